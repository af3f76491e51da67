"""Bulk Action Handlers — execute resolved bulk operations against owner-scoped storage.

Invariants:
    - Receives an already-resolved operation: validation happened before this runs
    - Exactly ONE repository mutation per call, batched over all target ids
    - affected_ids is a subset of the requested ids; non-owned ids silently drop out
    - Repository errors propagate unchanged (DataAccessError), never retried

Design Decisions:
    - Explicit isinstance routing over the operation variants: every mapping visible here
    - One handler class per repository, each requiring its collaborator
    - Repeating a set_status counts the same rows again: a row whose status already
      matches is still inside the owner+id scope and is still reported as affected
"""

import logging

from invoicing.core.bulk_operations import (
    BulkInvoiceOperation, BulkResult, DeleteClients, DeleteInvoices,
    SetInvoiceStatus, summarize_mutation,
)
from invoicing.core.domain_types import OwnerId
from invoicing.core.repository_protocols import (
    ClientRepository, InvoiceRepository,
)

logger = logging.getLogger(__name__)


class InvoiceBulkHandlers:
    """Bulk invoice mutations for one request."""

    def __init__(self, invoices: InvoiceRepository):
        self._invoices = invoices

    async def execute_invoice_operation(
        self, owner_id: OwnerId, operation: BulkInvoiceOperation,
    ) -> BulkResult:
        """Apply a DeleteInvoices or SetInvoiceStatus in one batched call."""
        if isinstance(operation, DeleteInvoices):
            action = "delete"
            touched = await self._invoices.delete_owned(owner_id, operation.ids)
        elif isinstance(operation, SetInvoiceStatus):
            action = "set_status"
            touched = await self._invoices.set_status_owned(
                owner_id, operation.ids, operation.status,
            )
        else:
            raise TypeError(f"Unsupported bulk operation: {operation!r}")

        result = summarize_mutation(operation.ids, touched)
        logger.info(
            f"Bulk invoice {action}: {result.affected}/{len(operation.ids)} affected",
            extra={
                "owner_id": str(owner_id), "action": action,
                "requested": len(operation.ids), "affected": result.affected,
            },
        )
        return result


class ClientBulkHandlers:
    """Bulk client deletion for one request."""

    def __init__(self, clients: ClientRepository):
        self._clients = clients

    async def delete_clients(
        self, owner_id: OwnerId, operation: DeleteClients,
    ) -> BulkResult:
        touched = await self._clients.delete_owned(owner_id, operation.ids)
        result = summarize_mutation(operation.ids, touched)
        logger.info(
            f"Bulk client delete: {result.affected}/{len(operation.ids)} affected",
            extra={
                "owner_id": str(owner_id), "action": "delete_clients",
                "requested": len(operation.ids), "affected": result.affected,
            },
        )
        return result
