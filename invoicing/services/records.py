"""Record Handlers — single invoice and client CRUD, scoped to the caller.

Invariants:
    - "Not owned" and "does not exist" both raise ResourceNotFoundError (404)
    - Single-record status change and delete reuse the bulk repository calls with
      one id, so they share the same owner+id predicate
    - An invoice may only reference a client owned by the same caller

Design Decisions:
    - Pagination arithmetic lives in core/pagination.py; handlers only pass numbers through
"""

import logging

from invoicing.core.domain_types import (
    ClientId, InvoiceId, InvoiceStatus, OwnerId,
)
from invoicing.core.errors import ResourceNotFoundError
from invoicing.core.pagination import build_pagination, page_offset
from invoicing.core.repository_protocols import (
    ClientRepository, InvoiceRepository,
)

logger = logging.getLogger(__name__)


class InvoiceRecords:
    """Single-invoice operations."""

    def __init__(self, invoices: InvoiceRepository, clients: ClientRepository):
        self._invoices = invoices
        self._clients = clients

    async def create(self, owner_id: OwnerId, fields: dict):
        client_id = fields.get("client_id")
        if client_id and not await self._clients.exists_owned(owner_id, client_id):
            raise ResourceNotFoundError("Client", str(client_id))
        invoice = await self._invoices.add(owner_id, fields)
        logger.info(
            f"Invoice {invoice.id} created",
            extra={"owner_id": str(owner_id)},
        )
        return invoice

    async def get(self, owner_id: OwnerId, invoice_id: InvoiceId):
        invoice = await self._invoices.get_owned(owner_id, invoice_id)
        if invoice is None:
            raise ResourceNotFoundError("Invoice", str(invoice_id))
        return invoice

    async def set_status(
        self, owner_id: OwnerId, invoice_id: InvoiceId, status: InvoiceStatus,
    ):
        touched = await self._invoices.set_status_owned(
            owner_id, [invoice_id], status,
        )
        if invoice_id not in touched:
            raise ResourceNotFoundError("Invoice", str(invoice_id))
        return await self.get(owner_id, invoice_id)

    async def delete(self, owner_id: OwnerId, invoice_id: InvoiceId) -> None:
        touched = await self._invoices.delete_owned(owner_id, [invoice_id])
        if invoice_id not in touched:
            raise ResourceNotFoundError("Invoice", str(invoice_id))

    async def list_page(
        self, owner_id: OwnerId, filters: dict, page: int, limit: int,
    ) -> tuple[list, dict]:
        rows, total = await self._invoices.page_for_owner(
            owner_id, filters, limit, page_offset(page, limit),
        )
        return list(rows), build_pagination(page, limit, total)


class ClientRecords:
    """Single-client operations."""

    def __init__(self, clients: ClientRepository):
        self._clients = clients

    async def create(self, owner_id: OwnerId, fields: dict):
        return await self._clients.add(owner_id, fields)

    async def get(self, owner_id: OwnerId, client_id: ClientId):
        client = await self._clients.get_owned(owner_id, client_id)
        if client is None:
            raise ResourceNotFoundError("Client", str(client_id))
        return client

    async def update(self, owner_id: OwnerId, client_id: ClientId, fields: dict):
        """Apply only the given fields; an empty update just returns the client."""
        if fields:
            touched = await self._clients.update_owned(owner_id, client_id, fields)
            if client_id not in touched:
                raise ResourceNotFoundError("Client", str(client_id))
            logger.info(
                f"Client {client_id} updated: {sorted(fields)}",
                extra={"owner_id": str(owner_id)},
            )
        return await self.get(owner_id, client_id)

    async def delete(self, owner_id: OwnerId, client_id: ClientId) -> None:
        touched = await self._clients.delete_owned(owner_id, [client_id])
        if client_id not in touched:
            raise ResourceNotFoundError("Client", str(client_id))

    async def list_page(
        self, owner_id: OwnerId, filters: dict, page: int, limit: int,
    ) -> tuple[list, dict]:
        rows, total = await self._clients.page_for_owner(
            owner_id, filters, limit, page_offset(page, limit),
        )
        return list(rows), build_pagination(page, limit, total)
