"""Invoice Routes — CRUD, single status change, and the bulk action gate.

Invariants:
    - Every route is scoped to get_current_owner; 401 before any body validation
    - Bulk: Pydantic parses structure, core.resolve_bulk_operation enforces the
      conditional newStatus rule, then exactly one repository mutation runs
    - Non-owned ids never error: they only lower `affected`

Design Decisions:
    - /bulk-actions declared before /{invoice_id} so the literal path wins
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from invoicing.api.dependencies import (
    get_client_repository, get_current_owner, get_invoice_repository,
)
from invoicing.core.bulk_operations import (
    describe_bulk_result, resolve_bulk_operation,
)
from invoicing.core.domain_types import InvoiceId, InvoiceStatus, OwnerId
from invoicing.core.repository_protocols import (
    ClientRepository, InvoiceRepository,
)
from invoicing.schemas.bulk import BulkActionResponse, BulkInvoiceActionRequest
from invoicing.schemas.invoice import (
    InvoiceCreate, InvoiceListResponse, InvoiceResponse, InvoiceStatusUpdate,
)
from invoicing.services.bulk_actions import InvoiceBulkHandlers
from invoicing.services.records import InvoiceRecords

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


@router.post("/bulk-actions", response_model=BulkActionResponse)
async def bulk_invoice_action(
    body: BulkInvoiceActionRequest,
    owner_id: OwnerId = Depends(get_current_owner),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
):
    """Delete or re-status up to 50 owned invoices in one call."""
    operation = resolve_bulk_operation(body.action, body.ids, body.new_status)
    result = await InvoiceBulkHandlers(invoices).execute_invoice_operation(
        owner_id, operation,
    )
    return BulkActionResponse(
        message=describe_bulk_result(operation, result.affected),
        affected=result.affected,
        affected_ids=list(result.affected_ids),
    )


@router.post(
    "", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED,
)
async def create_invoice(
    body: InvoiceCreate,
    owner_id: OwnerId = Depends(get_current_owner),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    clients: ClientRepository = Depends(get_client_repository),
):
    invoice = await InvoiceRecords(invoices, clients).create(
        owner_id, {**body.model_dump(), "status": body.status.value},
    )
    return InvoiceResponse.model_validate(invoice)


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: InvoiceStatus | None = Query(None, alias="status"),
    client_id: UUID | None = Query(None),
    issue_date_from: date | None = Query(None),
    issue_date_to: date | None = Query(None),
    due_date_from: date | None = Query(None),
    due_date_to: date | None = Query(None),
    search: str | None = Query(None, max_length=100),
    owner_id: OwnerId = Depends(get_current_owner),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    clients: ClientRepository = Depends(get_client_repository),
):
    """List owned invoices, newest first, with filters and pagination.

    `search` matches the invoice number or the linked client's company name.
    """
    filters = {
        "status": status_filter,
        "client_id": client_id,
        "issue_date_from": issue_date_from,
        "issue_date_to": issue_date_to,
        "due_date_from": due_date_from,
        "due_date_to": due_date_to,
        "search": search,
    }
    rows, pagination = await InvoiceRecords(invoices, clients).list_page(
        owner_id, filters, page, limit,
    )
    return InvoiceListResponse(
        invoices=[InvoiceResponse.model_validate(r) for r in rows],
        pagination=pagination,
    )


@router.get("/{invoice_id}", response_model=InvoiceResponse)
async def get_invoice(
    invoice_id: UUID,
    owner_id: OwnerId = Depends(get_current_owner),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    clients: ClientRepository = Depends(get_client_repository),
):
    invoice = await InvoiceRecords(invoices, clients).get(
        owner_id, InvoiceId(invoice_id),
    )
    return InvoiceResponse.model_validate(invoice)


@router.patch("/{invoice_id}/status", response_model=InvoiceResponse)
async def set_invoice_status(
    invoice_id: UUID,
    body: InvoiceStatusUpdate,
    owner_id: OwnerId = Depends(get_current_owner),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    clients: ClientRepository = Depends(get_client_repository),
):
    """Change one invoice's status. Any status → any status."""
    invoice = await InvoiceRecords(invoices, clients).set_status(
        owner_id, InvoiceId(invoice_id), body.status,
    )
    return InvoiceResponse.model_validate(invoice)


@router.delete("/{invoice_id}")
async def delete_invoice(
    invoice_id: UUID,
    owner_id: OwnerId = Depends(get_current_owner),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
    clients: ClientRepository = Depends(get_client_repository),
):
    await InvoiceRecords(invoices, clients).delete(owner_id, InvoiceId(invoice_id))
    return {"message": "Invoice deleted successfully"}
