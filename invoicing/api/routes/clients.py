"""Client Routes — create, read, update, list, delete, and bulk delete.

Invariants:
    - Every route is scoped to get_current_owner
    - Bulk delete accepts 1..50 clientIds; non-owned ids only lower deletedCount
    - Deleting a client keeps its invoices (client_id set to NULL by the foreign key)
    - GET/PUT/DELETE on a client the caller does not own is a 404
    - PUT writes only the fields present in the body
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from invoicing.api.dependencies import get_client_repository, get_current_owner
from invoicing.core.bulk_operations import resolve_client_deletion
from invoicing.core.domain_types import ClientId, ClientStatus, OwnerId
from invoicing.core.repository_protocols import ClientRepository
from invoicing.schemas.bulk import BulkClientDeleteRequest, BulkClientDeleteResponse
from invoicing.schemas.client import (
    ClientCreate, ClientListResponse, ClientResponse, ClientUpdate,
)
from invoicing.services.bulk_actions import ClientBulkHandlers
from invoicing.services.records import ClientRecords

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/clients", tags=["clients"])


@router.post("/bulk-delete", response_model=BulkClientDeleteResponse)
async def bulk_delete_clients(
    body: BulkClientDeleteRequest,
    owner_id: OwnerId = Depends(get_current_owner),
    clients: ClientRepository = Depends(get_client_repository),
):
    operation = resolve_client_deletion(body.client_ids)
    result = await ClientBulkHandlers(clients).delete_clients(
        owner_id, operation,
    )
    return BulkClientDeleteResponse(
        message="Clients deleted successfully",
        deleted_count=result.affected,
        deleted_ids=list(result.affected_ids),
    )


@router.post(
    "", response_model=ClientResponse, status_code=status.HTTP_201_CREATED,
)
async def create_client(
    body: ClientCreate,
    owner_id: OwnerId = Depends(get_current_owner),
    clients: ClientRepository = Depends(get_client_repository),
):
    client = await ClientRecords(clients).create(
        owner_id, body.model_dump(mode="json"),
    )
    return ClientResponse.model_validate(client)


@router.get("", response_model=ClientListResponse)
async def list_clients(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: ClientStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, max_length=100),
    owner_id: OwnerId = Depends(get_current_owner),
    clients: ClientRepository = Depends(get_client_repository),
):
    rows, pagination = await ClientRecords(clients).list_page(
        owner_id, {"status": status_filter, "search": search}, page, limit,
    )
    return ClientListResponse(
        clients=[ClientResponse.model_validate(r) for r in rows],
        pagination=pagination,
    )


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    owner_id: OwnerId = Depends(get_current_owner),
    clients: ClientRepository = Depends(get_client_repository),
):
    client = await ClientRecords(clients).get(owner_id, ClientId(client_id))
    return ClientResponse.model_validate(client)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    body: ClientUpdate,
    owner_id: OwnerId = Depends(get_current_owner),
    clients: ClientRepository = Depends(get_client_repository),
):
    client = await ClientRecords(clients).update(
        owner_id, ClientId(client_id), body.model_dump(mode="json", exclude_unset=True),
    )
    return ClientResponse.model_validate(client)


@router.delete("/{client_id}")
async def delete_client(
    client_id: UUID,
    owner_id: OwnerId = Depends(get_current_owner),
    clients: ClientRepository = Depends(get_client_repository),
):
    await ClientRecords(clients).delete(owner_id, ClientId(client_id))
    return {"message": "Client deleted successfully"}
