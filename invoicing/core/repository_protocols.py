"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every repository method takes owner_id: there is no unscoped read or write
    - Bulk mutations are one call per request and return the ids actually touched
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, the ORM rows satisfy InvoiceLike
      without inheriting from it
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the core functions that consume their results are never async
"""

from collections.abc import Collection, Mapping, Sequence
from datetime import date
from decimal import Decimal
from typing import Any, Protocol
from uuid import UUID

from invoicing.core.domain_types import (
    ClientId, InvoiceId, InvoiceStatus, OwnerId,
)


class InvoiceLike(Protocol):
    """Structural contract for invoice rows consumed by the aggregation core."""
    id: UUID
    status: str
    issue_date: date
    total_amount: Decimal


class IdentityProvider(Protocol):
    """Resolves the caller's owner id from request headers, or None."""
    def resolve(self, headers: Mapping[str, str]) -> OwnerId | None: ...


class InvoiceRepository(Protocol):
    """Contract for invoice persistence — implemented by shell."""
    async def list_for_owner(
        self, owner_id: OwnerId,
        statuses: Collection[InvoiceStatus] | None = None,
    ) -> Sequence[InvoiceLike]: ...
    async def delete_owned(
        self, owner_id: OwnerId, invoice_ids: Sequence[InvoiceId],
    ) -> list[InvoiceId]: ...
    async def set_status_owned(
        self, owner_id: OwnerId, invoice_ids: Sequence[InvoiceId],
        status: InvoiceStatus,
    ) -> list[InvoiceId]: ...
    async def get_owned(
        self, owner_id: OwnerId, invoice_id: InvoiceId,
    ) -> Any | None: ...
    async def add(self, owner_id: OwnerId, fields: dict) -> Any: ...
    async def page_for_owner(
        self, owner_id: OwnerId, filters: dict, limit: int, offset: int,
    ) -> tuple[Sequence[Any], int]: ...
    async def recent_for_owner(
        self, owner_id: OwnerId, limit: int,
    ) -> Sequence[Any]: ...


class ClientRepository(Protocol):
    """Contract for client persistence — implemented by shell."""
    async def exists_owned(self, owner_id: OwnerId, client_id: ClientId) -> bool: ...
    async def delete_owned(
        self, owner_id: OwnerId, client_ids: Sequence[ClientId],
    ) -> list[ClientId]: ...
    async def add(self, owner_id: OwnerId, fields: dict) -> Any: ...
    async def get_owned(self, owner_id: OwnerId, client_id: ClientId) -> Any | None: ...
    async def update_owned(
        self, owner_id: OwnerId, client_id: ClientId, fields: dict,
    ) -> list[ClientId]: ...
    async def page_for_owner(
        self, owner_id: OwnerId, filters: dict, limit: int, offset: int,
    ) -> tuple[Sequence[Any], int]: ...
