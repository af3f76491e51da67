"""SQL Repositories — owner-scoped invoice and client persistence over AsyncSession.

Invariants:
    - Every statement carries `owner_id == :owner`; there is no unscoped query
    - Bulk delete/update is ONE statement (`... WHERE owner_id = :owner AND id IN (:ids)
      RETURNING id`) followed by one commit
    - SQLAlchemyError is rolled back, logged, and re-raised as DataAccessError

Design Decisions:
    - Ownership and id filtering share one WHERE clause: no read-then-write window
      in which another request could change ownership between check and mutation
    - RETURNING over rowcount: callers need the ids, not just the count
    - The batch relies on the database applying a single statement atomically
    - Search terms are matched literally: `%`, `_` and `\` in user input are escaped
"""

import logging
from collections.abc import Collection, Sequence
from datetime import datetime, timezone

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.core.domain_types import (
    ClientId, ClientStatus, InvoiceId, InvoiceStatus, OwnerId,
)
from invoicing.core.errors import DataAccessError
from invoicing.models.client import Client
from invoicing.models.invoice import Invoice

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """ILIKE pattern matching `term` anywhere, with wildcards in `term` escaped."""
    for special in (_LIKE_ESCAPE, "%", "_"):
        term = term.replace(special, _LIKE_ESCAPE + special)
    return f"%{term}%"


def _matches(column, term: str):
    return column.ilike(contains_pattern(term), escape=_LIKE_ESCAPE)


class _SqlRepository:
    """Shared execute/commit with SQLAlchemy → DataAccessError translation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _fail(self, operation: str, exc: SQLAlchemyError) -> DataAccessError:
        await self.db.rollback()
        logger.error(
            f"Repository {operation} failed: {exc}",
            extra={"operation": operation, "error_code": "DATA_ACCESS_ERROR"},
        )
        return DataAccessError("Database operation failed", operation)

    async def _mutate_returning_ids(self, operation: str, statement) -> list:
        try:
            result = await self.db.execute(statement)
            ids = list(result.scalars().all())
            await self.db.commit()
        except SQLAlchemyError as e:
            raise await self._fail(operation, e) from e
        return ids

    async def _scalars(self, operation: str, statement) -> list:
        try:
            result = await self.db.execute(statement)
        except SQLAlchemyError as e:
            raise await self._fail(operation, e) from e
        return list(result.scalars().all())

    async def _count(self, operation: str, statement) -> int:
        try:
            result = await self.db.execute(statement)
        except SQLAlchemyError as e:
            raise await self._fail(operation, e) from e
        return result.scalar_one()

    async def _insert(self, operation: str, row):
        self.db.add(row)
        try:
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            raise await self._fail(operation, e) from e
        return row


class SqlInvoiceRepository(_SqlRepository):
    """InvoiceRepository implementation."""

    async def list_for_owner(
        self, owner_id: OwnerId,
        statuses: Collection[InvoiceStatus] | None = None,
    ) -> list[Invoice]:
        query = select(Invoice).where(Invoice.owner_id == owner_id)
        if statuses is not None:
            query = query.where(
                Invoice.status.in_([InvoiceStatus(s).value for s in statuses]),
            )
        return await self._scalars("list_invoices", query)

    async def delete_owned(
        self, owner_id: OwnerId, invoice_ids: Sequence[InvoiceId],
    ) -> list[InvoiceId]:
        statement = (
            delete(Invoice)
            .where(Invoice.owner_id == owner_id)
            .where(Invoice.id.in_(list(invoice_ids)))
            .returning(Invoice.id)
        )
        return await self._mutate_returning_ids("delete_invoices", statement)

    async def set_status_owned(
        self, owner_id: OwnerId, invoice_ids: Sequence[InvoiceId],
        status: InvoiceStatus,
    ) -> list[InvoiceId]:
        statement = (
            update(Invoice)
            .where(Invoice.owner_id == owner_id)
            .where(Invoice.id.in_(list(invoice_ids)))
            .values(
                status=InvoiceStatus(status).value,
                updated_at=datetime.now(timezone.utc),
            )
            .returning(Invoice.id)
        )
        return await self._mutate_returning_ids("update_invoice_status", statement)

    async def get_owned(
        self, owner_id: OwnerId, invoice_id: InvoiceId,
    ) -> Invoice | None:
        rows = await self._scalars(
            "get_invoice",
            select(Invoice)
            .where(Invoice.owner_id == owner_id)
            .where(Invoice.id == invoice_id)
            .execution_options(populate_existing=True),
        )
        return rows[0] if rows else None

    async def add(self, owner_id: OwnerId, fields: dict) -> Invoice:
        row = await self._insert(
            "create_invoice", Invoice(owner_id=owner_id, **fields),
        )
        # re-read so the joined client is loaded
        return await self.get_owned(owner_id, row.id)

    async def page_for_owner(
        self, owner_id: OwnerId, filters: dict, limit: int, offset: int,
    ) -> tuple[list[Invoice], int]:
        conditions = [Invoice.owner_id == owner_id]
        if filters.get("status"):
            conditions.append(Invoice.status == InvoiceStatus(filters["status"]).value)
        if filters.get("client_id"):
            conditions.append(Invoice.client_id == filters["client_id"])
        for column, bound in (
            (Invoice.issue_date, "issue_date"), (Invoice.due_date, "due_date"),
        ):
            if filters.get(f"{bound}_from"):
                conditions.append(column >= filters[f"{bound}_from"])
            if filters.get(f"{bound}_to"):
                conditions.append(column <= filters[f"{bound}_to"])
        if filters.get("search"):
            conditions.append(or_(
                _matches(Invoice.invoice_number, filters["search"]),
                _matches(Client.company_name, filters["search"]),
            ))

        # explicit join for the search predicate; the eager load uses its own alias
        client_join = (Client, Invoice.client_id == Client.id)
        total = await self._count(
            "count_invoices",
            select(func.count(Invoice.id))
            .select_from(Invoice)
            .outerjoin(*client_join)
            .where(*conditions),
        )
        rows = await self._scalars(
            "page_invoices",
            select(Invoice)
            .outerjoin(*client_join)
            .where(*conditions)
            .order_by(Invoice.created_at.desc(), Invoice.id)
            .limit(limit)
            .offset(offset),
        )
        return rows, total

    async def recent_for_owner(
        self, owner_id: OwnerId, limit: int,
    ) -> list[Invoice]:
        return await self._scalars(
            "recent_invoices",
            select(Invoice)
            .where(Invoice.owner_id == owner_id)
            .order_by(Invoice.created_at.desc(), Invoice.id)
            .limit(limit),
        )


class SqlClientRepository(_SqlRepository):
    """ClientRepository implementation."""

    async def exists_owned(self, owner_id: OwnerId, client_id: ClientId) -> bool:
        count = await self._count(
            "client_exists",
            select(func.count())
            .select_from(Client)
            .where(Client.owner_id == owner_id)
            .where(Client.id == client_id),
        )
        return count > 0

    async def delete_owned(
        self, owner_id: OwnerId, client_ids: Sequence[ClientId],
    ) -> list[ClientId]:
        statement = (
            delete(Client)
            .where(Client.owner_id == owner_id)
            .where(Client.id.in_(list(client_ids)))
            .returning(Client.id)
        )
        return await self._mutate_returning_ids("delete_clients", statement)

    async def get_owned(
        self, owner_id: OwnerId, client_id: ClientId,
    ) -> Client | None:
        rows = await self._scalars(
            "get_client",
            select(Client)
            .where(Client.owner_id == owner_id)
            .where(Client.id == client_id)
            .execution_options(populate_existing=True),
        )
        return rows[0] if rows else None

    async def update_owned(
        self, owner_id: OwnerId, client_id: ClientId, fields: dict,
    ) -> list[ClientId]:
        if "status" in fields:
            fields = {**fields, "status": ClientStatus(fields["status"]).value}
        statement = (
            update(Client)
            .where(Client.owner_id == owner_id)
            .where(Client.id == client_id)
            .values(**fields)
            .returning(Client.id)
        )
        return await self._mutate_returning_ids("update_client", statement)

    async def add(self, owner_id: OwnerId, fields: dict) -> Client:
        return await self._insert(
            "create_client", Client(owner_id=owner_id, **fields),
        )

    async def page_for_owner(
        self, owner_id: OwnerId, filters: dict, limit: int, offset: int,
    ) -> tuple[list[Client], int]:
        conditions = [Client.owner_id == owner_id]
        if filters.get("status"):
            conditions.append(Client.status == ClientStatus(filters["status"]).value)
        if filters.get("search"):
            conditions.append(
                _matches(Client.company_name, filters["search"]),
            )

        total = await self._count(
            "count_clients",
            select(func.count()).select_from(Client).where(*conditions),
        )
        rows = await self._scalars(
            "page_clients",
            select(Client)
            .where(*conditions)
            .order_by(Client.created_at.desc(), Client.id)
            .limit(limit)
            .offset(offset),
        )
        return rows, total
