"""Invoice ORM — persists billed amounts and their payment status.

Invariants:
    - id is UUID primary key
    - owner_id is non-nullable and indexed: every query filters on it
    - status is one of: draft, sent, paid, overdue, cancelled
    - total_amount is Numeric(12, 2): exact currency, never float
    - issue_date is a calendar Date (no time, no timezone)

Design Decisions:
    - client_id nullable with ondelete SET NULL: aggregation never needs the client,
      and deleting a client must not erase revenue history
    - (owner_id, status) index: dashboard metrics and revenue reads filter on both
    - `client` is many-to-one and joined-eager: every invoice read carries the client's
      company_name without a second round trip (no lazy IO under AsyncSession)
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint, Date, DateTime, ForeignKey, Index, Numeric, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from invoicing.db.base import Base
from invoicing.models.client import Client


class Invoice(Base):
    """Invoice entity — owned by exactly one user."""
    __tablename__ = "invoices"
    __table_args__ = (
        Index("ix_invoices_owner_status", "owner_id", "status"),
        CheckConstraint(
            "total_amount >= 0", name="ck_invoices_total_amount_non_negative",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    client_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
    )
    invoice_number: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft",
    )
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0"),
    )
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="USD",
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    client: Mapped[Client | None] = relationship(lazy="joined")

    @property
    def client_company_name(self) -> str | None:
        return self.client.company_name if self.client is not None else None
