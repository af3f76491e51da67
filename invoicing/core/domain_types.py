"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - OwnerId, InvoiceId, ClientId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - PENDING_STATUSES is the single source of truth for "awaiting payment"

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, and compare equal to
      the raw strings stored in the status column
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

OwnerId = NewType("OwnerId", UUID)
InvoiceId = NewType("InvoiceId", UUID)
ClientId = NewType("ClientId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice lifecycle states — maps to DB `status` column."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class ClientStatus(str, Enum):
    """Client relationship states."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


class BulkAction(str, Enum):
    """Bulk operation tags accepted by POST /invoices/bulk-actions."""
    DELETE = "delete"
    SET_STATUS = "set_status"


class AggregationPeriod(str, Enum):
    """Revenue bucket granularity."""
    MONTHLY = "monthly"
    YEARLY = "yearly"


# Sent and overdue invoices count jointly as pending on the dashboard
PENDING_STATUSES: frozenset[InvoiceStatus] = frozenset({
    InvoiceStatus.SENT, InvoiceStatus.OVERDUE,
})
