"""Bulk Operation Gate — resolves parsed bulk requests into typed mutations.

Invariants:
    - Target count is 1..MAX_BULK_TARGETS, checked before anything else
    - set_status requires a status; the error names the `newStatus` field
    - Resolution is PURE: returns an operation descriptor, never touches storage
    - Resolved ids are de-duplicated in request order (duplicates never double-count)
    - summarize_mutation only reports ids that were requested, each once

Design Decisions:
    - Tagged union of frozen dataclasses: DeleteInvoices carries no status field at
      all, so a "delete with status" or "set_status without status" cannot exist
      once resolved
    - Conditional requirement checked here, after Pydantic has done structural
      parsing: the two phases never interleave
    - No transition table: set_status may move between any two statuses
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from uuid import UUID

from invoicing.core.domain_types import (
    BulkAction, ClientId, InvoiceId, InvoiceStatus,
)
from invoicing.core.errors import InputValidationError


MAX_BULK_TARGETS: int = 50


# ─── Operations ──────────────────────────────────────────────────

@dataclass(frozen=True)
class DeleteInvoices:
    ids: tuple[InvoiceId, ...]


@dataclass(frozen=True)
class SetInvoiceStatus:
    ids: tuple[InvoiceId, ...]
    status: InvoiceStatus


@dataclass(frozen=True)
class DeleteClients:
    ids: tuple[ClientId, ...]


BulkInvoiceOperation = DeleteInvoices | SetInvoiceStatus


@dataclass(frozen=True)
class BulkResult:
    """Ids actually mutated — a subset of the requested ids."""
    affected_ids: tuple[UUID, ...]

    @property
    def affected(self) -> int:
        return len(self.affected_ids)


# ─── Validation ──────────────────────────────────────────────────

def target_count_violation(count: int, noun: str) -> str | None:
    """Message for an out-of-range target count, or None when 1..50."""
    if count < 1:
        return f"At least one {noun} ID is required"
    if count > MAX_BULK_TARGETS:
        return f"Maximum {MAX_BULK_TARGETS} {noun}s can be processed at once"
    return None


def _check_target_count(ids: Sequence[UUID], noun: str, field: str) -> None:
    violation = target_count_violation(len(ids), noun)
    if violation:
        error_type = "too_short" if not ids else "too_long"
        raise InputValidationError(violation, field, error_type)


def _unique(ids: Iterable[UUID]) -> tuple:
    return tuple(dict.fromkeys(ids))


def resolve_bulk_operation(
    action: BulkAction | str,
    ids: Sequence[UUID],
    new_status: InvoiceStatus | str | None = None,
) -> BulkInvoiceOperation:
    """Turn a structurally valid bulk request into its operation variant."""
    _check_target_count(ids, "invoice", "ids")
    action = BulkAction(action)
    if action is BulkAction.DELETE:
        return DeleteInvoices(ids=_unique(ids))
    if new_status is None:
        raise InputValidationError(
            "newStatus is required when action is set_status",
            "newStatus", "missing",
        )
    return SetInvoiceStatus(ids=_unique(ids), status=InvoiceStatus(new_status))


def resolve_client_deletion(ids: Sequence[UUID]) -> DeleteClients:
    _check_target_count(ids, "client", "clientIds")
    return DeleteClients(ids=_unique(ids))


# ─── Results ─────────────────────────────────────────────────────

def summarize_mutation(
    requested: Sequence[UUID], returned: Iterable[UUID],
) -> BulkResult:
    """Intersect storage-reported ids with the request, keeping request order."""
    touched = set(returned)
    return BulkResult(
        affected_ids=tuple(i for i in _unique(requested) if i in touched),
    )


def describe_bulk_result(operation: BulkInvoiceOperation, affected: int) -> str:
    verb = "Deleted" if isinstance(operation, DeleteInvoices) else "Updated"
    return f"{verb} {affected} invoice(s) successfully"
