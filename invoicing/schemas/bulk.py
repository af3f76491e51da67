"""Bulk Schemas — request/response models for bulk invoice and client mutations.

Invariants:
    - ids / clientIds: 1..50 syntactically valid UUIDs (duplicates tolerated)
    - action is one of: delete, set_status
    - newStatus is structurally optional here; core.bulk_operations requires it
      for set_status once this model has parsed

Design Decisions:
    - Count check shares its message with the core (target_count_violation) so the
      HTTP and in-process paths report the same text
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from invoicing.core.bulk_operations import target_count_violation
from invoicing.core.domain_types import BulkAction, InvoiceStatus


def _check_count(ids: list[UUID], noun: str) -> list[UUID]:
    violation = target_count_violation(len(ids), noun)
    if violation:
        raise ValueError(violation)
    return ids


class BulkInvoiceActionRequest(BaseModel):
    """POST /invoices/bulk-actions body."""
    model_config = ConfigDict(populate_by_name=True)

    action: BulkAction
    ids: list[UUID]
    new_status: InvoiceStatus | None = Field(None, alias="newStatus")

    @field_validator("ids")
    @classmethod
    def check_target_count(cls, v: list[UUID]) -> list[UUID]:
        return _check_count(v, "invoice")


class BulkClientDeleteRequest(BaseModel):
    """POST /clients/bulk-delete body."""
    model_config = ConfigDict(populate_by_name=True)

    client_ids: list[UUID] = Field(alias="clientIds")

    @field_validator("client_ids")
    @classmethod
    def check_target_count(cls, v: list[UUID]) -> list[UUID]:
        return _check_count(v, "client")


class BulkActionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    affected: int
    affected_ids: list[UUID] = Field(alias="affectedIds")


class BulkClientDeleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted_count: int = Field(alias="deletedCount")
    deleted_ids: list[UUID] = Field(alias="deletedIds")
