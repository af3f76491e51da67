"""Invoice Schemas — create, status update, and read models.

Invariants:
    - total_amount is a non-negative Decimal with at most 2 decimal places
    - due_date, when given, is not before issue_date
    - total_amount is Decimal in Python and a JSON number in responses (Money)
    - Read models carry the linked client's company_name, or None
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from invoicing.core.domain_types import InvoiceStatus
from invoicing.schemas.money import Money


class InvoiceCreate(BaseModel):
    client_id: UUID | None = None
    invoice_number: str = Field(min_length=1, max_length=50)
    issue_date: date
    due_date: date | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    total_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    currency: str = Field("USD", min_length=3, max_length=3)
    notes: str | None = Field(None, max_length=5000)

    @field_validator("invoice_number")
    @classmethod
    def strip_invoice_number(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("invoice_number cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def check_due_date(self):
        if self.due_date and self.due_date < self.issue_date:
            raise ValueError("due_date cannot be before issue_date")
        return self


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    client_id: UUID | None
    invoice_number: str
    status: InvoiceStatus
    issue_date: date
    due_date: date | None
    total_amount: Money
    currency: str
    notes: str | None
    created_at: datetime
    client_company_name: str | None = None


class InvoiceListResponse(BaseModel):
    invoices: list[InvoiceResponse]
    pagination: dict


class RecentInvoicesResponse(BaseModel):
    invoices: list[InvoiceResponse]
