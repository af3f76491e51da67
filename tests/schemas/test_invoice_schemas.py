"""Invoice & Client Schemas — create-model validation."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from invoicing.core.domain_types import ClientStatus, InvoiceStatus
from invoicing.schemas.client import ClientCreate
from invoicing.schemas.invoice import InvoiceCreate


def _invoice(**overrides) -> dict:
    data = {
        "invoice_number": "INV-001",
        "issue_date": "2024-01-15",
        "total_amount": "100.00",
    }
    data.update(overrides)
    return data


def test_invoice_defaults_to_draft_usd():
    inv = InvoiceCreate.model_validate(_invoice())
    assert inv.status is InvoiceStatus.DRAFT
    assert inv.currency == "USD"
    assert inv.issue_date == date(2024, 1, 15)
    assert inv.total_amount == Decimal("100.00")


def test_invoice_rejects_negative_amount():
    with pytest.raises(ValidationError):
        InvoiceCreate.model_validate(_invoice(total_amount="-1"))


def test_invoice_rejects_three_decimal_places():
    with pytest.raises(ValidationError):
        InvoiceCreate.model_validate(_invoice(total_amount="1.005"))


def test_invoice_rejects_due_date_before_issue_date():
    with pytest.raises(ValidationError):
        InvoiceCreate.model_validate(_invoice(due_date="2024-01-01"))


def test_invoice_number_is_stripped():
    inv = InvoiceCreate.model_validate(_invoice(invoice_number="  INV-9 "))
    assert inv.invoice_number == "INV-9"


def test_invoice_number_whitespace_only_rejected():
    with pytest.raises(ValidationError):
        InvoiceCreate.model_validate(_invoice(invoice_number="   "))


def test_client_defaults_to_active():
    client = ClientCreate.model_validate({"company_name": "Acme"})
    assert client.status is ClientStatus.ACTIVE


def test_client_rejects_malformed_email():
    with pytest.raises(ValidationError):
        ClientCreate.model_validate({"company_name": "Acme", "email": "nope"})
