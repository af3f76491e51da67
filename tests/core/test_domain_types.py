"""Domain Types — verifies enum members and identity wrappers.

Tests:
    - NewType wrappers exist and are callable
    - InvoiceStatus has exactly the five states
    - PENDING_STATUSES is sent + overdue
"""

from uuid import uuid4

from invoicing.core.domain_types import (
    OwnerId, InvoiceId, ClientId,
    InvoiceStatus, BulkAction, AggregationPeriod, PENDING_STATUSES,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert OwnerId(uid) == uid
    assert InvoiceId(uid) == uid
    assert ClientId(uid) == uid


def test_invoice_status_has_five_states():
    assert {s.value for s in InvoiceStatus} == {
        "draft", "sent", "paid", "overdue", "cancelled",
    }


def test_pending_statuses_are_sent_and_overdue():
    assert PENDING_STATUSES == {InvoiceStatus.SENT, InvoiceStatus.OVERDUE}


def test_enums_compare_equal_to_wire_strings():
    assert InvoiceStatus.PAID == "paid"
    assert BulkAction.SET_STATUS == "set_status"
    assert AggregationPeriod.YEARLY == "yearly"
