"""Bulk Action Handlers — one batched repository call per resolved operation.

Tests cover:
    - DeleteInvoices → exactly one delete_owned call with all ids
    - SetInvoiceStatus → exactly one set_status_owned call with the status
    - Ids reported by storage but not requested never leak into the result
    - DataAccessError propagates unchanged
"""

from uuid import uuid4

import pytest

from invoicing.core.bulk_operations import (
    DeleteClients, DeleteInvoices, SetInvoiceStatus,
)
from invoicing.core.domain_types import InvoiceStatus
from invoicing.core.errors import DataAccessError
from invoicing.services.bulk_actions import (
    ClientBulkHandlers, InvoiceBulkHandlers,
)
from tests.services.fakes import RecordingClientRepository, RecordingInvoiceRepository


async def test_delete_issues_single_batched_call():
    repo = RecordingInvoiceRepository()
    owner = uuid4()
    ids = (uuid4(), uuid4(), uuid4())

    result = await InvoiceBulkHandlers(repo).execute_invoice_operation(
        owner, DeleteInvoices(ids=ids),
    )

    assert repo.calls == [("delete_owned", owner, ids)]
    assert result.affected == 3


async def test_set_status_issues_single_batched_call():
    repo = RecordingInvoiceRepository()
    owner = uuid4()
    ids = (uuid4(), uuid4())

    await InvoiceBulkHandlers(repo).execute_invoice_operation(
        owner, SetInvoiceStatus(ids=ids, status=InvoiceStatus.PAID),
    )

    assert repo.calls == [("set_status_owned", owner, ids, InvoiceStatus.PAID)]


async def test_result_is_subset_of_requested_ids():
    requested = (uuid4(), uuid4(), uuid4())
    stranger = uuid4()
    repo = RecordingInvoiceRepository(touched=[requested[2], stranger, requested[0]])

    result = await InvoiceBulkHandlers(repo).execute_invoice_operation(
        uuid4(), DeleteInvoices(ids=requested),
    )

    assert result.affected_ids == (requested[0], requested[2])
    assert result.affected <= len(requested)


async def test_nothing_owned_returns_empty_result():
    repo = RecordingInvoiceRepository(touched=[])
    result = await InvoiceBulkHandlers(repo).execute_invoice_operation(
        uuid4(), DeleteInvoices(ids=(uuid4(),)),
    )
    assert result.affected == 0


async def test_data_access_error_propagates():
    repo = RecordingInvoiceRepository(fail=True)
    with pytest.raises(DataAccessError):
        await InvoiceBulkHandlers(repo).execute_invoice_operation(
            uuid4(), DeleteInvoices(ids=(uuid4(),)),
        )
    assert len(repo.calls) == 1


async def test_unsupported_operation_raises_type_error():
    repo = RecordingInvoiceRepository()
    with pytest.raises(TypeError):
        await InvoiceBulkHandlers(repo).execute_invoice_operation(
            uuid4(), DeleteClients(ids=(uuid4(),)),
        )
    assert repo.calls == []


async def test_delete_clients_single_call():
    repo = RecordingClientRepository()
    owner = uuid4()
    ids = (uuid4(), uuid4())
    result = await ClientBulkHandlers(repo).delete_clients(
        owner, DeleteClients(ids=ids),
    )
    assert repo.calls == [("delete_owned", owner, ids)]
    assert result.affected == 2


def test_handlers_require_their_repository():
    with pytest.raises(TypeError):
        InvoiceBulkHandlers()
    with pytest.raises(TypeError):
        ClientBulkHandlers()
