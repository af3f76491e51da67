"""Invoice Routes — create, read, list, single status change, single delete.

Invariants:
    - Another owner's invoice is indistinguishable from a missing one (404)
    - An invoice can only reference the caller's own client
    - Listing is newest first and scoped to the caller
"""

from decimal import Decimal
from uuid import uuid4

URL = "/api/v1/invoices"


def _payload(**overrides) -> dict:
    body = {
        "invoice_number": "INV-1001",
        "issue_date": "2024-03-01",
        "due_date": "2024-03-31",
        "total_amount": "1250.50",
    }
    body.update(overrides)
    return body


# ─── create ──────────────────────────────────────────────────────

async def test_create_invoice(client, auth):
    res = await client.post(URL, json=_payload(), headers=auth)

    assert res.status_code == 201
    body = res.json()
    assert body["invoice_number"] == "INV-1001"
    assert body["status"] == "draft"
    assert body["currency"] == "USD"
    assert Decimal(str(body["total_amount"])) == Decimal("1250.50")


async def test_create_invoice_requires_identity(client):
    res = await client.post(URL, json=_payload())
    assert res.status_code == 401


async def test_create_invoice_rejects_negative_amount(client, auth):
    res = await client.post(URL, json=_payload(total_amount="-1"), headers=auth)
    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "total_amount"


async def test_create_invoice_rejects_due_before_issue(client, auth):
    res = await client.post(
        URL, json=_payload(issue_date="2024-03-10", due_date="2024-03-01"),
        headers=auth,
    )
    assert res.status_code == 400


async def test_create_invoice_with_own_client(client, auth, owner_id, make_client):
    acme = await make_client(owner_id)
    res = await client.post(
        URL, json=_payload(client_id=str(acme.id)), headers=auth,
    )
    assert res.status_code == 201
    assert res.json()["client_id"] == str(acme.id)


async def test_create_invoice_with_foreign_client_is_404(
    client, auth, other_owner_id, make_client,
):
    theirs = await make_client(other_owner_id)
    res = await client.post(
        URL, json=_payload(client_id=str(theirs.id)), headers=auth,
    )
    assert res.status_code == 404
    assert res.json()["error"] == "Client not found"


# ─── get ─────────────────────────────────────────────────────────

async def test_get_own_invoice(client, auth, owner_id, make_invoice):
    inv = await make_invoice(owner_id, status="sent")
    res = await client.get(f"{URL}/{inv.id}", headers=auth)
    assert res.status_code == 200
    assert res.json()["status"] == "sent"


async def test_get_foreign_invoice_is_404(client, auth, other_owner_id, make_invoice):
    theirs = await make_invoice(other_owner_id)
    res = await client.get(f"{URL}/{theirs.id}", headers=auth)
    assert res.status_code == 404
    assert res.json() == {"error": "Invoice not found", "code": "RESOURCE_NOT_FOUND"}


# ─── status change ───────────────────────────────────────────────

async def test_patch_status(client, auth, owner_id, make_invoice):
    inv = await make_invoice(owner_id)
    res = await client.patch(
        f"{URL}/{inv.id}/status", json={"status": "paid"}, headers=auth,
    )
    assert res.status_code == 200
    assert res.json()["status"] == "paid"


async def test_patch_status_on_foreign_invoice_is_404(
    client, auth, other_owner_id, make_invoice,
):
    theirs = await make_invoice(other_owner_id, status="sent")
    res = await client.patch(
        f"{URL}/{theirs.id}/status", json={"status": "paid"}, headers=auth,
    )
    assert res.status_code == 404

    still = await client.get(
        f"{URL}/{theirs.id}", headers={"X-User-Id": str(other_owner_id)},
    )
    assert still.json()["status"] == "sent"


async def test_patch_status_rejects_unknown_status(client, auth, owner_id, make_invoice):
    inv = await make_invoice(owner_id)
    res = await client.patch(
        f"{URL}/{inv.id}/status", json={"status": "refunded"}, headers=auth,
    )
    assert res.status_code == 400


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_own_invoice(client, auth, owner_id, make_invoice):
    inv = await make_invoice(owner_id)
    res = await client.delete(f"{URL}/{inv.id}", headers=auth)
    assert res.status_code == 200
    assert res.json()["message"] == "Invoice deleted successfully"
    assert (await client.get(f"{URL}/{inv.id}", headers=auth)).status_code == 404


async def test_delete_missing_invoice_is_404(client, auth):
    res = await client.delete(f"{URL}/{uuid4()}", headers=auth)
    assert res.status_code == 404


# ─── list ────────────────────────────────────────────────────────

async def test_list_is_scoped_and_newest_first(
    client, auth, owner_id, other_owner_id, make_invoice,
):
    first = await make_invoice(owner_id)
    second = await make_invoice(owner_id)
    await make_invoice(other_owner_id)

    body = (await client.get(URL, headers=auth)).json()

    assert [i["id"] for i in body["invoices"]] == [str(second.id), str(first.id)]
    assert body["pagination"]["total"] == 2


async def test_list_pagination(client, auth, owner_id, make_invoice):
    for _ in range(5):
        await make_invoice(owner_id)

    body = (await client.get(URL, params={"page": 2, "limit": 2}, headers=auth)).json()

    assert len(body["invoices"]) == 2
    assert body["pagination"] == {
        "page": 2, "limit": 2, "total": 5, "totalPages": 3,
        "hasNext": True, "hasPrev": True,
    }


async def test_list_rejects_limit_over_100(client, auth):
    res = await client.get(URL, params={"limit": 101}, headers=auth)
    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "limit"


async def test_list_filters_by_status_and_date(client, auth, owner_id, make_invoice):
    await make_invoice(owner_id, status="paid", issue_date="2024-01-10")
    wanted = await make_invoice(owner_id, status="paid", issue_date="2024-02-10")
    await make_invoice(owner_id, status="draft", issue_date="2024-02-11")

    body = (await client.get(
        URL,
        params={"status": "paid", "issue_date_from": "2024-02-01"},
        headers=auth,
    )).json()

    assert [i["id"] for i in body["invoices"]] == [str(wanted.id)]


async def test_list_search_by_invoice_number(client, auth, owner_id, make_invoice):
    await make_invoice(owner_id)
    second = await make_invoice(owner_id)

    body = (await client.get(
        URL, params={"search": second.invoice_number}, headers=auth,
    )).json()

    assert [i["id"] for i in body["invoices"]] == [str(second.id)]


async def test_amount_is_a_json_number(client, auth):
    res = await client.post(URL, json=_payload(total_amount="19.99"), headers=auth)
    assert isinstance(res.json()["total_amount"], float)
    assert res.json()["total_amount"] == 19.99


async def test_list_filters_by_due_date_range(client, auth, owner_id, make_invoice):
    await make_invoice(owner_id, due_date="2024-02-01")
    wanted = await make_invoice(owner_id, due_date="2024-03-15")
    await make_invoice(owner_id, due_date="2024-04-30")
    await make_invoice(owner_id)

    body = (await client.get(
        URL,
        params={"due_date_from": "2024-03-01", "due_date_to": "2024-03-31"},
        headers=auth,
    )).json()

    assert [i["id"] for i in body["invoices"]] == [str(wanted.id)]
    assert body["pagination"]["total"] == 1


async def test_list_search_matches_client_company_name(
    client, auth, owner_id, make_invoice, make_client,
):
    globex = await make_client(owner_id, company_name="Globex Industries")
    acme = await make_client(owner_id, company_name="Acme Corp")
    wanted = await make_invoice(owner_id, client_id=globex.id)
    await make_invoice(owner_id, client_id=acme.id)
    await make_invoice(owner_id)

    body = (await client.get(URL, params={"search": "globex"}, headers=auth)).json()

    assert [i["id"] for i in body["invoices"]] == [str(wanted.id)]
    assert body["invoices"][0]["client_company_name"] == "Globex Industries"
    assert body["pagination"]["total"] == 1


async def test_list_rows_carry_client_company_name(
    client, auth, owner_id, make_invoice, make_client,
):
    acme = await make_client(owner_id, company_name="Acme Corp")
    await make_invoice(owner_id, client_id=acme.id)

    body = (await client.get(URL, headers=auth)).json()

    assert body["invoices"][0]["client_company_name"] == "Acme Corp"


async def test_search_wildcards_are_literal(client, auth):
    for number in ("PROMO-50%", "PROMO-500", "A_1", "AB1"):
        await client.post(URL, json=_payload(invoice_number=number), headers=auth)

    percent = (await client.get(URL, params={"search": "50%"}, headers=auth)).json()
    underscore = (await client.get(URL, params={"search": "a_1"}, headers=auth)).json()

    assert [i["invoice_number"] for i in percent["invoices"]] == ["PROMO-50%"]
    assert [i["invoice_number"] for i in underscore["invoices"]] == ["A_1"]


async def test_deleting_client_keeps_invoice_unlinked(
    client, auth, owner_id, make_invoice, make_client,
):
    acme = await make_client(owner_id)
    inv = await make_invoice(owner_id, status="paid", client_id=acme.id)

    res = await client.delete(f"/api/v1/clients/{acme.id}", headers=auth)
    assert res.status_code == 200

    got = await client.get(f"{URL}/{inv.id}", headers=auth)
    assert got.status_code == 200
    assert got.json()["client_id"] is None
    assert got.json()["client_company_name"] is None
