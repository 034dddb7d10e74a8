from __future__ import annotations

from datetime import date, timedelta

import pytest

from rental.services.status import today as local_today
from tests.conftest import ADMIN_USER

EQUIPMENT = {
    "name": "Hammock",
    "description": "Parachute nylon",
    "image_url": "/images/hammock.jpg",
    "price_1_to_3_days": 60,
    "price_4_to_7_days": 50,
    "price_8_plus_days": 40,
    "deposit": 200,
    "stock": 3,
    "sort_order": 5,
    "categories": ["sleeping"],
}


@pytest.fixture(autouse=True)
def _no_contract_mail(monkeypatch):
    monkeypatch.setattr(
        "rental.api.routers.reservations.send_contract_notification", lambda *a, **k: None
    )


async def _book(client, equipment_id: int, start: date, end: date, quantity: int = 1) -> dict:
    res = await client.post(
        "/api/reservations",
        json={
            "customer_name": "Petr",
            "customer_email": "petr@example.com",
            "customer_phone": "+420700000000",
            "customer_address": "Hlavni 2, Olomouc",
            "pickup_location": "olomouc",
            "items": [
                {
                    "equipment_id": equipment_id,
                    "quantity": quantity,
                    "date_from": start.isoformat(),
                    "date_to": end.isoformat(),
                }
            ],
        },
    )
    assert res.status_code == 201, res.text
    return res.json()["reservation"]


@pytest.mark.asyncio
async def test_admin_routes_require_session(app_client, engine):
    assert (await app_client.get("/api/admin/reservations")).status_code == 401
    assert (await app_client.post("/api/admin/equipment", json=EQUIPMENT)).status_code == 401
    assert (await app_client.get("/api/auth/status")).json() == {
        "authenticated": False,
        "username": None,
    }


@pytest.mark.asyncio
async def test_login_rejects_bad_credentials(app_client, engine):
    res = await app_client.post("/api/auth/login", json={"username": ADMIN_USER, "password": "nope"})
    assert res.status_code == 401
    assert res.json() == {"detail": "invalid credentials"}


@pytest.mark.asyncio
async def test_login_status_logout(admin_client):
    status = await admin_client.get("/api/auth/status")
    assert status.json() == {"authenticated": True, "username": ADMIN_USER}

    await admin_client.post("/api/auth/logout")

    assert (await admin_client.get("/api/auth/status")).json()["authenticated"] is False
    assert (await admin_client.get("/api/admin/reservations")).status_code == 401


@pytest.mark.asyncio
async def test_equipment_crud_and_reorder(admin_client):
    created = await admin_client.post("/api/admin/equipment", json=EQUIPMENT)
    assert created.status_code == 201
    eid = created.json()["id"]

    other = (await admin_client.post("/api/admin/equipment", json={**EQUIPMENT, "name": "Lamp"})).json()

    updated = await admin_client.put(
        f"/api/admin/equipment/{eid}", json={**EQUIPMENT, "stock": 7, "name": "Hammock XL"}
    )
    assert updated.status_code == 200
    assert updated.json()["stock"] == 7
    assert updated.json()["name"] == "Hammock XL"

    reorder = await admin_client.post(
        "/api/admin/equipment/reorder",
        json=[{"id": eid, "sort_order": 9}, {"id": other["id"], "sort_order": 1}],
    )
    assert reorder.status_code == 200
    catalog = (await admin_client.get("/api/equipment")).json()
    assert [e["id"] for e in catalog] == [other["id"], eid]

    assert (await admin_client.delete(f"/api/admin/equipment/{eid}")).status_code == 204
    assert (await admin_client.delete(f"/api/admin/equipment/{eid}")).status_code == 404
    assert (await admin_client.get(f"/api/equipment/{eid}")).status_code == 404


@pytest.mark.asyncio
async def test_equipment_validation(admin_client):
    negative = await admin_client.post("/api/admin/equipment", json={**EQUIPMENT, "stock": -1})
    assert negative.status_code == 422
    no_category = await admin_client.post("/api/admin/equipment", json={**EQUIPMENT, "categories": []})
    assert no_category.status_code == 422
    missing = await admin_client.put("/api/admin/equipment/999", json=EQUIPMENT)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_list_applies_and_persists_auto_status(admin_client, make_equipment):
    eid = await make_equipment(stock=5)
    today = local_today("UTC")
    past = await _book(admin_client, eid, today - timedelta(days=5), today - timedelta(days=3))
    current = await _book(admin_client, eid, today - timedelta(days=1), today + timedelta(days=1))
    future = await _book(admin_client, eid, today + timedelta(days=10), today + timedelta(days=12))

    listing = await admin_client.get("/api/admin/reservations")

    assert listing.status_code == 200
    statuses = {r["id"]: r["status"] for r in listing.json()}
    assert statuses == {past["id"]: "returned", current["id"]: "borrowed", future["id"]: "pending"}
    # newest first, with items
    assert listing.json()[0]["id"] == future["id"]
    assert listing.json()[0]["items"][0]["equipment_id"] == eid

    stored = await admin_client.get(f"/api/reservations/by-number/{past['order_number']}")
    assert stored.json()["status"] == "returned"


@pytest.mark.asyncio
async def test_status_update_and_validation(admin_client, make_equipment):
    eid = await make_equipment()
    res = await _book(admin_client, eid, date(2030, 1, 1), date(2030, 1, 2))

    ok = await admin_client.patch(f"/api/admin/reservations/{res['id']}/status", json={"status": "cancelled"})
    assert ok.status_code == 200
    assert ok.json()["status"] == "cancelled"

    bad = await admin_client.patch(f"/api/admin/reservations/{res['id']}/status", json={"status": "lost"})
    assert bad.status_code == 422

    missing = await admin_client.patch("/api/admin/reservations/999/status", json={"status": "returned"})
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_range_and_replace_items(admin_client, make_equipment):
    eid = await make_equipment()
    res = await _book(admin_client, eid, date(2030, 1, 1), date(2030, 1, 2))

    moved = await admin_client.put(
        f"/api/admin/reservations/{res['id']}",
        json={"date_from": "2030-02-01", "date_to": "2030-02-04", "quantity": 2},
    )
    assert moved.status_code == 200
    assert (moved.json()["date_from"], moved.json()["date_to"]) == ("2030-02-01", "2030-02-04")

    replaced = await admin_client.put(
        f"/api/admin/reservations/{res['id']}/items",
        json={"items": [{"equipment_id": eid, "quantity": 2, "daily_price": 90, "deposit": 30}]},
    )
    assert replaced.status_code == 200
    body = replaced.json()
    assert body["items"][0]["days"] == 4
    assert body["items"][0]["total_price"] == 90 * 2 * 4 + 60
    assert body["total_price"] == 780
    assert body["total_deposit"] == 60
    assert body["quantity"] == 2


@pytest.mark.asyncio
async def test_delete_cascades_and_frees_stock(admin_client, make_equipment):
    eid = await make_equipment(stock=1)
    res = await _book(admin_client, eid, date(2030, 1, 1), date(2030, 1, 2))

    assert (await admin_client.delete(f"/api/admin/reservations/{res['id']}")).status_code == 204
    assert (await admin_client.delete(f"/api/admin/reservations/{res['id']}")).status_code == 404
    assert (await admin_client.get(f"/api/reservations/{res['id']}/items")).status_code == 404
    assert (await admin_client.get(f"/api/equipment/{eid}/reservations")).json() == []

    again = await admin_client.post(
        f"/api/equipment/{eid}/availability",
        json={"date_from": "2030-01-01", "date_to": "2030-01-02"},
    )
    assert again.json()["available_quantity"] == 1


@pytest.mark.asyncio
async def test_contract_download(admin_client, make_equipment):
    eid = await make_equipment()
    res = await _book(admin_client, eid, date(2030, 1, 1), date(2030, 1, 2))

    pdf = await admin_client.get(f"/api/admin/reservations/{res['id']}/contract")

    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.headers["content-disposition"] == (
        f'attachment; filename="contract-{res["order_number"]}.pdf"'
    )
    assert pdf.content.startswith(b"%PDF")
    assert pdf.headers["cache-control"] == "no-store"
