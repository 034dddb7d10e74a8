from __future__ import annotations

import pytest


@pytest.mark.asyncio
async def test_catalog_is_ordered_by_sort_order_then_id(app_client, make_equipment):
    b = await make_equipment(name="Stove", sort_order=2)
    a = await make_equipment(name="Tent", sort_order=1)
    c = await make_equipment(name="Mat", sort_order=2)

    res = await app_client.get("/api/equipment")

    assert res.status_code == 200
    assert [e["id"] for e in res.json()] == [a, b, c]


@pytest.mark.asyncio
async def test_equipment_detail_and_404(app_client, make_equipment):
    eid = await make_equipment(name="Tent", categories=["tents", "summer"])

    res = await app_client.get(f"/api/equipment/{eid}")
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Tent"
    assert body["categories"] == ["tents", "summer"]

    missing = await app_client.get("/api/equipment/9999")
    assert missing.status_code == 404
    assert missing.json() == {"detail": "equipment not found"}


@pytest.mark.asyncio
async def test_availability_endpoint(app_client, make_equipment):
    eid = await make_equipment(stock=3)

    res = await app_client.post(
        f"/api/equipment/{eid}/availability",
        json={"date_from": "2025-06-01", "date_to": "2025-06-03"},
    )

    assert res.status_code == 200
    assert res.json() == {"available": True, "available_quantity": 3}


@pytest.mark.asyncio
async def test_availability_unknown_equipment_reports_zero(app_client, engine):
    res = await app_client.post(
        "/api/equipment/4242/availability",
        json={"date_from": "2025-06-01", "date_to": "2025-06-03"},
    )
    assert res.status_code == 200
    assert res.json() == {"available": False, "available_quantity": 0}


@pytest.mark.asyncio
async def test_reversed_range_is_rejected_with_field_errors(app_client, make_equipment):
    eid = await make_equipment()

    res = await app_client.post(
        f"/api/equipment/{eid}/availability",
        json={"date_from": "2025-06-05", "date_to": "2025-06-01"},
    )

    assert res.status_code == 422
    body = res.json()
    assert body["detail"] == "Unprocessable Entity"
    assert body["errors"] and body["errors"][0]["loc"][0] == "body"


@pytest.mark.asyncio
async def test_quote_endpoint(app_client, make_equipment):
    eid = await make_equipment(price_1_to_3_days=100, price_4_to_7_days=80, deposit=50)

    res = await app_client.post(
        f"/api/equipment/{eid}/quote",
        json={"date_from": "2025-06-01", "date_to": "2025-06-05", "quantity": 2},
    )

    assert res.status_code == 200
    assert res.json() == {
        "equipment_id": eid,
        "days": 5,
        "quantity": 2,
        "daily_price": 80,
        "deposit": 50,
        "rental": 800,
        "deposit_total": 100,
        "total": 900,
    }
