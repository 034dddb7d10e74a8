from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest

from rental.services import contracts
from rental.services.contracts import ContractParty, compute_totals, render_contract

pytestmark = pytest.mark.unit


def _reservation():
    return SimpleNamespace(
        order_number="P2025008",
        customer_name="Jana Novakova",
        customer_email="jana@example.com",
        customer_phone="+420 600 000 000",
        customer_address="Nadrazni 1, Brno",
        pickup_location="brno",
        date_from=date(2025, 6, 1),
        date_to=date(2025, 6, 2),
    )


def _items():
    return [
        SimpleNamespace(equipment_id=1, quantity=1, daily_price=100, days=2, deposit=50),
        SimpleNamespace(equipment_id=7, quantity=2, daily_price=40, days=2, deposit=10),
    ]


def test_totals_are_recomputed_from_items():
    totals = compute_totals(_items())
    assert totals.rental == 200 + 160
    assert totals.deposit == 50 + 20
    assert totals.total == 430


def test_render_contract_returns_pdf_bytes():
    pdf = render_contract(
        _reservation(),
        _items(),
        {1: "Tent for 3"},
        ContractParty(shop_name="Test Rental", lessor_lines=["Main Street 1"], iban="CZ6508000000192000145399"),
    )
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_qr_section_only_with_iban(monkeypatch):
    calls: list[str] = []
    real = contracts.spd_payload

    def spy(**kwargs):
        calls.append(kwargs["order_number"])
        return real(**kwargs)

    monkeypatch.setattr(contracts, "spd_payload", spy)

    render_contract(_reservation(), _items(), {}, ContractParty(shop_name="Test Rental"))
    assert calls == []

    render_contract(
        _reservation(), _items(), {}, ContractParty(shop_name="Test Rental", iban="CZ65080000")
    )
    assert calls == ["P2025008"]
