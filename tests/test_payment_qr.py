from __future__ import annotations

import base64

import pytest

from rental.services.payment_qr import payment_url, qr_svg_data_url, spd_payload, variable_symbol

pytestmark = pytest.mark.unit


def test_payment_url_joins_without_double_slash():
    assert payment_url("https://shop.test/", "P2025001") == "https://shop.test/payment/P2025001"
    assert payment_url("", "P2025001") == "/payment/P2025001"


def test_variable_symbol_keeps_at_most_ten_digits():
    assert variable_symbol("P2025001") == "2025001"
    assert variable_symbol("P202512345678") == "2025123456"


def test_spd_payload_format():
    payload = spd_payload(
        iban="CZ65 0800 0000 1920 0014 5399",
        amount=1250,
        currency="czk",
        order_number="P2025008",
        shop_name="Test Rental",
    )
    assert payload == (
        "SPD*1.0*ACC:CZ6508000000192000145399*AM:1250.00*CC:CZK"
        "*X-VS:2025008*MSG:Test Rental 2025008"
    )


def test_qr_svg_data_url_is_base64_svg():
    url = qr_svg_data_url("https://shop.test/payment/P2025001")
    prefix = "data:image/svg+xml;base64,"
    assert url.startswith(prefix)
    svg = base64.b64decode(url[len(prefix):]).decode("utf-8")
    assert "<svg" in svg
