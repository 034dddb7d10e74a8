"""Payment links and QR codes (SPD strings and SVG data URLs)."""

from __future__ import annotations

import base64
import re

from reportlab.graphics import renderSVG
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing

_NON_DIGITS = re.compile(r"\D")


def payment_url(public_base_url: str, order_number: str) -> str:
    return f"{public_base_url.rstrip('/')}/payment/{order_number}"


def variable_symbol(order_number: str) -> str:
    # Czech bank "variable symbol": digits only, at most 10
    return _NON_DIGITS.sub("", order_number)[:10]


def spd_payload(
    *, iban: str, amount: int, currency: str, order_number: str, shop_name: str
) -> str:
    """Build a Short Payment Descriptor understood by Czech banking apps."""
    vs = variable_symbol(order_number)
    account = iban.replace(" ", "").upper()
    return f"SPD*1.0*ACC:{account}*AM:{int(amount)}.00*CC:{currency.upper()}*X-VS:{vs}*MSG:{shop_name} {vs}"


def qr_drawing(value: str, size: float = 150) -> Drawing:
    """QR code as a reportlab drawing scaled to ``size`` points square."""
    widget = QrCodeWidget(value)
    x1, y1, x2, y2 = widget.getBounds()
    width, height = x2 - x1, y2 - y1
    drawing = Drawing(size, size, transform=[size / width, 0, 0, size / height, 0, 0])
    drawing.add(widget)
    return drawing


def qr_svg_data_url(value: str, size: float = 200) -> str:
    svg = renderSVG.drawToString(qr_drawing(value, size))
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"
