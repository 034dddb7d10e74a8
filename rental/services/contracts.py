"""Rental contract PDF rendering."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from io import BytesIO
from typing import Protocol
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from rental.services.payment_qr import qr_drawing, spd_payload

BUSINESS_TERMS = (
    "The lessee pays the rental and a refundable deposit before the equipment is handed over.",
    "The lessee uses the equipment with due care, only for its usual purpose, and does not lend it to third parties.",
    "The lessee reports any damage or loss without delay. Repair or replacement costs may be set off against the deposit.",
    "The equipment is returned clean and complete on the last day of the rental period. Late returns are charged at the daily rate.",
    "The deposit is refunded on return once the equipment has been checked.",
    "Either party may terminate the contract with ten days' notice running from the day after delivery of the notice.",
)


class ContractItem(Protocol):
    equipment_id: int
    quantity: int
    daily_price: int
    days: int
    deposit: int


class ContractReservation(Protocol):
    order_number: str
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    pickup_location: str
    date_from: date
    date_to: date


@dataclass(frozen=True)
class ContractTotals:
    rental: int
    deposit: int

    @property
    def total(self) -> int:
        return self.rental + self.deposit


@dataclass(frozen=True)
class ContractParty:
    """Lessor identity and payment details printed on every contract."""

    shop_name: str
    lessor_lines: Sequence[str] = ()
    iban: str = ""
    currency: str = "CZK"


def compute_totals(items: Sequence[ContractItem]) -> ContractTotals:
    rental = sum(int(i.daily_price) * int(i.quantity) * int(i.days) for i in items)
    deposit = sum(int(i.deposit) * int(i.quantity) for i in items)
    return ContractTotals(rental=rental, deposit=deposit)


def _money(amount: int, currency: str) -> str:
    return f"{amount:,} {currency}".replace(",", " ")


def _fmt_date(d: date) -> str:
    return d.strftime("%d.%m.%Y")


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ContractTitle",
            parent=base["Heading1"],
            fontSize=18,
            spaceAfter=6,
            textColor=colors.HexColor("#14532d"),
        ),
        "h2": ParagraphStyle(
            "ContractH2",
            parent=base["Heading2"],
            fontSize=11,
            spaceBefore=10,
            spaceAfter=4,
            textColor=colors.HexColor("#374151"),
        ),
        "body": ParagraphStyle("ContractBody", parent=base["BodyText"], fontSize=9, leading=12),
        "small": ParagraphStyle(
            "ContractSmall",
            parent=base["Normal"],
            fontSize=8,
            leading=10,
            textColor=colors.HexColor("#4b5563"),
        ),
    }


def _party_table(party: ContractParty, reservation: ContractReservation, st) -> Table:
    lessor = "<br/>".join(escape(x) for x in [party.shop_name, *party.lessor_lines])
    lessee = "<br/>".join(
        escape(x)
        for x in [
            reservation.customer_name,
            reservation.customer_address,
            reservation.customer_email,
            reservation.customer_phone,
        ]
        if x
    )
    tbl = Table(
        [
            [Paragraph("<b>LESSOR</b>", st["body"]), Paragraph("<b>LESSEE</b>", st["body"])],
            [Paragraph(lessor, st["body"]), Paragraph(lessee, st["body"])],
        ],
        colWidths=[8.5 * cm, 8.5 * cm],
    )
    tbl.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
            ]
        )
    )
    return tbl


def _items_table(
    items: Sequence[ContractItem], names: Mapping[int, str], currency: str
) -> Table:
    rows: list[list[str]] = [["Item", "Qty", "Price/day", "Days", "Rental", "Deposit"]]
    for item in items:
        name = names.get(int(item.equipment_id)) or f"Equipment {item.equipment_id}"
        rental = int(item.daily_price) * int(item.quantity) * int(item.days)
        rows.append(
            [
                name,
                str(item.quantity),
                _money(int(item.daily_price), currency),
                str(item.days),
                _money(rental, currency),
                _money(int(item.deposit) * int(item.quantity), currency),
            ]
        )
    tbl = Table(rows, colWidths=[6 * cm, 1.3 * cm, 2.5 * cm, 1.3 * cm, 3 * cm, 2.9 * cm], repeatRows=1)
    tbl.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#166534")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8.5),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f3f4f6")]),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#e5e7eb")),
                ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    return tbl


def _totals_table(totals: ContractTotals, currency: str) -> Table:
    tbl = Table(
        [
            ["Rental", _money(totals.rental, currency)],
            ["Deposit", _money(totals.deposit, currency)],
            ["Total to pay", _money(totals.total, currency)],
        ],
        colWidths=[4 * cm, 3.5 * cm],
        hAlign="RIGHT",
    )
    tbl.setStyle(
        TableStyle(
            [
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("LINEABOVE", (0, -1), (-1, -1), 0.75, colors.HexColor("#374151")),
            ]
        )
    )
    return tbl


def _signature_block(heading: str, lines: Sequence[str], left: str, right: str, st) -> KeepTogether:
    sig = Table(
        [["", ""], [left, right]],
        colWidths=[7 * cm, 7 * cm],
        rowHeights=[1.2 * cm, None],
        hAlign="LEFT",
    )
    sig.setStyle(
        TableStyle(
            [
                ("LINEABOVE", (0, 1), (0, 1), 0.5, colors.black),
                ("LINEABOVE", (1, 1), (1, 1), 0.5, colors.black),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("RIGHTPADDING", (0, 0), (0, -1), 1 * cm),
            ]
        )
    )
    flow = [Paragraph(heading, st["h2"])]
    flow += [Paragraph(escape(line), st["body"]) for line in lines]
    flow.append(sig)
    return KeepTogether(flow)


def render_contract(
    reservation: ContractReservation,
    items: Sequence[ContractItem],
    names: Mapping[int, str],
    party: ContractParty,
) -> bytes:
    """Render the rental contract and return the PDF bytes.

    Totals are always derived from ``items`` so that edited reservations
    print what the lines actually add up to.
    """
    st = _styles()
    totals = compute_totals(items)
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=1.8 * cm,
        bottomMargin=1.8 * cm,
        title=f"Rental contract {reservation.order_number}",
        author=party.shop_name,
    )

    story: list = [
        Paragraph("Equipment rental contract", st["title"]),
        Paragraph(f"Contract no. <b>{escape(reservation.order_number)}</b>", st["body"]),
        Spacer(1, 0.4 * cm),
        _party_table(party, reservation, st),
        Paragraph("RENTAL PERIOD", st["h2"]),
        Paragraph(
            f"{_fmt_date(reservation.date_from)} to {_fmt_date(reservation.date_to)}"
            f" (pickup: {escape(str(reservation.pickup_location))})",
            st["body"],
        ),
        Paragraph("SUBJECT OF THE CONTRACT", st["h2"]),
        _items_table(items, names, party.currency),
        Spacer(1, 0.3 * cm),
        _totals_table(totals, party.currency),
    ]

    if party.iban:
        payload = spd_payload(
            iban=party.iban,
            amount=totals.total,
            currency=party.currency,
            order_number=reservation.order_number,
            shop_name=party.shop_name,
        )
        story += [
            Paragraph("QR PAYMENT", st["h2"]),
            qr_drawing(payload, size=3.5 * cm),
            Paragraph(f"Account: {escape(party.iban)}", st["small"]),
        ]

    story.append(
        _signature_block(
            "HANDOVER",
            [
                "The lessee confirms receipt of the equipment listed above in working order and "
                "agrees to pay the rental and the deposit.",
            ],
            f"Handed over for {party.shop_name}",
            "Received, lessee's signature",
            st,
        )
    )
    story.append(
        _signature_block(
            "RETURN OF EQUIPMENT",
            [
                "Equipment returned to the lessor in condition: undamaged / damaged",
                "Deposit refunded in the amount of: ....................................",
            ],
            f"Received for {party.shop_name}",
            "Returned, lessee's signature",
            st,
        )
    )

    story.append(Paragraph("Business terms", st["h2"]))
    for number, term in enumerate(BUSINESS_TERMS, 1):
        story.append(Paragraph(f"{number}. {escape(term)}", st["small"]))

    doc.build(story)
    return buf.getvalue()
