"""Best-effort contract delivery run after the checkout response."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import structlog

from rental.core.config import Settings
from rental.services.contracts import (
    ContractItem,
    ContractParty,
    ContractReservation,
    render_contract,
)
from rental.services.mailer import ContractEmailResult, send_contract_emails

logger = structlog.get_logger(__name__)


def contract_party(settings: Settings) -> ContractParty:
    return ContractParty(
        shop_name=settings.shop_name,
        lessor_lines=tuple(settings.lessor_lines),
        iban=settings.payment_iban,
        currency=settings.payment_currency,
    )


def send_contract_notification(
    settings: Settings,
    reservation: ContractReservation,
    items: Sequence[ContractItem],
    names: Mapping[int, str],
) -> ContractEmailResult | None:
    """Render the contract and mail it; never raises.

    Runs as a background task, so a failure here cannot change a checkout
    that has already been committed and answered.
    """
    try:
        pdf = render_contract(reservation, items, names, contract_party(settings))
        result = send_contract_emails(
            settings,
            order_number=reservation.order_number,
            customer_name=reservation.customer_name,
            customer_email=reservation.customer_email,
            pdf=pdf,
        )
    except Exception:
        logger.error(
            "contract_notification_failed",
            order_number=reservation.order_number,
            exc_info=True,
        )
        return None

    logger.info(
        "contract_email_sent",
        order_number=reservation.order_number,
        customer_sent=result.customer_sent,
        owner_sent=result.owner_sent,
    )
    return result
