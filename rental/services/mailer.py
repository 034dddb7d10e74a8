"""SMTP delivery of rental contracts."""

from __future__ import annotations

import smtplib
from dataclasses import dataclass
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import structlog

from rental.core.config import Settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    subtype: str = "pdf"


@dataclass(frozen=True)
class ContractEmailResult:
    customer_sent: bool
    owner_sent: bool


def smtp_configured(settings: Settings) -> bool:
    return bool(settings.smtp_host and settings.smtp_user and settings.smtp_password)


def send_email(
    settings: Settings,
    *,
    to: str,
    subject: str,
    body_text: str,
    body_html: str = "",
    attachments: tuple[Attachment, ...] = (),
) -> bool:
    """Send one message. Returns False when SMTP is not configured or sending fails."""
    if not smtp_configured(settings):
        logger.warning("smtp_not_configured", to=to, subject=subject)
        return False

    sender = settings.mail_from or settings.smtp_user
    msg = MIMEMultipart("mixed")
    msg["Subject"] = subject
    msg["From"] = sender
    msg["To"] = to

    body = MIMEMultipart("alternative")
    body.attach(MIMEText(body_text, "plain", "utf-8"))
    if body_html:
        body.attach(MIMEText(body_html, "html", "utf-8"))
    msg.attach(body)

    for att in attachments:
        part = MIMEApplication(att.content, _subtype=att.subtype)
        part.add_header("Content-Disposition", "attachment", filename=att.filename)
        msg.attach(part)

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as srv:
            srv.ehlo()
            if settings.smtp_port != 25:
                srv.starttls()
                srv.ehlo()
            srv.login(settings.smtp_user, settings.smtp_password)
            srv.sendmail(sender, [to], msg.as_string())
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("email_send_failed", to=to, subject=subject, error=str(exc))
        return False

    logger.info("email_sent", to=to, subject=subject)
    return True


def _customer_text(order_number: str, customer_name: str, shop_name: str) -> str:
    return (
        f"Dear {customer_name},\n\n"
        f"thank you for your order {order_number}. The rental contract is attached.\n"
        "Please bring a printed copy when you pick up the equipment.\n\n"
        f"{shop_name}\n"
    )


def _owner_text(order_number: str, customer_name: str, customer_email: str) -> str:
    return (
        f"Order number: {order_number}\n"
        f"Customer: {customer_name} <{customer_email}>\n"
        "The rental contract is attached.\n"
    )


def send_contract_emails(
    settings: Settings,
    *,
    order_number: str,
    customer_name: str,
    customer_email: str,
    pdf: bytes,
) -> ContractEmailResult:
    attachment = Attachment(filename=f"contract-{order_number}.pdf", content=pdf)
    customer_sent = send_email(
        settings,
        to=customer_email,
        subject=f"Reservation confirmation - {order_number}",
        body_text=_customer_text(order_number, customer_name, settings.shop_name),
        attachments=(attachment,),
    )
    owner_sent = False
    if settings.owner_email:
        owner_sent = send_email(
            settings,
            to=settings.owner_email,
            subject=f"New reservation - {order_number}",
            body_text=_owner_text(order_number, customer_name, customer_email),
            attachments=(attachment,),
        )
    else:
        logger.warning("owner_email_not_configured", order_number=order_number)
    return ContractEmailResult(customer_sent=customer_sent, owner_sent=owner_sent)
