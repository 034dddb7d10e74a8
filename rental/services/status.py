"""Date-driven reservation status transitions."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from rental.models import ReservationStatus


def today(tz_name: str = "UTC") -> date:
    return datetime.now(ZoneInfo(tz_name)).date()


def resolve_status(
    status: ReservationStatus, date_from: date, date_to: date, today: date
) -> ReservationStatus:
    """Move a reservation along its lifecycle by calendar date.

    ``pending`` and ``borrowed`` become ``returned`` once the range has ended;
    ``pending`` becomes ``borrowed`` once the range has started. ``returned``
    and ``cancelled`` are terminal and only change manually.
    """
    status = ReservationStatus(status)
    if status in (ReservationStatus.pending, ReservationStatus.borrowed) and today > date_to:
        return ReservationStatus.returned
    if status is ReservationStatus.pending and today >= date_from:
        return ReservationStatus.borrowed
    return status
