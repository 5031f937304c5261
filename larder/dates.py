"""Expiry date arithmetic and status classification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class ExpiryStatus:
    level: str  # "expired" | "today" | "soon" | "fresh"
    text: str
    warning: bool


def parse_date(value: str | date) -> date:
    """Normalize an ISO ``YYYY-MM-DD`` string, date or datetime to a date.

    Raises:
        ValueError: If a string is not a valid ISO calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def days_until_expiry(expiry: str | date, today: date | None = None) -> int:
    """Whole days from today until ``expiry``.

    Negative once the date has passed, 0 on the day itself.
    """
    today = parse_date(today) if today is not None else date.today()
    return (parse_date(expiry) - today).days


def offset_date(days: int, today: date | None = None) -> date:
    """Return the date ``days`` after today."""
    return (today or date.today()) + timedelta(days=days)


def expiry_status(days: int) -> ExpiryStatus:
    if days < 0:
        return ExpiryStatus("expired", f"Expired {-days} day(s) ago", True)
    if days == 0:
        return ExpiryStatus("today", "Expires today", True)
    if days <= 2:
        return ExpiryStatus("soon", f"Expires in {days} day(s)", True)
    return ExpiryStatus("fresh", f"Expires in {days} day(s)", False)
