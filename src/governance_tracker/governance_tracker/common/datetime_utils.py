from __future__ import annotations

import time
from datetime import date, datetime, timezone
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def try_parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        return None


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def today_local() -> date:
    return date.today()


def epoch_millis() -> int:
    return int(time.time() * 1000)


def to_iso_timestamp(moment: datetime) -> str:
    """Format as ``2026-03-05T14:30:00.000Z`` (UTC, millisecond precision)."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_iso_timestamp(value: str) -> datetime:
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_date(value: Optional[str]) -> str:
    """Display form of an ISO date, e.g. ``Mar 5, 2026``."""
    if not value:
        return ""
    parsed = try_parse_iso_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_timestamp(value: Optional[str]) -> str:
    """Display form of an ISO timestamp, e.g. ``3/5/26, 2:30 PM``."""
    if not value:
        return ""
    try:
        moment = parse_iso_timestamp(value)
    except ValueError:
        return str(value)
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{moment.month}/{moment.day}/{moment.strftime('%y')}, {hour}:{moment.minute:02d} {suffix}"
