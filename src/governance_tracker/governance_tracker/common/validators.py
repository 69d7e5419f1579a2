from __future__ import annotations

from datetime import datetime

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_iso_date(value: str, field_name: str, *, allow_empty: bool = False) -> str:
    value = (value or "").strip()
    if not value and allow_empty:
        return value
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")
    return value


def require_max_bytes(size: int, field_name: str, max_bytes: int) -> int:
    if size > max_bytes:
        raise ValidationError(f"{field_name} too large. Maximum size is {max_bytes // (1024 * 1024)}MB.")
    return size
