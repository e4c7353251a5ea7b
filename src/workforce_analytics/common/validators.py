from __future__ import annotations

from ..core.exceptions import ValidationError
from .datetime_utils import is_iso_date


def require_iso_date(value: str, field_name: str) -> str:
    if not is_iso_date(value):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date, got {value!r}")
    return value


def require_positive(value: int, field_name: str) -> int:
    if value is None or int(value) <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return int(value)
