from __future__ import annotations

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def require_positive(value: int, field_name: str) -> int:
    if value is None or int(value) <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return int(value)


def require_minute_of_day(value: int, field_name: str, *, allow_end_of_day: bool = False) -> int:
    upper = MINUTES_PER_DAY if allow_end_of_day else MINUTES_PER_DAY - 1
    if value is None or not 0 <= int(value) <= upper:
        raise ValidationError(f"{field_name} must be between 0 and {upper}")
    return int(value)


def require_choice(value: str, field_name: str, choices: set[str]) -> str:
    if value is None or value.strip().upper() not in choices:
        raise ValidationError(f"{field_name} must be one of {sorted(choices)}")
    return value.strip().upper()
