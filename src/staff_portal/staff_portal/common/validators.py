from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_id(value: Any, field_name: str) -> int:
    """Coerce a positive integer id, rejecting blanks, bools and junk."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"Missing {field_name}")
    try:
        out = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")
    if out <= 0:
        raise ValidationError(f"Invalid {field_name}")
    return out
