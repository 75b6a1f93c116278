from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_negative(value: Optional[float], field_name: str) -> Optional[float]:
    if value is not None and value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value
