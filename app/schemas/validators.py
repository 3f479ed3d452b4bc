"""
Description:
Shared field checks for request schemas.

Author: @kcaparas1630
"""
from typing import Any


def require_text(value: Any, field_name: str) -> str:
    """Reject missing or blank strings with a "<field> is required" message."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value
