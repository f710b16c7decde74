from __future__ import annotations

import re
from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str]) -> str:
    email = (value or "").strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Invalid email address")
    return email


def optional_text(value: Optional[str]) -> Optional[str]:
    text = (value or "").strip()
    return text or None


def require_date_order(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date must be on or after the start date")
