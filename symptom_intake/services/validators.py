# symptom_intake/services/validators.py
from __future__ import annotations

from typing import Optional

from symptom_intake.errors import AuthError, ValidationError

MIN_AGE = 0
MAX_AGE = 150


def require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise AuthError()
    return user_id


def check_age(age: Optional[int]) -> Optional[int]:
    if age is None:
        return None
    if isinstance(age, bool) or not isinstance(age, int):
        raise ValidationError("Age must be a whole number")
    if age < MIN_AGE or age > MAX_AGE:
        raise ValidationError(f"Age must be between {MIN_AGE} and {MAX_AGE}")
    return age


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Blank free text is treated as not provided."""
    if value is None:
        return None
    value = value.strip()
    return value or None
