"""Validators."""

import re


def validate_email(email: str) -> bool:
    """Validate email format."""
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def require_text(value: str) -> str:
    """Reject empty and whitespace-only strings without altering the value."""
    if value is None or not value.strip():
        raise ValueError("must not be blank")
    return value


def optional_text(value):
    """Treat blank optional strings as absent."""
    if value is None or not str(value).strip():
        return None
    return value
