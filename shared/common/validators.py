"""
Shared Validators Module.

Validation helpers used by the weight & balance API.
"""
import re
from typing import Any

from django.core.exceptions import ValidationError


EMAIL_RE = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
NUMERIC_TEXT_RE = re.compile(r'^\d*\.?\d*$')

# Keeps weight * arm sums well inside the default 28-digit decimal context
MAX_NUMERIC_DIGITS = 10


# =============================================================================
# STRING VALIDATORS
# =============================================================================

def validate_email(value: str, field_name: str = "email") -> str:
    """Validate email format."""
    if not isinstance(value, str) or not EMAIL_RE.match(value.strip()):
        raise ValidationError(f"Invalid {field_name} format")
    return value.strip()


def count_digits(text: str) -> int:
    return sum(1 for ch in text if ch.isdigit())


def validate_numeric_text(value: Any, field_name: str = "value") -> str:
    """Validate unsigned decimal form text; blank is allowed."""
    text = '' if value is None else str(value).strip()
    if not NUMERIC_TEXT_RE.match(text):
        raise ValidationError(f"{field_name} must be a non-negative number")
    if count_digits(text) > MAX_NUMERIC_DIGITS:
        raise ValidationError(f"{field_name} cannot have more than {MAX_NUMERIC_DIGITS} digits")
    return text
