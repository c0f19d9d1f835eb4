import re
from typing import Dict, Optional

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8

REQUIRED_MESSAGES = {
    "email": "Email is required",
    "password": "Password is required",
}


def validate_field(field_name: str, value: str) -> Optional[str]:
    """Return the error message for one field, or None when it passes."""
    if field_name == "email":
        if not EMAIL_REGEX.fullmatch(value):
            return "Invalid email format"
    elif field_name == "password":
        if len(value) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None


def validate_form(values: Dict[str, str]) -> Dict[str, str]:
    """Errors blocking submission: required fields first, then field rules."""
    errors = {}
    for field_name, message in REQUIRED_MESSAGES.items():
        value = values.get(field_name, "")
        if not value:
            errors[field_name] = message
            continue
        error = validate_field(field_name, value)
        if error:
            errors[field_name] = error
    return errors
