from __future__ import annotations

import re
from typing import Dict

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def validate_registration(
    name: str,
    email: str,
    password: str,
    confirm_password: str,
) -> Dict[str, str]:
    """Return field -> error message; an empty dict means the form is valid."""
    errors: Dict[str, str] = {}

    if name.strip() == "":
        errors["name"] = "Name is required"
    elif len(name.strip()) < 2:
        errors["name"] = "Name must be at least 2 characters"

    if email.strip() == "":
        errors["email"] = "Email is required"
    elif not is_valid_email(email.strip()):
        errors["email"] = "Please enter a valid email address"

    # length is checked untrimmed, emptiness trimmed
    if password.strip() == "":
        errors["password"] = "Password is required"
    elif len(password) < 6:
        errors["password"] = "Password must be at least 6 characters"

    if confirm_password.strip() == "":
        errors["confirm-password"] = "Please confirm your password"
    elif confirm_password != password:
        errors["confirm-password"] = "Passwords do not match"

    return errors
