"""Auth form validation.

Validation runs before any backend call; a non-None return value is the
inline message shown above the form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Simple email pattern (same shape the browser's type=email accepts)
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PASSWORD_LENGTH = 8

SIGN_UP_SUCCESS_MESSAGE = "Account created successfully! You can now sign in."


@dataclass
class PasswordRequirements:
    """Which password rules are satisfied."""

    length: bool
    uppercase: bool
    lowercase: bool
    number: bool
    special: bool

    @property
    def all_met(self) -> bool:
        return all((self.length, self.uppercase, self.lowercase, self.number, self.special))

    def to_dict(self) -> dict[str, bool]:
        return {
            "length": self.length,
            "uppercase": self.uppercase,
            "lowercase": self.lowercase,
            "number": self.number,
            "special": self.special,
        }


@dataclass
class SignUpForm:
    email: str
    password: str
    confirm_password: str
    full_name: str
    accept_terms: bool = False


@dataclass
class SignInForm:
    email: str
    password: str


def validate_password(password: str) -> PasswordRequirements:
    """Evaluate each password rule independently."""
    return PasswordRequirements(
        length=len(password) >= MIN_PASSWORD_LENGTH,
        uppercase=re.search(r"[A-Z]", password) is not None,
        lowercase=re.search(r"[a-z]", password) is not None,
        number=re.search(r"[0-9]", password) is not None,
        special=re.search(r"[^A-Za-z0-9]", password) is not None,
    )


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email.strip()))


def validate_sign_in(form: SignInForm) -> str | None:
    if not form.email.strip() or not form.password:
        return "Email and password are required"
    if not validate_email(form.email):
        return "Invalid email format"
    return None


def validate_sign_up(form: SignUpForm) -> str | None:
    """Return the first failing rule's message, in form order."""
    if not form.full_name.strip():
        return "Full name is required"
    if not validate_email(form.email):
        return "Invalid email format"
    if form.password != form.confirm_password:
        return "Passwords do not match"
    if not validate_password(form.password).all_met:
        return "Password does not meet requirements"
    if not form.accept_terms:
        return "You must accept the terms and conditions"
    return None
