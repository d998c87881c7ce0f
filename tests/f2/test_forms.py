"""Tests for auth form validation (F2)."""

import pytest

from skillfriend.core.forms import (
    SignInForm,
    SignUpForm,
    validate_email,
    validate_password,
    validate_sign_in,
    validate_sign_up,
)


def _sign_up(**overrides) -> SignUpForm:
    data = {
        "email": "new@example.com",
        "password": "Secret#123",
        "confirm_password": "Secret#123",
        "full_name": "New User",
        "accept_terms": True,
    }
    data.update(overrides)
    return SignUpForm(**data)


class TestValidatePassword:
    """Each requirement is checked independently."""

    def test_strong_password(self):
        requirements = validate_password("Secret#123")
        assert requirements.all_met

    @pytest.mark.parametrize(
        "password,failing",
        [
            ("Se#1", "length"),
            ("secret#123", "uppercase"),
            ("SECRET#123", "lowercase"),
            ("Secret#abc", "number"),
            ("Secret1234", "special"),
        ],
    )
    def test_single_missing_requirement(self, password, failing):
        requirements = validate_password(password).to_dict()
        assert requirements[failing] is False
        assert all(v for k, v in requirements.items() if k != failing)

    def test_empty_password(self):
        requirements = validate_password("")
        assert not any(requirements.to_dict().values())


class TestValidateEmail:
    def test_valid(self):
        assert validate_email("user@example.com")

    def test_missing_domain(self):
        assert not validate_email("user@")

    def test_spaces(self):
        assert not validate_email("us er@example.com")


class TestValidateSignIn:
    def test_ok(self):
        assert validate_sign_in(SignInForm(email="a@b.co", password="x")) is None

    def test_missing_fields(self):
        assert validate_sign_in(SignInForm(email="", password="")) == (
            "Email and password are required"
        )

    def test_bad_email(self):
        assert validate_sign_in(SignInForm(email="nope", password="x")) == "Invalid email format"


class TestValidateSignUp:
    """Messages come back in form order."""

    def test_ok(self):
        assert validate_sign_up(_sign_up()) is None

    def test_mismatched_passwords(self):
        form = _sign_up(confirm_password="Secret#124")
        assert validate_sign_up(form) == "Passwords do not match"

    def test_weak_password(self):
        form = _sign_up(password="weak", confirm_password="weak")
        assert validate_sign_up(form) == "Password does not meet requirements"

    def test_terms_required(self):
        assert validate_sign_up(_sign_up(accept_terms=False)) == (
            "You must accept the terms and conditions"
        )

    def test_name_required(self):
        assert validate_sign_up(_sign_up(full_name="  ")) == "Full name is required"

    def test_mismatch_reported_before_weakness(self):
        form = _sign_up(password="weak", confirm_password="other")
        assert validate_sign_up(form) == "Passwords do not match"
