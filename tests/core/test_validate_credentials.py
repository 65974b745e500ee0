"""Credential Validation — tests for email shape and password policy."""

import pytest

from todo_api.core.errors import (
    InputValidationError, InvalidEmailFormatError, WeakPasswordError,
)
from todo_api.core.validate_credentials import (
    DEFAULT_MIN_PASSWORD_LENGTH,
    MAX_PASSWORD_BYTES,
    normalize_email,
    validate_email_shape,
    validate_password_strength,
)


def test_normalize_email_strips_and_lowercases():
    assert normalize_email("  Mike@Example.COM ") == "mike@example.com"


def test_validate_email_shape_returns_normalized():
    assert validate_email_shape("A@B.com") == "a@b.com"


@pytest.mark.parametrize(
    "bad", ["", "   ", "not-an-email", "a@", "@b.com", "a b@c.com", None, 12],
)
def test_validate_email_shape_rejects_bad_input(bad):
    with pytest.raises(InvalidEmailFormatError) as exc_info:
        validate_email_shape(bad)
    assert exc_info.value.field == "email"
    assert exc_info.value.code == "VALIDATION_ERROR"


def test_default_min_password_length_is_six():
    assert DEFAULT_MIN_PASSWORD_LENGTH == 6


def test_password_at_minimum_length_passes():
    assert validate_password_strength("secret") == "secret"


def test_short_password_is_weak():
    with pytest.raises(WeakPasswordError) as exc_info:
        validate_password_strength("12345")
    assert exc_info.value.field == "password"
    assert exc_info.value.min_length == 6


def test_custom_minimum_is_respected():
    with pytest.raises(WeakPasswordError):
        validate_password_strength("secret1", min_length=10)


def test_non_string_password_is_weak():
    with pytest.raises(WeakPasswordError):
        validate_password_strength(None)


def test_password_over_bcrypt_limit_rejected():
    with pytest.raises(InputValidationError) as exc_info:
        validate_password_strength("x" * (MAX_PASSWORD_BYTES + 1))
    assert not isinstance(exc_info.value, WeakPasswordError)
