"""Credential Validation — pure email/password policy checks run before hashing.

Invariants:
    - Emails are compared in normalized form (stripped, lower-cased)
    - Password minimum length comes from settings; the maximum is bcrypt's input limit
    - No IO: email-validator runs with deliverability checks disabled
"""

from email_validator import EmailNotValidError, validate_email

from todo_api.core.errors import (
    InputValidationError, InvalidEmailFormatError, WeakPasswordError,
)

DEFAULT_MIN_PASSWORD_LENGTH: int = 6
MAX_PASSWORD_BYTES: int = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email_shape(email: object) -> str:
    """Return the normalized email or raise InvalidEmailFormatError."""
    if not isinstance(email, str) or not email.strip():
        raise InvalidEmailFormatError()
    normalized = normalize_email(email)
    try:
        validate_email(normalized, check_deliverability=False)
    except EmailNotValidError:
        raise InvalidEmailFormatError()
    return normalized


def validate_password_strength(
    password: object, min_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
) -> str:
    if not isinstance(password, str) or len(password) < min_length:
        raise WeakPasswordError(min_length)
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InputValidationError(
            f"password must be at most {MAX_PASSWORD_BYTES} bytes", "password",
        )
    return password
