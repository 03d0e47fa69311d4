"""Credential Enforcement — input rules for login and registration.

Invariants:
    - Logins are trimmed, then matched case-sensitively
    - Registration login length 3-50 (after trim); password length >= 3
    - Display name defaults to the login when omitted or blank
    - Email is optional; trimmed and lower-cased, blank becomes None

Design Decisions:
    - Password minimum of 3 preserves the existing business rule; it is not a
      security recommendation
    - Lengths measured after trimming so "  ab  " is rejected like "ab"
"""

from dataclasses import dataclass

from stockroom.core.errors import BadRequestError


LOGIN_MIN_LENGTH: int = 3
LOGIN_MAX_LENGTH: int = 50
PASSWORD_MIN_LENGTH: int = 3


@dataclass(frozen=True)
class LoginInput:
    login: str
    password: str


@dataclass(frozen=True)
class RegistrationInput:
    login: str
    password: str
    name: str
    email: str | None


def normalize_login(login: str) -> str:
    return login.strip()


def validate_login_input(login: object, password: object) -> LoginInput:
    """Both fields required; only the login is normalized."""
    if not isinstance(login, str) or not isinstance(password, str):
        raise BadRequestError("Login and password are required")
    normalized = normalize_login(login)
    if not normalized or not password:
        raise BadRequestError("Login and password are required")
    return LoginInput(login=normalized, password=password)


def validate_registration(
    login: object,
    password: object,
    name: str | None = None,
    email: str | None = None,
) -> RegistrationInput:
    """Validate and normalize a registration request."""
    if not isinstance(login, str) or not isinstance(password, str):
        raise BadRequestError("Login and password are required")
    normalized = normalize_login(login)
    if not normalized or not password:
        raise BadRequestError("Login and password are required")
    if not LOGIN_MIN_LENGTH <= len(normalized) <= LOGIN_MAX_LENGTH:
        raise BadRequestError(
            f"Login must be between {LOGIN_MIN_LENGTH} and "
            f"{LOGIN_MAX_LENGTH} characters",
        )
    if len(password) < PASSWORD_MIN_LENGTH:
        raise BadRequestError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
        )

    display_name = (name or "").strip() or normalized
    clean_email = (email or "").strip().lower() or None
    return RegistrationInput(
        login=normalized, password=password,
        name=display_name, email=clean_email,
    )
