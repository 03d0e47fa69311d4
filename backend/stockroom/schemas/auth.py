"""Auth Schemas — login and registration payloads.

Invariants:
    - Responses never carry a password or hash
    - login/password presence and length rules live in core/enforce_credentials.py

Design Decisions:
    - Plain str fields (no EmailStr): email is display-only and optional
"""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    login: str = Field(max_length=255)
    password: str = Field(max_length=1024)


class RegisterRequest(BaseModel):
    login: str = Field(max_length=255)
    password: str = Field(max_length=1024)
    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)


class UserSummaryResponse(BaseModel):
    """Redacted user — id, login, name, role."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    login: str
    name: str
    role: str


class LoginResponse(BaseModel):
    token: str
    user: UserSummaryResponse


class RegisterResponse(BaseModel):
    message: str
    user: UserSummaryResponse
