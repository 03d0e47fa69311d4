"""Auth Routes — login and self-registration.

Invariants:
    - Both endpoints are public (no bearer token)
    - Login failures answer 401 INVALID_CREDENTIALS whatever the cause
    - Registration answers 201 with the redacted user; role is always "user"
"""

from fastapi import APIRouter, Depends, status

from stockroom.api.dependencies import get_authenticator
from stockroom.schemas.auth import (
    LoginRequest, LoginResponse, RegisterRequest, RegisterResponse,
    UserSummaryResponse,
)
from stockroom.services.authenticator import Authenticator

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest, authenticator: Authenticator = Depends(get_authenticator),
):
    """Exchange login + password for a bearer token."""
    result = await authenticator.login(body.login, body.password)
    return LoginResponse(
        token=result.token,
        user=UserSummaryResponse.model_validate(result.user),
    )


@router.post(
    "/register", response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest, authenticator: Authenticator = Depends(get_authenticator),
):
    """Create a regular user account."""
    user = await authenticator.register(
        body.login, body.password, name=body.name, email=body.email,
    )
    return RegisterResponse(
        message="User created successfully",
        user=UserSummaryResponse.model_validate(user),
    )
