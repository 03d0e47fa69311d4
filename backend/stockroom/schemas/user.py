"""User Schemas — admin listing of accounts (password excluded)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    login: str
    email: str | None = None
    name: str
    role: str
    created_at: datetime | None = None
