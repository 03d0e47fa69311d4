"""User Routes — admin-only account listing and deletion.

Invariants:
    - Both endpoints require role "admin"
    - Deleting your own account answers 400; unknown id answers 404
"""

from fastapi import APIRouter, Depends

from stockroom.api.dependencies import get_user_admin, require_admin
from stockroom.core.domain_types import Identity, UserId
from stockroom.schemas.product import DeletedResponse
from stockroom.schemas.user import UserResponse
from stockroom.services.user_admin import UserAdmin

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    _admin: Identity = Depends(require_admin),
    admin_service: UserAdmin = Depends(get_user_admin),
):
    """All accounts ordered by id, without passwords."""
    users = await admin_service.list_users()
    return [UserResponse.model_validate(u) for u in users]


@router.delete("/{user_id}", response_model=DeletedResponse)
async def delete_user(
    user_id: int,
    admin: Identity = Depends(require_admin),
    admin_service: UserAdmin = Depends(get_user_admin),
):
    await admin_service.delete_user(admin, UserId(user_id))
    return DeletedResponse(message="User deleted successfully", id=user_id)
