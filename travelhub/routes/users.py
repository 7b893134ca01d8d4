"""
User routes - accounts mirrored from the identity provider
"""
from fastapi import APIRouter, HTTPException, status, Depends

from travelhub.config.database import Collections
from travelhub.database.db_operations import db_ops
from travelhub.models.user import UserSync, UserRoleUpdate, UserResponse
from travelhub.utils.auth import get_current_user
from travelhub.utils.helpers import serialize_doc

router = APIRouter(prefix="/users", tags=["Users"])

VALID_ROLES = ("customer", "business", "admin")


@router.post("/", response_model=UserResponse)
async def create_or_update_user(
    user: UserSync,
    current_user: dict = Depends(get_current_user)
):
    """Create or refresh the caller's user record"""
    if user.user_id != current_user["user_id"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot sync another user")

    saved = await db_ops.upsert(
        Collections.USERS,
        {"user_id": user.user_id},
        user.model_dump(exclude={"user_id"}) | {"user_id": user.user_id},
    )
    return serialize_doc(saved)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Get user by identity provider id"""
    user = await db_ops.get_one(Collections.USERS, {"user_id": user_id})
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return serialize_doc(user)


@router.put("/role", response_model=UserResponse)
async def update_user_role(
    update: UserRoleUpdate,
    current_user: dict = Depends(get_current_user)
):
    """Set the caller's own marketplace role"""
    if update.user_id != current_user["user_id"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot change another user's role")
    if update.role not in VALID_ROLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid role. Must be customer, business, or admin",
        )

    updated = await db_ops.update_one(Collections.USERS, {"user_id": update.user_id}, {"role": update.role})
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return serialize_doc(updated)
