"""
Customer profile routes
"""
from fastapi import APIRouter, Depends

from travelhub.config.database import Collections
from travelhub.database.db_operations import db_ops
from travelhub.models.customer import CustomerProfileUpdate
from travelhub.utils.auth import get_current_user
from travelhub.utils.helpers import serialize_doc

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("/me")
async def get_my_profile(current_user: dict = Depends(get_current_user)):
    """Return the caller's customer profile (null when not created yet)"""
    customer = await db_ops.get_one(Collections.CUSTOMERS, {"owner_user_id": current_user["user_id"]})
    return {"customer": serialize_doc(customer)}


@router.put("/me")
async def upsert_my_profile(
    profile: CustomerProfileUpdate,
    current_user: dict = Depends(get_current_user)
):
    """Create or update the caller's customer profile"""
    update_data = profile.model_dump(mode="json", exclude_unset=True)
    update_data["owner_user_id"] = current_user["user_id"]

    existing = await db_ops.get_one(Collections.CUSTOMERS, {"owner_user_id": current_user["user_id"]})
    if existing:
        saved = await db_ops.update(Collections.CUSTOMERS, existing["_id"], update_data)
    else:
        update_data.update(total_bookings=0, total_spent=0, is_active=True, is_verified=False)
        saved = await db_ops.create(Collections.CUSTOMERS, update_data)
    return {"customer": serialize_doc(saved)}
