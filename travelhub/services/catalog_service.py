"""
Catalog lookups shared by the owner-facing routes
"""
from typing import Dict, Optional

from fastapi import HTTPException, status

from travelhub.config.database import Collections
from travelhub.database.db_operations import db_ops


async def get_owner_agency(user_id: str) -> Optional[Dict]:
    return await db_ops.get_one(Collections.AGENCIES, {"owner_user_id": user_id})


async def require_owner_agency(user_id: str) -> Dict:
    """The caller's agency, or 400 when they have not created one yet"""
    agency = await get_owner_agency(user_id)
    if not agency:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Create agency profile first",
        )
    return agency
