"""
Agency routes - public browsing plus the owner's own profile
"""
import logging
import re
from typing import Optional

from fastapi import APIRouter, HTTPException, status, Depends, Query

from travelhub.config.database import Collections
from travelhub.config.settings import settings
from travelhub.database.db_operations import db_ops
from travelhub.models.agency import AgencyCreate, AgencyUpdate, AgencyResponse
from travelhub.services.catalog_service import get_owner_agency
from travelhub.utils.auth import get_current_user
from travelhub.utils.helpers import serialize_doc, serialize_docs, page_window, pagination

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agencies", tags=["Agencies"])


def _contains(text: str) -> dict:
    return {"$regex": re.escape(text), "$options": "i"}


@router.get("/")
async def browse_agencies(
    search: Optional[str] = None,
    category: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.BROWSE_PAGE_SIZE, ge=1),
):
    """Browse agencies with search and filters (public)"""
    filter_query = {}
    if search:
        filter_query["$or"] = [
            {"agency_name": _contains(search)},
            {"description": _contains(search)},
        ]
    if category and category != "all":
        filter_query["category"] = category
    if city:
        filter_query["address.city"] = _contains(city)
    if state:
        filter_query["address.state"] = _contains(state)

    window = page_window(page, limit)
    agencies = await db_ops.get_all(
        Collections.AGENCIES, filter_query, sort=[("created_at", -1)], **window
    )
    total = await db_ops.count(Collections.AGENCIES, filter_query)

    return {
        "agencies": serialize_docs(agencies),
        "pagination": pagination(page, limit, total),
    }


@router.get("/me")
async def get_my_agency(current_user: dict = Depends(get_current_user)):
    """The caller's agency profile (null when not created yet)"""
    agency = await get_owner_agency(current_user["user_id"])
    return {"agency": serialize_doc(agency)}


@router.post("/me", response_model=AgencyResponse, status_code=status.HTTP_201_CREATED)
async def create_my_agency(
    agency: AgencyCreate,
    current_user: dict = Depends(get_current_user)
):
    """Create the caller's agency; one per owner"""
    if await get_owner_agency(current_user["user_id"]):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Agency already exists")

    agency_dict = agency.model_dump(mode="json")
    agency_dict["owner_user_id"] = current_user["user_id"]
    created = await db_ops.create(Collections.AGENCIES, agency_dict)
    logger.info("Agency %s created by %s", created["_id"], current_user["user_id"])
    return serialize_doc(created)


@router.put("/me", response_model=AgencyResponse)
async def update_my_agency(
    agency_update: AgencyUpdate,
    current_user: dict = Depends(get_current_user)
):
    """Update the caller's agency profile"""
    update_data = agency_update.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    updated = await db_ops.update_one(
        Collections.AGENCIES, {"owner_user_id": current_user["user_id"]}, update_data
    )
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Agency not found")
    return serialize_doc(updated)


@router.get("/{agency_id}")
async def get_agency_details(agency_id: str):
    """Agency with its active packages (public)"""
    agency = await db_ops.get_by_id(Collections.AGENCIES, agency_id)
    if not agency:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Travel agency not found")

    packages = await db_ops.get_all(
        Collections.PACKAGES,
        {"agency_id": str(agency["_id"]), "is_active": True},
        sort=[("category", 1), ("package_name", 1)],
        limit=settings.MAX_PAGE_SIZE,
    )
    return {"agency": serialize_doc(agency), "packages": serialize_docs(packages)}
