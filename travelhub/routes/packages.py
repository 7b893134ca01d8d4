"""
Package routes - agency owners manage their own packages
"""
from fastapi import APIRouter, HTTPException, status, Depends, Query

from travelhub.config.database import Collections
from travelhub.config.settings import settings
from travelhub.database.db_operations import db_ops, to_object_id
from travelhub.models.package import PackageCreate, PackageUpdate, PackageResponse
from travelhub.services.catalog_service import get_owner_agency, require_owner_agency
from travelhub.utils.auth import get_current_user
from travelhub.utils.helpers import serialize_doc, serialize_docs, page_window, pagination

router = APIRouter(prefix="/packages", tags=["Packages"])


def _owned(package_id: str, agency: dict) -> dict:
    """Filter matching a package only when it belongs to the agency"""
    oid = to_object_id(package_id)
    if oid is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Package not found")
    return {"_id": oid, "agency_id": str(agency["_id"])}


@router.get("/mine")
async def get_my_packages(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.MAX_PAGE_SIZE, ge=1),
    current_user: dict = Depends(get_current_user)
):
    """Packages of the caller's agency, newest first"""
    agency = await get_owner_agency(current_user["user_id"])
    if not agency:
        return {"packages": [], "pagination": pagination(page, limit, 0)}

    filter_query = {"agency_id": str(agency["_id"])}
    packages = await db_ops.get_all(
        Collections.PACKAGES, filter_query, sort=[("created_at", -1)], **page_window(page, limit)
    )
    total = await db_ops.count(Collections.PACKAGES, filter_query)
    return {
        "packages": serialize_docs(packages),
        "pagination": pagination(page, limit, total),
    }


@router.post("/", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
async def create_package(
    package: PackageCreate,
    current_user: dict = Depends(get_current_user)
):
    """Create a package under the caller's agency"""
    agency = await require_owner_agency(current_user["user_id"])
    package_dict = package.model_dump(mode="json")
    package_dict["agency_id"] = str(agency["_id"])
    created = await db_ops.create(Collections.PACKAGES, package_dict)
    return serialize_doc(created)


@router.put("/{package_id}", response_model=PackageResponse)
async def update_package(
    package_id: str,
    package_update: PackageUpdate,
    current_user: dict = Depends(get_current_user)
):
    """Update one of the caller's packages"""
    agency = await require_owner_agency(current_user["user_id"])
    update_data = package_update.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
    if update_data.get("promo_code") is not None:
        update_data["promo_code"] = update_data["promo_code"].strip().upper() or None

    updated = await db_ops.update_one(Collections.PACKAGES, _owned(package_id, agency), update_data)
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Package not found")
    return serialize_doc(updated)


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(
    package_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Delete one of the caller's packages"""
    agency = await require_owner_agency(current_user["user_id"])
    deleted = await db_ops.delete_one(Collections.PACKAGES, _owned(package_id, agency))
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Package not found")
