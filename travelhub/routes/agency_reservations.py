"""
Agency reservation routes - owners review and confirm/cancel bookings
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, status, Depends, Query

from travelhub.config.database import Collections
from travelhub.config.settings import settings
from travelhub.database.db_operations import db_ops, to_object_id
from travelhub.models.reservation import AgencyStatusUpdate, ReservationResponse
from travelhub.services.catalog_service import get_owner_agency, require_owner_agency
from travelhub.services.status_transitions import update_status_by_agency
from travelhub.utils.auth import get_current_user
from travelhub.utils.helpers import serialize_doc, serialize_docs, page_window, pagination

router = APIRouter(prefix="/agency/reservations", tags=["Agency Reservations"])


@router.get("/")
async def get_agency_reservations(
    status_filter: Optional[str] = Query(None, alias="status"),
    day: Optional[date] = Query(None, alias="date"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.AGENCY_PAGE_SIZE, ge=1),
    current_user: dict = Depends(get_current_user)
):
    """Reservations made against the caller's agency"""
    agency = await get_owner_agency(current_user["user_id"])
    if not agency:
        return {"reservations": [], "pagination": pagination(page, limit, 0)}

    filter_query = {"business_id": str(agency["_id"])}
    if status_filter and status_filter != "all":
        filter_query["status"] = status_filter
    if day:
        filter_query["appointment_date"] = day.isoformat()

    reservations = await db_ops.get_all(
        Collections.RESERVATIONS,
        filter_query,
        sort=[("appointment_date", 1), ("start_time", 1)],
        **page_window(page, limit),
    )
    total = await db_ops.count(Collections.RESERVATIONS, filter_query)
    return {
        "reservations": serialize_docs(reservations),
        "pagination": pagination(page, limit, total),
    }


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_agency_reservation(
    reservation_id: str,
    current_user: dict = Depends(get_current_user)
):
    agency = await require_owner_agency(current_user["user_id"])
    oid = to_object_id(reservation_id)
    reservation = None
    if oid is not None:
        reservation = await db_ops.get_one(
            Collections.RESERVATIONS, {"_id": oid, "business_id": str(agency["_id"])}
        )
    if not reservation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found")
    return serialize_doc(reservation)


@router.put("/{reservation_id}/status", response_model=ReservationResponse)
async def update_reservation_status(
    reservation_id: str,
    update: AgencyStatusUpdate,
    current_user: dict = Depends(get_current_user)
):
    """Confirm or cancel a reservation, with optional notes for the customer"""
    agency = await require_owner_agency(current_user["user_id"])
    updated = await update_status_by_agency(
        str(agency["_id"]), reservation_id, update.status, update.business_notes
    )
    return serialize_doc(updated)
