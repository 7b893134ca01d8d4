"""
Reservation routes - customers book, list and cancel their reservations
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException, status, Depends, Query

from travelhub.config.database import Collections
from travelhub.config.settings import settings
from travelhub.database.db_operations import db_ops, to_object_id
from travelhub.models.reservation import CustomerCancellation, ReservationResponse
from travelhub.services.booking_requests import parse_reservation_request
from travelhub.services.booking_service import create_reservation
from travelhub.services.status_transitions import cancel_by_customer
from travelhub.utils.auth import get_current_user
from travelhub.utils.helpers import serialize_doc, serialize_docs, page_window, pagination

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post("/", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def book_reservation(
    payload: Dict[str, Any] = Body(...),
    current_user: dict = Depends(get_current_user)
):
    """Book a time slot or a travel package.

    Accepts either an explicit ``kind`` ("slot" / "travel") or the legacy
    field names (agencyId/businessId, packageId/serviceId, departureDate/
    appointmentDate, startTime, numberOfTravelers, travelers, promoCode).
    """
    request = parse_reservation_request(payload)
    created = await create_reservation(current_user, request)
    return serialize_doc(created)


@router.get("/mine")
async def get_my_reservations(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.CUSTOMER_PAGE_SIZE, ge=1),
    current_user: dict = Depends(get_current_user)
):
    """The caller's reservations, newest date first"""
    filter_query = {"customer_user_id": current_user["user_id"]}
    if status_filter and status_filter != "all":
        filter_query["status"] = status_filter

    reservations = await db_ops.get_all(
        Collections.RESERVATIONS,
        filter_query,
        sort=[("appointment_date", -1), ("start_time", -1)],
        **page_window(page, limit),
    )
    total = await db_ops.count(Collections.RESERVATIONS, filter_query)
    return {
        "reservations": serialize_docs(reservations),
        "pagination": pagination(page, limit, total),
    }


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_my_reservation(
    reservation_id: str,
    current_user: dict = Depends(get_current_user)
):
    """One of the caller's reservations"""
    oid = to_object_id(reservation_id)
    reservation = None
    if oid is not None:
        reservation = await db_ops.get_one(
            Collections.RESERVATIONS, {"_id": oid, "customer_user_id": current_user["user_id"]}
        )
    if not reservation:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found")
    return serialize_doc(reservation)


@router.post("/{reservation_id}/cancel", response_model=ReservationResponse)
async def cancel_my_reservation(
    reservation_id: str,
    cancellation: Optional[CustomerCancellation] = None,
    current_user: dict = Depends(get_current_user)
):
    """Cancel a pending or confirmed reservation"""
    reason = cancellation.reason if cancellation else None
    updated = await cancel_by_customer(current_user["user_id"], reservation_id, reason)
    return serialize_doc(updated)
