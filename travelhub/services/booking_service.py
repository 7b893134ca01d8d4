"""
Booking validator and pricing calculator.

Resolves a tagged booking request against the catalog, checks slot
availability, prices the booking and persists the normalized reservation.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Union

from bson import ObjectId

from travelhub.config.database import Collections
from travelhub.database.db_operations import db_ops
from travelhub.models.reservation import ACTIVE_STATUSES, SlotBooking, TravelBooking
from travelhub.services.errors import BookingValidationError, NotFoundError, SlotConflictError
from travelhub.services.pricing import quote_slot, quote_travel, slot_duration, slot_end_time
from travelhub.utils.helpers import display_name

logger = logging.getLogger(__name__)


def customer_snapshot(user: Dict[str, Any], customer: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Customer identity copied onto the reservation.

    Taken once at booking time and never re-synced, so later profile edits
    do not rewrite booking history.
    """
    name = display_name(customer.get("first_name"), customer.get("last_name")) if customer else ""
    return {
        "customer_user_id": user["user_id"],
        "customer_name": name or user.get("name") or user["email"],
        "customer_email": user["email"],
        "customer_phone": customer.get("phone") if customer else None,
    }


async def resolve_catalog(agency_id: str, package_id: str) -> Dict[str, Dict[str, Any]]:
    """Load the agency and a package that belongs to it"""
    agency = await db_ops.get_by_id(Collections.AGENCIES, agency_id)
    if not agency:
        raise NotFoundError("Travel agency not found", ["agency_id"])

    package = await db_ops.get_by_id(Collections.PACKAGES, package_id)
    if not package or str(package.get("agency_id")) != str(agency["_id"]):
        raise NotFoundError("Package not found for this agency", ["package_id"])
    if not package.get("is_active", True):
        raise BookingValidationError("Package is not available for booking", ["package_id"])

    return {"agency": agency, "package": package}


async def find_slot_conflict(business_id: str, day: str, start_time: str, end_time: str) -> Optional[Dict]:
    """First active reservation overlapping [start_time, end_time) on the day"""
    existing = await db_ops.get_all(Collections.RESERVATIONS, {
        "business_id": business_id,
        "appointment_date": day,
        "status": {"$in": list(ACTIVE_STATUSES)},
        "start_time": {"$lt": end_time},
        "end_time": {"$gt": start_time},
    }, limit=1)
    return existing[0] if existing else None


async def create_reservation(principal: Dict[str, Any], request: Union[SlotBooking, TravelBooking]) -> Dict[str, Any]:
    """Validate, price and persist a reservation for the principal.

    Raises NotFoundError, BookingValidationError or SlotConflictError; the
    request itself has already been checked for missing fields.
    """
    user = await db_ops.get_one(Collections.USERS, {"user_id": principal["user_id"]})
    if not user:
        raise NotFoundError("User not found", ["user_id"])
    customer = await db_ops.get_one(Collections.CUSTOMERS, {"owner_user_id": principal["user_id"]})

    catalog = await resolve_catalog(request.agency_id, request.package_id)
    agency, package = catalog["agency"], catalog["package"]
    business_id = str(agency["_id"])
    day = request.date.isoformat()

    reservation: Dict[str, Any] = {
        "_id": ObjectId(),
        "kind": request.kind,
        "business_id": business_id,
        "service_id": str(package["_id"]),
        "appointment_date": day,
        "notes": request.notes,
        "status": "pending",
        "payment_status": "pending",
        **customer_snapshot(user, customer),
    }

    if isinstance(request, SlotBooking):
        end_time = slot_end_time(request.start_time, slot_duration(package))
        conflict = await find_slot_conflict(business_id, day, request.start_time, end_time)
        if conflict:
            raise SlotConflictError(
                f"Time slot {request.start_time}-{end_time} on {day} is already booked",
                ["start_time"],
            )
        reservation.update(start_time=request.start_time, end_time=end_time)
        reservation.update(quote_slot(package))
    else:
        reservation.update(
            number_of_travelers=request.number_of_travelers,
            travelers=[t.model_dump() for t in request.travelers],
        )
        reservation.update(quote_travel(package, request.number_of_travelers, request.promo_code))

    created = await _persist(reservation)

    if customer:
        await db_ops.increment(
            Collections.CUSTOMERS,
            {"owner_user_id": principal["user_id"]},
            {"total_bookings": 1},
            {"last_login_at": datetime.utcnow()},
        )

    logger.info(
        "Created %s reservation %s for agency %s (total %.2f)",
        created["kind"], created["_id"], business_id, created["total_price"],
    )
    return created


async def _persist(reservation: Dict[str, Any]) -> Dict[str, Any]:
    """Write the reservation; slot bookings first claim their time range"""
    if reservation["kind"] != "slot":
        return await db_ops.create(Collections.RESERVATIONS, reservation)

    reservation_id = str(reservation["_id"])
    claimed = await db_ops.claim_slot(
        reservation["business_id"], reservation["appointment_date"],
        reservation["start_time"], reservation["end_time"], reservation_id,
    )
    if not claimed:
        raise SlotConflictError(
            f"Time slot {reservation['start_time']}-{reservation['end_time']} "
            f"on {reservation['appointment_date']} was just booked",
            ["start_time"],
        )
    try:
        return await db_ops.create(Collections.RESERVATIONS, reservation)
    except Exception:
        logger.exception("Reservation write failed, releasing slot %s", reservation_id)
        await db_ops.release_slot(reservation["business_id"], reservation["appointment_date"], reservation_id)
        raise
