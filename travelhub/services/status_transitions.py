"""
Reservation status transitions.

Agencies confirm or cancel reservations made against them; customers cancel
their own. Nothing leaves ``cancelled``.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from travelhub.config.database import Collections
from travelhub.database.db_operations import db_ops, to_object_id
from travelhub.services.errors import BookingValidationError, InvalidTransitionError, NotFoundError

logger = logging.getLogger(__name__)

AGENCY = "business"
CUSTOMER = "customer"

# (actor, action) -> {current status: new status}
TRANSITIONS = {
    (AGENCY, "confirm"): {"pending": "confirmed"},
    (AGENCY, "cancel"): {"pending": "cancelled", "confirmed": "cancelled"},
    (CUSTOMER, "cancel"): {"pending": "cancelled", "confirmed": "cancelled"},
}

STATUS_ACTIONS = {"confirmed": "confirm", "cancelled": "cancel"}
KNOWN_STATUSES = ("pending", "confirmed", "cancelled")


def resolve_transition(current: str, actor: str, action: str) -> str:
    """New status for (current, actor, action), or InvalidTransitionError"""
    allowed = TRANSITIONS.get((actor, action))
    if allowed is None:
        raise InvalidTransitionError(f"A {actor} cannot {action} a reservation")
    new_status = allowed.get(current)
    if new_status is None:
        raise InvalidTransitionError(f"Cannot {action} a reservation that is {current}")
    return new_status


def action_for_status(target_status: str) -> str:
    """Map a requested target status to the action that reaches it"""
    if target_status not in KNOWN_STATUSES:
        raise BookingValidationError(f"Invalid status {target_status!r}", ["status"])
    action = STATUS_ACTIONS.get(target_status)
    if action is None:
        raise InvalidTransitionError(f"A reservation cannot be moved back to {target_status}")
    return action


async def _transition(scope: Dict[str, Any], reservation_id: str, actor: str, action: str,
                      extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    oid = to_object_id(reservation_id)
    if oid is None:
        raise NotFoundError("Reservation not found", ["reservation_id"])
    filter_query = {"_id": oid, **scope}

    reservation = await db_ops.get_one(Collections.RESERVATIONS, filter_query)
    if not reservation:
        raise NotFoundError("Reservation not found", ["reservation_id"])

    current = reservation.get("status", "pending")
    new_status = resolve_transition(current, actor, action)

    update_data = {"status": new_status, **(extra or {})}
    if new_status == "cancelled":
        update_data["cancelled_at"] = datetime.utcnow()
        update_data["cancelled_by"] = actor

    # Conditional on the status we validated against
    updated = await db_ops.update_one(
        Collections.RESERVATIONS, {**filter_query, "status": current}, update_data
    )
    if not updated:
        raise InvalidTransitionError("Reservation status changed, reload and try again")

    if new_status == "cancelled" and updated.get("start_time"):
        await db_ops.release_slot(updated["business_id"], updated["appointment_date"], str(updated["_id"]))

    logger.info("Reservation %s: %s -> %s by %s", reservation_id, current, new_status, actor)
    return updated


async def update_status_by_agency(agency_id: str, reservation_id: str, target_status: str,
                                  business_notes: Optional[str] = None) -> Dict[str, Any]:
    """Agency owner confirms or cancels a reservation on their agency"""
    action = action_for_status(target_status)
    extra = {"business_notes": business_notes} if business_notes else None
    return await _transition({"business_id": agency_id}, reservation_id, AGENCY, action, extra)


async def cancel_by_customer(user_id: str, reservation_id: str, reason: Optional[str] = None) -> Dict[str, Any]:
    """Customer cancels one of their own pending or confirmed reservations"""
    extra = {"cancellation_reason": reason or "Cancelled by customer"}
    return await _transition({"customer_user_id": user_id}, reservation_id, CUSTOMER, "cancel", extra)
