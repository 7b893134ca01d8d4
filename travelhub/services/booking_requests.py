"""
Turn raw booking payloads into the tagged SlotBooking | TravelBooking variant.

Clients still send the legacy superset of field names (businessId/agencyId,
serviceId/packageId, appointmentDate/departureDate, ...). The kind of booking
is inferred here, once, so the validator only ever sees an explicit variant.
"""
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import TypeAdapter, ValidationError

from travelhub.models.reservation import ReservationRequest, SlotBooking, TravelBooking, TravelerInfo
from travelhub.services.errors import BookingError, BookingValidationError, MissingFieldError
from travelhub.services.pricing import minutes_to_time, time_to_minutes

_request_adapter = TypeAdapter(ReservationRequest)


def _first(payload: Dict[str, Any], names: Iterable[str]) -> Any:
    """First non-empty value among aliases"""
    for name in names:
        value = payload.get(name)
        if value not in (None, ""):
            return value
    return None


def _present(payload: Dict[str, Any], names: Iterable[str]) -> bool:
    return any(payload.get(name) is not None for name in names)


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        # Accept full ISO timestamps from date pickers, keep the calendar day
        return date.fromisoformat(text[:10])
    except ValueError:
        raise BookingValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD", ["date"]) from None


def _parse_travelers_count(value: Any) -> int:
    if value in (None, "", 0, "0"):
        return 1
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise BookingValidationError(
            f"Number of travelers {value!r} is not a number", ["number_of_travelers"]
        ) from None
    if count < 1:
        raise BookingValidationError("Number of travelers must be at least 1", ["number_of_travelers"])
    return count


TRAVELER_ALIASES = {
    "passportNumber": "passport_number",
    "dietaryRestrictions": "dietary_restrictions",
    "medicalConditions": "medical_conditions",
}


def _travelers(value: Any) -> List[TravelerInfo]:
    """Traveler details, accepting the camelCase keys of older clients"""
    if value is None:
        return []
    if not isinstance(value, list):
        raise BookingValidationError("Travelers must be a list of traveler details", ["travelers"])
    travelers = []
    for index, raw in enumerate(value):
        if isinstance(raw, TravelerInfo):
            travelers.append(raw)
            continue
        if not isinstance(raw, dict):
            raise BookingValidationError(
                f"Traveler #{index + 1} must be an object with at least a name", [f"travelers.{index}"]
            )
        try:
            travelers.append(TravelerInfo.model_validate({TRAVELER_ALIASES.get(k, k): v for k, v in raw.items()}))
        except ValidationError as exc:
            raise BookingValidationError(
                f"Invalid traveler #{index + 1}: {exc.errors()[0]['msg']}", [f"travelers.{index}"]
            ) from None
    return travelers


def _error_field(loc: tuple) -> Tuple[str, ...]:
    # Tagged-union errors are prefixed with the variant name
    if loc and loc[0] in ("slot", "travel"):
        loc = loc[1:]
    return tuple(str(part) for part in loc)


def _validation_error(exc: ValidationError) -> BookingError:
    """Absent top-level fields become MissingFieldError, anything else BookingValidationError"""
    errors = exc.errors()
    missing = [
        _error_field(err["loc"])[0] for err in errors
        if err["type"] == "missing" and len(_error_field(err["loc"])) == 1
    ]
    if missing:
        return MissingFieldError(f"Missing required fields: {', '.join(missing)}", missing)
    fields = [".".join(_error_field(err["loc"])) for err in errors]
    return BookingValidationError(f"Invalid booking request: {errors[0]['msg']}", fields)


AGENCY_KEYS = ("agencyId", "agency_id", "businessId", "business_id")
PACKAGE_KEYS = ("packageId", "package_id", "serviceId", "service_id")
DEPARTURE_KEYS = ("departureDate", "departure_date")
DATE_KEYS = DEPARTURE_KEYS + ("appointmentDate", "appointment_date", "date")
TRAVELER_COUNT_KEYS = ("numberOfTravelers", "number_of_travelers")
START_TIME_KEYS = ("startTime", "start_time")
NOTES_KEYS = ("customerNotes", "customer_notes", "notes")


def _require_ids(agency_id: Any, package_id: Any, raw_date: Any) -> None:
    missing = [
        name for name, value in (("agency_id", agency_id), ("package_id", package_id), ("date", raw_date))
        if value in (None, "")
    ]
    if missing:
        raise MissingFieldError(
            "Missing required fields: agency id, package id and date are required",
            missing,
        )


def parse_reservation_request(payload: Dict[str, Any]) -> Union[SlotBooking, TravelBooking]:
    """Validate a raw payload and return the explicit booking variant.

    Tagged and legacy payloads get the same normalization: traveler count
    defaulting, camelCase traveler keys, truncation to the head count and
    zero-padded start times. Raises MissingFieldError when the agency,
    package, date or (for slots) start time is absent. Client price fields
    (subtotal, discount, totalAmount) are ignored.
    """
    kind = payload.get("kind")
    if kind in ("slot", "travel"):
        _require_ids(payload.get("agency_id"), payload.get("package_id"), payload.get("date"))
        tagged = dict(payload)
        if kind == "travel":
            tagged["number_of_travelers"] = _parse_travelers_count(payload.get("number_of_travelers"))
            tagged["travelers"] = _travelers(payload.get("travelers"))
        elif isinstance(payload.get("start_time"), str):
            tagged["start_time"] = minutes_to_time(time_to_minutes(payload["start_time"]))
        try:
            return _request_adapter.validate_python(tagged)
        except ValidationError as exc:
            raise _validation_error(exc) from None

    agency_id = _first(payload, AGENCY_KEYS)
    package_id = _first(payload, PACKAGE_KEYS)
    raw_date = _first(payload, DATE_KEYS)

    _require_ids(agency_id, package_id, raw_date)

    common = {
        "agency_id": str(agency_id),
        "package_id": str(package_id),
        "date": _parse_date(raw_date),
        "notes": str(_first(payload, NOTES_KEYS) or ""),
    }

    is_travel = _present(payload, TRAVELER_COUNT_KEYS) or _present(payload, DEPARTURE_KEYS)
    try:
        if is_travel:
            count = _parse_travelers_count(_first(payload, TRAVELER_COUNT_KEYS))
            return TravelBooking(
                **common,
                number_of_travelers=count,
                travelers=_travelers(payload.get("travelers") or [])[:count],
                promo_code=_first(payload, ("promoCode", "promo_code")),
            )

        start_time: Optional[str] = _first(payload, START_TIME_KEYS)
        if start_time is None:
            raise MissingFieldError("Start time is required for appointments", ["start_time"])
        return SlotBooking(**common, start_time=minutes_to_time(time_to_minutes(start_time)))
    except ValidationError as exc:
        raise _validation_error(exc) from None
