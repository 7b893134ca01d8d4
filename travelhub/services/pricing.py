"""
Pricing and time-slot arithmetic for reservations.

Pure functions over package documents; no database access here.
"""
from typing import Any, Dict, Optional

from travelhub.config.settings import settings
from travelhub.services.errors import BookingValidationError

MINUTES_PER_DAY = 24 * 60


# ─── Time slots ───────────────────────────────────────────────────────────────

def time_to_minutes(value: str) -> int:
    """'HH:MM' -> minutes since midnight"""
    try:
        hours, minutes = value.split(":")
        hours, minutes = int(hours), int(minutes)
    except (AttributeError, ValueError):
        raise BookingValidationError(f"Invalid time {value!r}, expected HH:MM", ["start_time"]) from None
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise BookingValidationError(f"Invalid time {value!r}, expected HH:MM", ["start_time"])
    return hours * 60 + minutes


def minutes_to_time(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def slot_duration(package: Dict[str, Any]) -> int:
    """Slot length in minutes for a package (default when unset)"""
    raw = package.get("duration_minutes")
    if raw in (None, "", 0):
        return settings.DEFAULT_SLOT_MINUTES
    try:
        minutes = int(raw)
    except (TypeError, ValueError):
        raise BookingValidationError(f"Package duration {raw!r} is not a number", ["duration_minutes"]) from None
    if minutes <= 0:
        raise BookingValidationError("Package duration must be positive", ["duration_minutes"])
    return minutes


def slot_end_time(start_time: str, duration_minutes: int) -> str:
    """End of a slot on the same reference day.

    Times are plain time-of-day values; a slot that would run past
    midnight is rejected rather than wrapped.
    """
    end = time_to_minutes(start_time) + duration_minutes
    if end >= MINUTES_PER_DAY:
        raise BookingValidationError(
            f"A {duration_minutes} minute slot starting at {start_time} runs past midnight",
            ["start_time"],
        )
    return minutes_to_time(end)


def slots_overlap(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """Half-open [start, end) overlap on zero-padded HH:MM strings"""
    return start_a < end_b and end_a > start_b


# ─── Prices ───────────────────────────────────────────────────────────────────

def package_price(package: Dict[str, Any]) -> float:
    raw = package.get("price")
    try:
        price = float(raw)
    except (TypeError, ValueError):
        raise BookingValidationError(f"Package price {raw!r} is not a number", ["price"]) from None
    if price < 0:
        raise BookingValidationError("Package price cannot be negative", ["price"])
    return price


def promo_applies(package: Dict[str, Any], promo_code: Optional[str]) -> bool:
    """Case-insensitive match against the package's own active promo code"""
    if not promo_code or not promo_code.strip():
        return False
    own_code = package.get("promo_code")
    if not own_code or not package.get("promo_code_active", False):
        return False
    return own_code.strip().upper() == promo_code.strip().upper()


def apply_discount(subtotal: float, discount: float) -> float:
    """Total after discount, never below zero"""
    return max(0.0, subtotal - discount)


def quote_slot(package: Dict[str, Any]) -> Dict[str, Any]:
    """Slot bookings pay the flat package price"""
    price = round(package_price(package), 2)
    return {
        "base_price": price,
        "subtotal": price,
        "discount": 0.0,
        "total_price": price,
        "promo_code": None,
    }


def quote_travel(package: Dict[str, Any], number_of_travelers: int, promo_code: Optional[str] = None) -> Dict[str, Any]:
    """Price a multi-day booking: price per traveler, minus the package promo when it matches"""
    price = package_price(package)
    subtotal = price * number_of_travelers

    applied = promo_applies(package, promo_code)
    discount = 0.0
    if applied:
        percent = float(package.get("promo_discount") or 0)
        percent = min(max(percent, 0.0), float(settings.MAX_PROMO_DISCOUNT))
        discount = min(subtotal * percent / 100, subtotal)

    return {
        "base_price": round(price, 2),
        "subtotal": round(subtotal, 2),
        "discount": round(discount, 2),
        "total_price": round(apply_discount(subtotal, discount), 2),
        "promo_code": promo_code.strip().upper() if applied else None,
    }
