# bookings/validation.py

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 64
PHONE_DIGITS = 10
LOCATION_MIN_LENGTH = 2
MAX_GUESTS = 100
MAX_ROOMS = 50

NAME_ERROR = "Name must be between 2 to 64 characters"
PHONE_ERROR = "Phone number must be exactly 10 digits"
DATES_REQUIRED_ERROR = "Check-in and check-out dates are required"
DATES_INVALID_ERROR = "Dates must be valid"
CHECKIN_PAST_ERROR = "Check-in date cannot be in the past"
CHECKOUT_ORDER_ERROR = "Check-out date must be after check-in"
ADULTS_ERROR = "Adults must be a number between 1 and 100"
CHILDREN_ERROR = "Children must be a number between 0 and 100"
ROOMS_ERROR = "Rooms must be a number between 1 and 50"
LOCATION_ERROR = "Location is required"

_NON_DIGITS = re.compile(r"\D")


class BookingValidationError(ValueError):
    """A booking request broke one of the field rules. `reason` is safe to show to clients."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NormalizedBooking(BaseModel):
    name: str
    phone: str
    location: str
    checkin: datetime
    checkout: datetime
    adults: int
    children: int = 0
    rooms: int


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def normalize_phone(phone: Any) -> str:
    if isinstance(phone, bool) or not isinstance(phone, (str, int)):
        return ""
    return _NON_DIGITS.sub("", str(phone))


def parse_date(value: Any) -> Optional[datetime]:
    """
    Accepts ISO-8601 dates or date-times (strings or objects). Aware
    date-times are converted to naive UTC so they compare with plain dates.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            # shifting to UTC left the supported year range
            return None
    return parsed


def utc_today() -> date:
    """Today in UTC, the same clock parsed date-times are normalized to."""
    return datetime.now(timezone.utc).date()


def as_count(value: Any) -> Optional[int]:
    """Return `value` as a whole number, or None if it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def validate_booking(raw: Mapping[str, Any], today: Optional[date] = None, check_past: bool = True) -> NormalizedBooking:
    """
    Check a raw booking payload rule by rule and return the normalized booking.

    Rules run in a fixed order and the first failure raises
    BookingValidationError, so a payload with several problems always
    reports the same one. `check_past` is off when re-validating an
    existing booking whose stay may already have started.
    """
    name = raw.get("name")
    if not isinstance(name, str) or not NAME_MIN_LENGTH <= len(name.strip()) <= NAME_MAX_LENGTH:
        raise BookingValidationError(NAME_ERROR)

    phone = normalize_phone(raw.get("phone"))
    if len(phone) != PHONE_DIGITS:
        raise BookingValidationError(PHONE_ERROR)

    if _is_blank(raw.get("checkin")) or _is_blank(raw.get("checkout")):
        raise BookingValidationError(DATES_REQUIRED_ERROR)

    checkin = parse_date(raw.get("checkin"))
    checkout = parse_date(raw.get("checkout"))
    if checkin is None or checkout is None:
        raise BookingValidationError(DATES_INVALID_ERROR)

    if check_past and checkin.date() < (today or utc_today()):
        raise BookingValidationError(CHECKIN_PAST_ERROR)

    if checkout <= checkin:
        raise BookingValidationError(CHECKOUT_ORDER_ERROR)

    adults = as_count(raw.get("adults"))
    if adults is None or not 1 <= adults <= MAX_GUESTS:
        raise BookingValidationError(ADULTS_ERROR)

    children = 0
    if raw.get("children") is not None:
        children = as_count(raw.get("children"))
        if children is None or not 0 <= children <= MAX_GUESTS:
            raise BookingValidationError(CHILDREN_ERROR)

    rooms = as_count(raw.get("rooms"))
    if rooms is None or not 1 <= rooms <= MAX_ROOMS:
        raise BookingValidationError(ROOMS_ERROR)

    location = raw.get("location")
    if not isinstance(location, str) or len(location.strip()) < LOCATION_MIN_LENGTH:
        raise BookingValidationError(LOCATION_ERROR)

    return NormalizedBooking(
        name=name.strip(),
        phone=phone,
        location=location.strip(),
        checkin=checkin,
        checkout=checkout,
        adults=adults,
        children=children,
        rooms=rooms,
    )
