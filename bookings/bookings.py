# bookings.py

import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, BackgroundTasks, HTTPException, Depends
from pymongo.errors import PyMongoError

from models.booking import BookingRequest, BookingUpdate, BookingResponse, BookingCreatedResponse
from models.user import Identity
from auth.dependencies import ADMIN_ONLY, STAFF_ROLES, require_roles
from bookings.validation import BookingValidationError, validate_booking
from config import Settings, get_app_settings
from database.booking_store import BookingStore, InvalidBookingId
from database.connection import get_booking_store
from notifications.notifications import BookingNotifier, get_notifier
from pricing.pricing import compute

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bookings"])

BOOKING_FIELDS = ("name", "phone", "location", "checkin", "checkout", "adults", "children", "rooms")
PRICING_FIELDS = {"location", "checkin", "checkout", "rooms"}


def server_error(message: str) -> HTTPException:
    logger.exception(message)
    return HTTPException(status_code=500, detail="Internal server error")


@router.post("/book", response_model=BookingCreatedResponse)
async def create_booking(
    booking: BookingRequest,
    background_tasks: BackgroundTasks,
    store: BookingStore = Depends(get_booking_store),
    notifier: BookingNotifier = Depends(get_notifier),
    settings: Settings = Depends(get_app_settings),
):
    """Public booking form. The amount is always priced here, never taken from the client."""
    try:
        normalized = validate_booking(booking.model_dump())
    except BookingValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.reason)

    quote = compute(normalized.location, normalized.checkin, normalized.checkout, normalized.rooms, settings.pricing())

    booking_doc = normalized.model_dump()
    booking_doc["totalAmount"] = float(quote.total_amount)
    booking_doc["remark"] = ""
    booking_doc["createdAt"] = datetime.now(timezone.utc)

    try:
        booking_id = await store.create(booking_doc)
    except PyMongoError:
        raise server_error("Error saving booking")

    logger.info("Booking %s saved for %s at %s", booking_id, normalized.name, normalized.location)
    # runs after the response is sent; the notifier logs its own failures
    background_tasks.add_task(notifier.notify, booking_doc)

    return BookingCreatedResponse(
        bookingId=booking_id,
        totalAmount=float(quote.total_amount),
        pricePerNight=float(quote.price_per_night),
        nights=quote.nights,
    )


@router.get("/bookings", response_model=List[BookingResponse])
async def get_bookings(
    store: BookingStore = Depends(get_booking_store),
    identity: Identity = Depends(require_roles(STAFF_ROLES)),
):
    """All bookings, newest first."""
    try:
        return await store.find_all()
    except PyMongoError:
        raise server_error("Error fetching bookings")


@router.put("/bookings/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    update: BookingUpdate,
    store: BookingStore = Depends(get_booking_store),
    settings: Settings = Depends(get_app_settings),
    identity: Identity = Depends(require_roles(ADMIN_ONLY)),
):
    """
    Apply a partial update. The merged booking is validated again (without
    the past check-in rule, the stay may already be underway) and the total
    is repriced when a pricing input changes. Fields left out of the payload
    are not written.
    """
    changes = update.model_dump(exclude_unset=True)
    try:
        existing = await store.find_by_id(booking_id)
    except InvalidBookingId:
        raise HTTPException(status_code=400, detail="Invalid booking ID")
    except PyMongoError:
        raise server_error("Error updating booking")
    if not existing:
        raise HTTPException(status_code=404, detail="Booking not found")

    try:
        normalized = validate_booking({**existing, **changes}, check_past=False)
    except BookingValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.reason)

    fields = {key: getattr(normalized, key) for key in BOOKING_FIELDS if key in changes}
    if "remark" in changes:
        fields["remark"] = changes["remark"] or ""
    if PRICING_FIELDS & fields.keys():
        quote = compute(normalized.location, normalized.checkin, normalized.checkout, normalized.rooms, settings.pricing())
        fields["totalAmount"] = float(quote.total_amount)

    try:
        updated = await store.update_by_id(booking_id, fields)
    except PyMongoError:
        raise server_error("Error updating booking")
    if not updated:
        raise HTTPException(status_code=404, detail="Booking not found")

    logger.info("Booking %s updated by %s: %s", booking_id, identity.username, sorted(fields))
    return updated


@router.delete("/bookings/{booking_id}")
async def delete_booking(
    booking_id: str,
    store: BookingStore = Depends(get_booking_store),
    identity: Identity = Depends(require_roles(ADMIN_ONLY)),
):
    try:
        deleted = await store.delete_by_id(booking_id)
    except InvalidBookingId:
        raise HTTPException(status_code=400, detail="Invalid booking ID")
    except PyMongoError:
        raise server_error("Error deleting booking")
    if not deleted:
        raise HTTPException(status_code=404, detail="Booking not found")

    logger.info("Booking %s deleted by %s", booking_id, identity.username)
    return {"message": "Booking deleted successfully"}
