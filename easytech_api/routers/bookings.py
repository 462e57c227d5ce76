"""Bookings router for the logged-in user's booking requests."""

import logging
from typing import List
from fastapi import APIRouter, Depends, status

from easytech_api.auth import get_current_user
from easytech_api.database import get_storage
from easytech_api.models import User
from easytech_api.schemas import BookingCreate, BookingRead
from easytech_api.storage import Storage

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_data: BookingCreate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Submit a booking request owned by the current user.

    Args:
        booking_data: Requested service, date, time and notes
        current_user: Authenticated user, recorded as the owner
        storage: Application storage

    Returns:
        dict: Success message and the pending booking
    """
    logger.info(f"Booking request for service {booking_data.service_id} by user {current_user.id}")
    booking = storage.create_booking_request(
        current_user.id, booking_data.model_dump(mode="json")
    )
    logger.info(f"Booking request created: {booking.id}")
    return {
        "message": "Booking request submitted successfully",
        "booking": BookingRead.model_validate(booking),
    }


@router.get("", response_model=List[BookingRead])
def list_bookings(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """List the current user's bookings, most recent first."""
    logger.info(f"Fetching bookings for user {current_user.id}")
    return storage.list_bookings_by_user(current_user.id)
