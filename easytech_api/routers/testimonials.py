"""Testimonials router."""

import logging
from typing import List
from fastapi import APIRouter, Depends, status

from easytech_api.auth import get_current_user
from easytech_api.database import get_storage
from easytech_api.models import User
from easytech_api.schemas import TestimonialCreate, TestimonialRead
from easytech_api.storage import Storage

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/testimonials", tags=["Testimonials"])


@router.get("", response_model=List[TestimonialRead])
def list_testimonials(storage: Storage = Depends(get_storage)):
    logger.info("Fetching all testimonials")
    return storage.list_testimonials()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_testimonial(
    testimonial_data: TestimonialCreate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Create a new testimonial."""
    logger.info(f"Creating testimonial from {testimonial_data.name}")
    testimonial = storage.create_testimonial(testimonial_data.model_dump(mode="json"))
    return {
        "message": "Testimonial created successfully",
        "testimonial": TestimonialRead.model_validate(testimonial),
    }
