"""Contact router for the contact form and newsletter subscriptions."""

import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status

from easytech_api.database import get_storage
from easytech_api.schemas import (
    ContactCreate,
    ContactSubmissionRead,
    NewsletterSubscribe,
    NewsletterSubscriptionRead,
)
from easytech_api.storage import DuplicateRecordError, Storage

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Contact"])


@router.post("/contact", status_code=status.HTTP_201_CREATED)
def submit_contact(contact_data: ContactCreate, storage: Storage = Depends(get_storage)):
    """Store a contact form submission."""
    logger.info(f"Contact form submitted by {contact_data.email}")
    submission = storage.create_contact_submission(contact_data.model_dump(mode="json"))
    return {
        "message": "Contact form submitted successfully",
        "submission": ContactSubmissionRead.model_validate(submission),
    }


@router.post("/newsletter-subscribe", status_code=status.HTTP_201_CREATED)
def subscribe_newsletter(
    request: NewsletterSubscribe,
    response: Response,
    storage: Storage = Depends(get_storage),
):
    """
    Subscribe an email to the newsletter.

    An inactive subscription for the same email is reactivated instead of
    creating a second record.

    Args:
        request: Subscription request with email
        response: Outgoing response, used to downgrade the status on reactivation
        storage: Application storage

    Returns:
        dict: Success message, plus the subscription when newly created

    Raises:
        HTTPException: If the email is already actively subscribed
    """
    email = request.email
    logger.info(f"Newsletter subscription requested for: {email}")

    existing = storage.get_newsletter_subscription_by_email(email)
    if existing:
        if existing.active:
            logger.warning(f"Newsletter subscription rejected: already subscribed - {email}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already subscribed"
            )

        storage.update_newsletter_subscription(existing.id, {"active": True})
        logger.info(f"Newsletter subscription reactivated: {email}")
        response.status_code = status.HTTP_200_OK
        return {"message": "Subscription reactivated successfully"}

    try:
        subscription = storage.create_newsletter_subscription({"email": email})
    except DuplicateRecordError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already subscribed"
        )

    logger.info(f"Newsletter subscription created: {email}")
    return {
        "message": "Subscribed to newsletter successfully",
        "subscription": NewsletterSubscriptionRead.model_validate(subscription),
    }
