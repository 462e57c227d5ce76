"""Services router for listing and creating services."""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from easytech_api.auth import get_current_user
from easytech_api.database import get_storage
from easytech_api.models import User
from easytech_api.routers.common import parse_record_id
from easytech_api.schemas import ServiceCreate, ServiceRead
from easytech_api.storage import Storage

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/services", tags=["Services"])


@router.get("", response_model=List[ServiceRead])
def list_services(storage: Storage = Depends(get_storage)):
    """List all services."""
    logger.info("Fetching all services")
    services = storage.list_services()
    logger.info(f"Found {len(services)} services")
    return services


@router.get("/{service_id}", response_model=ServiceRead)
def get_service(service_id: str, storage: Storage = Depends(get_storage)):
    """
    Get a single service.

    Args:
        service_id: Raw service ID from the path
        storage: Application storage

    Returns:
        ServiceRead: The service

    Raises:
        HTTPException: 400 if the ID is not an integer, 404 if not found
    """
    record_id = parse_record_id(service_id)
    logger.info(f"Fetching service {record_id}")

    service = storage.get_service(record_id)
    if not service:
        logger.warning(f"Service not found: {record_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service not found"
        )
    return service


@router.post("", status_code=status.HTTP_201_CREATED)
def create_service(
    service_data: ServiceCreate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Create a new service."""
    logger.info(f"Creating service '{service_data.title}' for user {current_user.username}")
    service = storage.create_service(service_data.model_dump(mode="json"))
    logger.info(f"Service created successfully: {service.id}")
    return {
        "message": "Service created successfully",
        "service": ServiceRead.model_validate(service),
    }
