"""Helpers shared by the routers."""

import re
import logging
from fastapi import HTTPException, status

# Configure logging
logger = logging.getLogger(__name__)

# Plain ASCII integers only: no whitespace, underscores or other digit scripts
RECORD_ID_PATTERN = re.compile(r"-?[0-9]+")


def parse_record_id(raw_id: str) -> int:
    """
    Parse a path parameter into an integer record id.

    Args:
        raw_id: Raw path segment

    Returns:
        int: Parsed id

    Raises:
        HTTPException: If the segment is not a plain integer
    """
    if not RECORD_ID_PATTERN.fullmatch(raw_id):
        logger.warning(f"Invalid ID format: {raw_id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid ID format"
        )
    return int(raw_id)
