"""Blog router for listing, reading and creating blog posts."""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from easytech_api.auth import get_current_user
from easytech_api.database import get_storage
from easytech_api.models import User
from easytech_api.routers.common import parse_record_id
from easytech_api.schemas import BlogPostCreate, BlogPostRead
from easytech_api.storage import Storage

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blog-posts", tags=["Blog"])


@router.get("", response_model=List[BlogPostRead])
def list_posts(storage: Storage = Depends(get_storage)):
    """
    List all blog posts.

    Args:
        storage: Application storage

    Returns:
        List[BlogPostRead]: Every blog post
    """
    logger.info("Fetching all blog posts")
    posts = storage.list_blog_posts()
    logger.info(f"Found {len(posts)} blog posts")
    return posts


# GET /api/blog-posts/related/{post_id}
@router.get("/related/{post_id}", response_model=List[BlogPostRead])
def list_related_posts(post_id: str, storage: Storage = Depends(get_storage)):
    """
    List up to three posts sharing the category of a post.

    Args:
        post_id: Raw blog post ID from the path
        storage: Application storage

    Returns:
        List[BlogPostRead]: Related posts, empty if the post does not exist

    Raises:
        HTTPException: If the ID is not an integer
    """
    record_id = parse_record_id(post_id)
    logger.info(f"Fetching posts related to {record_id}")
    return storage.get_related_blog_posts(record_id)


# GET /api/blog-posts/{post_id}
@router.get("/{post_id}", response_model=BlogPostRead)
def get_post(post_id: str, storage: Storage = Depends(get_storage)):
    """
    Get a single blog post.

    Raises:
        HTTPException: 400 if the ID is not an integer, 404 if not found
    """
    record_id = parse_record_id(post_id)
    logger.info(f"Fetching blog post {record_id}")

    post = storage.get_blog_post(record_id)
    if not post:
        logger.warning(f"Blog post not found: {record_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found"
        )
    return post


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: BlogPostCreate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Create a new blog post."""
    logger.info(f"Creating new blog post: {post_data.title}")
    post = storage.create_blog_post(post_data.model_dump(mode="json"))
    logger.info(f"Blog post created successfully: {post.id}")
    return {
        "message": "Blog post created successfully",
        "blogPost": BlogPostRead.model_validate(post),
    }
