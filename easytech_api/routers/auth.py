"""Authentication router for registration, login, logout and the current user."""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status

from easytech_api.config import Settings
from easytech_api.database import get_storage
from easytech_api.models import User
from easytech_api.schemas import UserCreate, UserLogin, UserRead
from easytech_api.storage import DuplicateRecordError, Storage
from easytech_api.auth import (
    AuthenticationError,
    PasswordAuthenticator,
    end_session,
    get_authenticator,
    get_current_user,
    get_settings,
    hash_password,
    session_cookie,
    start_session,
)

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, storage: Storage = Depends(get_storage)):
    """
    Register a new user.

    Args:
        user_data: Registration data (username, password, optional email)
        storage: Application storage

    Returns:
        dict: Success message and the created user without its password

    Raises:
        HTTPException: If the username is already taken
    """
    logger.info(f"Registration attempt for username: {user_data.username}")

    # Check if user already exists
    if storage.get_user_by_username(user_data.username):
        logger.warning(f"Registration failed: Username already exists - {user_data.username}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists"
        )

    try:
        user = storage.create_user({
            "username": user_data.username,
            "password_hash": hash_password(user_data.password),
            "email": user_data.email,
        })
    except DuplicateRecordError:
        logger.warning(f"Registration failed: Concurrent duplicate - {user_data.username}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists"
        )

    logger.info(f"User registered successfully: {user.username}")
    return {
        "message": "User registered successfully",
        "user": UserRead.model_validate(user),
    }


@router.post("/login")
def login(
    credentials: UserLogin,
    response: Response,
    authenticator: PasswordAuthenticator = Depends(get_authenticator),
    settings: Settings = Depends(get_settings),
):
    """
    Authenticate a user and start a cookie session.

    Raises:
        HTTPException: If credentials are invalid
    """
    logger.info(f"Login attempt for username: {credentials.username}")

    try:
        user = authenticator.authenticate(credentials.username, credentials.password)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )

    start_session(response, user, settings)

    logger.info(f"User logged in successfully: {user.username}")
    return {
        "message": "Login successful",
        "user": UserRead.model_validate(user),
    }


@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(session_cookie),
    settings: Settings = Depends(get_settings),
    storage: Storage = Depends(get_storage),
):
    """End the current session server-side and clear the session cookie."""
    end_session(response, token, settings, storage)
    logger.info("User logged out")
    return {"message": "Logged out successfully"}


@router.get("/user")
def read_current_user(current_user: User = Depends(get_current_user)):
    """Return the logged-in user without its password."""
    return {"user": UserRead.model_validate(current_user)}
