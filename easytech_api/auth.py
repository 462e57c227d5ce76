"""Authentication utilities: password hashing, session tokens and the auth gate."""

import logging
import secrets
from typing import Optional
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import APIKeyCookie

from easytech_api.config import Settings
from easytech_api.database import get_storage
from easytech_api.models import User
from easytech_api.storage import Storage

# Configure logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALGORITHM = "HS256"
SESSION_COOKIE = "session"

# Session cookie carrying the signed token
session_cookie = APIKeyCookie(name=SESSION_COOKIE, auto_error=False)


class AuthenticationError(Exception):
    """Raised when a username/password pair does not match a user."""


def _truncate(password: str) -> str:
    # Bcrypt has a 72-byte limit
    password_bytes = password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Bcrypt has a maximum password length of 72 bytes. Passwords longer than
    this are truncated to prevent errors.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    logger.debug("Hashing password")
    return pwd_context.hash(_truncate(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to verify against

    Returns:
        bool: True if password matches, False otherwise
    """
    logger.debug("Verifying password")
    return pwd_context.verify(_truncate(plain_password), hashed_password)


class PasswordAuthenticator:
    """Checks username/password credentials against stored users."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def authenticate(self, username: str, password: str) -> User:
        """
        Resolve credentials to a user.

        Args:
            username: Exact, case-sensitive username
            password: Plain text password

        Returns:
            User: The matching user

        Raises:
            AuthenticationError: If the user is unknown or the password is wrong
        """
        user = self.storage.get_user_by_username(username)
        if user is None:
            logger.warning(f"Login failed: User not found - {username}")
            raise AuthenticationError("Invalid credentials")

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: Invalid password - {username}")
            raise AuthenticationError("Invalid credentials")

        return user


def serialize_user(user: User, settings: Settings) -> str:
    """
    Create the signed session token for a user.

    Args:
        user: Authenticated user
        settings: Settings holding the signing secret and lifetime

    Returns:
        str: Encoded JWT carrying the user id as subject and a unique jti
    """
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user.id),
        "jti": secrets.token_hex(16),
        "iat": now,
        "exp": now + timedelta(seconds=settings.session_max_age),
    }
    logger.info(f"Creating session token for user: {user.id}")
    return jwt.encode(claims, settings.session_secret, algorithm=ALGORITHM)


def decode_session(token: str, settings: Settings) -> Optional[dict]:
    """
    Decode and verify a session token.

    Returns:
        Optional[dict]: Claims of a well-formed, unexpired token, otherwise None
    """
    try:
        payload = jwt.decode(token, settings.session_secret, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Token decode error: {e}")
        return None

    if not payload.get("jti"):
        logger.warning("Token missing jti claim")
        return None
    return payload


def deserialize_user(token: str, settings: Settings, storage: Storage) -> Optional[User]:
    """
    Resolve a session token back to its user.

    Args:
        token: Encoded session token
        settings: Settings holding the signing secret
        storage: Storage used to load the user and the revoked sessions

    Returns:
        Optional[User]: The user, or None if the token is invalid, revoked or the user is gone
    """
    payload = decode_session(token, settings)
    if payload is None:
        return None

    if storage.is_session_revoked(payload["jti"]):
        logger.warning(f"Revoked session presented: {payload['jti']}")
        return None

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        logger.warning("Token missing a valid subject claim")
        return None

    return storage.get_user(user_id)


def start_session(response: Response, user: User, settings: Settings) -> None:
    """Attach the session cookie for a user to a response."""
    response.set_cookie(
        key=SESSION_COOKIE,
        value=serialize_user(user, settings),
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def end_session(response: Response, token: Optional[str], settings: Settings, storage: Storage) -> None:
    """
    Revoke the presented session token and remove the session cookie.

    Copies of the cookie kept from before logout stop working as well.
    """
    payload = decode_session(token, settings) if token else None
    if payload is not None:
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        storage.revoke_session(payload["jti"], expires_at)
        logger.info(f"Session revoked for user: {payload.get('sub')}")

    response.delete_cookie(
        key=SESSION_COOKIE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_authenticator(request: Request) -> PasswordAuthenticator:
    return request.app.state.authenticator


def get_current_user(
    token: Optional[str] = Depends(session_cookie),
    settings: Settings = Depends(get_settings),
    storage: Storage = Depends(get_storage),
) -> User:
    """
    Dependency to get the current authenticated user from the session cookie.

    Args:
        token: Session token from the cookie, if any
        settings: Application settings
        storage: Application storage

    Returns:
        User: The authenticated user

    Raises:
        HTTPException: If there is no valid session
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )

    if not token:
        logger.warning("Request without session cookie")
        raise credentials_exception

    user = deserialize_user(token, settings, storage)
    if user is None:
        logger.warning("Session does not resolve to a user")
        raise credentials_exception

    logger.info(f"User authenticated: {user.username}")
    return user
