"""Application settings loaded from the environment."""

import os
import logging
from typing import List, Optional
from pydantic import BaseModel
from dotenv import load_dotenv

# Configure logging
logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings(BaseModel):
    """Runtime configuration for the API."""

    app_name: str = "EasyTechAPI"
    database_url: str = "sqlite:///./easytech.db"
    session_secret: str
    session_max_age: int = 60 * 60 * 24
    cookie_secure: bool = False
    cors_origins: List[str] = ["*"]
    admin_username: str = "admin"
    admin_password: Optional[str] = None
    admin_email: str = "admin@easytech.com"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables (and a .env file if present).

        Returns:
            Settings: The loaded configuration

        Raises:
            ValueError: If SESSION_SECRET is not set
        """
        load_dotenv()

        session_secret = os.getenv("SESSION_SECRET")
        if not session_secret:
            raise ValueError("SESSION_SECRET must be set in .env file")

        origins = os.getenv("CORS_ORIGINS", "*")

        settings = cls(
            app_name=os.getenv("NAME_APP", "EasyTechAPI"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./easytech.db"),
            session_secret=session_secret,
            session_max_age=int(os.getenv("SESSION_MAX_AGE", str(60 * 60 * 24))),
            cookie_secure=_env_bool("COOKIE_SECURE"),
            cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
            admin_username=os.getenv("ADMIN_USERNAME", "admin"),
            admin_password=os.getenv("ADMIN_PASSWORD") or None,
            admin_email=os.getenv("ADMIN_EMAIL", "admin@easytech.com"),
            log_file=os.getenv("LOG_FILE") or None,
        )
        logger.debug(f"Settings loaded for {settings.app_name}")
        return settings
