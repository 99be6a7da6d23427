"""Client configuration with environment variable loading.

Pydantic-based configuration for the dashboard's connection to the
remote document service.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_BASE_URL = "http://localhost:8080/api"
# Stands in for an authenticated user until sessions exist
DEFAULT_USER_ID = "ddf650f5-2147-4e2a-9fdc-524c0d321994"
MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10MB, matches the service's form limit


class ClientConfig(BaseModel):
    """Configuration for the dashboard client.

    Attributes:
        api_base_url: Base URL of the remote document API (no trailing slash).
        user_id: Identity passed to every user-scoped request.
        timeout: HTTP timeout in seconds for remote calls.
        max_upload_bytes: Largest file the upload control will send.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL),
        description="Base URL of the remote document API",
    )
    user_id: str = Field(
        default_factory=lambda: os.getenv("INSIGHT_USER_ID", DEFAULT_USER_ID),
        description="User identifier for document and chat requests",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("API_TIMEOUT", "60")),
        gt=0.0,
        le=600.0,
        description="HTTP timeout in seconds",
    )
    max_upload_bytes: int = Field(
        default=MAX_UPLOAD_SIZE,
        ge=1,
        description="Maximum upload size in bytes",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        """Validate that a user identifier is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("User ID required. Set INSIGHT_USER_ID in .env")
        return v.strip()


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If the environment holds an invalid URL or blank user ID.
    """
    return ClientConfig()
