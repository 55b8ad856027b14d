"""Chat client configuration with environment variable loading.

Pydantic-based configuration for talking to the MediBot chat backend.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the chat backend client.

    Attributes:
        api_base_url: Base URL of the chat backend.
        request_timeout: Per-request timeout in seconds.
        bot_name: Assistant name used in greetings and transcripts.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("MEDIBOT_API_URL", "http://127.0.0.1:8000"),
        description="Chat backend base URL",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("MEDIBOT_REQUEST_TIMEOUT", "30")),
        ge=1.0,
        le=600.0,
        description="Timeout in seconds for each backend request",
    )
    bot_name: str = Field(
        default_factory=lambda: os.getenv("MEDIBOT_BOT_NAME", "MediBot"),
        min_length=1,
        description="Assistant display name",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                "MEDIBOT_API_URL must start with http:// or https://"
            )
        return v.rstrip("/")


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If the backend URL is malformed.
    """
    return ClientConfig()
