"""Client configuration loaded from environment variables.

Uses pydantic-settings so every field can be overridden via
``SPACE_EMAIL_*`` env vars.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientConfig(BaseSettings):
    """Connection settings for the Space Email service."""

    model_config = {"env_prefix": "SPACE_EMAIL_"}

    base_url: str = Field(
        default="https://space.galaxybuster.net",
        description="Scheme and host every endpoint path is appended to",
    )
    user_agent: str = Field(
        default="Space Email API Client",
        description="User-Agent header sent with every request",
    )
    timeout_seconds: float | None = Field(
        default=None,
        description="HTTP timeout; None keeps the httpx default",
    )
    session_cookie_name: str = Field(
        default="PHPSESSID",
        description="Name of the cookie carrying the session token",
    )
    ca_bundle_path: str | None = Field(
        default=None,
        description="Path to a CA bundle for TLS verification",
    )
