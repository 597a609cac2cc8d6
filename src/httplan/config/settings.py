"""Settings for the httpx transport and logging.

Values come from the environment (prefix ``HTTPLAN_``) or a local ``.env``
file. Endpoint descriptions never read settings; they carry their own
timeout.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HttplanSettings(BaseSettings):
    """Transport and logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HTTPLAN_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Client-level timeout, used when a request carries none (seconds).",
    )
    user_agent: str = Field(
        default="httplan/0.1",
        min_length=1,
        description="User-Agent header sent by the httpx transport.",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Whether the httpx transport follows redirects.",
    )
    max_connections: int = Field(
        default=100,
        ge=1,
        description="Connection pool size of the httpx transport.",
    )
    verbose: bool = Field(
        default=False,
        description="Enable DEBUG logging for httplan.",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines.",
    )
