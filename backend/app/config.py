"""
Copenhagen Beaches Proxy — Application Configuration
=====================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.

Every field defaults to the value the ESP32 client expects, so an
unconfigured deployment proxies api.badevand.dk for København on
/api/copenhagen-beaches with a 30 second upstream timeout.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Upstream API ──────────────────────────────────────────────────────
    # What: Danish beach-status dataset (JSON array of every beach in Denmark)
    upstream_url: str = Field(
        default="https://api.badevand.dk/api/beaches/dk",
        description="URL of the upstream beach dataset",
    )

    # What: Upper bound for the whole upstream call (connect + read)
    # Valid range: 1-120 seconds
    upstream_timeout: float = Field(default=30.0, ge=1.0, le=120.0)

    # What: Identifies this proxy to the upstream operator
    upstream_user_agent: str = Field(default="CopenhagenBeaches-Proxy/1.0")

    # ── Filtering & Response ──────────────────────────────────────────────
    # What: Exact, case-sensitive municipality match (no diacritic folding)
    municipality: str = Field(default="København")

    # What: Value of the `source` field in the success envelope
    source_label: str = Field(default="api.badevand.dk")

    # What: Route the device polls
    beaches_path: str = Field(default="/api/copenhagen-beaches")

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # What: Controls verbosity of application logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("beaches_path")
    @classmethod
    def validate_beaches_path(cls, v: str) -> str:
        """Route paths must be absolute for FastAPI to mount them."""
        if not v.startswith("/"):
            raise ValueError(f"beaches_path '{v}' must start with '/'")
        return v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance — imported throughout the application
settings = Settings()
