"""
Configuration management for transcript-resolver.

Loads settings from .env file with sensible defaults.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Configuration settings for the application."""
    
    # Hosted transcript API (disabled when no key is set)
    SUPADATA_API_KEY: str | None = os.getenv("SUPADATA_API_KEY") or None
    SUPADATA_BASE_URL: str = os.getenv("SUPADATA_BASE_URL", "https://api.supadata.ai/v1")
    
    # Direct page fetch settings
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    )
    CONSENT_COOKIE: str = os.getenv(
        "CONSENT_COOKIE",
        "CONSENT=PENDING+987; SOCS=CAESEwgDEgk1ODE5MjkyNDQaAmVuIAEaBgiA_LyaBg",
    )
    
    # Timeout settings
    YOUTUBE_TIMEOUT: int = int(os.getenv("YOUTUBE_TIMEOUT", "30"))
    HOSTED_TIMEOUT: int = int(os.getenv("HOSTED_TIMEOUT", "30"))
    FETCH_DEADLINE: float = float(os.getenv("FETCH_DEADLINE", "8.0"))
    
    # Retry settings
    MAX_ATTEMPTS: int = int(os.getenv("MAX_ATTEMPTS", "3"))
    RETRY_BASE_DELAY: float = float(os.getenv("RETRY_BASE_DELAY", "1.0"))
    
    # HTTP surface
    ALWAYS_OK_STATUS: bool = _env_flag("ALWAYS_OK_STATUS", "true")
    SERVER_HOST: str = os.getenv("SERVER_HOST", "127.0.0.1")
    SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8000"))
    
    # Remote transcript service; when set, fetch_transcript posts to it instead of resolving locally
    TRANSCRIPT_SERVICE_URL: str | None = os.getenv("TRANSCRIPT_SERVICE_URL") or None
    
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


# Global config instance
config = Config()
