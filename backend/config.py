"""
Configuration - Environment settings and provider constants

Loads API credentials from the environment (and an optional .env file) and
collects the limits and timeouts shared by the provider adapters.
"""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Page size limits
MAX_PAGE_SIZE = 10  # SerpAPI / Freepik quota per call
DEFAULT_PAGE_SIZE = 10

# Timeouts (seconds)
SEARCH_TIMEOUT = 15.0
PROBE_TIMEOUT = 5.0
GENERATION_TIMEOUT = 60.0
SCRAPE_TIMEOUT = 30.0
SCRAPE_QUEUE_TIMEOUT = 90.0  # waiting for the shared browser
PAGE_LOAD_TIMEOUT = 15.0  # page load + render wait must stay below SCRAPE_TIMEOUT
RENDER_WAIT_SECONDS = 8.0

# Freepik resource format filter
RESOURCE_FORMATS = frozenset({"vector", "psd"})

# Model settings
LLM_MODEL = "gpt-4o-mini"

REQUIRED_KEYS = ("OPENAI_API_KEY", "SERPAPI_KEY", "FREEPIK_API_KEY")

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:8501",
]


def cors_origins_from_env() -> List[str]:
    """Comma-separated CORS_ORIGINS, or the local development defaults."""
    value = os.getenv("CORS_ORIGINS")
    if not value:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Runtime settings for the aggregation service."""

    openai_api_key: str = Field(..., min_length=1)
    serpapi_key: str = Field(..., min_length=1)
    freepik_api_key: str = Field(..., min_length=1)
    openai_model: str = LLM_MODEL
    validate_image_urls: bool = True
    enable_scrapers: bool = True
    include_structured_extras: bool = True
    max_results: Optional[int] = Field(None, ge=1)
    chrome_binary: Optional[str] = None
    cors_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Raises:
            RuntimeError: If any required API key is missing
        """
        load_dotenv()

        missing = [key for key in REQUIRED_KEYS if not os.getenv(key)]
        if missing:
            raise RuntimeError(
                f"Missing API keys: {', '.join(missing)}. "
                f"Required: {', '.join(REQUIRED_KEYS)}"
            )

        max_results = os.getenv("MAX_RESULTS")

        return cls(
            openai_api_key=os.environ["OPENAI_API_KEY"],
            serpapi_key=os.environ["SERPAPI_KEY"],
            freepik_api_key=os.environ["FREEPIK_API_KEY"],
            openai_model=os.getenv("OPENAI_MODEL", LLM_MODEL),
            validate_image_urls=_env_flag("VALIDATE_IMAGE_URLS", True),
            enable_scrapers=_env_flag("ENABLE_SCRAPERS", True),
            include_structured_extras=_env_flag("INCLUDE_STRUCTURED_EXTRAS", True),
            max_results=int(max_results) if max_results else None,
            chrome_binary=os.getenv("CHROME_BINARY") or None,
            cors_origins=cors_origins_from_env(),
        )
