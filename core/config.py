"""Runtime settings loaded from the environment (and an optional .env file)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .constants import (
    DEFAULT_CACHE_DIR,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_COMPANIES_URL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OPENROUTER_MODEL,
    SEARCH_PROVIDERS,
)


@dataclass(frozen=True)
class Settings:
    companies_url: str = DEFAULT_COMPANIES_URL
    cache_dir: Path = Path(DEFAULT_CACHE_DIR)
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    search_provider: str = "gemini"
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    openrouter_api_key: Optional[str] = None
    openrouter_model: str = DEFAULT_OPENROUTER_MODEL
    search_endpoint: Optional[str] = None
    request_timeout: float = 30.0
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Load settings from environment variables.

    API keys are optional here: a missing key only fails the first search
    (with ConfigurationError), never startup.

    Raises:
        ValueError: If SEARCH_PROVIDER names an unknown provider.
    """
    load_dotenv()

    provider = os.getenv("SEARCH_PROVIDER", "gemini").strip().lower()
    if provider not in SEARCH_PROVIDERS:
        raise ValueError(
            f"Unknown SEARCH_PROVIDER '{provider}'. Expected one of: {', '.join(SEARCH_PROVIDERS)}"
        )

    return Settings(
        companies_url=os.getenv("COMPANIES_URL", DEFAULT_COMPANIES_URL),
        cache_dir=Path(os.getenv("COMPANIES_CACHE_DIR", DEFAULT_CACHE_DIR)),
        cache_ttl_seconds=int(os.getenv("COMPANIES_CACHE_TTL", str(DEFAULT_CACHE_TTL_SECONDS))),
        search_provider=provider,
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        openrouter_api_key=os.getenv("OPENROUTER_API_KEY") or None,
        openrouter_model=os.getenv("OPENROUTER_MODEL", DEFAULT_OPENROUTER_MODEL),
        search_endpoint=os.getenv("SEARCH_ENDPOINT") or None,
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
