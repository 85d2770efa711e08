"""
Dataset Store - load the companies document with a time-expiring cache.

Load order:
1. A cache entry younger than the TTL is used as-is (no fetch)
2. Otherwise the source is fetched, validated and sanitized, and the cache
   entry is replaced wholesale
3. If the fetch fails, the cache entry is used regardless of age
"""

import json
import logging
import os
import tempfile
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import requests

from .constants import CACHE_FILE_NAME, DEFAULT_CACHE_TTL_SECONDS, USER_AGENT
from .data_io import companies_to_json, company_from_dict, parse_companies, validate_company
from .errors import DatasetError, FetchError, FormatError
from .models import Company, DatasetSnapshot

logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def fetch_companies_payload(
    source: str,
    timeout: float = 30.0,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """Fetch and decode the raw companies document.

    Args:
        source: HTTP(S) URL or local file path
        timeout: Request timeout in seconds
        headers: Extra request headers

    Returns:
        Decoded JSON document (not validated)

    Raises:
        FetchError: Source unreachable, missing, or non-200
        FormatError: Body is not valid JSON
    """
    if not _is_url(source):
        path = Path(source)
        if not path.exists():
            raise FetchError(f"Companies file not found: {path}")
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise FormatError(f"Companies file is not valid JSON: {e}") from e

    request_headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
    if headers:
        request_headers.update(headers)

    try:
        response = requests.get(source, headers=request_headers, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Failed to fetch companies: {e}") from e

    if response.status_code != 200:
        raise FetchError(f"Failed to fetch companies: {response.status_code} {response.reason}")

    try:
        return response.json()
    except ValueError as e:
        raise FormatError(f"Companies response is not valid JSON: {e}") from e


class DatasetStore:
    """Fetches the company dataset and keeps a snapshot in a JSON cache file.

    Example:
        store = DatasetStore("https://.../companies.json", cache_dir=Path("cache/companies"))
        snapshot = store.load()
        print(len(snapshot.companies), snapshot.origin)
    """

    def __init__(
        self,
        source: str,
        cache_dir: Optional[Path] = None,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        timeout: float = 30.0,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the store.

        Args:
            source: HTTP(S) URL or local path of the companies document
            cache_dir: Directory for the cache file (None disables caching)
            ttl_seconds: Age below which the cache is used without fetching
            timeout: Request timeout in seconds
            clock: Time source (seconds since epoch)
        """
        self.source = source
        self.cache_dir = Path(cache_dir) if cache_dir else None
        self.ttl_seconds = ttl_seconds
        self.timeout = timeout
        self._clock = clock

    @property
    def cache_file(self) -> Optional[Path]:
        if self.cache_dir is None:
            return None
        return self.cache_dir / CACHE_FILE_NAME

    def read_cache(self) -> Optional[Dict[str, Any]]:
        """Read the cache entry, or None if missing or unreadable."""
        cache_file = self.cache_file
        if cache_file is None or not cache_file.exists():
            return None
        try:
            with open(cache_file, "r", encoding="utf-8") as f:
                entry = json.load(f)
            if not isinstance(entry, dict) or not isinstance(entry.get("companies"), list):
                raise ValueError("unexpected cache layout")
            float(entry["timestamp"])
            return entry
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to parse cached data %s: %s", cache_file, e)
            return None

    def write_cache(self, companies: List[Company]) -> None:
        """Replace the cache entry with a fresh snapshot."""
        if self.cache_dir is None:
            return
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        now = self._clock()
        entry = {
            "timestamp": now,
            "cached_at": datetime.fromtimestamp(now).isoformat(),
            "total_companies": len(companies),
            "companies": companies_to_json(companies),
        }
        fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, prefix=".companies-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(entry, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.cache_file)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def cache_age(self, entry: Dict[str, Any]) -> float:
        return self._clock() - float(entry["timestamp"])

    @staticmethod
    def _companies_from_cache(entry: Dict[str, Any]) -> List[Company]:
        # Cached records were validated on the way in; re-check in case the file was edited
        return [company_from_dict(raw) for raw in entry["companies"] if validate_company(raw)]

    def fetch(self) -> DatasetSnapshot:
        """Fetch from the source, bypassing the cache (the cache is still refreshed)."""
        logger.info("Fetching fresh company data from %s", self.source)
        payload = fetch_companies_payload(
            self.source,
            timeout=self.timeout,
            headers={"Cache-Control": "no-cache"},
        )
        companies, invalid = parse_companies(payload)
        try:
            self.write_cache(companies)
        except OSError as e:
            logger.warning("Failed to write cache %s: %s", self.cache_file, e)
        return DatasetSnapshot(
            companies=companies,
            origin="network",
            fetched_at=datetime.fromtimestamp(self._clock()).isoformat(),
            invalid_count=invalid,
        )

    def load(self) -> DatasetSnapshot:
        """Load the dataset: fresh cache, then network, then stale cache.

        Raises:
            FetchError / FormatError: If the fetch fails and there is no cache entry
        """
        entry = self.read_cache()
        if entry is not None and self.cache_age(entry) < self.ttl_seconds:
            logger.info("Using cached company data")
            return DatasetSnapshot(
                companies=self._companies_from_cache(entry),
                origin="cache",
                fetched_at=entry.get("cached_at", ""),
            )

        try:
            return self.fetch()
        except DatasetError as e:
            logger.error("Error fetching companies: %s", e)
            if entry is None:
                raise
            logger.warning("Using stale cached data as fallback")
            return DatasetSnapshot(
                companies=self._companies_from_cache(entry),
                origin="stale-cache",
                fetched_at=entry.get("cached_at", ""),
                error=str(e),
            )
