"""Client for a deployed AI search endpoint (``POST /search`` of the API)."""

import logging
from typing import Optional

import requests

from core.errors import ParseError, UpstreamError
from core.models import AvailabilityManifest, SearchFilters

from .translator import validate_search_filters

logger = logging.getLogger(__name__)


class RemoteQueryTranslator:
    """Same contract as QueryTranslator, but the prompt runs server-side.

    Example:
        translator = RemoteQueryTranslator("http://localhost:8000/search")
        filters = translator.translate("healthcare startups", manifest)
    """

    def __init__(self, endpoint: str, timeout: float = 60.0):
        self.endpoint = endpoint
        self.timeout = timeout

    def translate(self, query: str, manifest: AvailabilityManifest) -> Optional[SearchFilters]:
        query = (query or "").strip()
        if not query:
            return None

        try:
            response = requests.post(
                self.endpoint,
                headers={"Content-Type": "application/json"},
                json={"query": query, "availableData": manifest.to_dict()},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamError(None, str(e)) from e

        if response.status_code != 200:
            logger.error("Search endpoint error: %s %s", response.status_code, response.text)
            raise UpstreamError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Invalid response format from AI: {e}") from e
        if not isinstance(data, dict):
            raise ParseError("Invalid response format from AI")

        return validate_search_filters(data, manifest)
