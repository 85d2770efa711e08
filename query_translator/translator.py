"""
Query Translator - turn a free-text query into validated search filters.

Pipeline: build prompt -> provider call -> strip markdown fences -> parse
JSON -> validate every value against the dataset vocabulary.

Validation is not an error path: unknown or non-string values are dropped
silently. A response that is not JSON, however, is a hard failure
(ParseError); it is never turned into an empty filter set.
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from core.errors import ParseError
from core.models import AvailabilityManifest, SearchFilters

from .prompts import build_search_prompt

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers anywhere in the text and trim it."""
    return _FENCE.sub("", _JSON_FENCE.sub("", text)).strip()


def parse_model_response(text: str) -> Dict[str, Any]:
    """Parse the model's answer into a dict.

    Raises:
        ParseError: If the cleaned text is not a JSON object
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse AI response: %r", text)
        raise ParseError(f"Failed to parse AI response as JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def validate_string_list(items: Any, valid_items: Iterable[str], field_name: str = "") -> List[str]:
    """Keep the string entries of ``items`` that appear in ``valid_items``."""
    if not isinstance(items, list):
        if items is not None:
            logger.warning("Expected array for %s, got %s", field_name, type(items).__name__)
        return []

    valid = set(valid_items)
    validated = []
    for item in items:
        if not isinstance(item, str):
            logger.warning("Non-string %s filtered out: %r", field_name, item)
            continue
        if item not in valid:
            logger.warning("Invalid %s filtered out: %r", field_name, item)
            continue
        validated.append(item)
    return validated


def validate_year_range(value: Any) -> Optional[Tuple[int, int]]:
    """Accept only an ordered pair of integers ``[min, max]``."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    start, end = value
    for year in (start, end):
        if not isinstance(year, int) or isinstance(year, bool):
            return None
    if start > end:
        return None
    return (start, end)


def _company_values(manifest: AvailabilityManifest, key: str) -> List[str]:
    return [c.get(key) for c in manifest.companies if isinstance(c, dict) and isinstance(c.get(key), str)]


def validate_search_filters(data: Dict[str, Any], manifest: AvailabilityManifest) -> SearchFilters:
    """Validate a parsed model answer against the manifest.

    Categories are checked against ``manifest.categories``; countries, states
    and cities against the values of the manifest's company summaries.
    """
    return SearchFilters(
        categories=validate_string_list(data.get("categories"), manifest.categories, "category"),
        countries=validate_string_list(data.get("countries"), _company_values(manifest, "country"), "country"),
        states=validate_string_list(data.get("states"), _company_values(manifest, "state"), "state"),
        cities=validate_string_list(data.get("cities"), _company_values(manifest, "city"), "city"),
        founded_year_range=validate_year_range(data.get("foundedYearRange")),
        keywords=list(data["keywords"]) if isinstance(data.get("keywords"), list) else [],
    )


class QueryTranslator:
    """Translate natural-language queries with an LLM provider.

    Example:
        translator = QueryTranslator(GeminiProvider(api_key="..."))
        filters = translator.translate("fintech in India", build_manifest(companies))
    """

    def __init__(self, provider):
        """Initialize the translator.

        Args:
            provider: Object with ``generate(prompt) -> str``
        """
        self.provider = provider

    def translate(self, query: str, manifest: AvailabilityManifest) -> Optional[SearchFilters]:
        """Translate a query into validated search filters.

        Args:
            query: Free-text query
            manifest: Vocabulary and company summaries of the current dataset

        Returns:
            SearchFilters, or None for a blank query (no provider call)

        Raises:
            ConfigurationError, UpstreamError, EmptyResponseError: From the provider
            ParseError: Model output is not a JSON object
        """
        query = (query or "").strip()
        if not query:
            return None

        logger.info("AI search query: %s (%d companies)", query, len(manifest.companies))
        prompt = build_search_prompt(query, manifest)
        text = self.provider.generate(prompt)
        logger.debug("AI response text: %s", text)

        filters = validate_search_filters(parse_model_response(text), manifest)
        logger.info("Validated filters: %s", filters.to_dict())
        return filters
