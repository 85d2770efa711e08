"""
Shared data I/O utilities for the AI Radar company directory.

This module converts between the companies JSON document and ``Company``
records: per-record validation, sanitization, and (de)serialization.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .constants import COMPANY_FIELDS
from .errors import FormatError
from .models import Company

logger = logging.getLogger(__name__)

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_INLINE_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)


def validate_company(raw: Any) -> bool:
    """Check that a raw JSON element has every company field with the right type.

    ``founded`` must be an integer (booleans are rejected), ``founders`` and
    ``tags`` must be lists of strings.
    """
    if not isinstance(raw, dict):
        return False

    for key, expected in COMPANY_FIELDS.items():
        value = raw.get(key)
        if expected is int:
            if not isinstance(value, int) or isinstance(value, bool):
                return False
        elif expected is list:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                return False
        elif not isinstance(value, expected):
            return False
    return True


def sanitize_string(text: str) -> str:
    """Remove script blocks, ``javascript:`` and inline event handlers."""
    text = _SCRIPT_BLOCK.sub("", text)
    text = _JS_PROTOCOL.sub("", text)
    return _INLINE_HANDLER.sub("", text)


def _ensure_scheme(url: str) -> str:
    return url if url.startswith("http") else f"https://{url}"


def company_from_dict(raw: Dict[str, Any]) -> Company:
    """Build a sanitized Company from an already validated JSON element."""
    return Company(
        id=raw["id"],
        name=sanitize_string(raw["name"]),
        founded=raw["founded"],
        founders=tuple(sanitize_string(f) for f in raw["founders"]),
        website=_ensure_scheme(raw["website"]),
        category=raw["category"],
        tags=tuple(raw["tags"]),
        country=raw["country"],
        state=raw["state"],
        city=raw["city"],
        logo_url=raw["logoUrl"],
        description=sanitize_string(raw["description"]),
        linkedin_profile=_ensure_scheme(raw["linkedinProfile"]),
    )


def company_to_dict(company: Company) -> Dict[str, Any]:
    """Serialize a Company back to the camelCase document format."""
    return {
        "id": company.id,
        "name": company.name,
        "founded": company.founded,
        "founders": list(company.founders),
        "website": company.website,
        "category": company.category,
        "tags": list(company.tags),
        "country": company.country,
        "state": company.state,
        "city": company.city,
        "logoUrl": company.logo_url,
        "description": company.description,
        "linkedinProfile": company.linkedin_profile,
    }


def summarize_company(company: Company) -> Dict[str, Any]:
    """Compact record sent to the query translator as part of the manifest."""
    return {
        "id": company.id,
        "name": company.name,
        "category": company.category,
        "tags": list(company.tags),
        "description": company.description,
        "country": company.country,
        "state": company.state,
        "city": company.city,
        "founded": company.founded,
    }


def parse_companies(payload: Any) -> Tuple[List[Company], int]:
    """Validate and sanitize a companies document.

    Invalid elements are dropped (and logged), never partially admitted.

    Args:
        payload: Decoded JSON document

    Returns:
        Tuple of (valid companies in document order, number of dropped elements)

    Raises:
        FormatError: If the document is not a JSON array
    """
    if not isinstance(payload, list):
        raise FormatError("Invalid data format: expected array of companies")

    companies = []
    invalid = 0
    for index, raw in enumerate(payload):
        if not validate_company(raw):
            logger.warning("Invalid company data at index %d: %r", index, raw)
            invalid += 1
            continue
        companies.append(company_from_dict(raw))

    logger.info("Validated %d companies (%d dropped)", len(companies), invalid)
    return companies, invalid


def load_companies_from_json(json_path: Path) -> Tuple[List[Company], int]:
    """Load and validate companies from a local JSON file.

    Example:
        companies, dropped = load_companies_from_json(Path("data/companies_sample.json"))
    """
    with open(json_path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise FormatError(f"{json_path} is not valid JSON: {e}") from e
    return parse_companies(payload)


def companies_to_json(companies: List[Company]) -> List[Dict[str, Any]]:
    return [company_to_dict(c) for c in companies]
