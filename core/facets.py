"""
Facet extraction.

Derives the distinct, sorted values of the category/tag, country, state and
city fields of the current dataset. These lists populate the filter choices
and are the vocabulary that AI search results are validated against.
"""

from typing import Iterable, List

from .data_io import summarize_company
from .models import AvailabilityManifest, Company


def extract_categories(companies: Iterable[Company]) -> List[str]:
    """Sorted unique union of every category and every tag."""
    values = set()
    for c in companies:
        values.add(c.category)
        values.update(c.tags)
    return sorted(values)


def extract_countries(companies: Iterable[Company]) -> List[str]:
    return sorted({c.country for c in companies})


def extract_states(companies: Iterable[Company]) -> List[str]:
    return sorted({c.state for c in companies})


def extract_cities(companies: Iterable[Company]) -> List[str]:
    return sorted({c.city for c in companies})


def extract_locations(companies: Iterable[Company]) -> List[str]:
    """Sorted unique union of countries, states and cities."""
    values = set()
    for c in companies:
        values.update((c.country, c.state, c.city))
    return sorted(values)


def build_manifest(companies: List[Company]) -> AvailabilityManifest:
    """Build the availability manifest sent with an AI query.

    Args:
        companies: Current dataset

    Returns:
        AvailabilityManifest with categories, locations and company summaries
    """
    return AvailabilityManifest(
        categories=extract_categories(companies),
        locations=extract_locations(companies),
        companies=[summarize_company(c) for c in companies],
    )
