"""
Shared data models for the AI Radar company directory.

This module contains the core data classes passed between the dataset store,
the facet extractor, the filter engine and the query translator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .constants import DEFAULT_YEAR_RANGE


@dataclass(frozen=True)
class Company:
    """A validated company record.

    Attribute names are snake_case; the JSON document uses camelCase keys
    (see ``core.data_io.company_from_dict`` / ``company_to_dict``).
    """
    id: str
    name: str
    founded: int
    founders: Tuple[str, ...]
    website: str
    category: str
    tags: Tuple[str, ...]
    country: str
    state: str
    city: str
    logo_url: str
    description: str
    linkedin_profile: str


class Provenance(str, Enum):
    """Where the current filter selection came from.

    MANUAL is the idle state: an empty selection shows every company.
    SEARCH means the selection was produced by an AI query: an empty
    selection then means "the search found nothing" and shows no company.
    """
    MANUAL = "manual"
    SEARCH = "search"


@dataclass(frozen=True)
class FilterSelection:
    """Faceted filter state applied by the filter engine."""
    categories: Tuple[str, ...] = ()
    countries: Tuple[str, ...] = ()
    states: Tuple[str, ...] = ()
    year_range: Tuple[int, int] = DEFAULT_YEAR_RANGE

    def is_default(self) -> bool:
        """True when nothing is selected and the year range is untouched."""
        return (
            not self.categories
            and not self.countries
            and not self.states
            and tuple(self.year_range) == DEFAULT_YEAR_RANGE
        )


@dataclass
class SearchFilters:
    """Validated output of the query translator.

    ``categories``/``countries``/``states``/``cities`` only ever hold values
    observed in the dataset the query was grounded on. ``keywords`` are
    advisory and not applied by the filter engine.
    """
    categories: List[str] = field(default_factory=list)
    countries: List[str] = field(default_factory=list)
    states: List[str] = field(default_factory=list)
    cities: List[str] = field(default_factory=list)
    founded_year_range: Optional[Tuple[int, int]] = None
    keywords: List[Any] = field(default_factory=list)

    @property
    def has_criteria(self) -> bool:
        """Whether the answer carries anything the filter engine applies."""
        return bool(
            self.categories
            or self.countries
            or self.states
            or self.founded_year_range is not None
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire format; ``foundedYearRange`` is omitted when absent."""
        data: Dict[str, Any] = {
            "categories": list(self.categories),
            "countries": list(self.countries),
            "states": list(self.states),
            "cities": list(self.cities),
        }
        if self.founded_year_range is not None:
            data["foundedYearRange"] = list(self.founded_year_range)
        data["keywords"] = list(self.keywords)
        return data


@dataclass
class AvailabilityManifest:
    """Snapshot of the dataset vocabulary sent along with an AI query."""
    categories: List[str] = field(default_factory=list)
    locations: List[str] = field(default_factory=list)
    companies: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": list(self.categories),
            "locations": list(self.locations),
            "companies": list(self.companies),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AvailabilityManifest":
        return cls(
            categories=list(data.get("categories") or []),
            locations=list(data.get("locations") or []),
            companies=list(data.get("companies") or []),
        )


@dataclass
class DatasetSnapshot:
    """Result of one dataset load.

    ``origin`` is one of ``network``, ``cache`` (fresh entry, no fetch) or
    ``stale-cache`` (fetch failed, ``error`` holds the reason).
    """
    companies: List[Company]
    origin: str
    fetched_at: str = ""
    invalid_count: int = 0
    error: Optional[str] = None
