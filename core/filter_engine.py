"""
Filter Engine - faceted filtering of the company directory.

``filter_companies`` is a pure function of (companies, selection, provenance).
``FilterSession`` holds the mutable selection of one browsing session and the
provenance bit that decides what an empty selection means:

- Provenance.MANUAL: empty selection shows every company
- Provenance.SEARCH: empty selection means the AI search found nothing,
  so no company is shown
"""

from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from .constants import DEFAULT_YEAR_RANGE
from .models import Company, FilterSelection, Provenance, SearchFilters


def _matches_category(company: Company, categories: Tuple[str, ...]) -> bool:
    if not categories:
        return True
    category = company.category.lower()
    tags = [t.lower() for t in company.tags]
    for selected in categories:
        needle = selected.lower()
        if needle in category or any(needle in tag for tag in tags):
            return True
    return False


def matches(company: Company, selection: FilterSelection) -> bool:
    """Check a single company against every criterion of the selection."""
    if not _matches_category(company, selection.categories):
        return False
    if selection.countries and company.country not in selection.countries:
        return False
    if selection.states and company.state not in selection.states:
        return False
    year_min, year_max = selection.year_range
    return year_min <= company.founded <= year_max


def filter_companies(
    companies: Iterable[Company],
    selection: FilterSelection,
    provenance: Provenance = Provenance.MANUAL,
) -> List[Company]:
    """Return the companies matching the selection, in input order.

    Args:
        companies: Dataset to filter
        selection: Current filter selection
        provenance: Whether the selection came from a manual edit or an AI search

    Returns:
        Matching companies. Empty when a search produced the default selection.
    """
    if provenance is Provenance.SEARCH and selection.is_default():
        return []
    return [c for c in companies if matches(c, selection)]


def selection_from_search(filters: SearchFilters) -> FilterSelection:
    """Convert translator output to a filter selection.

    Cities and keywords are not part of the selection.
    """
    return FilterSelection(
        categories=tuple(filters.categories),
        countries=tuple(filters.countries),
        states=tuple(filters.states),
        year_range=tuple(filters.founded_year_range or DEFAULT_YEAR_RANGE),
    )


def _toggle(values: Tuple[str, ...], value: str) -> Tuple[str, ...]:
    if value in values:
        return tuple(v for v in values if v != value)
    return values + (value,)


class FilterSession:
    """Mutable filter state of one browsing session.

    Example:
        session = FilterSession()
        session.toggle_category("Healthcare")
        visible = session.visible(companies)
    """

    def __init__(self):
        self.selection = FilterSelection()
        self.provenance = Provenance.MANUAL
        self.search_had_criteria = False
        self.last_search: Optional[SearchFilters] = None

    def _manual(self, selection: FilterSelection) -> None:
        self.selection = selection
        self.provenance = Provenance.MANUAL
        self.search_had_criteria = False

    def toggle_category(self, category: str) -> None:
        self._manual(replace(self.selection, categories=_toggle(self.selection.categories, category)))

    def toggle_country(self, country: str) -> None:
        self._manual(replace(self.selection, countries=_toggle(self.selection.countries, country)))

    def toggle_state(self, state: str) -> None:
        self._manual(replace(self.selection, states=_toggle(self.selection.states, state)))

    def set_year_range(self, year_min: int, year_max: int) -> None:
        if year_min > year_max:
            raise ValueError(f"Invalid year range: {year_min} > {year_max}")
        self._manual(replace(self.selection, year_range=(year_min, year_max)))

    def apply_search(self, filters: Optional[SearchFilters]) -> None:
        """Replace the selection with an AI-derived one.

        ``None`` (a blank query) leaves the session untouched.
        """
        if filters is None:
            return
        self.selection = selection_from_search(filters)
        self.provenance = Provenance.SEARCH
        self.search_had_criteria = filters.has_criteria
        self.last_search = filters

    def clear(self) -> None:
        self._manual(FilterSelection())
        self.last_search = None

    @property
    def active_filter_count(self) -> int:
        s = self.selection
        return len(s.categories) + len(s.countries) + len(s.states)

    def visible(self, companies: Iterable[Company]) -> List[Company]:
        provenance = self.provenance
        # An explicit answer that happens to equal the defaults is not "nothing found"
        if provenance is Provenance.SEARCH and self.search_had_criteria:
            provenance = Provenance.MANUAL
        return filter_companies(companies, self.selection, provenance)
