#!/usr/bin/env python3
"""
Filter Engine Test Suite

Tests for faceted filtering:
1. Selection semantics (category substring, exact country/state, inclusive years)
2. Provenance of the selection (manual edit vs AI search)
3. FilterSession state transitions
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.constants import DEFAULT_YEAR_RANGE
from core.filter_engine import FilterSession, filter_companies, matches, selection_from_search
from core.models import FilterSelection, Provenance, SearchFilters


def names(companies):
    return [c.name for c in companies]


# =============================================================================
# filter_companies
# =============================================================================


class TestFilterCompanies:
    """Tests for the pure filter function."""

    def test_default_manual_selection_returns_everything_in_order(self, three_companies):
        result = filter_companies(three_companies, FilterSelection(), Provenance.MANUAL)
        assert names(result) == ["A", "B", "C"]

    def test_default_search_selection_returns_nothing(self, three_companies):
        assert filter_companies(three_companies, FilterSelection(), Provenance.SEARCH) == []

    def test_non_default_search_selection_filters_normally(self, three_companies):
        selection = FilterSelection(countries=("USA",))
        assert names(filter_companies(three_companies, selection, Provenance.SEARCH)) == ["B"]

    def test_category_is_case_insensitive_substring(self, three_companies):
        selection = FilterSelection(categories=("ai",))
        assert names(filter_companies(three_companies, selection)) == ["A"]

    def test_category_matches_tags(self, company_factory):
        fintech = company_factory(name="Ledger", category="Fintech", tags=["Machine Learning"])
        other = company_factory(name="Bank", category="Fintech", tags=["Payments"])
        selection = FilterSelection(categories=("learning",))
        assert names(filter_companies([fintech, other], selection)) == ["Ledger"]

    def test_any_selected_category_is_enough(self, three_companies):
        selection = FilterSelection(categories=("Finance", "Healthcare"))
        assert names(filter_companies(three_companies, selection)) == ["B", "C"]

    def test_country_is_exact_match(self, three_companies):
        assert names(filter_companies(three_companies, FilterSelection(countries=("India",)))) == ["A", "C"]
        assert filter_companies(three_companies, FilterSelection(countries=("india",))) == []

    def test_state_is_exact_match(self, three_companies):
        selection = FilterSelection(states=("Maharashtra", "California"))
        assert names(filter_companies(three_companies, selection)) == ["B", "C"]

    def test_year_range_is_inclusive(self, three_companies):
        selection = FilterSelection(year_range=(2018, 2021))
        assert names(filter_companies(three_companies, selection)) == ["A", "B"]

    def test_year_below_min_is_excluded(self, company_factory):
        companies = [
            company_factory(id="before", name="Before", founded=2017),
            company_factory(id="first", name="First", founded=2018),
            company_factory(id="last", name="Last", founded=2021),
            company_factory(id="after", name="After", founded=2022),
        ]
        selection = FilterSelection(year_range=(2018, 2021))
        assert names(filter_companies(companies, selection)) == ["First", "Last"]

    def test_three_company_scenario(self, company_factory):
        companies = [
            company_factory(id="1", name="Ledgerly", category="Financial Services", tags=[], founded=2015),
            company_factory(id="2", name="CareBot", category="Healthcare", tags=[], founded=2019),
            company_factory(id="3", name="ModelWorks", category="AI/ML", tags=[], founded=2023),
        ]
        selection = FilterSelection(categories=("Financial Services",))
        result = filter_companies(companies, selection, Provenance.MANUAL)
        assert result == [companies[0]]

    def test_criteria_are_combined(self, three_companies):
        selection = FilterSelection(countries=("India",), year_range=(2016, 2025))
        assert names(filter_companies(three_companies, selection)) == ["A"]

    def test_result_is_subset_of_input(self, three_companies):
        selection = FilterSelection(categories=("a",), countries=("India", "USA"))
        result = filter_companies(three_companies, selection)
        assert all(c in three_companies for c in result)
        assert all(matches(c, selection) for c in result)


class TestSelectionFromSearch:

    def test_missing_year_range_becomes_default(self):
        selection = selection_from_search(SearchFilters(countries=["India"]))
        assert selection.countries == ("India",)
        assert selection.year_range == DEFAULT_YEAR_RANGE

    def test_cities_and_keywords_are_not_applied(self):
        selection = selection_from_search(SearchFilters(cities=["Mumbai"], keywords=["b2b"]))
        assert selection.is_default()


# =============================================================================
# FilterSession
# =============================================================================


class TestFilterSession:
    """Tests for session state and provenance tracking."""

    def test_new_session_shows_everything(self, three_companies):
        session = FilterSession()
        assert session.provenance is Provenance.MANUAL
        assert names(session.visible(three_companies)) == ["A", "B", "C"]

    def test_toggle_adds_then_removes(self):
        session = FilterSession()
        session.toggle_category("AI/ML")
        assert session.selection.categories == ("AI/ML",)
        session.toggle_category("AI/ML")
        assert session.selection.categories == ()

    def test_active_filter_count(self):
        session = FilterSession()
        session.toggle_category("AI/ML")
        session.toggle_country("India")
        session.toggle_country("USA")
        session.toggle_state("Karnataka")
        assert session.active_filter_count == 4

    def test_invalid_year_range_is_rejected(self):
        session = FilterSession()
        with pytest.raises(ValueError):
            session.set_year_range(2022, 2015)
        assert session.selection.year_range == DEFAULT_YEAR_RANGE

    def test_empty_search_answer_shows_nothing(self, three_companies):
        session = FilterSession()
        session.apply_search(SearchFilters())
        assert session.provenance is Provenance.SEARCH
        assert session.visible(three_companies) == []

    def test_search_answer_is_applied(self, three_companies):
        session = FilterSession()
        session.apply_search(SearchFilters(countries=["India"], founded_year_range=(2016, 2020)))
        assert names(session.visible(three_companies)) == ["A"]
        assert session.last_search is not None

    def test_explicit_default_year_range_is_not_an_empty_answer(self, three_companies):
        session = FilterSession()
        session.apply_search(SearchFilters(founded_year_range=DEFAULT_YEAR_RANGE))
        assert names(session.visible(three_companies)) == ["A", "B", "C"]

    def test_blank_query_leaves_session_untouched(self, three_companies):
        session = FilterSession()
        session.toggle_country("USA")
        session.apply_search(None)
        assert session.provenance is Provenance.MANUAL
        assert names(session.visible(three_companies)) == ["B"]

    def test_manual_edit_after_search_resets_provenance(self, three_companies):
        session = FilterSession()
        session.apply_search(SearchFilters())
        session.toggle_country("India")
        session.toggle_country("India")
        assert session.provenance is Provenance.MANUAL
        assert names(session.visible(three_companies)) == ["A", "B", "C"]

    def test_clear_restores_default(self, three_companies):
        session = FilterSession()
        session.apply_search(SearchFilters(categories=["Healthcare"]))
        session.clear()
        assert session.selection.is_default()
        assert session.provenance is Provenance.MANUAL
        assert session.last_search is None
        assert len(session.visible(three_companies)) == 3
