"""
Core shared utilities for the AI Radar company directory.

This package provides the data models, the dataset store, the facet
extractor and the filter engine used by the HTTP service and the CLI.

Usage:
    from core import DatasetStore, FilterSession, build_manifest
    from core import filter_companies, extract_categories
"""

from .models import (
    AvailabilityManifest,
    Company,
    DatasetSnapshot,
    FilterSelection,
    Provenance,
    SearchFilters,
)
from .errors import (
    ConfigurationError,
    DatasetError,
    DirectoryError,
    EmptyResponseError,
    FetchError,
    FormatError,
    ParseError,
    SearchTranslationError,
    UpstreamError,
)
from .config import Settings, load_settings
from .data_io import (
    company_to_dict,
    load_companies_from_json,
    parse_companies,
    validate_company,
)
from .dataset_store import DatasetStore, fetch_companies_payload
from .facets import (
    build_manifest,
    extract_categories,
    extract_cities,
    extract_countries,
    extract_locations,
    extract_states,
)
from .filter_engine import FilterSession, filter_companies, selection_from_search
from .constants import DEFAULT_YEAR_RANGE

__all__ = [
    # Models
    "AvailabilityManifest",
    "Company",
    "DatasetSnapshot",
    "FilterSelection",
    "Provenance",
    "SearchFilters",
    # Errors
    "ConfigurationError",
    "DatasetError",
    "DirectoryError",
    "EmptyResponseError",
    "FetchError",
    "FormatError",
    "ParseError",
    "SearchTranslationError",
    "UpstreamError",
    # Settings
    "Settings",
    "load_settings",
    # Data I/O
    "company_to_dict",
    "load_companies_from_json",
    "parse_companies",
    "validate_company",
    "DatasetStore",
    "fetch_companies_payload",
    # Facets
    "build_manifest",
    "extract_categories",
    "extract_cities",
    "extract_countries",
    "extract_locations",
    "extract_states",
    # Filtering
    "FilterSession",
    "filter_companies",
    "selection_from_search",
    "DEFAULT_YEAR_RANGE",
]
