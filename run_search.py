#!/usr/bin/env python3
"""
AI Radar CLI - browse and search the company directory.

Loads the companies document (with a 5 minute cache and stale fallback),
applies manual filters or translates a natural-language query into filters,
and prints the matching companies.

Usage:
    # List every company
    python run_search.py

    # Manual filters (repeat a flag to select several values)
    python run_search.py --category "AI/ML" --country India --country USA

    # Founded-year range
    python run_search.py --year-min 2018 --year-max 2021

    # AI search (needs GEMINI_API_KEY, or OPENROUTER_API_KEY with SEARCH_PROVIDER=openrouter)
    python run_search.py --query "fintech companies in India"

    # AI search through a deployed API (python run_api.py)
    python run_search.py --query "healthcare startups" --endpoint http://localhost:8000/search

    # Local file, no cache, JSON output
    python run_search.py --source data/companies_sample.json --no-cache --output-format json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.config import load_settings
from core.constants import DEFAULT_YEAR_RANGE
from core.data_io import company_to_dict
from core.dataset_store import DatasetStore
from core.errors import DatasetError, SearchTranslationError
from core.facets import build_manifest, extract_categories, extract_countries, extract_states
from core.filter_engine import FilterSession
from core.models import Company
from query_translator import QueryTranslator, RemoteQueryTranslator, build_provider


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Browse and search the AI Radar company directory.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Usage:", 1)[1],
    )
    parser.add_argument(
        "--source",
        help="Companies JSON URL or file (default: COMPANIES_URL)",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        help="Cache directory (default: COMPANIES_CACHE_DIR)",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Always fetch, never read or write the cache",
    )
    parser.add_argument("--category", action="append", default=[], help="Category or tag (substring, case-insensitive)")
    parser.add_argument("--country", action="append", default=[], help="Country (exact match)")
    parser.add_argument("--state", action="append", default=[], help="State (exact match)")
    parser.add_argument("--year-min", type=int, help=f"Founded on or after (default: {DEFAULT_YEAR_RANGE[0]})")
    parser.add_argument("--year-max", type=int, help=f"Founded on or before (default: {DEFAULT_YEAR_RANGE[1]})")
    parser.add_argument("--query", help="Natural-language search query")
    parser.add_argument(
        "--endpoint",
        help="Deployed search endpoint to send the query to (default: SEARCH_ENDPOINT, else call the provider directly)",
    )
    parser.add_argument(
        "--show-facets",
        action="store_true",
        help="Print the available categories, countries and states",
    )
    parser.add_argument(
        "--output-format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    args = parser.parse_args(argv)

    manual = args.category or args.country or args.state or args.year_min is not None or args.year_max is not None
    if args.query and manual:
        parser.error("--query replaces the filter selection; do not combine it with manual filters")
    return args


def print_facets(companies: List[Company]) -> None:
    print("\n" + "=" * 60)
    print("AVAILABLE FILTERS")
    print("=" * 60)
    print(f"Categories: {', '.join(extract_categories(companies))}")
    print(f"Countries:  {', '.join(extract_countries(companies))}")
    print(f"States:     {', '.join(extract_states(companies))}")


def print_companies(companies: List[Company]) -> None:
    print(f"\nFound {len(companies)} companies")
    print("-" * 60)
    for c in companies:
        location = ", ".join(v for v in (c.city, c.state, c.country) if v)
        tags = f" [{', '.join(c.tags)}]" if c.tags else ""
        print(f"{c.name} ({c.founded}) - {c.category}{tags}")
        print(f"    {location} | {c.website}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    store = DatasetStore(
        source=args.source or settings.companies_url,
        cache_dir=None if args.no_cache else (args.cache_dir or settings.cache_dir),
        ttl_seconds=settings.cache_ttl_seconds,
        timeout=settings.request_timeout,
    )
    try:
        snapshot = store.load()
    except DatasetError as e:
        print(f"Error loading companies: {e}")
        print("Run the command again to retry.")
        return 1

    companies = snapshot.companies
    if snapshot.error:
        print(f"Warning: using cached data from {snapshot.fetched_at} ({snapshot.error})")
    if snapshot.invalid_count:
        print(f"Skipped {snapshot.invalid_count} invalid company records")

    if args.show_facets:
        print_facets(companies)

    session = FilterSession()
    # Repeated values select once
    for category in dict.fromkeys(args.category):
        session.toggle_category(category)
    for country in dict.fromkeys(args.country):
        session.toggle_country(country)
    for state in dict.fromkeys(args.state):
        session.toggle_state(state)
    if args.year_min is not None or args.year_max is not None:
        year_min = args.year_min if args.year_min is not None else DEFAULT_YEAR_RANGE[0]
        year_max = args.year_max if args.year_max is not None else DEFAULT_YEAR_RANGE[1]
        try:
            session.set_year_range(year_min, year_max)
        except ValueError as e:
            print(f"Error: {e}")
            return 2

    if args.query:
        endpoint = args.endpoint or settings.search_endpoint
        if endpoint:
            translator = RemoteQueryTranslator(endpoint, timeout=settings.request_timeout)
        else:
            translator = QueryTranslator(build_provider(settings))
        try:
            filters = translator.translate(args.query, build_manifest(companies))
        except SearchTranslationError as e:
            print(f"Search failed: {e}")
            print("\nFound 0 companies")
            return 1
        session.apply_search(filters)
        if filters is not None:
            print(f"AI filters: {json.dumps(filters.to_dict(), ensure_ascii=False)}")

    visible = session.visible(companies)

    if args.output_format == "json":
        print(json.dumps([company_to_dict(c) for c in visible], ensure_ascii=False, indent=2))
    else:
        print_companies(visible)
    return 0


if __name__ == "__main__":
    sys.exit(main())
