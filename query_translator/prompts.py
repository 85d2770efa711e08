"""
Prompt template for AI search.

The prompt grounds the model in the actual dataset: the full company
manifest and the available categories are embedded, and the answer must be
a JSON object with fixed keys whose values come from that data only.
"""

import json

from core.models import AvailabilityManifest

SEARCH_PROMPT_TEMPLATE = """You are an intelligent company search system. Analyze the user query against the actual company database and return appropriate filters.

User Query: "{query}"

Company Database:
{companies_json}

Available Categories: {categories}

INSTRUCTIONS:
1. Analyze the user query against the actual company data (names, descriptions, categories, tags, locations)
2. Return ONLY a valid JSON object with filter criteria
3. Be intelligent about matching:
   - "fintech" should match companies with "Financial Services" category or finance-related descriptions
   - "AI companies" should match companies with AI/ML tags or AI-related descriptions
   - "customer service" should match companies whose descriptions mention customer service/support
   - Location queries should match the exact country/state/city names from the data
4. Use exact values from the database only. Never return a category, country, state or city that does not appear in the data above.

Required JSON format:
{{
  "categories": [],
  "countries": [],
  "states": [],
  "cities": [],
  "foundedYearRange": null,
  "keywords": []
}}

Examples:
Query: "fintech companies" → Look for companies with Financial Services category or finance-related descriptions
Query: "AI companies in India" → Look for AI/ML companies AND filter by country="India"
Query: "customer service automation" → Look for companies whose descriptions mention customer service/support
Query: "companies founded after 2020" → Set foundedYearRange: [2021, 2025]

Return ONLY the JSON filter object, no other text."""


def build_search_prompt(query: str, manifest: AvailabilityManifest) -> str:
    """Build the search prompt for a query.

    Args:
        query: Free-text user query (already trimmed)
        manifest: Dataset vocabulary and company summaries

    Returns:
        Prompt text
    """
    return SEARCH_PROMPT_TEMPLATE.format(
        query=query,
        companies_json=json.dumps(manifest.companies, ensure_ascii=False, indent=2),
        categories=", ".join(manifest.categories),
    )
