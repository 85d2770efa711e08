"""
Shared constants for the AI Radar company directory.

This module contains the defaults used by the dataset store, the filter
engine, the query translator and the HTTP service.
"""

# ============================================================================
# Dataset
# ============================================================================

DEFAULT_COMPANIES_URL = (
    "https://raw.githubusercontent.com/AI-Boomi/ai-radar-companies/main/public/companies.json"
)
DEFAULT_CACHE_DIR = "cache/companies"
DEFAULT_CACHE_TTL_SECONDS = 5 * 60
CACHE_FILE_NAME = "ai-radar-companies.json"
USER_AGENT = "AI-Radar-App/1.0"

# Field name -> expected JSON type of a company record
COMPANY_FIELDS = {
    "id": str,
    "name": str,
    "founded": int,
    "founders": list,
    "website": str,
    "category": str,
    "tags": list,
    "country": str,
    "state": str,
    "city": str,
    "logoUrl": str,
    "description": str,
    "linkedinProfile": str,
}

# ============================================================================
# Filtering
# ============================================================================

# The untouched year slider; equals "no year filter"
DEFAULT_YEAR_RANGE = (2010, 2025)

# ============================================================================
# Query translation
# ============================================================================

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_OPENROUTER_MODEL = "google/gemini-2.5-flash"
SEARCH_PROVIDERS = ("gemini", "openrouter")

TRANSLATION_TEMPERATURE = 0.1
TRANSLATION_MAX_OUTPUT_TOKENS = 1000

# Keys the model must answer with
SEARCH_FILTER_KEYS = [
    "categories",
    "countries",
    "states",
    "cities",
    "foundedYearRange",
    "keywords",
]

# ============================================================================
# HTTP service
# ============================================================================

CORS_ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, Authorization"
PROXY_CACHE_CONTROL = "public, max-age=300"
