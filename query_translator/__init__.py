"""
Query Translator Package

Natural-language search for the company directory:
- Prompt template grounded in the dataset manifest
- Gemini / OpenRouter providers
- Fence stripping, JSON parsing and vocabulary validation
- Client for a deployed search endpoint
"""

from .prompts import build_search_prompt
from .providers import GeminiProvider, OpenRouterProvider, build_provider
from .remote import RemoteQueryTranslator
from .translator import (
    QueryTranslator,
    parse_model_response,
    strip_code_fences,
    validate_search_filters,
)

__all__ = [
    "build_search_prompt",
    # Providers
    "GeminiProvider",
    "OpenRouterProvider",
    "build_provider",
    # Translators
    "QueryTranslator",
    "RemoteQueryTranslator",
    # Helpers
    "parse_model_response",
    "strip_code_fences",
    "validate_search_filters",
]
