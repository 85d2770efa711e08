"""Exception hierarchy for dataset loading and AI query translation."""

from typing import Optional


class DirectoryError(Exception):
    """Base class for every error raised by the directory."""


# ============================================================================
# Dataset errors
# ============================================================================

class DatasetError(DirectoryError):
    """The company dataset could not be loaded."""


class FetchError(DatasetError):
    """The dataset source was unreachable or answered with a non-200 status."""


class FormatError(DatasetError):
    """The dataset payload (or a record in it) has the wrong shape."""


# ============================================================================
# Query translation errors
# ============================================================================

class SearchTranslationError(DirectoryError):
    """A free-text query could not be turned into search filters."""


class ConfigurationError(SearchTranslationError):
    """The AI provider credential is missing."""


class UpstreamError(SearchTranslationError):
    """The AI provider (or remote search endpoint) answered with a failure."""

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        super().__init__(f"Upstream error: {status} - {body}")


class ParseError(SearchTranslationError):
    """The model output is not valid JSON after fence stripping."""


class EmptyResponseError(SearchTranslationError):
    """The provider payload carried no completion text."""
