"""Shared fixtures for the test suite."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.data_io import company_from_dict


def make_record(**overrides) -> dict:
    """A valid company record in document (camelCase) format."""
    record = {
        "id": "acme",
        "name": "Acme AI",
        "founded": 2018,
        "founders": ["Ada Lovelace"],
        "website": "https://acme.ai",
        "category": "AI/ML",
        "tags": ["Machine Learning"],
        "country": "India",
        "state": "Karnataka",
        "city": "Bengaluru",
        "logoUrl": "https://acme.ai/logo.png",
        "description": "Applied machine learning",
        "linkedinProfile": "https://www.linkedin.com/company/acme",
    }
    record.update(overrides)
    return record


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def company_factory():
    def _make(**overrides):
        return company_from_dict(make_record(**overrides))
    return _make


@pytest.fixture
def three_companies(company_factory):
    """A: AI/ML India 2018, B: Healthcare USA 2021, C: Finance India 2015."""
    return [
        company_factory(id="a", name="A", category="AI/ML", tags=[], country="India", founded=2018),
        company_factory(id="b", name="B", category="Healthcare", tags=[], country="USA",
                        state="California", city="San Francisco", founded=2021),
        company_factory(id="c", name="C", category="Finance", tags=[], country="India",
                        state="Maharashtra", city="Mumbai", founded=2015),
    ]
