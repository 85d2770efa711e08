"""Pydantic models for API request/response schemas."""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


class AvailableData(BaseModel):
    """Dataset vocabulary the AI search is grounded on."""

    categories: List[str] = Field(default_factory=list, description="Categories and tags in the dataset")
    locations: List[str] = Field(default_factory=list, description="Countries, states and cities in the dataset")
    companies: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Company summaries (id, name, category, tags, description, country, state, city, founded)",
    )


class SearchRequest(BaseModel):
    """Request body for AI search."""

    query: Optional[str] = Field(None, description="Free-text search query")
    availableData: Optional[AvailableData] = Field(None, description="Availability manifest")

    model_config = {
        "json_schema_extra": {
            "example": {
                "query": "fintech companies in India",
                "availableData": {
                    "categories": ["AI/ML", "Financial Services"],
                    "locations": ["Bengaluru", "India", "Karnataka"],
                    "companies": [
                        {
                            "id": "acme-pay",
                            "name": "Acme Pay",
                            "category": "Financial Services",
                            "tags": ["Payments"],
                            "description": "UPI payment rails for merchants",
                            "country": "India",
                            "state": "Karnataka",
                            "city": "Bengaluru",
                            "founded": 2019,
                        }
                    ],
                },
            }
        }
    }


class SearchFiltersResponse(BaseModel):
    """Validated search filters; foundedYearRange is omitted when absent."""

    categories: List[str] = Field(default_factory=list)
    countries: List[str] = Field(default_factory=list)
    states: List[str] = Field(default_factory=list)
    cities: List[str] = Field(default_factory=list)
    foundedYearRange: Optional[Tuple[int, int]] = Field(None, description="Inclusive [min, max]")
    keywords: List[Any] = Field(default_factory=list, description="Advisory keywords")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    provider: str = Field(..., description="Configured AI search provider")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(None, description="Underlying failure")
