"""
FastAPI application for the AI Radar directory.

Endpoints:
- GET  /companies  proxy for the companies JSON document
- POST /search     natural-language query -> validated search filters
- GET  /health     health check

Every response is open to all origins; OPTIONS preflights get an empty 200.

Start the server with:
    uvicorn api.main:app --reload
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response

from core.config import Settings, load_settings
from core.constants import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, PROXY_CACHE_CONTROL
from core.dataset_store import fetch_companies_payload
from core.errors import ConfigurationError, DatasetError, SearchTranslationError
from core.models import AvailabilityManifest
from query_translator import QueryTranslator, build_provider

from .schemas import ErrorResponse, HealthResponse, SearchFiltersResponse, SearchRequest

logger = logging.getLogger(__name__)

app = FastAPI(
    title="AI Radar API",
    description="Company directory data proxy and AI-powered search",
    version="1.0.0",
)


@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    """Answer preflights directly and open every response to all origins."""
    if request.method == "OPTIONS":
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
                "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
            },
        )
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


# ----------------------------------------------------------------------------
# Dependencies
# ----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return load_settings()


def get_translator(settings: Settings = Depends(get_settings)) -> QueryTranslator:
    return QueryTranslator(build_provider(settings))


def _error(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


# ----------------------------------------------------------------------------
# Endpoints
# ----------------------------------------------------------------------------

@app.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)) -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "provider": settings.search_provider}


@app.get(
    "/companies",
    responses={500: {"model": ErrorResponse}},
)
def companies_proxy(settings: Settings = Depends(get_settings)):
    """Proxy the companies JSON document from its upstream source."""
    logger.info("Proxying request for companies data")
    try:
        data = fetch_companies_payload(settings.companies_url, timeout=settings.request_timeout)
    except DatasetError as e:
        logger.error("Companies proxy error: %s", e)
        return _error(500, "Failed to fetch companies data", str(e))

    return JSONResponse(content=data, headers={"Cache-Control": PROXY_CACHE_CONTROL})


@app.post(
    "/search",
    response_model=SearchFiltersResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
def search(request: SearchRequest, translator: QueryTranslator = Depends(get_translator)):
    """Translate a natural-language query into filters grounded in availableData."""
    if not request.query or not request.query.strip() or request.availableData is None:
        return _error(400, "Missing query or availableData")

    manifest = AvailabilityManifest(
        categories=request.availableData.categories,
        locations=request.availableData.locations,
        companies=request.availableData.companies,
    )

    try:
        filters = translator.translate(request.query, manifest)
    except ConfigurationError as e:
        logger.error("AI search misconfigured: %s", e)
        return _error(500, "AI provider API key not configured")
    except SearchTranslationError as e:
        logger.error("AI search failed: %s", e)
        return _error(502, "Search failed", str(e))

    return filters.to_dict()
