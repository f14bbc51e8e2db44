"""
Main Application - Design Inspiration API

Single entry point for the FastAPI application. One search request fans out
to image search (SerpAPI), the Freepik resource marketplace, optional
Freepik AI image generation, design-platform scrapers and an LLM design
consultant, and comes back as one JSON payload.

Architecture:
1. User sends GET /search with a query and optional design filters
2. Design advisor writes freeform recommendations (heading, palette, fonts)
3. Extracted signals shape the per-provider queries
4. All providers are queried concurrently; failures become empty results
5. Results are categorised, deduplicated and returned with the suggestions

Auxiliary endpoints wrap single structured LLM calls (palettes, font pairings,
layouts, trends, accessibility, brand guidelines, Instagram trends).
"""

from contextlib import asynccontextmanager
from typing import Awaitable, Optional

import httpx
import logfire
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from backend.config import SEARCH_TIMEOUT, Settings, cors_origins_from_env
from backend.models.schema import InvalidSearchRequest, SearchRequest, SearchResponse
from backend.services.aggregator import Aggregator
from backend.services.design_advisor_service import DesignAdvisorService
from backend.services.response_assembler import assemble_response
from backend.tools.browser import BrowserManager
from backend.tools.catalog import build_provider_slots

load_dotenv()

# Configure Logfire for tracing
logfire.configure(send_to_logfire="if-token-present", service_name="design-inspiration-api")
logfire.instrument_openai()


def design_filters(
    q: Optional[str] = None,
    industry: Optional[str] = None,
    font: Optional[str] = None,
    color: Optional[str] = None,
    design_style: Optional[str] = Query(None, alias="designStyle"),
    audience: Optional[str] = None,
    purpose: Optional[str] = None,
) -> SearchRequest:
    """Common query parameters, validated before any provider call."""
    return SearchRequest(
        query=q or "",
        industry=industry,
        font=font,
        color=color,
        design_style=design_style,
        audience=audience,
        purpose=purpose,
    ).validated()


def _error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def _structured_endpoint(label: str, call: Awaitable[BaseModel]):
    """Run a structured LLM call; failures surface as 500 with details."""
    try:
        return await call
    except Exception as e:
        logfire.exception("{label} generation failed", label=label)
        return _error_response(500, f"Failed to generate {label}", str(e))


def create_app(
    settings: Optional[Settings] = None,
    aggregator: Optional[Aggregator] = None,
    advisor: Optional[DesignAdvisorService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Components passed in are used as-is; anything missing is built in the
    lifespan from `settings` (or the environment). Missing API keys raise
    RuntimeError during startup, so the server refuses to start.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        browser = None

        if app.state.aggregator is None or app.state.advisor is None:
            app.state.settings = app.state.settings or Settings.from_env()
            config = app.state.settings

            if app.state.advisor is None:
                app.state.advisor = DesignAdvisorService(config.openai_api_key, config.openai_model)

            if app.state.aggregator is None:
                client = httpx.AsyncClient(timeout=SEARCH_TIMEOUT, follow_redirects=True)
                if config.enable_scrapers:
                    browser = BrowserManager(chrome_binary=config.chrome_binary)
                app.state.aggregator = Aggregator(
                    app.state.advisor,
                    build_provider_slots(config, client, browser),
                    max_results=config.max_results,
                    include_structured_extras=config.include_structured_extras,
                )

        yield

        if browser is not None:
            await browser.close()
        if client is not None:
            await client.aclose()

    app = FastAPI(
        title="Design Inspiration API",
        description="Aggregated design inspiration from image search, Freepik, design platforms and AI",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.aggregator = aggregator
    app.state.advisor = advisor

    # Instrument FastAPI with Logfire
    logfire.instrument_fastapi(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins if settings else cors_origins_from_env(),
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(InvalidSearchRequest)
    async def invalid_request_handler(request: Request, exc: InvalidSearchRequest):
        return _error_response(400, str(exc))

    @app.get("/")
    async def root():
        """Service information."""
        return {
            "status": "active",
            "service": "Design Inspiration API",
            "endpoints": {
                "search": "/search?q=",
                "health": "/health",
            },
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok", "message": "Design API is running"}

    @app.get("/search", response_model=SearchResponse, response_model_exclude_none=True)
    async def search(
        request: Request,
        filters: SearchRequest = Depends(design_filters),
        ai: bool = False,
        platforms: bool = False,
        sort_by: Optional[str] = Query(None, alias="sortBy"),
        limit: Optional[int] = Query(None, ge=1, le=200),
    ):
        """
        Search design inspiration across all providers.

        Process:
        1. Generate AI design suggestions for the query
        2. Build provider queries from the request and extracted signals
        3. Query every provider in parallel, tolerating failures
        4. Categorise, deduplicate and optionally sort the images

        Returns images, AI suggestions, related terms, color palette and heading.
        """
        search_request = filters.model_copy(
            update={
                "want_ai_images": ai,
                "want_platform_results": platforms,
                "sort_by": sort_by or None,
                "max_results": limit,
            }
        )
        try:
            result = await request.app.state.aggregator.aggregate(search_request)
            return assemble_response(result)
        except InvalidSearchRequest:
            raise
        except Exception as e:
            logfire.exception("Search failed for {query}", query=search_request.query)
            return _error_response(500, "Failed to fetch design resources", str(e))

    @app.get("/color-palette")
    async def color_palette(request: Request, filters: SearchRequest = Depends(design_filters)):
        return await _structured_endpoint(
            "color palette", request.app.state.advisor.color_palette(filters)
        )

    @app.get("/font-pairings")
    async def font_pairings(request: Request, filters: SearchRequest = Depends(design_filters)):
        async def _pairings():
            return {"fontPairings": await request.app.state.advisor.font_pairings(filters)}

        return await _structured_endpoint("font pairings", _pairings())

    @app.get("/layout-suggestions")
    async def layout_suggestions(request: Request, filters: SearchRequest = Depends(design_filters)):
        async def _layouts():
            return {"layoutSuggestions": await request.app.state.advisor.layout_suggestions(filters)}

        return await _structured_endpoint("layout suggestions", _layouts())

    @app.get("/design-trends")
    async def design_trends(request: Request, filters: SearchRequest = Depends(design_filters)):
        return await _structured_endpoint(
            "design trends", request.app.state.advisor.design_trends(filters)
        )

    @app.get("/accessibility-recommendations")
    async def accessibility_recommendations(
        request: Request,
        filters: SearchRequest = Depends(design_filters),
        colors: Optional[str] = None,
    ):
        color_list = [c.strip() for c in (colors or "").split(",") if c.strip()]
        return await _structured_endpoint(
            "accessibility recommendations",
            request.app.state.advisor.accessibility_recommendations(filters, color_list),
        )

    @app.get("/brand-guidelines")
    async def brand_guidelines(request: Request, filters: SearchRequest = Depends(design_filters)):
        return await _structured_endpoint(
            "brand guidelines", request.app.state.advisor.brand_guidelines(filters)
        )

    @app.get("/instagram-trends")
    async def instagram_trends(request: Request, filters: SearchRequest = Depends(design_filters)):
        return await _structured_endpoint(
            "Instagram trends", request.app.state.advisor.instagram_trends(filters)
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
