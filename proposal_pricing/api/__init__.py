"""
FastAPI application factory and API package.

Run with:
    uvicorn proposal_pricing.api:app --reload --port 8000

Or via main.py:
    python -m proposal_pricing --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from proposal_pricing.config import get_settings
from proposal_pricing.api.routes import (
    health_router,
    pricing_router,
    proposals_router,
    rates_router,
)
from proposal_pricing.pricing.errors import PricingError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="Proposal Pricing API",
        description="Pricing, rate snapshots and what-if simulation for service proposals",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(pricing_router, prefix="/api/pricing", tags=["Pricing"])
    application.include_router(rates_router, prefix="/api/rates", tags=["Rates"])
    application.include_router(proposals_router, prefix="/api/proposals", tags=["Proposals"])

    @application.exception_handler(PricingError)
    async def pricing_error_handler(request: Request, exc: PricingError):
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
        return JSONResponse(
            status_code=422,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @application.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        # Service payloads and rate tables are validated inside the routes
        return JSONResponse(
            status_code=422,
            content={"error": "ValidationError", "detail": exc.errors(include_url=False, include_context=False)},
        )

    logger.info(f"{settings.app_name} API ready (mock_mode={settings.mock_mode})")
    return application


# Module-level instance for `uvicorn proposal_pricing.api:app`
app = create_app()
