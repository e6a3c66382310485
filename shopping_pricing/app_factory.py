"""
Application factory for the shopping pricing API.

Builds the FastAPI application: CORS, rate limiting, routers and the health
check.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from . import __version__
from .config import CORS_ORIGINS
from .rate_limit import limiter
from .routes import pricing_router, promotions_router, tax_rates_router

logger = logging.getLogger(__name__)

ROUTERS = (tax_rates_router, pricing_router, promotions_router)


def create_app(cors_origins: Optional[List[str]] = None) -> FastAPI:
    """
    Create a FastAPI application.

    Args:
        cors_origins: Allowed origins. Defaults to the CORS_ORIGINS setting.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Shopping Pricing API",
        description="Line-item pricing, promotions and tax summaries for shopping sessions",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Configure rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Include routers with API version prefix
    api_v1 = APIRouter(prefix="/api/v1")
    for router in ROUTERS:
        api_v1.include_router(router)
    app.include_router(api_v1)

    # Also mount at root
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "version": __version__}

    logger.info("Application created with %d routers", len(ROUTERS))

    return app
