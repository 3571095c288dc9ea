"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from retirement_calculator.api.dependencies import get_deposit_cache, get_interest_cache
from retirement_calculator.api.middleware import RequestIDMiddleware, MetricsMiddleware
from retirement_calculator.api.v1 import cache, retirement
from retirement_calculator.infrastructure.database.repositories import LifestyleDepositRepository
from retirement_calculator.infrastructure.database.session import SessionLocal
from retirement_calculator.infrastructure.observability.logging import setup_logging
from retirement_calculator.services.cache_loader import warm_cache
from retirement_calculator.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def preload_lifespan(app: FastAPI):
    """Populate both cache namespaces before serving calculations"""
    db = SessionLocal()
    try:
        warm_cache(
            LifestyleDepositRepository(db),
            get_deposit_cache(),
            get_interest_cache(),
            settings.interest_rate_csv_path,
        )
    finally:
        db.close()
    logging.info("Cache preloaded, service ready")
    yield


def create_app(preload_cache: bool | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    if preload_cache is None:
        preload_cache = settings.preload_cache

    app = FastAPI(
        title="Retirement Calculator",
        description="Cache-backed retirement savings projection service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=preload_lifespan if preload_cache else None,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(retirement.router, prefix="/v1", tags=["retirement-plans"])
    app.include_router(cache.router, prefix="/v1", tags=["cache"])

    return app


app = create_app()
