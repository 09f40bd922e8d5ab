"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finlar_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finlar_gateway.api.v1 import enrichment, statements
from finlar_gateway.infrastructure.observability.logging import setup_logging
from finlar_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FinLar Billing Gateway",
        description="Credit card statement attribution and installment projection service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
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
    app.include_router(enrichment.router, prefix="/v1", tags=["enrichment"])
    app.include_router(statements.router, prefix="/v1", tags=["statements"])

    return app


app = create_app()
