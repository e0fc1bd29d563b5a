"""FastAPI application factory"""

from datetime import datetime, timezone
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from lending_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from lending_gateway.api.v1 import decision, income, payment
from lending_gateway.infrastructure.observability.logging import setup_logging
from lending_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Lending Gateway",
        description="Deterministic loan decisioning, income analysis and payment calculation",
        version=settings.service_version,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": settings.service_name,
            "version": settings.service_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(decision.router, prefix="/v1", tags=["decisions"])
    app.include_router(income.router, prefix="/v1", tags=["income"])
    app.include_router(payment.router, prefix="/v1", tags=["payments"])

    return app


app = create_app()
