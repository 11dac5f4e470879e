"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from mt_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from mt_gateway.api.v1 import invoke, query
from mt_gateway.infrastructure.observability.logging import setup_logging
from mt_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="MT Transfer Gateway",
        description="MT payment message validation, ledger transfer and reply service",
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
        return {"status": "ok", "service": settings.service_name, "ledger_store_id": settings.ledger_store_id}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(invoke.router, prefix="/v1", tags=["invoke"])
    app.include_router(query.router, prefix="/v1", tags=["query"])

    return app


app = create_app()
