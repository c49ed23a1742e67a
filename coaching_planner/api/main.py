"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from coaching_planner.api.middleware import RequestIDMiddleware, MetricsMiddleware
from coaching_planner.api.v1 import options, plan, cashflow, summary
from coaching_planner.infrastructure.observability.logging import setup_logging
from coaching_planner.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Coaching Package Planner",
        description="Installment plans that keep client debt within 20% of package value",
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
    app.include_router(options.router, prefix="/v1", tags=["options"])
    app.include_router(plan.router, prefix="/v1", tags=["plans"])
    app.include_router(cashflow.router, prefix="/v1", tags=["cashflow"])
    app.include_router(summary.router, prefix="/v1", tags=["summary"])

    return app


app = create_app()
