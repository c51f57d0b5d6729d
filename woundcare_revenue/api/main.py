"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from woundcare_revenue.api.middleware import RequestIDMiddleware, MetricsMiddleware
from woundcare_revenue.api.v1 import grafts, quote, history, progression
from woundcare_revenue.domain.pricing import GraftPriceTable
from woundcare_revenue.infrastructure.observability.logging import setup_logging
from woundcare_revenue.infrastructure.pricing.loader import load_price_table
from woundcare_revenue.config import settings

# Setup structured logging
setup_logging(settings.log_level, service=settings.service_name)


def create_app(price_table: GraftPriceTable | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    The price table is loaded and validated here, once, so a bad quarterly
    update fails at startup instead of on the first calculation.
    """
    if price_table is None:
        price_table = load_price_table(settings.graft_prices_path)

    app = FastAPI(
        title="Wound Care Revenue Service",
        description="Graft pricing and provider revenue progression estimates",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.price_table = price_table

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": settings.service_name,
            "pricing_quarter": app.state.price_table.quarter_label,
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers; history before progression so /progression/history
    # is not captured by /progression/{estimate_id}
    app.include_router(grafts.router, prefix="/v1", tags=["grafts"])
    app.include_router(quote.router, prefix="/v1", tags=["quotes"])
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(progression.router, prefix="/v1", tags=["progressions"])

    return app


app = create_app()
