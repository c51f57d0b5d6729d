"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from woundcare_revenue.domain.pricing import GraftPriceTable
from woundcare_revenue.infrastructure.clients.renderer import ReportRendererClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_price_table(request: Request) -> GraftPriceTable:
    """Price table loaded at startup and shared read-only"""
    return request.app.state.price_table


def get_renderer_client() -> ReportRendererClient:
    """Provide report renderer client instance"""
    return ReportRendererClient()
