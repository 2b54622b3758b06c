"""Health check endpoint."""

from fastapi import APIRouter

from ... import __version__
from ...api.dependencies import StoreDep
from ...services.rate_catalog import get_rate_catalog


router = APIRouter(prefix="/api/v1", tags=["Health"])


@router.get("/health")
async def health_check(store: StoreDep) -> dict:
    """
    Health check endpoint.

    Returns:
        Health status, catalog readiness and store statistics
    """
    return {
        "status": "healthy",
        "service": "捲簾報價系統",
        "version": __version__,
        "catalog_ready": get_rate_catalog().is_ready,
        "store": store.get_stats(),
    }
