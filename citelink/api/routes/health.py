"""Health check and monitoring routes"""
import time
from datetime import datetime
from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import generate_latest

from citelink import __version__
from citelink.api.schemas import HealthResponse


def create_health_router(
    start_time: float,
    exhibit_count_getter=None,
    history_size_getter=None,
) -> APIRouter:
    """Create health check router.

    Args:
        start_time: Server start time for uptime calculation
        exhibit_count_getter: Callable that returns the directory size
        history_size_getter: Callable that returns the history size

    Returns:
        FastAPI router with health endpoints
    """
    router = APIRouter()

    @router.get("/api/v1/citations/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint"""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(),
            version=__version__,
            uptime=time.time() - start_time,
            system_info={
                "exhibits": exhibit_count_getter() if exhibit_count_getter else 0,
                "history_entries": history_size_getter() if history_size_getter else 0,
            },
        )

    @router.get("/metrics")
    async def get_metrics():
        """Prometheus metrics endpoint"""
        return Response(generate_latest(), media_type="text/plain")

    return router
