#!/usr/bin/env python3
"""
Citation service REST API

Exposes detection, suggestion, navigation and history for hosts that
run the citation subsystem out of process.
"""
import logging
import os
import time
from typing import Optional

import redis
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from citelink import __version__
from citelink.adapters.directory import InMemoryExhibitDirectory, load_directory_snapshot
from citelink.adapters.storage import InMemoryHistoryStore, RedisHistoryStore
from citelink.api.middleware.authentication import create_token_verifier, resolve_api_key
from citelink.api.routes.citations import create_citations_router, limiter
from citelink.api.routes.health import create_health_router
from citelink.core.citation.history import HistoryTracker
from citelink.core.citation.navigator import CitationNavigator
from citelink.core.citation.ranker import SuggestionRanker
from citelink.core.citation.resolver import NavigationResolver
from citelink.core.ports.directory import ExhibitDirectoryPort
from citelink.core.ports.history_storage import HistoryStoragePort

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "citelink_api_requests_total", "Total API requests", [
        "method", "endpoint", "status"])
REQUEST_DURATION = Histogram(
    "citelink_api_request_duration_seconds",
    "Request duration")


class CitationAPI:
    """Citation API wiring the core services with dependency injection"""

    def __init__(
        self,
        directory: Optional[ExhibitDirectoryPort] = None,
        history_storage: Optional[HistoryStoragePort] = None,
        snapshot_path: Optional[str] = None,
        api_key: Optional[str] = None,
    ):
        """Initialize API with dependency injection.

        Args:
            directory: Exhibit directory (default: YAML snapshot from
                CITELINK_SNAPSHOT, else empty)
            history_storage: History backend (default: Redis when
                CITELINK_REDIS_URL is set, else in-memory)
            snapshot_path: Explicit YAML snapshot path
            api_key: Bearer token for citation routes (default:
                CITELINK_API_KEY; requests are refused when neither is set)
        """
        if directory is None:
            snapshot_path = snapshot_path or os.environ.get("CITELINK_SNAPSHOT")
            if snapshot_path:
                directory = load_directory_snapshot(snapshot_path)
            else:
                directory = InMemoryExhibitDirectory()

        if history_storage is None:
            redis_url = os.environ.get("CITELINK_REDIS_URL")
            if redis_url:
                history_storage = RedisHistoryStore(
                    redis.Redis.from_url(redis_url, decode_responses=True)
                )
            else:
                history_storage = InMemoryHistoryStore()

        self.directory = directory
        self.history = HistoryTracker(storage=history_storage)
        self.navigator = CitationNavigator(NavigationResolver(directory), self.history)
        self.ranker = SuggestionRanker()
        self.start_time = time.time()
        self.api_key = api_key or resolve_api_key()

        self.app = FastAPI(
            title="Citelink Citation API",
            description="Citation detection, autocomplete and navigation for case documents",
            version=__version__,
        )
        self._setup_middleware()
        self._setup_routes()

    def _setup_middleware(self):
        """Setup API middleware"""
        # CORS
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        # Rate limiting
        self.app.state.limiter = limiter
        self.app.add_exception_handler(
            RateLimitExceeded, _rate_limit_exceeded_handler)
        self.app.add_middleware(SlowAPIMiddleware)

        # Request logging middleware
        @self.app.middleware("http")
        async def log_requests(request, call_next):
            start_time = time.time()
            response = await call_next(request)
            process_time = time.time() - start_time

            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=request.url.path,
                status=response.status_code,
            ).inc()

            REQUEST_DURATION.observe(process_time)

            logger.info(
                f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s"
            )

            return response

    def _setup_routes(self):
        """Setup API routes"""
        @self.app.get("/")
        async def root():
            return {
                "service": "Citelink Citation API",
                "version": __version__,
                "status": "operational",
                "docs": "/docs",
            }

        self.app.include_router(
            create_health_router(
                start_time=self.start_time,
                exhibit_count_getter=lambda: len(self.directory.get_exhibits()),
                history_size_getter=lambda: len(self.history),
            )
        )
        self.app.include_router(
            create_citations_router(
                directory=self.directory,
                navigator=self.navigator,
                ranker=self.ranker,
                verify_token_func=create_token_verifier(self.api_key),
            )
        )


# FastAPI app factory
def create_app(
    directory: Optional[ExhibitDirectoryPort] = None,
    history_storage: Optional[HistoryStoragePort] = None,
    snapshot_path: Optional[str] = None,
    api_key: Optional[str] = None,
) -> FastAPI:
    """Create FastAPI application"""
    api = CitationAPI(directory, history_storage, snapshot_path, api_key)
    return api.app


# CLI entry point
if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Citelink Citation API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--snapshot", help="Path to YAML project snapshot")

    args = parser.parse_args()
    app = create_app(snapshot_path=args.snapshot)
    uvicorn.run(app, host=args.host, port=args.port)
