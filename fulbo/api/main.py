"""
FastAPI Application Main
Hauptanwendung für die Fulbo Data API
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from fulbo.core.config import Settings
from fulbo.core.leagues import LEAGUES
from fulbo.games.bingo import BingoService, build_bingo_cache
from fulbo.monitoring.prometheus_metrics import CONTENT_TYPE_LATEST, PrometheusMetrics


def create_fastapi_app(
    settings: Settings,
    *,
    bingo_service: Optional[BingoService] = None,
    metrics: Optional[PrometheusMetrics] = None,
) -> FastAPI:
    """Factory function to create the FastAPI app.

    Collaborators can be injected (tests); otherwise they are built from
    ``settings``.
    """
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application Lifespan Management"""
        logger.info(f"Starting Fulbo Data API (data_dir={settings.data_dir})")
        yield
        logger.info("Shutting down Fulbo Data API")

    app = FastAPI(
        title="Fulbo Data API",
        description="Player rosters of the major European leagues, quiz questions and bingo boards",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Make collaborators available to endpoints
    app.state.settings = settings
    app.state.bingo_service = bingo_service or BingoService(settings, cache=build_bingo_cache(settings))
    if metrics is None and settings.enable_metrics:
        metrics = PrometheusMetrics(settings)
    app.state.metrics = metrics

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin] if settings.cors_origin else settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def metrics_http_middleware(request: Request, call_next):
        start = time.time()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            if app.state.metrics:
                # label by route template to keep cardinality bounded
                route = request.scope.get("route")
                endpoint = getattr(route, "path", request.url.path)
                app.state.metrics.record_api_request(
                    method=request.method,
                    endpoint=endpoint,
                    status=str(getattr(response, "status_code", 500)),
                    duration=time.time() - start,
                )

    @app.get("/")
    async def root():
        """Root endpoint with API overview"""
        return {
            "message": "Fulbo Data API",
            "version": "1.0.0",
            "status": "active",
            "endpoints": {
                "teams": {
                    "url": "/leagues/{league}/{team}.json",
                    "alias": "/api/get/{league}/{team}.json",
                    "description": "Players of one team",
                },
                "list": {"url": "/api/list/{league}", "description": "Team files of a league"},
                "quiz": {
                    "url": "/api/quiz/questions",
                    "description": "Quiz questions",
                    "params": "?count=10 (optional, default all)",
                },
                "bingo": {"url": "/api/bingo/{game_id}", "description": "Football bingo board"},
            },
            "leagues": {key: cfg.display_name for key, cfg in LEAGUES.items()},
            "examples": [
                "/leagues/premier/manchester-city.json",
                "/leagues/laligaes/real-madrid.json",
                "/leagues/bundesliga/bayern-munchen.json",
            ],
        }

    @app.get("/health")
    async def health_check():
        """Basic health check endpoint"""
        return {"status": "ok"}

    @app.get("/metrics")
    async def prometheus_metrics():
        if not app.state.metrics:
            return Response(status_code=404)
        return Response(content=app.state.metrics.export_metrics(), media_type=CONTENT_TYPE_LATEST)

    # Include aggregated API router
    from fulbo.api.router import api_router

    app.include_router(api_router)

    return app
