"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, routes
from .config import settings
from .services.presentation.board import RouteBoard
from .services.routing.coordinator import RoutePlanningCoordinator
from .services.routing.osrm_client import DirectionsProvider, OSRMClient

logger = logging.getLogger(__name__)


def create_app(provider: DirectionsProvider | None = None) -> FastAPI:
    """Build the application.

    ``provider`` replaces the OSRM client, which is otherwise created and
    closed with the application lifespan.
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned_client = None
        directions = provider
        if directions is None:
            owned_client = OSRMClient()
            directions = owned_client
        board = RouteBoard()
        coordinator = RoutePlanningCoordinator(
            directions,
            board,
            cancel_superseded=settings.cancel_superseded,
            show_alternates=settings.show_alternates,
        )
        app.state.board = board
        app.state.coordinator = coordinator
        logger.info(f"{settings.app_name} ready (OSRM at {settings.osrm_base_url})")
        try:
            yield
        finally:
            await coordinator.aclose()
            if owned_client is not None:
                await owned_client.aclose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(routes.router, prefix=settings.api_prefix)
    return app


app = create_app()
