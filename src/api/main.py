"""
PlantPilot API

Grow-room intake, canned grow advice and the SOP marketplace.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from api.actions import account, chat, config, health, intake, marketplace, sops
from api.errors import register_error_handlers
from core.config import Settings, get_settings
from plantpilot import __version__
from services.container import build_services

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting PlantPilot API v%s, data dir %s", __version__, settings.data_dir)
        services = build_services(settings)
        app.state.services = services
        try:
            yield
        finally:
            logger.info("Shutting down, draining store flushes...")
            services.close()

    app = FastAPI(title="PlantPilot API", version=__version__, lifespan=lifespan)

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        enabled=settings.rate_limit_enabled,
    )
    app.state.limiter = limiter
    app.add_exception_handler(
        RateLimitExceeded,
        _rate_limit_exceeded_handler,  # type: ignore[arg-type]
    )
    app.add_middleware(SlowAPIMiddleware)

    origins = settings.cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    for module in (health, config, intake, chat, sops, marketplace, account):
        app.include_router(module.router)
    return app


configure_logging(get_settings())
app = create_app()
