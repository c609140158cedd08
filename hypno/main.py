"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hypno.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.hypno_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Hypno",
        description="Spiral / ripple pattern overlay renderer with draggable text labels",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all stage modules to trigger registration
    from hypno.engine.compositor import register_stages
    from hypno.engine.registry import get_registry

    register_stages()

    from hypno.api.router import api_router

    app.include_router(api_router)
    logger.info("Hypno API ready (env=%s, %d stages)", settings.hypno_env, get_registry().count)

    return app


app = create_app()
