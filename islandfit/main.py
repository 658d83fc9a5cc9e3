"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI

from islandfit.config import settings
from islandfit.engine.pipeline import register_transforms

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.islandfit_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="IslandFit",
        description="Island boundary tracing and Chebyshev curve fitting for binary frames",
        version="0.1.0",
    )

    # Import all transform modules to trigger registration
    register_transforms()

    from islandfit.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
