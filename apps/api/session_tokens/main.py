from __future__ import annotations

import datetime as dt
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .models.schemas import HealthResponse
from .routers import tokens


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.getLogger("session_tokens").setLevel(settings.log_level.upper())
    app = FastAPI(title="Session Token API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:  # pragma: no cover - trivial
        return HealthResponse(status="ok", timestamp=dt.datetime.now(dt.timezone.utc))

    app.include_router(tokens.router, prefix=settings.api_prefix)
    logger.debug("Token routes mounted under %s", settings.api_prefix)
    return app


app = create_app()
