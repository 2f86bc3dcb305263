"""FastAPI entrypoint for the packing list parser backend."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from packing_list_parser.logging_config import setup_logging

from .config import get_settings
from .middleware import APIKeyMiddleware
from .routers import parsing


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Packing List Parser API", version="1.0.0")
    allow_origins = settings.cors_origins or ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(APIKeyMiddleware)

    app.include_router(parsing.router, prefix="/api")

    @app.get("/", tags=["info"])
    def root() -> dict[str, str]:
        return {"message": "Packing List Parser API", "version": "1.0.0", "docs": "/docs"}

    @app.get("/health", tags=["health"])
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
