"""Application configuration and dependency factories."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List
from dotenv import load_dotenv

from packing_list_parser.extraction.registry import FormatRegistry, get_default_registry

load_dotenv()

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(slots=True)
class Settings:
    api_key: str | None = None
    cors_origins: List[str] | None = None
    log_level: str = "INFO"
    formats_dir: str | None = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    cors_raw = os.environ.get("CORS_ALLOW_ORIGINS", "http://localhost:3000,http://localhost:3001")
    cors_origins = [origin.strip() for origin in cors_raw.split(",") if origin.strip()]
    if not cors_origins:
        cors_origins = ["*"]

    invalid = []
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        invalid.append("LOG_LEVEL")

    formats_dir = os.environ.get("FORMATS_DIR") or None
    if formats_dir and not Path(formats_dir).is_dir():
        invalid.append("FORMATS_DIR")

    if invalid:
        raise RuntimeError(f"Invalid environment variables: {', '.join(sorted(invalid))}")

    return Settings(
        api_key=os.environ.get("API_KEY") or None,
        cors_origins=cors_origins,
        log_level=log_level,
        formats_dir=formats_dir,
    )


def get_registry() -> FormatRegistry:
    settings = get_settings()
    return get_default_registry(settings.formats_dir)


def get_request_logger() -> logging.Logger:
    return logging.getLogger("packing_list_parser.api")
