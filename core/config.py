from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Tuple

from dotenv import find_dotenv, load_dotenv
import pandas as pd


DEFAULT_SHEET_RANGE = "'Form responses'!A:M"
DEFAULT_TIMEZONE = "Asia/Kolkata"


logger = logging.getLogger(__name__)


def _env(name: str, default: str = "") -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default.strip()
    value = raw.strip()
    return value if value else default.strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if not raw:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_timezone(name: str, default: str) -> str:
    raw = _env(name, default)
    try:
        pd.Timestamp.now(tz=raw)
    except (KeyError, ValueError, TypeError):
        logger.warning("%s=%r is not a known timezone; using %s", name, raw, default)
        return default
    return raw


def _env_csv(name: str, default: str = "") -> Tuple[str, ...]:
    raw = _env(name, default)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class SheetSettings:
    """Where the form responses live and how their columns are read."""

    sheet_id: str = ""
    sheet_range: str = DEFAULT_SHEET_RANGE
    service_key: str = field(default="", repr=False)
    service_key_file: str = ""
    timezone: str = DEFAULT_TIMEZONE
    timestamp_column: str = "Timestamp"
    salesperson_column: str = "attended by"
    legacy_timestamps: bool = False

    @classmethod
    def from_env(cls) -> "SheetSettings":
        return cls(
            sheet_id=_env("SHEET_ID"),
            sheet_range=_env("SHEET_RANGE", DEFAULT_SHEET_RANGE),
            service_key=_env("GOOGLE_SERVICE_KEY"),
            service_key_file=_env("GOOGLE_SERVICE_KEY_FILE"),
            timezone=_env_timezone("REFERENCE_TIMEZONE", DEFAULT_TIMEZONE),
            timestamp_column=_env("TIMESTAMP_COLUMN", "Timestamp"),
            salesperson_column=_env("SALESPERSON_COLUMN", "attended by"),
            legacy_timestamps=_env_bool("TIMESTAMP_LEGACY_PARSING", False),
        )


@dataclass(frozen=True)
class ApiSettings:
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ()
    port: int = 8080

    @classmethod
    def from_env(cls) -> "ApiSettings":
        return cls(
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            cors_origins=_env_csv("CORS_ORIGINS"),
            port=max(1, _env_int("PORT", 8080)),
        )


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_dotenv(find_dotenv(usecwd=True), override=False)


@lru_cache(maxsize=1)
def get_sheet_settings() -> SheetSettings:
    _load_env_once()
    return SheetSettings.from_env()


@lru_cache(maxsize=1)
def get_api_settings() -> ApiSettings:
    _load_env_once()
    return ApiSettings.from_env()
