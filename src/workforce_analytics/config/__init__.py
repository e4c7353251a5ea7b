from __future__ import annotations

import importlib
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from ..core.constants import DEFAULT_CALENDAR_UTC_OFFSET_MINUTES, DEFAULT_PAGE_SIZE

_PACKAGE = __name__


def get_settings_module() -> str:
    # APP_ENV picks the settings module, defaulting to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return f"{_PACKAGE}.production"

    if env in {"test", "testing"}:
        return f"{_PACKAGE}.testing"

    return f"{_PACKAGE}.development"


@dataclass(frozen=True)
class Settings:
    page_size: int = DEFAULT_PAGE_SIZE
    calendar_utc_offset_minutes: int = DEFAULT_CALENDAR_UTC_OFFSET_MINUTES
    log_level: str = "INFO"
    debug: bool = False


def load_settings() -> Settings:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    return Settings(
        page_size=int(getattr(settings, "PAGE_SIZE", DEFAULT_PAGE_SIZE)),
        calendar_utc_offset_minutes=int(
            getattr(settings, "CALENDAR_UTC_OFFSET_MINUTES", DEFAULT_CALENDAR_UTC_OFFSET_MINUTES)
        ),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        debug=bool(getattr(settings, "DEBUG", False)),
    )
