"""Environment-driven settings for the annotator."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .export import DEFAULT_EXPORT_PATH

load_dotenv()

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration. ``None`` paths mean the packaged defaults."""

    traces_path: str | None = None
    behaviors_path: str | None = None
    export_path: str = DEFAULT_EXPORT_PATH
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings_from_env() -> Settings:
    """Read ``ANNOTATOR_*`` variables from the environment or a .env file."""

    log_level = (os.getenv("ANNOTATOR_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unsupported ANNOTATOR_LOG_LEVEL '{log_level}'")

    return Settings(
        traces_path=os.getenv("ANNOTATOR_TRACES_PATH") or None,
        behaviors_path=os.getenv("ANNOTATOR_BEHAVIORS_PATH") or None,
        export_path=os.getenv("ANNOTATOR_EXPORT_PATH") or DEFAULT_EXPORT_PATH,
        log_level=log_level,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
