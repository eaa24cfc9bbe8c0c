"""
Runtime settings, read from the environment (and a .env file when present).
"""

import logging
import os
from pathlib import Path
from typing import Literal, Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

_ENV_FIELDS = {
    "CT_STORAGE_DIR": "storage_dir",
    "CT_LOG_LEVEL": "log_level",
    "CT_TABLE_FORMAT": "table_format",
    "CT_SHOW_TOOLTIP": "show_tooltip",
}


class TrackerSettings(BaseModel):
    """Settings for the condition tracker server."""

    storage_dir: Path = Field(
        default=Path("ct_data"),
        description="Directory holding the tracker state and campaign files",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name for the server process",
    )
    table_format: Literal["html", "yaml"] = Field(
        default="html",
        description="Format of the editable conditions table in the config document",
    )
    show_tooltip: bool = Field(
        default=True,
        description="Whether token tooltips are shown on a fresh install",
    )

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings(environ: Mapping[str, str] | None = None) -> TrackerSettings:
    """Build settings from ``environ`` (defaults to os.environ after loading .env)."""
    if environ is None:
        if not load_dotenv():
            logger.debug(".env file not found, using process environment only")
        environ = os.environ

    values = {
        field: environ[var]
        for var, field in _ENV_FIELDS.items()
        if environ.get(var, "") != ""
    }
    return TrackerSettings.model_validate(values)
