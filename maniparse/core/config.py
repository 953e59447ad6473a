"""
Runtime settings.

Environment variables:
    MANIPARSE_MANIFEST  — default manifest path when none is given (manifest.yaml)
    MANIPARSE_LOG_LEVEL — logging level name (WARNING)
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, field_validator

DEFAULT_MANIFEST_PATH = "manifest.yaml"
DEFAULT_LOG_LEVEL = "WARNING"


class Settings(BaseModel):
    manifest_path: Path = Path(DEFAULT_MANIFEST_PATH)
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    manifest_path = (env.get("MANIPARSE_MANIFEST") or "").strip() or DEFAULT_MANIFEST_PATH
    log_level = (env.get("MANIPARSE_LOG_LEVEL") or "").strip() or DEFAULT_LOG_LEVEL
    return Settings(manifest_path=Path(manifest_path), log_level=log_level)
