"""MiniDrive application configuration.

Loads settings from a single YAML file:
  * minidrive.settings.yaml  — server, storage and logging configuration

Everything has a default, so a missing file yields a working local setup
that stores uploads in ./uploads and listens on port 8080.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SETTINGS_FILE = Path("minidrive.settings.yaml")


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


# ---------------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class StorageSettings(BaseModel):
    """Where uploads live and how far the index page walks into them."""
    root_dir:             str           = "uploads"
    max_depth:            Optional[int] = None
    max_files_per_upload: int           = 1000

    @field_validator("max_depth")
    @classmethod
    def _non_negative_depth(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("max_depth must be >= 0")
        return value


class LoggingSettings(BaseModel):
    level: str = "info"


class AppConfig(BaseModel):
    server:  ServerSettings  = Field(default_factory=ServerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(settings_path: Optional[Path] = None) -> AppConfig:
    """Load *AppConfig* from YAML.

    A relative ``storage.root_dir`` is resolved against the directory that
    holds the settings file, or the working directory when there is none.
    """
    path = Path(settings_path) if settings_path is not None else SETTINGS_FILE
    data = _load_yaml(path)

    config = AppConfig(**data)

    base_dir = path.parent if path.exists() else Path.cwd()
    root_dir = Path(config.storage.root_dir)
    if not root_dir.is_absolute():
        config.storage.root_dir = str((base_dir / root_dir).absolute())

    logger.info(
        "Settings loaded (server=%s:%s, storage.root_dir=%s)",
        config.server.host,
        config.server.port,
        config.storage.root_dir,
    )
    return config


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Return the configuration loaded from the default settings file."""
    return load_config()
