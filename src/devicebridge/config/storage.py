"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "devicebridge"
DEFAULT_CATALOG_FILENAME: Final[str] = "catalog.json"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    catalog_filename: str = DEFAULT_CATALOG_FILENAME
    http_cache_filename: str = HTTP_CACHE_FILENAME
    catalog_override: Path | None = None

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def catalog_path(self, *, ensure: bool = True) -> Path:
        if self.catalog_override is not None:
            return self.catalog_override.expanduser().resolve()
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.catalog_filename

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.http_cache_filename


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var("DEVICEBRIDGE_DATA_DIR")
    env_catalog = optional_env_var("DEVICEBRIDGE_CATALOG_PATH")
    return StorageConfig(
        data_dir=Path(env_dir) if env_dir else _default_data_dir(),
        catalog_override=Path(env_catalog) if env_catalog else None,
    )
