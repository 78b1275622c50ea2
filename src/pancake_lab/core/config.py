"""Runtime configuration for Pancake Lab.

Precedence, lowest first: field defaults, ``PANCAKE_LAB_*`` environment
variables (nested fields use ``__``, e.g. ``PANCAKE_LAB_STORE__BACKEND=redis``),
an optional TOML file, then explicit ``overrides``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomli
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .enums import LockStrategyType, StoreBackend
from .errors import ConfigError


class StoreConfig(BaseModel):
    backend: StoreBackend = StoreBackend.MEMORY
    path: str = "data/orders.jsonl"  # journal file for the file backend
    redis_url: str = "redis://localhost:6379/0"
    redis_prefix: str = "pancake_lab:"


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # json | console


class Settings(BaseSettings):
    """Store backend, locking and logging settings."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    lock_strategy: LockStrategyType = LockStrategyType.GLOBAL
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "PANCAKE_LAB_", "env_nested_delimiter": "__"}

    def validate_runtime(self) -> None:
        """Raise ``ConfigError`` if the chosen backend is missing its target."""
        if self.store.backend == StoreBackend.FILE and not self.store.path.strip():
            raise ConfigError("File store requires store.path to be set.")
        if self.store.backend == StoreBackend.REDIS and not self.store.redis_url.strip():
            raise ConfigError("Redis store requires store.redis_url to be set.")


def _merge_sections(base: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with path.open("rb") as fh:
            return tomli.load(fh)
    except tomli.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Build ``Settings`` from an optional TOML file plus *overrides*.

    A *config_path* that is given but missing or unparsable raises
    ``ConfigError``.  Table-valued overrides are merged one level deep, so
    ``{"store": {"path": ...}}`` keeps the file's other store keys.
    """
    data = _read_toml(Path(config_path)) if config_path else {}
    if overrides:
        data = _merge_sections(data, overrides)
    return Settings(**data)
