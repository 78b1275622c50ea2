"""Build the configured order store."""

from __future__ import annotations

from pancake_lab.core.config import Settings
from pancake_lab.core.enums import StoreBackend
from pancake_lab.core.interfaces import IOrderStore

from .file_store import JsonFileOrderStore
from .memory_store import InMemoryOrderStore


def build_store(settings: Settings) -> IOrderStore:
    """Return the store selected by ``settings.store.backend``."""
    settings.validate_runtime()
    cfg = settings.store

    if cfg.backend == StoreBackend.FILE:
        return JsonFileOrderStore(cfg.path)
    if cfg.backend == StoreBackend.REDIS:
        from .redis_store import RedisOrderStore

        store = RedisOrderStore(cfg.redis_url, prefix=cfg.redis_prefix)
        store.connect()
        return store
    return InMemoryOrderStore()
