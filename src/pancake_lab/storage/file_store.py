"""JSONL-backed order store.

Every ``save`` / ``delete`` appends one journal record; on start the
journal is replayed into an ``InMemoryOrderStore``, last record wins.

Record shapes::

    {"op": "save", "order": {...}}
    {"op": "delete", "id": "..."}

The journal is never compacted.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from pancake_lab.core.enums import OrderStatus
from pancake_lab.core.errors import InvalidArgument, Unavailable
from pancake_lab.core.file_io import iter_lines, safe_append_line
from pancake_lab.domain.order import Order

from .codec import order_from_dict, order_to_dict
from .memory_store import InMemoryOrderStore

logger = logging.getLogger(__name__)

_OP_SAVE = "save"
_OP_DELETE = "delete"


class JsonFileOrderStore:
    """Journal-on-disk, index-in-memory order store."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.RLock()
        self._inner = InMemoryOrderStore()
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        """Replay the journal into memory, skipping malformed records."""
        applied = 0
        try:
            for lineno, line in iter_lines(self._path):
                try:
                    record = json.loads(line)
                    if not isinstance(record, dict):
                        raise TypeError(type(record).__name__)
                    op = record["op"]
                    if op == _OP_SAVE:
                        self._inner.save(order_from_dict(record["order"]))
                    elif op == _OP_DELETE:
                        if not isinstance(record["id"], str):
                            raise TypeError(type(record["id"]).__name__)
                        self._inner.delete(record["id"])
                    else:
                        raise KeyError(op)
                    applied += 1
                except (json.JSONDecodeError, KeyError, TypeError, InvalidArgument):
                    logger.warning(
                        "Skipping malformed journal record %s:%d", self._path, lineno
                    )
        except OSError as exc:
            raise Unavailable(f"Cannot read order journal {self._path}: {exc}") from exc

        if applied:
            logger.info(
                "Replayed %d journal records from %s (%d orders)",
                applied,
                self._path,
                self._inner.size,
            )

    def _append(self, record: dict) -> None:
        try:
            safe_append_line(self._path, json.dumps(record, sort_keys=True))
        except OSError as exc:
            raise Unavailable(f"Cannot write order journal {self._path}: {exc}") from exc

    def save(self, order: Order) -> Order:
        if order is None:
            raise InvalidArgument("Order cannot be empty")
        with self._lock:
            self._append({"op": _OP_SAVE, "order": order_to_dict(order)})
            return self._inner.save(order)

    def find_by_id(self, order_id: str) -> Order | None:
        return self._inner.find_by_id(order_id)

    def find_active(self) -> list[Order]:
        return self._inner.find_active()

    def find_by_status(self, status: OrderStatus) -> list[Order]:
        return self._inner.find_by_status(status)

    def exists(self, order_id: str) -> bool:
        return self._inner.exists(order_id)

    def delete(self, order_id: str) -> bool:
        with self._lock:
            if not self._inner.exists(order_id):
                return False
            self._append({"op": _OP_DELETE, "id": order_id})
            return self._inner.delete(order_id)

    @property
    def size(self) -> int:
        return self._inner.size
