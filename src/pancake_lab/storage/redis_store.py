"""Redis-backed order store.

Each order is one JSON string under ``<prefix>order:<id>``.  Status and
active filters scan the key space and filter client-side, which is fine
for the order volumes a single kitchen produces.

Uses the synchronous ``redis`` client; the coordinator is call-and-return.
"""

from __future__ import annotations

import logging

import redis

from pancake_lab.core.enums import OrderStatus
from pancake_lab.core.errors import InvalidArgument, Unavailable
from pancake_lab.domain.order import Order

from .codec import dumps, loads

logger = logging.getLogger(__name__)


def _order_key(prefix: str, order_id: str) -> str:
    return f"{prefix}order:{order_id}"


class RedisOrderStore:
    """Order store over a Redis connection.

    Args:
        redis_url: Redis connection URL (e.g. ``redis://localhost:6379/0``).
        prefix: Key namespace prefix. Defaults to ``"pancake_lab:"``.
        client: Pre-built client (tests inject a mock here).
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        *,
        prefix: str = "pancake_lab:",
        client: redis.Redis | None = None,
    ) -> None:
        self._url = redis_url
        self._prefix = prefix
        self._redis = client

    # -- lifecycle -----------------------------------------------------------

    def connect(self) -> None:
        """Create the client and verify connectivity."""
        if self._redis is not None:
            return
        try:
            client = redis.Redis.from_url(self._url, decode_responses=False)
            client.ping()
        except redis.RedisError as exc:
            raise Unavailable(f"Redis unavailable: {exc}") from exc
        self._redis = client
        logger.info("Redis connected: %s", self._url.split("@")[-1])

    def close(self) -> None:
        if self._redis is not None:
            self._redis.close()
            self._redis = None
            logger.info("Redis connection closed.")

    @property
    def redis(self) -> redis.Redis:
        """Return the underlying client, raising if not connected."""
        if self._redis is None:
            raise Unavailable("RedisOrderStore not connected. Call connect() first.")
        return self._redis

    # -- store protocol ------------------------------------------------------

    def save(self, order: Order) -> Order:
        if order is None:
            raise InvalidArgument("Order cannot be empty")
        try:
            self.redis.set(_order_key(self._prefix, order.id), dumps(order))
        except redis.RedisError as exc:
            raise Unavailable(f"Failed to save order {order.id}: {exc}") from exc
        logger.debug("Order saved: id=%s status=%s", order.id, order.status.value)
        return order

    def find_by_id(self, order_id: str) -> Order | None:
        if not order_id or not order_id.strip():
            return None
        try:
            raw = self.redis.get(_order_key(self._prefix, order_id))
        except redis.RedisError as exc:
            raise Unavailable(f"Failed to load order {order_id}: {exc}") from exc
        if raw is None:
            return None
        return loads(raw)

    def _all_orders(self) -> list[Order]:
        pattern = _order_key(self._prefix, "*")
        orders: list[Order] = []
        try:
            for key in self.redis.scan_iter(match=pattern, count=100):
                raw = self.redis.get(key)
                if raw is None:
                    continue
                try:
                    orders.append(loads(raw))
                except InvalidArgument:
                    logger.warning("Skipping malformed order value at %s", key)
        except redis.RedisError as exc:
            raise Unavailable(f"Failed to scan orders: {exc}") from exc
        return orders

    def find_active(self) -> list[Order]:
        return [o for o in self._all_orders() if o.is_active]

    def find_by_status(self, status: OrderStatus) -> list[Order]:
        if status is None:
            raise InvalidArgument("Status cannot be empty")
        return [o for o in self._all_orders() if o.status == status]

    def exists(self, order_id: str) -> bool:
        if not order_id or not order_id.strip():
            return False
        try:
            return bool(self.redis.exists(_order_key(self._prefix, order_id)))
        except redis.RedisError as exc:
            raise Unavailable(f"Failed to check order {order_id}: {exc}") from exc

    def delete(self, order_id: str) -> bool:
        if not order_id or not order_id.strip():
            return False
        try:
            removed = self.redis.delete(_order_key(self._prefix, order_id))
        except redis.RedisError as exc:
            raise Unavailable(f"Failed to delete order {order_id}: {exc}") from exc
        return bool(removed)
