"""Structured logging for Pancake Lab.

structlog renders every record, including stdlib ``logging`` records from
library modules, as JSON or console lines on stderr.  Each CLI command
runs inside ``command_context``, which binds a fresh trace id, the command
name, the acting role and the order id so every line the command emits
can be correlated.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

from pancake_lab.core.config import ObservabilityConfig

_SHARED_PROCESSORS: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def current_trace_id() -> str:
    """Trace id bound by the enclosing ``command_context``, or ``""``."""
    return structlog.contextvars.get_contextvars().get("trace_id", "")


def _renderer(log_format: str) -> Any:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def setup_logging(config: ObservabilityConfig | None = None) -> None:
    """Route structlog and stdlib logging through one stderr handler."""
    config = config or ObservabilityConfig()
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(config.log_format),
            ],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)


@contextmanager
def command_context(
    command: str, *, actor: str = "", order_id: str = ""
) -> Iterator[str]:
    """Bind command metadata for the duration of one command.

    Yields the trace id assigned to the command.
    """
    trace_id = uuid.uuid4().hex
    bound = {"trace_id": trace_id, "command": command}
    if actor:
        bound["actor"] = actor
    if order_id:
        bound["order_id"] = order_id
    with structlog.contextvars.bound_contextvars(**bound):
        yield trace_id


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
