"""Locked line I/O for the JSONL order journal.

Writers hold an exclusive ``fcntl`` lock across write, flush and ``fsync``;
readers hold a shared one while iterating.  Two processes pointed at the
same journal therefore never see half a record.
"""

from __future__ import annotations

import fcntl
import os
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator


@contextmanager
def _flocked(fh: IO[str], mode: int) -> Iterator[IO[str]]:
    fcntl.flock(fh.fileno(), mode)
    try:
        yield fh
    finally:
        fcntl.flock(fh.fileno(), fcntl.LOCK_UN)


def safe_append_line(path: Path, line: str) -> None:
    """Durably append *line* plus a newline, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as fh, _flocked(fh, fcntl.LOCK_EX):
        fh.write(f"{line}\n")
        fh.flush()
        os.fsync(fh.fileno())


def iter_lines(path: Path) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, stripped_line)`` for every non-blank line.

    A missing file yields nothing.
    """
    if not path.exists():
        return
    with path.open(encoding="utf-8") as fh, _flocked(fh, fcntl.LOCK_SH):
        for lineno, raw in enumerate(fh, start=1):
            text = raw.strip()
            if text:
                yield lineno, text
