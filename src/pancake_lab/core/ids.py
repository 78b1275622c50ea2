"""Identifier and timestamp helpers shared by the domain and the stores.

Order and pancake ids are random UUID4 strings.  Timestamps are always
timezone-aware UTC; naive datetimes never enter an ``Order``.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
