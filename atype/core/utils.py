"""
Utility helpers shared across routers/services.
"""

from __future__ import annotations

from datetime import datetime, timezone
import threading
import time


def now_iso() -> str:
    """UTC timestamp with millisecond precision, e.g. 2026-10-19T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def time_key(value) -> float:
    """
    Sort key for record times. Accepts ISO strings and legacy epoch
    milliseconds; unparseable or missing values sort first.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) / 1000.0
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return 0.0
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp()
    return 0.0


class IdGenerator:
    """Monotonic integer ids seeded from the wall clock in milliseconds."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        now = int(time.time() * 1000)
        with self._lock:
            self._last = max(now, self._last + 1)
            return self._last


_ids = IdGenerator()


def new_id() -> int:
    return _ids.next_id()
