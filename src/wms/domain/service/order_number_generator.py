"""Domain service: Order Number Generator.

Order numbers look like ``ORD-20240101-000042``: a prefix, the date key and
a zero-padded sequence that restarts every day.  Allocation happens under a
lock against one in-memory counter per date key, so concurrent callers
never see the same number and numbers only grow within a day.

The first allocation for a date key seeds the counter from storage (the
highest sequence already persisted under that key), so numbering survives
a restart instead of starting over at 1.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from wms.domain.exceptions import InvalidOperationError, ValidationError

logger = structlog.get_logger(__name__)

DEFAULT_PREFIX = "ORD"
SEQUENCE_WIDTH = 6


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderNumberGenerator:

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        seed: Callable[[str], int] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Args:
            prefix: Leading part of every number.
            seed: Given a number prefix such as ``"ORD-20240101-"``, returns
                the highest sequence already used under it (0 if none).
            clock: Source of "today" when ``next()`` gets no date key.
        """
        self._prefix = prefix
        self._seed = seed
        self._clock = clock
        self._counters: dict[str, int] = {}
        self._lock = threading.Lock()

    @staticmethod
    def date_key_for(moment: datetime) -> str:
        return moment.strftime("%Y%m%d")

    def number_prefix(self, date_key: str) -> str:
        return f"{self._prefix}-{date_key}-"

    def next(self, date_key: str | None = None) -> str:
        """Allocate the next order number for *date_key* (default: today)."""
        key = date_key if date_key is not None else self.date_key_for(self._clock())
        if not key or not key.strip():
            raise ValidationError("Date key is required")

        number_prefix = self.number_prefix(key)
        with self._lock:
            current = self._counters.get(key)
            if current is None:
                current = self._seed(number_prefix) if self._seed is not None else 0
            if current + 1 >= 10**SEQUENCE_WIDTH:
                raise InvalidOperationError(
                    f"Order number sequence exhausted for date key {key}"
                )
            current += 1
            self._counters[key] = current

        number = f"{number_prefix}{current:0{SEQUENCE_WIDTH}d}"
        logger.debug("Order number allocated", date_key=key, sequence=current)
        return number
