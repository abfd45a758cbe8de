"""Identifier generation for planned creates."""

from __future__ import annotations

import itertools
import time
import uuid


class ImportIdGenerator:
    """Generate ``import-<millis>-<counter>-<suffix>`` identifiers.

    The counter keeps ids unique within one process even when the clock does not
    advance between calls.
    """

    def __init__(self, prefix: str = "import") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def new_id(self) -> str:
        millis = time.time_ns() // 1_000_000
        suffix = uuid.uuid4().hex[:9]
        return f"{self.prefix}-{millis}-{next(self._counter)}-{suffix}"
