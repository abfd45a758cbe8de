"""Import pipeline defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_positive_int

DEFAULT_IMPORT_BATCH_SIZE = 100


@dataclass(frozen=True, slots=True)
class ImportConfig:
    batch_size: int = DEFAULT_IMPORT_BATCH_SIZE
    max_rows: int | None = None


def get_import_config() -> ImportConfig:
    batch_size = optional_positive_int("BULKPLAN_BATCH_SIZE")
    return ImportConfig(
        batch_size=batch_size or DEFAULT_IMPORT_BATCH_SIZE,
        max_rows=optional_positive_int("BULKPLAN_MAX_ROWS"),
    )
