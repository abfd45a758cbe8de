"""Result types produced by the CSV parser."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class FieldOutcome:
    """Outcome of evaluating one rule against one raw value."""

    value: object = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True, kw_only=True)
class ParsedRow:
    """One validated data line.

    ``data`` holds typed values keyed by field name; ``raw`` keeps the untouched
    strings keyed by header so failed rows can be reported verbatim.
    """

    data: Mapping[str, object]
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    line_number: int
    raw: Mapping[str, str] = field(default_factory=dict[str, str])

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True, slots=True, kw_only=True)
class ParseResult:
    headers: tuple[str, ...]
    rows: tuple[ParsedRow, ...]
    warnings: tuple[str, ...] = ()

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    @property
    def valid_rows(self) -> int:
        return sum(1 for row in self.rows if row.is_valid)

    @property
    def error_rows(self) -> int:
        return self.total_rows - self.valid_rows

    @property
    def valid(self) -> tuple[ParsedRow, ...]:
        return tuple(row for row in self.rows if row.is_valid)
