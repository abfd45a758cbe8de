"""Per-field rule evaluation.

Evaluation order for a single value is fixed:

1. required and empty -> error
2. optional and empty -> ``None`` (or the transform of ``""``)
3. type coercion; number, date and boolean values return as soon as they parse
4. pattern
5. allowed choices
6. length bounds
7. transform (or the trimmed string)

Type coercion runs before the generic string checks, so numeric bounds are not
also applied as length bounds.
"""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final, assert_never

from bulkplan.domain.schema import FieldType

from .types import FieldOutcome

if TYPE_CHECKING:
    from bulkplan.domain.schema import FieldRule

EMAIL_PATTERN: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TRUE_TOKENS: Final = frozenset({"true", "1", "yes", "y"})
FALSE_TOKENS: Final = frozenset({"false", "0", "no", "n"})
DATE_FORMATS: Final[tuple[str, ...]] = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
)


def evaluate_field(raw: str | None, rule: FieldRule) -> FieldOutcome:
    """Validate and coerce one raw column value against ``rule``."""

    trimmed = (raw or "").strip()

    if not trimmed:
        if rule.required:
            return FieldOutcome(error="Required field is empty")
        return FieldOutcome(value=rule.transform(trimmed) if rule.transform else None)

    match rule.type:
        case FieldType.EMAIL:
            if not EMAIL_PATTERN.search(trimmed):
                return FieldOutcome(error="Invalid email format")
        case FieldType.NUMBER:
            return _coerce_number(trimmed, rule)
        case FieldType.DATE:
            parsed = parse_date(trimmed)
            if parsed is None:
                return FieldOutcome(error="Invalid date format")
            return FieldOutcome(value=parsed)
        case FieldType.BOOLEAN:
            return _coerce_boolean(trimmed)
        case FieldType.STRING:
            pass
        case _:
            assert_never(rule.type)

    if rule.pattern is not None and not rule.pattern.search(trimmed):
        return FieldOutcome(error="Invalid format")

    if rule.choices is not None and trimmed not in rule.choices:
        return FieldOutcome(error=f"Must be one of: {', '.join(rule.choices)}")

    if rule.min is not None and len(trimmed) < rule.min:
        return FieldOutcome(error=f"Must be at least {_format_bound(rule.min)} characters")
    if rule.max is not None and len(trimmed) > rule.max:
        return FieldOutcome(error=f"Must be at most {_format_bound(rule.max)} characters")

    return FieldOutcome(value=rule.transform(trimmed) if rule.transform else trimmed)


def parse_date(value: str) -> datetime | None:
    """Parse ISO-8601 and a few common layouts into an aware UTC datetime."""

    normalized = value.strip()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        for layout in DATE_FORMATS:
            try:
                parsed = datetime.strptime(normalized, layout)  # noqa: DTZ007
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _coerce_number(value: str, rule: FieldRule) -> FieldOutcome:
    try:
        number = float(value)
    except ValueError:
        return FieldOutcome(error="Must be a valid number")
    if not math.isfinite(number):
        return FieldOutcome(error="Must be a valid number")
    if rule.min is not None and number < rule.min:
        return FieldOutcome(error=f"Must be at least {_format_bound(rule.min)}")
    if rule.max is not None and number > rule.max:
        return FieldOutcome(error=f"Must be at most {_format_bound(rule.max)}")
    return FieldOutcome(value=number)


def _coerce_boolean(value: str) -> FieldOutcome:
    lowered = value.lower()
    if lowered in TRUE_TOKENS:
        return FieldOutcome(value=True)
    if lowered in FALSE_TOKENS:
        return FieldOutcome(value=False)
    return FieldOutcome(error="Must be true/false, yes/no, or 1/0")


def _format_bound(bound: float) -> str:
    return f"{bound:g}"
