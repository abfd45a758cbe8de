"""Schema-driven CSV parser.

``parse`` turns raw delimited text into a ``ParseResult``. Structural problems
(empty input, missing required headers) raise before any row is touched;
everything else is collected on the rows.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from bulkplan.domain.errors import MalformedInputError, SchemaViolationError
from bulkplan.domain.schema import EntityKind, Schema, get_schema

from .fields import evaluate_field
from .tokenizer import format_line, split_lines, tokenize_line
from .types import ParsedRow, ParseResult

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)


def parse(text: str, schema: Schema | EntityKind | str) -> ParseResult:
    """Parse ``text`` against ``schema`` (a schema or its registry key)."""

    resolved = schema if isinstance(schema, Schema) else get_schema(schema)
    lines = split_lines(text)
    if not lines:
        raise MalformedInputError("CSV file is empty")

    _header_line_number, header_line = lines[0]
    headers = tuple(header.strip() for header in tokenize_line(header_line))
    warnings = validate_headers(headers, resolved)

    rows = tuple(
        validate_row(headers, tokenize_line(line), resolved, line_number=line_number)
        for line_number, line in lines[1:]
    )
    result = ParseResult(headers=headers, rows=rows, warnings=tuple(warnings))
    log.info(
        "Parsed %s rows for %s: valid=%s, errors=%s",
        result.total_rows,
        resolved.kind,
        result.valid_rows,
        result.error_rows,
    )
    return result


def validate_headers(headers: Sequence[str], schema: Schema) -> list[str]:
    """Raise for missing required headers and return warnings for unknown ones."""

    missing = tuple(field for field in schema.required_fields if field not in headers)
    if missing:
        raise SchemaViolationError(missing)

    allowed = set(schema.all_fields)
    unknown = [header for header in headers if header not in allowed]
    if unknown:
        log.debug("Ignoring unknown headers for %s: %s", schema.kind, unknown)
        return [f"Unknown headers will be ignored: {', '.join(unknown)}"]
    return []


def validate_row(
    headers: Sequence[str],
    values: Sequence[str],
    schema: Schema,
    *,
    line_number: int,
) -> ParsedRow:
    """Validate one tokenized line; rule failures are recorded, never raised."""

    raw = {
        header: values[index] if index < len(values) else ""
        for index, header in enumerate(headers)
    }
    errors: list[str] = []
    warnings: list[str] = []
    data: dict[str, object] = {}

    if len(values) > len(headers):
        warnings.append(f"Row has {len(values)} values but header has {len(headers)} columns")

    for rule in schema.rules:
        outcome = evaluate_field(raw.get(rule.field), rule)
        if not outcome.ok:
            errors.append(f"{rule.field}: {outcome.error}")
            continue
        data[rule.field] = outcome.value

    return ParsedRow(
        data=data,
        errors=tuple(errors),
        warnings=tuple(warnings),
        line_number=line_number,
        raw=raw,
    )


def generate_template(schema_name: str | EntityKind) -> str:
    """Return the header line of an empty, importable file for ``schema_name``."""

    return format_line(get_schema(schema_name).all_fields)
