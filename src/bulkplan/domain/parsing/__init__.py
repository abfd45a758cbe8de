"""CSV tokenization and schema validation."""

from __future__ import annotations

from .fields import evaluate_field, parse_date
from .parser import generate_template, parse, validate_headers, validate_row
from .tokenizer import format_line, quote_field, split_lines, tokenize_line
from .types import FieldOutcome, ParsedRow, ParseResult

__all__ = [
    "FieldOutcome",
    "ParseResult",
    "ParsedRow",
    "evaluate_field",
    "format_line",
    "generate_template",
    "parse",
    "parse_date",
    "quote_field",
    "split_lines",
    "tokenize_line",
    "validate_headers",
    "validate_row",
]
