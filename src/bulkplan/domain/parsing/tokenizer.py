"""Line splitting and quote-aware field tokenization.

Lines are split before fields are tokenized, so a newline inside a quoted
field is not supported: the quoted value ends at the line break.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

DELIMITER = ","
QUOTE = '"'

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[tuple[int, str]]:
    """Return ``(line_number, line)`` pairs for every non-blank line.

    Line numbers are 1-based positions in the source text, blank lines included.
    """

    return [
        (index, line)
        for index, line in enumerate(_LINE_BREAK.split(text), start=1)
        if line.strip()
    ]


def tokenize_line(line: str) -> list[str]:
    """Split one line into raw field values.

    A double quote toggles the quoted state; inside quotes a doubled quote is
    unescaped to one quote. Commas only delimit outside quotes. Values are not
    trimmed.
    """

    fields: list[str] = []
    current: list[str] = []
    quoted = False
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == QUOTE:
            if quoted and index + 1 < length and line[index + 1] == QUOTE:
                current.append(QUOTE)
                index += 2
                continue
            quoted = not quoted
        elif char == DELIMITER and not quoted:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    fields.append("".join(current))
    return fields


def quote_field(value: str) -> str:
    """Quote ``value`` when it contains a delimiter, quote or surrounding space."""

    if DELIMITER in value or QUOTE in value or value != value.strip():
        escaped = value.replace(QUOTE, QUOTE * 2)
        return f"{QUOTE}{escaped}{QUOTE}"
    return value


def format_line(values: Iterable[str]) -> str:
    return DELIMITER.join(quote_field(value) for value in values)
