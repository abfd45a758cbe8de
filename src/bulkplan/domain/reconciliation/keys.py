"""Natural lookup keys used to match incoming rows with existing entities."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import assert_never

from bulkplan.domain.schema import EntityKind

FALLBACK_KEY_FIELDS: tuple[str, ...] = ("name", "title", "id")


def lookup_key(kind: EntityKind, data: Mapping[str, object]) -> str | None:
    """Derive the lookup key for ``data``; ``None`` when the row carries none.

    Empty values fall through to the next candidate field, as with ``or``.
    """

    match kind:
        case EntityKind.USERS:
            return _first_present(data, ("email",))
        case EntityKind.CUSTOMERS:
            return _first_present(data, ("name", "email"))
        case EntityKind.PROJECTS:
            return _first_present(data, ("title",))
        case EntityKind.ORGANIZATIONS:
            return _first_present(data, FALLBACK_KEY_FIELDS) or record_fingerprint(data)
        case _:
            assert_never(kind)


def record_fingerprint(data: Mapping[str, object]) -> str:
    """Canonical JSON of the whole record, the key of last resort."""

    return json.dumps(dict(data), sort_keys=True, default=str, separators=(",", ":"))


def _first_present(data: Mapping[str, object], fields: tuple[str, ...]) -> str | None:
    for field in fields:
        value = data.get(field)
        if value:
            return str(value)
    return None
