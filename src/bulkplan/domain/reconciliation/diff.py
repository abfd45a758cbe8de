"""Shallow, field-level comparison of flat records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .contracts import DiffKind, FieldDiff

if TYPE_CHECKING:
    from collections.abc import Mapping


def has_changes(existing: Mapping[str, object], incoming: Mapping[str, object]) -> bool:
    """Return whether any incoming field differs from ``existing``.

    Only the incoming keys are compared: a field the existing record has but the
    row omits is not a change (partial-update semantics).
    """

    return any(key not in existing or existing[key] != value for key, value in incoming.items())


def generate_diff(before: Mapping[str, object], after: Mapping[str, object]) -> list[FieldDiff]:
    """Removed and modified fields in ``before`` order, then added fields."""

    diff: list[FieldDiff] = []
    for key, old_value in before.items():
        if key not in after:
            diff.append(FieldDiff(key, old_value, None, DiffKind.REMOVED))
        elif old_value != after[key]:
            diff.append(FieldDiff(key, old_value, after[key], DiffKind.MODIFIED))
    diff.extend(
        FieldDiff(key, None, new_value, DiffKind.ADDED)
        for key, new_value in after.items()
        if key not in before
    )
    return diff
