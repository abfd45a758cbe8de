"""Identifier generation port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IdGenerator(Protocol):
    """Produce identifiers for entities planned for creation."""

    def new_id(self) -> str: ...
