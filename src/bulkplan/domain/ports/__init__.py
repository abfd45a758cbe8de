"""Domain port definitions for adapters."""

from __future__ import annotations

from .identifiers import IdGenerator
from .lookup import EntityLookup, EntityRecord

__all__ = [
    "EntityLookup",
    "EntityRecord",
    "IdGenerator",
]
