"""Structural errors raised by the import pipeline.

Only failures that abort a whole operation are modelled as exceptions. Per-row
validation and planning problems are accumulated in the results instead.
"""

from __future__ import annotations


class ImportPipelineError(Exception):
    """Base class for structural import failures."""


class MalformedInputError(ImportPipelineError):
    """Raised when the input text cannot be parsed at all (e.g. an empty file)."""


class SchemaViolationError(ImportPipelineError):
    """Raised when the header line does not satisfy the schema."""

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = missing
        noun = "header" if len(missing) == 1 else "headers"
        super().__init__(f"Required {noun} missing: {', '.join(missing)}")


class UnknownSchemaError(ImportPipelineError):
    """Raised when a schema name is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown schema: {name}")
