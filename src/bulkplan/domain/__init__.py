"""Domain core: schemas, parsing and dry-run reconciliation (no I/O)."""
