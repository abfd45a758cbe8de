"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from bulkplan.adapters.ids import ImportIdGenerator
from bulkplan.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyLookupSession,
    is_started,
    startup,
)
from bulkplan.config import ImportConfig, get_import_config
from bulkplan.domain.errors import ImportPipelineError
from bulkplan.domain.parsing import parse, split_lines
from bulkplan.domain.reconciliation import (
    DryRunEngine,
    ImportOptions,
    estimate_execution_time,
)
from bulkplan.domain.schema import get_schema

if TYPE_CHECKING:
    from bulkplan.domain.parsing import ParseResult
    from bulkplan.domain.ports import EntityLookup, IdGenerator
    from bulkplan.domain.reconciliation import DryRunResult, ExecutionEstimate
    from bulkplan.domain.schema import EntityKind


log = getLogger(__name__)


class RowLimitExceededError(ImportPipelineError):
    """Raised when a file has more data rows than the configured cap."""

    def __init__(self, rows: int, limit: int) -> None:
        self.rows = rows
        self.limit = limit
        super().__init__(f"Import has {rows} data rows, limit is {limit}")


@dataclass(frozen=True, slots=True)
class DryRunReport:
    parse_result: ParseResult
    result: DryRunResult
    estimate: ExecutionEstimate


def read_import_file(path: Path | str) -> str:
    """Read an import file as UTF-8, dropping a leading byte-order mark."""

    return Path(path).read_text(encoding="utf-8-sig")


def dry_run_text(
    text: str,
    kind: EntityKind | str,
    options: ImportOptions | None = None,
    *,
    lookup: EntityLookup,
    id_generator: IdGenerator | None = None,
    config: ImportConfig | None = None,
) -> DryRunReport:
    """Parse ``text`` and dry-run the parsed rows against ``lookup``."""

    effective_config = config or get_import_config()
    effective_options = options or ImportOptions(batch_size=effective_config.batch_size)
    schema = get_schema(kind)

    if effective_config.max_rows is not None:
        data_rows = max(len(split_lines(text)) - 1, 0)
        if data_rows > effective_config.max_rows:
            raise RowLimitExceededError(data_rows, effective_config.max_rows)

    parse_result = parse(text, schema)
    engine = DryRunEngine(lookup=lookup, id_generator=id_generator or ImportIdGenerator())
    result = engine.perform_dry_run(schema.kind, parse_result.rows, effective_options)
    estimate = estimate_execution_time(result.changes, batch_size=effective_options.batch_size)
    return DryRunReport(parse_result=parse_result, result=result, estimate=estimate)


def dry_run_import(
    path: Path | str,
    kind: EntityKind | str,
    options: ImportOptions | None = None,
    *,
    lookup: EntityLookup | None = None,
    id_generator: IdGenerator | None = None,
    config: ImportConfig | None = None,
) -> DryRunReport:
    """Dry-run an import file using the given lookup or the configured database."""

    log.info("Starting dry run: kind=%s, file=%s, options=%s", kind, path, options)
    text = read_import_file(path)

    if lookup is not None:
        report = dry_run_text(
            text, kind, options, lookup=lookup, id_generator=id_generator, config=config
        )
    else:
        if not is_started():
            startup()
        with SqlAlchemyLookupSession() as scope:
            report = dry_run_text(
                text,
                kind,
                options,
                lookup=scope.lookup,
                id_generator=id_generator,
                config=config,
            )

    log.info(
        "Finished dry run: rows=%s, changes=%s, errors=%s, batches=%s, seconds=%s",
        report.parse_result.total_rows,
        len(report.result.changes),
        report.result.summary.errors,
        report.estimate.batch_count,
        report.estimate.estimated_seconds,
    )
    return report
