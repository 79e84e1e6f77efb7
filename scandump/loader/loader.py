"""Loader orchestrating extension population and batched fact loading."""

import logging
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from scandump.config import DEFAULT_BATCH_SIZE
from scandump.database import Database, LoadReport, ScanRecord
from scandump.loader.appender import (
    BatchAppender,
    batch_count,
    check_batch_size,
    iter_batches,
)
from scandump.loader.extensions import ExtensionRegistry, distinct_extensions
from scandump.loader.progress import LoadStats, ProgressReporter

logger = logging.getLogger(__name__)


class Loader:
    """Loads scan records into the database inside a single transaction."""

    def __init__(
        self,
        database: Database,
        batch_size: int = DEFAULT_BATCH_SIZE,
        progress_interval: int = 1,
    ) -> None:
        check_batch_size(batch_size)
        self.db = database
        self.batch_size = batch_size
        self.progress = ProgressReporter(interval=progress_interval)

    def load(self, records: Sequence[ScanRecord]) -> LoadReport:
        report = LoadReport(
            records_total=len(records),
            batches_total=batch_count(len(records), self.batch_size),
            read_failures=sum(1 for r in records if r.read_failure),
        )

        with self.db.transaction() as conn:
            extensions = distinct_extensions(records)
            logger.info("Inserting %d unique file extensions", len(extensions))
            registry = ExtensionRegistry(conn)
            extension_ids = registry.resolve(extensions)
            report.extensions_total = len(extension_ids)
            report.extensions_inserted = registry.inserted

            self._append_all(BatchAppender(conn, extension_ids), records, report)

        logger.info(
            "Committed %d of %d records (%d batches skipped)",
            report.rows_appended,
            report.records_total,
            len(report.failed_batches),
        )
        return report

    def _append_all(
        self,
        appender: BatchAppender,
        records: Sequence[ScanRecord],
        report: LoadReport,
    ) -> None:
        stats = LoadStats()
        self.progress.report_start(report.records_total, report.batches_total)

        for index, (start, batch) in enumerate(iter_batches(records, self.batch_size)):
            logger.debug("Processing batch %d/%d", index + 1, report.batches_total)
            failure = appender.append_batch(index, start, batch)
            stats.batches_done += 1

            if failure is None:
                stats.rows_appended += len(batch)
                report.total_bytes += sum(r.file_size for r in batch)
            else:
                stats.batches_failed += 1
                report.failed_batches.append(failure)

            self.progress.report_batch(stats, report.batches_total)

        report.rows_appended = stats.rows_appended
        self.progress.report_completion(stats, report.total_bytes)


def _load_worker(
    db_path: Path,
    records: Sequence[ScanRecord],
    batch_size: int,
    progress_interval: int,
) -> LoadReport:
    # The connection is opened and closed on the worker thread.
    with Database(db_path) as db:
        loader = Loader(db, batch_size=batch_size, progress_interval=progress_interval)
        return loader.load(records)


def load_in_background(
    db_path: Path,
    records: Sequence[ScanRecord],
    batch_size: int = DEFAULT_BATCH_SIZE,
    progress_interval: int = 1,
) -> "Future[LoadReport]":
    """Run the whole load on a background worker thread and return its future."""
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="scandump-load")
    try:
        return executor.submit(_load_worker, db_path, records, batch_size, progress_interval)
    finally:
        executor.shutdown(wait=False)
