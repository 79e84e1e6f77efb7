"""Batched bulk append of scan records into file_info."""

import logging
from collections.abc import Iterator, Sequence

import duckdb
import pandas as pd

from scandump.database.models import BatchFailure, ScanRecord
from scandump.database.schema import FILE_INFO_COLUMNS, FILE_INFO_TABLE
from scandump.loader.extensions import extension_id_for

logger = logging.getLogger(__name__)

USMALLINT_RANGE = (0, 2**16 - 1)
INTEGER_RANGE = (-(2**31), 2**31 - 1)
BIGINT_RANGE = (-(2**63), 2**63 - 1)

# column -> (pandas dtype, allowed range); string columns are unchecked
COLUMN_TYPES: dict[str, tuple[str, tuple[int, int] | None]] = {
    "file_path": ("object", None),
    "file_name": ("object", None),
    "extension_id": ("uint16", USMALLINT_RANGE),
    "file_size": ("int64", BIGINT_RANGE),
    "creation_date": ("uint16", USMALLINT_RANGE),
    "last_access_date": ("uint16", USMALLINT_RANGE),
    "last_write_date": ("uint16", USMALLINT_RANGE),
    "attributes": ("int32", INTEGER_RANGE),
    "read_failure": ("bool", None),
}


class ColumnOverflowError(ArithmeticError):
    """Raised when a value does not fit its file_info column type."""


def check_batch_size(batch_size: int) -> None:
    if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size < 1:
        raise ValueError(f"batch_size must be a positive integer, got {batch_size!r}")


def iter_batches(
    records: Sequence[ScanRecord], batch_size: int
) -> Iterator[tuple[int, Sequence[ScanRecord]]]:
    """Yield (start offset, chunk) pairs of at most batch_size records, in order."""
    check_batch_size(batch_size)
    for start in range(0, len(records), batch_size):
        yield start, records[start : start + batch_size]


def batch_count(total: int, batch_size: int) -> int:
    return (total + batch_size - 1) // batch_size


class BatchAppender:
    """Appends batches of records to file_info through DuckDB's bulk append."""

    def __init__(self, conn: duckdb.DuckDBPyConnection, extension_ids: dict[str, int]) -> None:
        self.conn = conn
        self.extension_ids = extension_ids

    def append_batch(
        self,
        index: int,
        start: int,
        batch: Sequence[ScanRecord],
    ) -> BatchFailure | None:
        """
        Append one batch.

        Arithmetic faults (including column overflows) are logged and the
        batch is skipped; the returned BatchFailure records which rows were
        dropped. Any other error propagates to the caller.
        """
        try:
            frame = self.build_frame(batch)
            self._append_frame(frame)
        except ArithmeticError as e:
            end = start + len(batch)
            logger.error(
                "%s while appending batch %d (records %d-%d): %s",
                type(e).__name__,
                index + 1,
                start,
                end - 1,
                e,
                exc_info=True,
            )
            return BatchFailure(index=index, start=start, end=end, error=f"{type(e).__name__}: {e}")
        return None

    def build_frame(self, batch: Sequence[ScanRecord]) -> pd.DataFrame:
        rows = [self._row_for(record) for record in batch]
        columns: dict[str, list] = {name: [] for name in FILE_INFO_COLUMNS}
        for row in rows:
            for name, value in zip(FILE_INFO_COLUMNS, row):
                columns[name].append(value)

        series = {}
        for name in FILE_INFO_COLUMNS:
            dtype, bounds = COLUMN_TYPES[name]
            if bounds is not None:
                _check_range(name, columns[name], bounds)
            series[name] = pd.Series(columns[name], dtype=dtype)
        return pd.DataFrame(series, columns=list(FILE_INFO_COLUMNS))

    def _row_for(self, record: ScanRecord) -> tuple:
        return (
            record.file_path,
            record.file_name,
            extension_id_for(record, self.extension_ids),
            record.file_size,
            record.creation_date,
            record.last_access_date,
            record.last_write_date,
            int(record.attributes),
            record.read_failure,
        )

    def _append_frame(self, frame: pd.DataFrame) -> None:
        self.conn.append(FILE_INFO_TABLE, frame)


def _check_range(column: str, values: list[int], bounds: tuple[int, int]) -> None:
    low, high = bounds
    for value in values:
        if value < low or value > high:
            raise ColumnOverflowError(
                f"value {value} out of range [{low}, {high}] for column {column}"
            )
