"""Data models for the database."""

from dataclasses import dataclass, field
from enum import IntFlag


class FileAttributes(IntFlag):
    """Windows file attribute bits as captured by the scanner."""

    NONE = 0
    READ_ONLY = 0x1
    HIDDEN = 0x2
    SYSTEM = 0x4
    DIRECTORY = 0x10
    ARCHIVE = 0x20
    DEVICE = 0x40
    NORMAL = 0x80
    TEMPORARY = 0x100
    SPARSE_FILE = 0x200
    REPARSE_POINT = 0x400
    COMPRESSED = 0x800
    OFFLINE = 0x1000
    NOT_CONTENT_INDEXED = 0x2000
    ENCRYPTED = 0x4000
    INTEGRITY_STREAM = 0x8000
    NO_SCRUB_DATA = 0x20000


@dataclass(frozen=True)
class ScanRecord:
    """One filesystem entry as captured by the scanner."""

    file_path: str | None = None
    file_name: str | None = None
    file_extension: str | None = None
    file_size: int = 0
    creation_date: int = 0
    last_access_date: int = 0
    last_write_date: int = 0
    attributes: int = 0
    read_failure: bool = False
    error_code: int = 0


@dataclass
class BatchFailure:
    """A batch that was skipped during the append phase."""

    index: int
    start: int
    end: int
    error: str

    @property
    def record_count(self) -> int:
        return self.end - self.start


@dataclass
class LoadReport:
    """Accounting for a single load run."""

    records_total: int = 0
    rows_appended: int = 0
    batches_total: int = 0
    extensions_total: int = 0
    extensions_inserted: int = 0
    read_failures: int = 0
    total_bytes: int = 0
    failed_batches: list[BatchFailure] = field(default_factory=list)

    @property
    def rows_skipped(self) -> int:
        return sum(f.record_count for f in self.failed_batches)

    @property
    def is_complete(self) -> bool:
        return not self.failed_batches
