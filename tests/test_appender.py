"""Tests for batched bulk append."""

from pathlib import Path

import pytest

from scandump.database import Database, ScanRecord
from scandump.loader.appender import (
    BatchAppender,
    ColumnOverflowError,
    batch_count,
    check_batch_size,
    iter_batches,
)


@pytest.fixture
def db(tmp_path: Path):
    database = Database(tmp_path / "test.db")
    database.connect()
    yield database
    database.close()


def make_records(count: int) -> list[ScanRecord]:
    return [
        ScanRecord(file_path=f"/data/f{i}.txt", file_name=f"f{i}.txt", file_extension=".txt")
        for i in range(count)
    ]


class TestIterBatches:
    """Tests for iter_batches."""

    def test_splits_preserving_order(self) -> None:
        records = make_records(5)
        batches = list(iter_batches(records, 2))

        assert [start for start, _ in batches] == [0, 2, 4]
        assert [len(b) for _, b in batches] == [2, 2, 1]
        assert [r for _, b in batches for r in b] == records

    def test_batch_larger_than_input(self) -> None:
        batches = list(iter_batches(make_records(3), 1000))
        assert len(batches) == 1

    def test_empty_input(self) -> None:
        assert list(iter_batches([], 10)) == []

    @pytest.mark.parametrize("size", [0, -1, True, 2.5])
    def test_rejects_invalid_batch_size(self, size) -> None:
        with pytest.raises(ValueError):
            list(iter_batches(make_records(1), size))

    @pytest.mark.parametrize("size", [0, False, "10"])
    def test_check_batch_size_rejects(self, size) -> None:
        with pytest.raises(ValueError, match="positive integer"):
            check_batch_size(size)

    def test_batch_count(self) -> None:
        assert batch_count(0, 10) == 0
        assert batch_count(10, 10) == 1
        assert batch_count(11, 10) == 2


class TestBatchAppender:
    """Tests for BatchAppender."""

    def test_appends_rows_in_column_order(self, db: Database) -> None:
        record = ScanRecord(
            file_path="C:\\a.txt",
            file_name="a.txt",
            file_extension=".txt",
            file_size=10,
            creation_date=1,
            last_access_date=2,
            last_write_date=3,
            attributes=32,
            read_failure=True,
        )
        appender = BatchAppender(db.conn, {".txt": 7})

        assert appender.append_batch(0, 0, [record]) is None

        row = db.conn.execute("SELECT * FROM file_info").fetchone()
        assert row == ("C:\\a.txt", "a.txt", 7, 10, 1, 2, 3, 32, True)

    def test_missing_extension_uses_zero(self, db: Database) -> None:
        appender = BatchAppender(db.conn, {})
        appender.append_batch(0, 0, [ScanRecord(file_name="README")])

        row = db.conn.execute("SELECT extension_id FROM file_info").fetchone()
        assert row[0] == 0

    def test_null_strings_stored_as_null(self, db: Database) -> None:
        appender = BatchAppender(db.conn, {})
        appender.append_batch(0, 0, [ScanRecord()])

        row = db.conn.execute("SELECT file_path, file_name FROM file_info").fetchone()
        assert row == (None, None)

    def test_overflow_skips_batch(self, db: Database) -> None:
        appender = BatchAppender(db.conn, {})
        batch = [ScanRecord(file_name="ok"), ScanRecord(file_name="bad", creation_date=70000)]

        failure = appender.append_batch(3, 30, batch)

        assert failure is not None
        assert (failure.index, failure.start, failure.end) == (3, 30, 32)
        assert "ColumnOverflowError" in failure.error
        assert db.count_rows("file_info") == 0

    def test_build_frame_raises_on_overflow(self, db: Database) -> None:
        appender = BatchAppender(db.conn, {})
        with pytest.raises(ColumnOverflowError, match="file_size"):
            appender.build_frame([ScanRecord(file_size=2**63)])

    def test_zero_division_skips_batch(self, db: Database, monkeypatch) -> None:
        appender = BatchAppender(db.conn, {})

        def fail(frame):
            raise ZeroDivisionError("division by zero")

        monkeypatch.setattr(appender, "_append_frame", fail)
        failure = appender.append_batch(0, 0, make_records(2))

        assert failure is not None
        assert failure.record_count == 2

    def test_other_errors_propagate(self, db: Database, monkeypatch) -> None:
        appender = BatchAppender(db.conn, {})

        def fail(frame):
            raise RuntimeError("disk full")

        monkeypatch.setattr(appender, "_append_frame", fail)
        with pytest.raises(RuntimeError):
            appender.append_batch(0, 0, make_records(1))
