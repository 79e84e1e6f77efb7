"""Tests for extension lookup population."""

from pathlib import Path

import pytest

from scandump.database import Database, ScanRecord
from scandump.loader.extensions import (
    NO_EXTENSION_ID,
    ExtensionRegistry,
    distinct_extensions,
    extension_id_for,
)


@pytest.fixture
def db(tmp_path: Path):
    database = Database(tmp_path / "test.db")
    database.connect()
    yield database
    database.close()


class TestDistinctExtensions:
    """Tests for distinct_extensions."""

    def test_deduplicates_in_first_seen_order(self) -> None:
        records = [
            ScanRecord(file_extension=".txt"),
            ScanRecord(file_extension=".jpg"),
            ScanRecord(file_extension=".txt"),
        ]
        assert distinct_extensions(records) == [".txt", ".jpg"]

    def test_skips_empty_and_null(self) -> None:
        records = [
            ScanRecord(file_extension=""),
            ScanRecord(file_extension=None),
            ScanRecord(file_extension=".md"),
        ]
        assert distinct_extensions(records) == [".md"]

    def test_case_sensitive(self) -> None:
        records = [ScanRecord(file_extension=".JPG"), ScanRecord(file_extension=".jpg")]
        assert distinct_extensions(records) == [".JPG", ".jpg"]


class TestExtensionIdFor:
    """Tests for extension_id_for."""

    def test_mapped(self) -> None:
        assert extension_id_for(ScanRecord(file_extension=".txt"), {".txt": 4}) == 4

    def test_empty_is_zero(self) -> None:
        assert extension_id_for(ScanRecord(file_extension=""), {"": 4}) == NO_EXTENSION_ID

    def test_unmapped_is_zero(self) -> None:
        assert extension_id_for(ScanRecord(file_extension=".bin"), {}) == NO_EXTENSION_ID


class TestExtensionRegistry:
    """Tests for ExtensionRegistry."""

    def test_inserts_and_maps(self, db: Database) -> None:
        registry = ExtensionRegistry(db.conn)
        mapping = registry.resolve([".txt", ".jpg"])

        assert mapping == {".txt": 1, ".jpg": 2}
        assert registry.inserted == 2
        assert db.count_rows("file_extensions") == 2

    def test_existing_extensions_keep_their_ids(self, db: Database) -> None:
        ExtensionRegistry(db.conn).resolve([".txt", ".jpg"])

        registry = ExtensionRegistry(db.conn)
        mapping = registry.resolve([".jpg", ".png"])

        assert mapping[".jpg"] == 2
        assert ".txt" not in mapping
        assert registry.inserted == 1
        assert db.count_rows("file_extensions") == 3

    def test_empty_input(self, db: Database) -> None:
        registry = ExtensionRegistry(db.conn)
        assert registry.resolve([]) == {}
        assert registry.inserted == 0
