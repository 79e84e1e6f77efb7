"""File extension lookup table population."""

import logging
from collections.abc import Iterable, Sequence

import duckdb

from scandump.database.models import ScanRecord

logger = logging.getLogger(__name__)

NO_EXTENSION_ID = 0


def distinct_extensions(records: Iterable[ScanRecord]) -> list[str]:
    """Distinct non-empty extensions in first-seen order; matching is case-sensitive."""
    return list(dict.fromkeys(r.file_extension for r in records if r.file_extension))


def extension_id_for(record: ScanRecord, mapping: dict[str, int]) -> int:
    if not record.file_extension:
        return NO_EXTENSION_ID
    return mapping.get(record.file_extension, NO_EXTENSION_ID)


class ExtensionRegistry:
    """Inserts extensions into file_extensions and resolves their ids."""

    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self.conn = conn
        self.inserted = 0

    def resolve(self, extensions: Sequence[str]) -> dict[str, int]:
        """
        Fetch-or-insert every extension and return extension -> id.

        Extensions already present from an earlier run are ignored on insert
        and picked up by the read-back, so they keep their original ids.
        """
        for extension in extensions:
            row = self.conn.execute(
                """
                INSERT OR IGNORE INTO file_extensions (extension)
                VALUES (?)
                RETURNING extension_id
                """,
                [extension],
            ).fetchone()
            if row is not None:
                self.inserted += 1

        wanted = set(extensions)
        rows = self.conn.execute("SELECT extension, extension_id FROM file_extensions").fetchall()
        mapping = {ext: ext_id for ext, ext_id in rows if ext in wanted}

        logger.info(
            "Resolved %d extensions (%d newly inserted)",
            len(mapping),
            self.inserted,
        )
        return mapping
