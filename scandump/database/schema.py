"""Database schema definition."""

import duckdb

FILE_INFO_TABLE = "file_info"
FILE_EXTENSIONS_TABLE = "file_extensions"

# Column order used by the bulk appender; must match the DDL below.
FILE_INFO_COLUMNS = (
    "file_path",
    "file_name",
    "extension_id",
    "file_size",
    "creation_date",
    "last_access_date",
    "last_write_date",
    "attributes",
    "read_failure",
)

SCHEMA_SQL = """
-- Scanned file facts
CREATE TABLE IF NOT EXISTS file_info (
    file_path VARCHAR,
    file_name VARCHAR,
    extension_id USMALLINT,
    file_size BIGINT,
    creation_date USMALLINT,
    last_access_date USMALLINT,
    last_write_date USMALLINT,
    attributes INTEGER,
    read_failure BOOLEAN
);

-- Extension lookup; 0 is never assigned and means "no extension"
CREATE SEQUENCE IF NOT EXISTS file_extensions_id_seq START 1;

CREATE TABLE IF NOT EXISTS file_extensions (
    extension_id INTEGER PRIMARY KEY DEFAULT nextval('file_extensions_id_seq'),
    extension VARCHAR UNIQUE
);
"""


def create_schema(conn: duckdb.DuckDBPyConnection) -> None:
    """Create tables and sequence if they don't exist."""
    conn.execute(SCHEMA_SQL)
