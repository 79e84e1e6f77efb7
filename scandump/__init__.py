"""scandump - Bulk-load filesystem scan dumps into DuckDB."""

__version__ = "0.1.0"

from scandump.database import Database
from scandump.loader import Loader

__all__ = ["Database", "Loader"]
