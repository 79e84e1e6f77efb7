"""Loader module for reading scan dumps and appending them to the database."""

from .appender import BatchAppender, ColumnOverflowError, iter_batches
from .extensions import ExtensionRegistry, distinct_extensions
from .loader import Loader, load_in_background
from .progress import ProgressReporter
from .reader import ScanFileError, load_scan_records

__all__ = [
    "Loader",
    "load_in_background",
    "load_scan_records",
    "ScanFileError",
    "BatchAppender",
    "ColumnOverflowError",
    "iter_batches",
    "ExtensionRegistry",
    "distinct_extensions",
    "ProgressReporter",
]
