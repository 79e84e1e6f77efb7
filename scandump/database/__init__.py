"""Database module for scandump."""

from .connection import Database
from .models import BatchFailure, FileAttributes, LoadReport, ScanRecord
from .schema import create_schema

__all__ = [
    "Database",
    "create_schema",
    "ScanRecord",
    "FileAttributes",
    "BatchFailure",
    "LoadReport",
]
