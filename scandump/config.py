"""Configuration module for scandump."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

DEFAULT_INPUT_FILENAME = "scanned_files_dump.json"
DEFAULT_BATCH_SIZE = 1000


def default_database_path(now: datetime | None = None) -> Path:
    now = now or datetime.now()
    return Path(f"database_{now:%Y%m%d%H%M%S}.db")


@dataclass
class ProgressConfig:
    interval: int = 1


@dataclass
class Config:
    input_path: Path = field(default_factory=lambda: Path(DEFAULT_INPUT_FILENAME))
    database_path: Path = field(default_factory=default_database_path)
    batch_size: int = DEFAULT_BATCH_SIZE
    progress: ProgressConfig = field(default_factory=ProgressConfig)
