"""Progress reporting utilities for loading."""

import sys
import time
from dataclasses import dataclass, field


@dataclass
class LoadStats:
    """Statistics for an ongoing load operation."""

    batches_done: int = 0
    rows_appended: int = 0
    batches_failed: int = 0
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time


class ProgressReporter:
    """Reports load progress to the user."""

    def __init__(self, interval: int = 1):
        self.interval = max(1, interval)

    def report_start(self, records: int, batches: int) -> None:
        print(f"Inserting {records:,} records in {batches:,} batches...", file=sys.stderr)

    def report_batch(self, stats: LoadStats, total_batches: int) -> None:
        if stats.batches_done % self.interval == 0 or stats.batches_done == total_batches:
            print(
                f"[{stats.rows_appended:,} rows] Processed batch "
                f"{stats.batches_done}/{total_batches}",
                file=sys.stderr,
            )

    def report_completion(self, stats: LoadStats, total_bytes: int) -> None:
        duration = _format_duration(stats.elapsed_seconds)
        print(
            f"\nLoad complete: {stats.rows_appended:,} rows in "
            f"{stats.batches_done:,} batches ({duration})",
            file=sys.stderr,
        )
        print(f"Total size of loaded files: {_format_bytes(total_bytes)}", file=sys.stderr)
        if stats.batches_failed:
            print(f"Skipped batches: {stats.batches_failed:,}", file=sys.stderr)


def _format_duration(seconds: float) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def _format_bytes(size: int) -> str:
    size_f = float(size)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_f < 1024:
            return f"{size_f:.2f} {unit}"
        size_f /= 1024
    return f"{size_f:.2f} PB"
