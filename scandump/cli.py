"""CLI interface for scandump."""

import logging
import sys
from concurrent.futures import Future
from pathlib import Path

import click

from scandump.config import DEFAULT_BATCH_SIZE, Config
from scandump.database import LoadReport
from scandump.loader import ScanFileError, load_in_background, load_scan_records

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_PARTIAL = 3


@click.command("scandump")
@click.option(
    "--input",
    "input_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON dump of scanned files [default: scanned_files_dump.json]",
)
@click.option(
    "--batch-size",
    type=click.IntRange(min=1),
    default=DEFAULT_BATCH_SIZE,
    show_default=True,
    help="Number of records per append batch",
)
@click.option(
    "--database",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to database file [default: database_<timestamp>.db]",
)
@click.option(
    "--progress-interval",
    type=click.IntRange(min=1),
    default=1,
    help="Print status every N batches",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable info logging")
def cli(
    input_path: Path | None,
    batch_size: int,
    database: Path | None,
    progress_interval: int,
    verbose: bool,
) -> None:
    """Load a JSON dump of scanned files into a DuckDB database."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )

    config = Config(batch_size=batch_size)
    config.progress.interval = progress_interval
    if input_path is not None:
        config.input_path = input_path
    if database is not None:
        config.database_path = database

    click.echo(f"Using database: {config.database_path}")

    exit_code = 0
    try:
        records = load_scan_records(config.input_path)
        click.echo(f"Loaded {len(records):,} records from {config.input_path}")

        future = load_in_background(
            config.database_path,
            records,
            batch_size=config.batch_size,
            progress_interval=config.progress.interval,
        )
        report = _wait_for(future)
        _print_report(report)
        if not report.is_complete:
            exit_code = EXIT_PARTIAL
    except ScanFileError as e:
        click.echo(f"Error: {e}", err=True)
        exit_code = EXIT_FAILED
    except KeyboardInterrupt:
        # while reading input, or a second Ctrl-C while waiting on the worker
        exit_code = 130
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Load failed")
        click.echo(f"Error: {e}", err=True)
        exit_code = EXIT_FAILED
    finally:
        click.echo("Application execution complete.")

    sys.exit(exit_code)


def _wait_for(future: "Future[LoadReport]") -> LoadReport:
    try:
        return future.result()
    except KeyboardInterrupt:
        # the worker cannot be cancelled and will commit, so report its outcome
        click.echo("Interrupted; waiting for the running load to finish...", err=True)
        return future.result()


def _print_report(report: LoadReport) -> None:
    click.echo()
    click.echo("Load Summary:")
    click.echo(f"  Records read: {report.records_total:,}")
    click.echo(f"  Rows appended: {report.rows_appended:,}")
    click.echo(f"  Batches: {report.batches_total:,}")
    click.echo(f"  Extensions resolved: {report.extensions_total:,}")
    click.echo(f"  Extensions inserted: {report.extensions_inserted:,}")
    click.echo(f"  Records with read failures: {report.read_failures:,}")

    if report.failed_batches:
        click.echo()
        click.echo(
            f"Warning: {len(report.failed_batches)} batches skipped "
            f"({report.rows_skipped:,} records not loaded):",
            err=True,
        )
        for failure in report.failed_batches:
            click.echo(
                f"  batch {failure.index + 1}: records {failure.start}-{failure.end - 1} "
                f"({failure.error})",
                err=True,
            )


def main() -> None:
    """Entry point for the CLI."""
    cli(standalone_mode=True)  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
