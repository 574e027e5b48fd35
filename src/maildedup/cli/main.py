"""Command-line interface for maildedup.

Provides CLI commands for scanning a maildir and removing duplicate messages.
"""

import contextlib
import importlib.metadata
import sys
from pathlib import Path

import click

from maildedup.audit import RunContext
from maildedup.engine import DedupConfig, DedupResult, run_dedup, run_deletion
from maildedup.errors import DeleteFailure
from maildedup.parse import DEFAULT_ORIGIN_MARKERS
from maildedup.report import format_report
from maildedup.selection import DEFAULT_PREFERRED_FOLDERS

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("maildedup")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development

_AFFIRMATIVE = ("y", "Y")


def _origin_marker_option(f):
    return click.option(
        "--origin-marker",
        "origin_markers",
        multiple=True,
        default=DEFAULT_ORIGIN_MARKERS,
        show_default=True,
        help="Header marking a copy synced from a secondary source (repeatable)",
    )(f)


def _workers_option(f):
    return click.option(
        "--workers",
        "-j",
        type=click.IntRange(min=1),
        default=None,
        help="Maximum parallel readers (default: executor default)",
    )(f)


@click.group()
@click.version_option(version=__version__, prog_name="maildedup")
def cli() -> None:
    """Find and remove duplicate messages in merged maildir backups.

    Use 'maildedup COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("maildir", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    required=True,
    help="Output JSONL file path",
)
@_workers_option
@_origin_marker_option
def scan(maildir: str, output: str, workers: int | None, origin_markers: tuple[str, ...]) -> None:
    """Fingerprint every message below MAILDIR and write records as JSONL.

    Nothing is deleted.

    Examples
    --------
        maildedup scan ~/Mail -o records.jsonl
    """
    from maildedup import scan_maildir, write_jsonl

    try:
        records = scan_maildir(maildir, origin_markers=origin_markers, workers=workers)
        write_jsonl(records, output)
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.secho(f"✓ Successfully wrote {len(records)} records to {output}", fg="green")


def _ask_delete() -> bool:
    """Ask for deletion with a single keystroke."""
    click.echo("Delete dupes? [y/N] ", nl=False)
    answer = click.getchar()
    click.echo()
    return answer in _AFFIRMATIVE


def _find(maildir: str, config: DedupConfig, run: RunContext | None) -> DedupResult:
    click.echo("Traversing files...", err=True)
    with contextlib.ExitStack() as stack:
        bars: list = []

        def on_files_found(count: int) -> None:
            click.echo(f"Found {count} files", err=True)
            bars.append(
                stack.enter_context(
                    click.progressbar(length=count, label="Processing files", file=sys.stderr)
                )
            )

        def on_progress(step: int) -> None:
            bars[0].update(step)

        return run_dedup(
            maildir,
            config=config,
            run=run,
            on_files_found=on_files_found,
            on_progress=on_progress,
        )


def _delete(result: DedupResult, run: RunContext | None) -> int:
    """Delete all dupes with a progress bar. Returns the number of failures."""
    failures: list[DeleteFailure] = []

    with click.progressbar(
        length=result.dupe_count, label="Deleting", file=sys.stderr
    ) as bar:

        def on_deleted(path: str, failure: DeleteFailure | None) -> None:
            if failure is not None:
                failures.append(failure)
            bar.update(1)

        report = run_deletion(result.results, run=run, on_deleted=on_deleted)

    for failure in failures:
        click.secho(f"✗ Could not delete {failure.path}: {failure.message}", fg="red", err=True)
    click.echo(f"Deleted {len(report.deleted)} file(s), {len(report.failures)} failed.")
    return len(report.failures)


@cli.command()
@click.argument("maildir", type=click.Path(exists=True, file_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Delete dupes without asking")
@click.option("--dry-run", is_flag=True, help="Print the report only, never delete")
@_workers_option
@_origin_marker_option
@click.option(
    "--prefer-folder",
    "preferred_folders",
    multiple=True,
    default=DEFAULT_PREFERRED_FOLDERS,
    show_default=True,
    help="Path substring preferred for the kept copy, most preferred first (repeatable)",
)
@click.option(
    "--audit-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Write events.jsonl and run.json to this directory",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def dedupe(
    maildir: str,
    yes: bool,
    dry_run: bool,
    workers: int | None,
    origin_markers: tuple[str, ...],
    preferred_folders: tuple[str, ...],
    audit_dir: str | None,
    verbose: bool,
) -> None:
    """Report duplicate messages below MAILDIR and delete them on confirmation.

    Messages are fingerprinted by Message-ID, Date and Subject (clean keys),
    or by parsed date and Subject when those are unreadable (dirty keys).
    Within each group one copy is kept: primary origin first, then fewest
    headers, then preferred folder, then smallest path.

    Examples
    --------
        maildedup dedupe ~/Mail/merged
        maildedup dedupe ~/Mail/merged --dry-run --audit-dir audit/
        maildedup dedupe ~/Mail/merged --prefer-folder Sent --prefer-folder Archive -y
    """
    try:
        config = DedupConfig(
            workers=workers,
            origin_markers=origin_markers,
            preferred_folders=preferred_folders,
        )
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    if verbose:
        click.echo("Starting deduplication...", err=True)
        click.echo(f"  Input: {maildir}", err=True)
        click.echo(f"  Origin markers: {', '.join(config.origin_markers) or '(none)'}", err=True)
        click.echo(f"  Preferred folders: {', '.join(config.preferred_folders)}", err=True)
        if audit_dir:
            click.echo(f"  Audit: {audit_dir}", err=True)

    run = RunContext.start(Path(audit_dir), config=config.to_dict()) if audit_dir else None
    status = "failed"
    delete_failures = 0

    try:
        result = _find(maildir, config, run)

        if not result.success:
            click.secho(f"✗ Deduplication failed: {result.error_message}", fg="red", err=True)
            sys.exit(1)

        click.echo(format_report(result.results, result.skipped))

        if dry_run:
            click.echo("Dry run, nothing deleted.")
        elif result.dupe_count == 0:
            click.echo("No dupes to delete.")
        elif yes or _ask_delete():
            click.echo("Deleting.")
            delete_failures = _delete(result, run)
        else:
            click.echo("Nothing deleted.")

        status = "partial" if delete_failures else "success"
        click.echo("Done")

    except Exception as e:
        if run:
            run.record_error(e, include_traceback=True)
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)

    finally:
        if run:
            records = result.total_records if status != "failed" else None
            run.finish(status=status, records_processed=records)


if __name__ == "__main__":
    cli()
