"""CLI entry point: lockscan.

Subcommands:
    lockscan scan /path/to/project             # list pinned dependencies
    lockscan scan /path/to/project --json      # same, as JSON
    lockscan osv-queries /path/to/project      # OSV querybatch bodies
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict
from pathlib import Path

import click

from lockscan.core.logging import setup_logging
from lockscan.scanner import NoDependencyFilesError, ScanReport, build_osv_queries, scan_directory
from lockscan.scanner.query import summarize


def _report_to_dict(report: ScanReport) -> dict:
    return {
        **summarize(report),
        "results": [asdict(r) for r in report.results],
        "diagnostics": [asdict(d) for d in report.diagnostics],
    }


def _print_report(report: ScanReport) -> None:
    click.echo(
        f"Found {report.total_packages} dependencies in {len(report.results)} lockfile(s)\n"
    )
    for result in report.results:
        name = Path(result.source_file).name
        click.echo(f"  {name}  ({result.ecosystem}, {len(result.dependencies)} packages)")
        for dep in result.dependencies:
            click.echo(f"    {dep.name} {dep.version}")
        click.echo()


def _print_diagnostics(report: ScanReport) -> None:
    for diag in report.diagnostics:
        click.echo(f"Warning: skipped {Path(diag.source_file).name}: {diag.message}", err=True)


def _scan_or_exit(directory: str, workers: int | None) -> ScanReport:
    try:
        return scan_directory(Path(directory), max_workers=workers)
    except NoDependencyFilesError as exc:
        click.echo(f"Error: {exc}", err=True)
        for diag in exc.diagnostics:
            click.echo(f"  {Path(diag.source_file).name}: {diag.message}", err=True)
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """Scan project directories for dependency lockfiles."""
    setup_logging("DEBUG" if verbose else None)


@main.command()
@click.argument("directory", type=click.Path(file_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Parse files in parallel")
def scan(directory: str, as_json: bool, workers: int | None) -> None:
    """List the dependencies pinned by every lockfile in DIRECTORY."""
    report = _scan_or_exit(directory, workers)
    _print_diagnostics(report)
    if as_json:
        click.echo(json.dumps(_report_to_dict(report), indent=2))
    else:
        _print_report(report)


@main.command("osv-queries")
@click.argument("directory", type=click.Path(file_okay=False))
@click.option("--batch-size", type=click.IntRange(min=1), default=None, help="Queries per batch")
def osv_queries(directory: str, batch_size: int | None) -> None:
    """Print OSV querybatch request bodies for DIRECTORY."""
    report = _scan_or_exit(directory, None)
    _print_diagnostics(report)
    click.echo(json.dumps(build_osv_queries(report.results, batch_size=batch_size), indent=2))


if __name__ == "__main__":
    main()
