"""Directory scanner — probe for lockfiles and parse each one independently."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import structlog

# Ensure parsers are registered before any scan runs.
import lockscan.scanner.parsers  # noqa: F401
from lockscan.core.config import scan_workers
from lockscan.scanner.errors import LockfileError, NoDependencyFilesError
from lockscan.scanner.models import ScanDependencies, ScanDiagnostic, ScanReport
from lockscan.scanner.registry import LockfileFormat, discover_lockfiles

log = structlog.get_logger("lockscan.scanner")

_Outcome = tuple[ScanDependencies | None, ScanDiagnostic | None]


def _parse_one(fmt: LockfileFormat, path: Path) -> _Outcome:
    """Parse one lockfile; failures become a diagnostic instead of raising."""
    ecosystem = fmt.ecosystem.osv_name
    try:
        result = fmt.parse(path)
    except LockfileError as exc:
        log.warning(
            "scanner.lockfile_failed",
            file=fmt.filename,
            ecosystem=ecosystem,
            error=exc.message,
        )
        return None, ScanDiagnostic(str(path), ecosystem, exc.message)
    except Exception as exc:
        log.exception("scanner.lockfile_failed", file=fmt.filename, ecosystem=ecosystem)
        return None, ScanDiagnostic(str(path), ecosystem, f"unexpected error: {exc}")

    log.debug(
        "scanner.lockfile_parsed",
        file=fmt.filename,
        ecosystem=ecosystem,
        dependencies=len(result.dependencies),
    )
    return result, None


def scan_directory(directory: Path | str, *, max_workers: int | None = None) -> ScanReport:
    """Scan *directory* for every recognized lockfile.

    Each lockfile yields its own :class:`ScanDependencies`, in probe order. A
    file that fails to read or parse is logged, reported in
    ``ScanReport.diagnostics`` and skipped.

    Raises :class:`NoDependencyFilesError` when no recognized lockfile exists,
    or when every one found failed.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NoDependencyFilesError(directory)

    matches = discover_lockfiles(directory)
    if not matches:
        log.info("scanner.no_lockfiles", directory=str(directory))
        raise NoDependencyFilesError(directory)

    for fmt, _ in matches:
        log.debug("scanner.lockfile_found", file=fmt.filename, ecosystem=fmt.ecosystem.osv_name)

    workers = max_workers if max_workers is not None else scan_workers()
    if workers > 1 and len(matches) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(lambda m: _parse_one(*m), matches))
    else:
        outcomes = [_parse_one(fmt, path) for fmt, path in matches]

    results = [result for result, _ in outcomes if result is not None]
    diagnostics = [diag for _, diag in outcomes if diag is not None]

    if not results:
        raise NoDependencyFilesError(directory, diagnostics)

    report = ScanReport(directory=directory, results=results, diagnostics=diagnostics)
    log.info(
        "scanner.complete",
        directory=str(directory),
        files=len(results),
        failed=len(diagnostics),
        packages=report.total_packages,
    )
    return report
