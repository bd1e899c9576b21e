"""Turn scan results into OSV ``/v1/querybatch`` request bodies.

No HTTP happens here; the vulnerability client posts each body as-is.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from lockscan.core.config import osv_batch_size
from lockscan.scanner.models import Dependency, ScanDependencies, ScanReport

ANY_VERSION = "*"


def osv_query(dep: Dependency) -> dict[str, Any]:
    """One OSV query. ``*`` means no version constraint, so none is sent."""
    query: dict[str, Any] = {"package": {"name": dep.name, "ecosystem": dep.ecosystem}}
    if dep.version != ANY_VERSION:
        query["version"] = dep.version
    return query


def build_osv_queries(
    results: Iterable[ScanDependencies], *, batch_size: int | None = None
) -> list[dict[str, Any]]:
    """Chunk every dependency into ``{"queries": [...]}`` bodies.

    Chunks never span two lockfiles, matching how results are attributed
    back to their source file.
    """
    size = batch_size if batch_size is not None else osv_batch_size()
    if size < 1:
        raise ValueError(f"batch_size must be positive, got {size}")

    batches: list[dict[str, Any]] = []
    for result in results:
        deps = result.dependencies
        for start in range(0, len(deps), size):
            batches.append({"queries": [osv_query(d) for d in deps[start : start + size]]})
    return batches


def summarize(report: ScanReport) -> dict[str, Any]:
    return {
        "directory": str(report.directory),
        "ecosystems": report.ecosystems,
        "total_packages": report.total_packages,
        "files": len(report.results),
        "failed": len(report.diagnostics),
    }
