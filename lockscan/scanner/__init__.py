"""Lockfile scanner — extract pinned dependencies from package-manager lockfiles."""

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.errors import (
    LockfileError,
    LockfileParseError,
    LockfileReadError,
    NoDependencyFilesError,
    ScanError,
)
from lockscan.scanner.models import Dependency, ScanDependencies, ScanDiagnostic, ScanReport
from lockscan.scanner.query import build_osv_queries, summarize
from lockscan.scanner.scanner import scan_directory

__all__ = [
    "Dependency",
    "Ecosystem",
    "LockfileError",
    "LockfileParseError",
    "LockfileReadError",
    "NoDependencyFilesError",
    "ScanDependencies",
    "ScanDiagnostic",
    "ScanError",
    "ScanReport",
    "build_osv_queries",
    "scan_directory",
    "summarize",
]
