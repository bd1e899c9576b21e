"""lockscan: multi-ecosystem dependency lockfile scanner."""

__version__ = "0.1.0"

from lockscan.scanner import (
    Dependency,
    Ecosystem,
    NoDependencyFilesError,
    ScanDependencies,
    ScanReport,
    scan_directory,
)

__all__ = [
    "Dependency",
    "Ecosystem",
    "NoDependencyFilesError",
    "ScanDependencies",
    "ScanReport",
    "scan_directory",
]
