"""Scanner exceptions."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lockscan.scanner.models import ScanDiagnostic


class ScanError(Exception):
    """Base exception for all scanner errors."""


class NoDependencyFilesError(ScanError):
    """Raised when a directory yields nothing to scan.

    Either no recognized lockfile exists, or every lockfile found failed to
    parse. In the latter case ``diagnostics`` explains why.
    """

    def __init__(
        self,
        directory: Path | str,
        diagnostics: Sequence[ScanDiagnostic] = (),
    ):
        self.directory = Path(directory)
        self.diagnostics = list(diagnostics)
        if self.diagnostics:
            message = (
                f"No dependency files could be parsed in {self.directory} "
                f"({len(self.diagnostics)} failed)"
            )
        else:
            message = f"No dependency files found in {self.directory}"
        super().__init__(message)


class LockfileError(ScanError):
    """A single lockfile could not be turned into dependencies."""

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        self.message = message
        super().__init__(f"{self.path.name}: {message}")


class LockfileReadError(LockfileError):
    """The lockfile exists but could not be read."""


class LockfileParseError(LockfileError):
    """The lockfile's root structure is not valid for its format."""
