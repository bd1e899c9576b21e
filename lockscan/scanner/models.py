"""Data models for the lockfile scanner."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Dependency:
    """A single package pinned by a lockfile."""

    name: str
    version: str
    ecosystem: str


@dataclass
class ScanDependencies:
    """Everything parsed out of exactly one lockfile."""

    ecosystem: str
    source_file: str
    dependencies: list[Dependency] = field(default_factory=list)


@dataclass(frozen=True)
class ScanDiagnostic:
    """Why one lockfile was left out of a scan."""

    source_file: str
    ecosystem: str
    message: str


@dataclass
class ScanReport:
    """Result of scanning one directory."""

    directory: Path
    results: list[ScanDependencies]
    diagnostics: list[ScanDiagnostic] = field(default_factory=list)

    @property
    def ecosystems(self) -> list[str]:
        seen: list[str] = []
        for result in self.results:
            if result.ecosystem not in seen:
                seen.append(result.ecosystem)
        return seen

    @property
    def total_packages(self) -> int:
        return sum(len(r.dependencies) for r in self.results)
