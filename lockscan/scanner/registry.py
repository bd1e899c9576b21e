"""Lockfile registry — map recognized filenames to parsers and ecosystems."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import ScanDependencies

ParseFn = Callable[[Path], ScanDependencies]

# Directory probe order. Scan results follow this order.
PROBE_ORDER: tuple[str, ...] = (
    "package-lock.json",
    "pnpm-lock.yaml",
    "yarn.lock",
    "Cargo.lock",
    "requirements.txt",
    "poetry.lock",
    "Pipfile.lock",
    "go.sum",
    "gradle.lockfile",
    "pom.xml",
    "packages.lock.json",
    "Gemfile.lock",
    "composer.lock",
    "pubspec.lock",
    "mix.lock",
    "Podfile.lock",
    "Package.resolved",
)


@dataclass(frozen=True)
class LockfileFormat:
    """A recognized lockfile name and the function that parses it."""

    filename: str
    ecosystem: Ecosystem
    parse: ParseFn


LOCKFILE_REGISTRY: dict[str, LockfileFormat] = {}


def register_lockfile(filename: str, ecosystem: Ecosystem) -> Callable[[ParseFn], ParseFn]:
    """Decorator registering *fn* as the parser for *filename*."""
    if filename not in PROBE_ORDER:
        raise ValueError(f"{filename} is not a recognized lockfile name")

    def decorator(fn: ParseFn) -> ParseFn:
        LOCKFILE_REGISTRY[filename] = LockfileFormat(filename, ecosystem, fn)
        return fn

    return decorator


def discover_lockfiles(directory: Path) -> list[tuple[LockfileFormat, Path]]:
    """Probe *directory* (non-recursively) for every registered lockfile.

    Returns (format, path) pairs in probe order.
    """
    matches: list[tuple[LockfileFormat, Path]] = []
    for filename in PROBE_ORDER:
        fmt = LOCKFILE_REGISTRY.get(filename)
        if fmt is None:
            continue
        candidate = directory / filename
        if candidate.is_file():
            matches.append((fmt, candidate))
    return matches
