"""Parser for Dart/Flutter pubspec.lock files."""

from __future__ import annotations

from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import (
    load_yaml_mapping,
    make_dependency,
    read_lockfile,
    scan_result,
)
from lockscan.scanner.registry import register_lockfile


@register_lockfile("pubspec.lock", Ecosystem.PUB)
def parse_pubspec_lock(path: Path) -> ScanDependencies:
    data = load_yaml_mapping(path, read_lockfile(path))

    packages = data.get("packages")
    if not isinstance(packages, dict):
        packages = {}

    deps: list[Dependency | None] = []
    for name, info in packages.items():
        if not isinstance(info, dict):
            continue
        # Flutter SDK packages are not published on pub.dev
        if info.get("source") == "sdk":
            continue
        deps.append(make_dependency(name, info.get("version"), Ecosystem.PUB))

    return scan_result(path, Ecosystem.PUB, deps)
