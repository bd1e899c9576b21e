"""Parser for Composer composer.lock files."""

from __future__ import annotations

from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import (
    load_json_object,
    make_dependency,
    read_lockfile,
    scan_result,
)
from lockscan.scanner.registry import register_lockfile

_SECTIONS = ("packages", "packages-dev")


def normalize_composer_version(version: str) -> str:
    """``v1.2.3`` -> ``1.2.3``."""
    return version[1:] if version.startswith("v") else version


@register_lockfile("composer.lock", Ecosystem.PACKAGIST)
def parse_composer_lock(path: Path) -> ScanDependencies:
    data = load_json_object(path, read_lockfile(path))

    deps: list[Dependency | None] = []
    for section in _SECTIONS:
        packages = data.get(section)
        # "packages-dev": null when installed with --no-dev
        if not isinstance(packages, list):
            continue
        for pkg in packages:
            if not isinstance(pkg, dict):
                continue
            version = pkg.get("version")
            deps.append(
                make_dependency(
                    pkg.get("name"),
                    normalize_composer_version(version) if isinstance(version, str) else None,
                    Ecosystem.PACKAGIST,
                )
            )

    return scan_result(path, Ecosystem.PACKAGIST, deps)
