"""Parser for Rust Cargo.lock files."""

from __future__ import annotations

from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import ScanDependencies
from lockscan.scanner.parsers._common import load_toml, make_dependency, read_lockfile, scan_result
from lockscan.scanner.registry import register_lockfile


@register_lockfile("Cargo.lock", Ecosystem.CARGO)
def parse_cargo_lock(path: Path) -> ScanDependencies:
    data = load_toml(path, read_lockfile(path))

    packages = data.get("package", [])
    if not isinstance(packages, list):
        packages = []

    return scan_result(
        path,
        Ecosystem.CARGO,
        (
            make_dependency(pkg.get("name"), pkg.get("version"), Ecosystem.CARGO)
            for pkg in packages
            if isinstance(pkg, dict)
        ),
    )
