"""Parser for NuGet packages.lock.json files."""

from __future__ import annotations

from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import (
    dedupe,
    load_json_object,
    make_dependency,
    read_lockfile,
    scan_result,
)
from lockscan.scanner.registry import register_lockfile


@register_lockfile("packages.lock.json", Ecosystem.NUGET)
def parse_packages_lock(path: Path) -> ScanDependencies:
    data = load_json_object(path, read_lockfile(path))

    frameworks = data.get("dependencies")
    if not isinstance(frameworks, dict):
        frameworks = {}

    deps: list[Dependency] = []
    for packages in frameworks.values():
        if not isinstance(packages, dict):
            continue
        for name, info in packages.items():
            if not isinstance(info, dict):
                continue
            # Project references are not packages
            if info.get("type") == "Project":
                continue
            dep = make_dependency(name, info.get("resolved"), Ecosystem.NUGET)
            if dep is not None:
                deps.append(dep)

    # The same package is listed once per target framework
    return scan_result(path, Ecosystem.NUGET, dedupe(deps))
