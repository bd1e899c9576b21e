"""Parser for CocoaPods Podfile.lock files.

The ``PODS:`` section lists every resolved pod at two spaces, each followed
by its own requirements at four spaces::

    PODS:
      - Alamofire (5.6.4)
      - Firebase/Analytics (10.5.0):
        - Firebase/Core
        - FirebaseAnalytics (~> 10.5.0)

Resolved pods are reported with their version. Requirements naming a pod
that has no resolved entry of its own are flattened in with their literal
constraint, or ``*`` when none is given.
"""

from __future__ import annotations

import re
from enum import Enum, auto
from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import dedupe, make_dependency, read_lockfile, scan_result
from lockscan.scanner.registry import register_lockfile

_POD_ENTRY_RE = re.compile(r"^(?P<name>[^\s(]+)(?:\s+\((?P<version>[^)]+)\))?$")


class PodfileState(Enum):
    SEEKING = auto()
    IN_PODS = auto()


def parse_pod_entry(entry: str) -> tuple[str, str | None] | None:
    """Split ``Name (version)`` / ``"Name (version)":`` / ``Name``."""
    entry = entry.strip().rstrip(":").strip().strip("\"'")
    m = _POD_ENTRY_RE.match(entry)
    if not m:
        return None
    return m.group("name"), m.group("version")


@register_lockfile("Podfile.lock", Ecosystem.COCOAPODS)
def parse_podfile_lock(path: Path) -> ScanDependencies:
    resolved: list[Dependency] = []
    requirements: list[tuple[str, str]] = []
    state = PodfileState.SEEKING

    for line in read_lockfile(path).splitlines():
        if not line.strip():
            continue

        if not line.startswith(" "):
            state = PodfileState.IN_PODS if line.rstrip() == "PODS:" else PodfileState.SEEKING
            continue

        if state is not PodfileState.IN_PODS:
            continue

        if line.startswith("  - "):
            parsed = parse_pod_entry(line[4:])
            if parsed is None or parsed[1] is None:
                continue
            dep = make_dependency(parsed[0], parsed[1], Ecosystem.COCOAPODS)
            if dep is not None:
                resolved.append(dep)
        elif line.startswith("    - "):
            parsed = parse_pod_entry(line[6:])
            if parsed is not None:
                requirements.append((parsed[0], parsed[1] or "*"))

    resolved_names = {dep.name for dep in resolved}
    deps = list(resolved)
    for name, constraint in requirements:
        if name in resolved_names:
            continue
        dep = make_dependency(name, constraint, Ecosystem.COCOAPODS)
        if dep is not None:
            deps.append(dep)

    return scan_result(path, Ecosystem.COCOAPODS, dedupe(deps))
