"""Parsers for Go module files: go.sum (scanned) and go.mod (on request)."""

from __future__ import annotations

import re
from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import dedupe, make_dependency, read_lockfile, scan_result
from lockscan.scanner.registry import register_lockfile

_GO_MOD_SUFFIX = "/go.mod"

# Single require: require github.com/foo/bar v1.2.3
_SINGLE_RE = re.compile(r"^require\s+(\S+)\s+(\S+)")

# Inside require block: github.com/foo/bar v1.2.3
_BLOCK_RE = re.compile(r"^(\S+)\s+(v\S+)")


def clean_go_version(version: str) -> str:
    """Strip ``+incompatible``; pseudo-versions are kept whole for matching."""
    if version.endswith("+incompatible"):
        return version[: -len("+incompatible")]
    return version


@register_lockfile("go.sum", Ecosystem.GO)
def parse_go_sum(path: Path) -> ScanDependencies:
    deps: list[Dependency] = []

    for raw_line in read_lockfile(path).splitlines():
        # module/path v1.2.3 h1:hash=
        # module/path v1.2.3/go.mod h1:hash=
        parts = raw_line.split()
        if len(parts) < 2:
            continue

        module, version = parts[0], parts[1]
        if version.endswith(_GO_MOD_SUFFIX):
            version = version[: -len(_GO_MOD_SUFFIX)]

        dep = make_dependency(module, clean_go_version(version), Ecosystem.GO)
        if dep is not None:
            deps.append(dep)

    # The /go.mod line collapses into the module line here
    return scan_result(path, Ecosystem.GO, dedupe(deps))


def parse_go_mod(path: Path) -> ScanDependencies:
    """Parse require directives of a go.mod, indirect requirements included.

    go.sum is what the directory scan reads; go.mod is for callers that only
    have a manifest at hand.
    """
    deps: list[Dependency] = []
    in_require_block = False

    for raw_line in read_lockfile(path).splitlines():
        line = raw_line.split("//", 1)[0].strip()
        if not line:
            continue

        # Detect require block boundaries
        if line.startswith("require") and line.endswith("("):
            in_require_block = True
            continue
        if in_require_block and line == ")":
            in_require_block = False
            continue

        m = _BLOCK_RE.match(line) if in_require_block else _SINGLE_RE.match(line)
        if not m:
            continue

        dep = make_dependency(m.group(1), clean_go_version(m.group(2)), Ecosystem.GO)
        if dep is not None:
            deps.append(dep)

    return scan_result(path, Ecosystem.GO, dedupe(deps))
