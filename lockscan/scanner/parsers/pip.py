"""Parsers for Python dependency files: requirements.txt, poetry.lock, Pipfile.lock.

requirements.txt only pins transitive dependencies when it was produced by
``pip freeze`` or ``pip-compile``; hand-written files usually list direct
dependencies with ranges. Non-exact specifiers are reported verbatim
(``>=2.0``, ``===1.0``) rather than resolved, and a bare name is reported
as ``*``.
"""

from __future__ import annotations

import re
from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import (
    load_json_object,
    load_toml,
    make_dependency,
    read_lockfile,
    scan_result,
)
from lockscan.scanner.registry import register_lockfile

# name, operator, first version clause: "django>=3.0,<4.0" -> django, >=, 3.0
_SPEC_RE = re.compile(
    r"^([A-Za-z0-9][A-Za-z0-9._-]*)"  # package name
    r"\s*(===|==|>=|<=|~=|!=|>|<)\s*"  # operator
    r"([^\s,]+)"  # version
)

_BARE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

_EXTRAS_RE = re.compile(r"\[[^\]]*\]")

_PIPFILE_SECTIONS = ("default", "develop")


@register_lockfile("requirements.txt", Ecosystem.PYPI)
def parse_requirements(path: Path) -> ScanDependencies:
    deps: list[Dependency] = []

    for raw_line in read_lockfile(path).splitlines():
        line = raw_line.strip()
        # Comments and options (-r, -e, --index-url, --hash, ...)
        if not line or line.startswith(("#", "-")):
            continue

        dep = parse_requirement_line(line)
        if dep is not None:
            deps.append(dep)

    return scan_result(path, Ecosystem.PYPI, deps)


def parse_requirement_line(line: str) -> Dependency | None:
    """Parse one requirement specifier; None when the line is not one."""
    # Environment markers, inline comments, line continuations
    line = line.split(";", 1)[0]
    line = line.split(" #", 1)[0]
    line = line.rstrip().rstrip("\\")
    line = _EXTRAS_RE.sub("", line).strip()

    m = _SPEC_RE.match(line)
    if m:
        name, op, version = m.group(1), m.group(2), m.group(3)
        if op != "==":
            version = f"{op}{version}"
        return make_dependency(name.lower(), version, Ecosystem.PYPI)

    if _BARE_NAME_RE.match(line):
        return make_dependency(line.lower(), "*", Ecosystem.PYPI)

    return None


@register_lockfile("poetry.lock", Ecosystem.PYPI)
def parse_poetry_lock(path: Path) -> ScanDependencies:
    data = load_toml(path, read_lockfile(path))

    packages = data.get("package", [])
    if not isinstance(packages, list):
        packages = []

    deps: list[Dependency | None] = []
    for pkg in packages:
        if not isinstance(pkg, dict):
            continue
        name = pkg.get("name")
        deps.append(
            make_dependency(
                name.lower() if isinstance(name, str) else None,
                pkg.get("version"),
                Ecosystem.PYPI,
            )
        )

    return scan_result(path, Ecosystem.PYPI, deps)


@register_lockfile("Pipfile.lock", Ecosystem.PYPI)
def parse_pipfile_lock(path: Path) -> ScanDependencies:
    data = load_json_object(path, read_lockfile(path))

    deps: list[Dependency | None] = []
    for section in _PIPFILE_SECTIONS:
        entries = data.get(section)
        if not isinstance(entries, dict):
            continue
        for name, info in entries.items():
            # Git / editable entries carry no version
            if not isinstance(info, dict) or not isinstance(info.get("version"), str):
                continue
            version = info["version"]
            if version.startswith("=="):
                version = version[2:]
            deps.append(make_dependency(name.lower(), version, Ecosystem.PYPI))

    return scan_result(path, Ecosystem.PYPI, deps)
