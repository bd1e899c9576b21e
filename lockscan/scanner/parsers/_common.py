"""Helpers shared by the lockfile parsers."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.errors import LockfileParseError, LockfileReadError
from lockscan.scanner.models import Dependency, ScanDependencies


def read_lockfile(path: Path) -> str:
    """Read a lockfile as text, mapping I/O failures to LockfileReadError."""
    try:
        return path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        raise LockfileReadError(path, str(exc)) from exc


def load_json_object(path: Path, content: str) -> dict[str, Any]:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise LockfileParseError(path, f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise LockfileParseError(path, "expected a JSON object at the top level")
    return data


def load_toml(path: Path, content: str) -> dict[str, Any]:
    try:
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise LockfileParseError(path, f"invalid TOML: {exc}") from exc


def load_yaml_mapping(path: Path, content: str) -> dict[str, Any]:
    """Load a YAML mapping with every scalar kept as a string.

    BaseLoader skips implicit typing, so ``version: 1.10`` stays ``"1.10"``
    and a ``no:`` key stays ``"no"``.
    """
    try:
        data = yaml.load(content, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise LockfileParseError(path, f"invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise LockfileParseError(path, "expected a YAML mapping at the top level")
    return data


def dedupe(deps: Iterable[Dependency]) -> list[Dependency]:
    """Drop repeated (name, version) pairs, keeping first-seen order."""
    seen: set[tuple[str, str]] = set()
    unique: list[Dependency] = []
    for dep in deps:
        key = (dep.name, dep.version)
        if key in seen:
            continue
        seen.add(key)
        unique.append(dep)
    return unique


def make_dependency(name: str | None, version: str | None, ecosystem: Ecosystem) -> Dependency | None:
    """Build a record, or None when either field is missing or blank."""
    if not isinstance(name, str) or not isinstance(version, str):
        return None
    name = name.strip()
    version = version.strip()
    if not name or not version:
        return None
    return Dependency(name=name, version=version, ecosystem=ecosystem.osv_name)


def scan_result(
    path: Path, ecosystem: Ecosystem, deps: Iterable[Dependency | None]
) -> ScanDependencies:
    return ScanDependencies(
        ecosystem=ecosystem.osv_name,
        source_file=str(path),
        dependencies=[d for d in deps if d is not None],
    )
