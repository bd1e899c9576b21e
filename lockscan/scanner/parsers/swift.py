"""Parser for Swift Package Manager Package.resolved files.

v2 and v3 files keep ``pins`` at the top level and identify each package by
its ``location`` URL; v1 files nest them under ``object.pins`` with an
explicit ``package`` name.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.errors import LockfileParseError
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import (
    load_json_object,
    make_dependency,
    read_lockfile,
    scan_result,
)
from lockscan.scanner.registry import register_lockfile


def package_name_from_url(url: str) -> str:
    """``https://github.com/Alamofire/Alamofire.git`` -> ``Alamofire``."""
    url = url.rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url.rsplit("/", 1)[-1]


def _pin_version(pin: dict[str, Any]) -> str | None:
    state = pin.get("state")
    if not isinstance(state, dict):
        return None
    # Branch- or revision-pinned packages carry no version
    return state.get("version")


def _pins_v2(data: dict[str, Any]) -> list[Any] | None:
    pins = data.get("pins")
    return pins if isinstance(pins, list) else None


def _pins_v1(data: dict[str, Any]) -> list[Any] | None:
    obj = data.get("object")
    if not isinstance(obj, dict):
        return None
    pins = obj.get("pins")
    return pins if isinstance(pins, list) else None


def _name_v2(pin: dict[str, Any]) -> str | None:
    location = pin.get("location")
    return package_name_from_url(location) if isinstance(location, str) else None


def _name_v1(pin: dict[str, Any]) -> str | None:
    return pin.get("package")


@dataclass(frozen=True)
class _ResolvedVariant:
    name: str
    pins: Callable[[dict[str, Any]], list[Any] | None]
    pin_name: Callable[[dict[str, Any]], str | None]


# Newest layout first
_VARIANTS: tuple[_ResolvedVariant, ...] = (
    _ResolvedVariant("v2", _pins_v2, _name_v2),
    _ResolvedVariant("v1", _pins_v1, _name_v1),
)


@register_lockfile("Package.resolved", Ecosystem.SWIFTURL)
def parse_package_resolved(path: Path) -> ScanDependencies:
    data = load_json_object(path, read_lockfile(path))

    for variant in _VARIANTS:
        pins = variant.pins(data)
        if pins is None:
            continue
        deps: list[Dependency | None] = [
            make_dependency(variant.pin_name(pin), _pin_version(pin), Ecosystem.SWIFTURL)
            for pin in pins
            if isinstance(pin, dict)
        ]
        return scan_result(path, Ecosystem.SWIFTURL, deps)

    raise LockfileParseError(path, "Unknown Package.resolved format")
