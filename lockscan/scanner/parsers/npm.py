"""Parsers for npm ecosystem lockfiles: package-lock.json, pnpm-lock.yaml, yarn.lock.

package-lock.json
  v2/v3 lockfiles list every install under ``packages`` keyed by its
  ``node_modules/...`` path; v1 lockfiles nest installs under
  ``dependencies`` recursively. ``packages`` wins when both are present.

pnpm-lock.yaml
  Read line by line; only the top-level ``packages:`` section matters.
  Keys look like ``/lodash@4.17.21`` (v6), ``lodash@4.17.21`` (v9) or
  ``/lodash/4.17.21`` (v5 and older).

yarn.lock
  Classic (v1) entries carry ``version "x"``; berry (v2+) lockfiles start
  with a ``__metadata:`` block and carry ``version: x``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any

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

_NODE_MODULES = "node_modules/"


# ── package-lock.json ─────────────────────────────────────────────────────


@register_lockfile("package-lock.json", Ecosystem.NPM)
def parse_package_lock(path: Path) -> ScanDependencies:
    data = load_json_object(path, read_lockfile(path))

    packages = data.get("packages")
    if isinstance(packages, dict):
        deps = _collect_packages(packages)
    else:
        deps = []
        _collect_dependencies_v1(data.get("dependencies"), deps)

    return scan_result(path, Ecosystem.NPM, dedupe(deps))


def package_name_from_path(install_path: str) -> str | None:
    """Extract the package name from a ``node_modules`` install path.

    Examples:
        node_modules/lodash                      -> lodash
        node_modules/@types/node                 -> @types/node
        node_modules/foo/node_modules/bar        -> bar
        packages/app                             -> None (workspace folder)
    """
    pos = install_path.rfind(_NODE_MODULES)
    if pos == -1:
        return None
    return install_path[pos + len(_NODE_MODULES) :] or None


def _collect_packages(packages: dict[str, Any]) -> list[Dependency]:
    deps: list[Dependency] = []
    for install_path, info in packages.items():
        # "" is the root project
        if not install_path or not isinstance(info, dict):
            continue
        if info.get("link"):
            continue
        dep = make_dependency(package_name_from_path(install_path), info.get("version"), Ecosystem.NPM)
        if dep is not None:
            deps.append(dep)
    return deps


def _collect_dependencies_v1(tree: Any, out: list[Dependency]) -> None:
    """Flatten a lockfile v1 ``dependencies`` tree, depth-first."""
    if not isinstance(tree, dict):
        return
    for name, info in tree.items():
        if not isinstance(info, dict):
            continue
        dep = make_dependency(name, info.get("version"), Ecosystem.NPM)
        if dep is not None:
            out.append(dep)
        _collect_dependencies_v1(info.get("dependencies"), out)


# ── pnpm-lock.yaml ────────────────────────────────────────────────────────


class PnpmState(Enum):
    SEEKING = auto()
    IN_PACKAGES = auto()
    IN_ENTRY = auto()


@register_lockfile("pnpm-lock.yaml", Ecosystem.NPM)
def parse_pnpm_lock(path: Path) -> ScanDependencies:
    content = read_lockfile(path)
    deps: list[Dependency] = []

    state = PnpmState.SEEKING
    # Entry whose key carried no version; waits for a "version:" field
    pending_name: str | None = None

    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        indent = len(line) - len(line.lstrip(" "))

        if indent == 0:
            state = PnpmState.IN_PACKAGES if stripped == "packages:" else PnpmState.SEEKING
            pending_name = None
            continue

        if state is PnpmState.SEEKING:
            continue

        if indent == 2 and stripped.endswith(":"):
            pending_name = None
            name, version = parse_pnpm_key(stripped[:-1])
            if name and version:
                dep = make_dependency(name, version, Ecosystem.NPM)
                if dep is not None:
                    deps.append(dep)
            elif name:
                pending_name = name
            state = PnpmState.IN_ENTRY
            continue

        if (
            state is PnpmState.IN_ENTRY
            and pending_name
            and indent == 4
            and stripped.startswith("version:")
        ):
            version = stripped[len("version:") :].strip().strip("'\"")
            dep = make_dependency(pending_name, version, Ecosystem.NPM)
            if dep is not None:
                deps.append(dep)
            pending_name = None

    return scan_result(path, Ecosystem.NPM, dedupe(deps))


def parse_pnpm_key(key: str) -> tuple[str | None, str | None]:
    """Split a pnpm ``packages:`` key into (name, version).

    Examples:
        /lodash@4.17.21                    -> (lodash, 4.17.21)
        /@types/node@18.0.0(typescript@5)  -> (@types/node, 18.0.0)
        '@types/node@18.0.0'               -> (@types/node, 18.0.0)
        /react-dom/17.0.2_react@17.0.2     -> (react-dom, 17.0.2)
        /@babel/core/7.20.0                -> (@babel/core, 7.20.0)
        /foo                               -> (foo, None)
    """
    key = key.strip().strip("'\"")
    if key.startswith("/"):
        key = key[1:]
    if not key:
        return None, None

    legacy = _parse_pnpm_legacy_key(key)
    if legacy is not None:
        return legacy

    # Peer-dependency suffix: name@1.0.0(peer@2.0.0)
    key = key.split("(", 1)[0]
    at = key.find("@", 1)
    if at == -1:
        return key or None, None
    return key[:at] or None, key[at + 1 :] or None


def _parse_pnpm_legacy_key(key: str) -> tuple[str | None, str | None] | None:
    """Handle ``name/version`` keys; return None when *key* is not one."""
    parts = key.split("/")
    if key.startswith("@"):
        if len(parts) < 3 or "@" in parts[1]:
            return None
        name, version = f"{parts[0]}/{parts[1]}", parts[2]
    else:
        if len(parts) < 2 or "@" in parts[0]:
            return None
        name, version = parts[0], parts[1]

    # Peer suffix: 17.0.2_react@17.0.2
    version = version.split("_", 1)[0]
    if not version[:1].isdigit():
        return None, None
    return name, version


# ── yarn.lock ─────────────────────────────────────────────────────────────


class YarnState(Enum):
    SEEKING = auto()
    IN_PACKAGE_ENTRY = auto()


@dataclass(frozen=True)
class _YarnVariant:
    name: str
    detect: Callable[[str], bool]
    read_version: Callable[[str], str | None]


def _read_classic_version(line: str) -> str | None:
    # '  version "4.17.21"'
    if not line.startswith("  version "):
        return None
    return line[len("  version ") :].strip().strip("\"'") or None


def _read_berry_version(line: str) -> str | None:
    # '  version: 4.17.21'
    if not line.startswith("  version:"):
        return None
    return line[len("  version:") :].strip().strip("\"'") or None


# Tried in order; classic is the fallback and matches anything.
_YARN_VARIANTS: tuple[_YarnVariant, ...] = (
    _YarnVariant("berry", lambda content: "__metadata:" in content, _read_berry_version),
    _YarnVariant("classic", lambda content: True, _read_classic_version),
)


@register_lockfile("yarn.lock", Ecosystem.NPM)
def parse_yarn_lock(path: Path) -> ScanDependencies:
    content = read_lockfile(path)
    variant = detect_yarn_variant(content)
    deps = _parse_yarn_entries(content, variant.read_version)
    return scan_result(path, Ecosystem.NPM, dedupe(deps))


def detect_yarn_variant(content: str) -> _YarnVariant:
    for variant in _YARN_VARIANTS:
        if variant.detect(content):
            return variant
    raise AssertionError("classic yarn variant always matches")  # pragma: no cover


def yarn_spec_name(spec: str) -> str | None:
    """Extract the package name from a yarn descriptor.

    The second ``@`` bounds scoped names, the first bounds plain ones:
        lodash@^4.17.21          -> lodash
        @types/node@^18.0.0      -> @types/node
        lodash@npm:^4.17.21      -> lodash
        @types/node@npm:^18.0.0  -> @types/node
    """
    spec = spec.strip().strip("\"'")
    at = spec.find("@", 1) if spec.startswith("@") else spec.find("@")
    if at <= 0:
        return None
    return spec[:at]


def _header_names(line: str) -> list[str]:
    """Names declared on an entry header, e.g. ``a@^1, a@^1.2:``."""
    names: list[str] = []
    for spec in line.rstrip()[:-1].split(","):
        name = yarn_spec_name(spec)
        if name and name not in names:
            names.append(name)
    return names


def _parse_yarn_entries(
    content: str, read_version: Callable[[str], str | None]
) -> list[Dependency]:
    deps: list[Dependency] = []
    state = YarnState.SEEKING
    names: list[str] = []
    version: str | None = None

    def flush() -> None:
        if version is None:
            return
        for name in names:
            dep = make_dependency(name, version, Ecosystem.NPM)
            if dep is not None:
                deps.append(dep)

    for line in content.splitlines():
        if not line.strip() or line.startswith("#"):
            continue

        if not line[0].isspace():
            flush()
            names, version = [], None
            header = line.rstrip()
            if header.endswith(":") and not header.startswith("__metadata"):
                names = _header_names(header)
            state = YarnState.IN_PACKAGE_ENTRY if names else YarnState.SEEKING
            continue

        if state is YarnState.IN_PACKAGE_ENTRY and version is None:
            version = read_version(line)

    flush()
    return deps
