"""Parser for Elixir mix.lock files.

mix.lock is an Elixir map literal with one dependency per line::

    %{
      "cowboy": {:hex, :cowboy, "2.9.0", "865dd8...", [:make, :rebar3], [...], "hexpm", "2c72..."},
      "plug": {:git, "https://github.com/elixir-plug/plug.git", "8a5c...", []},
    }

Only ``:hex`` tuples name a Hex package; git and path checkouts are skipped.
The Hex package name is the second tuple element, which may differ from the
map key when the app is renamed in ``mix.exs``.
"""

from __future__ import annotations

import re
from enum import Enum, auto
from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import make_dependency, read_lockfile, scan_result
from lockscan.scanner.registry import register_lockfile

_HEX_ENTRY_RE = re.compile(
    r'^"(?P<app>[^"]+)"\s*:\s*'
    r'\{:hex,\s*:"?(?P<package>[A-Za-z0-9_.\-]+)"?,\s*'
    r'"(?P<version>[^"]+)"'
)


class MixLockState(Enum):
    SEEKING = auto()
    IN_MAP = auto()
    DONE = auto()


def parse_mix_lock_line(line: str) -> Dependency | None:
    m = _HEX_ENTRY_RE.match(line.strip())
    if not m:
        return None
    return make_dependency(m.group("package"), m.group("version"), Ecosystem.HEX)


@register_lockfile("mix.lock", Ecosystem.HEX)
def parse_mix_lock(path: Path) -> ScanDependencies:
    deps: list[Dependency] = []
    state = MixLockState.SEEKING

    for raw_line in read_lockfile(path).splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if state is MixLockState.SEEKING:
            if line.startswith("%{"):
                state = MixLockState.IN_MAP
                # Single-line lockfile: %{"a": {...}}
                line = line[2:].strip()
                if not line:
                    continue
            else:
                continue

        if state is MixLockState.DONE:
            break

        if line == "}":
            state = MixLockState.DONE
            continue

        dep = parse_mix_lock_line(line)
        if dep is not None:
            deps.append(dep)

    return scan_result(path, Ecosystem.HEX, deps)
