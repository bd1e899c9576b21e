"""Parser for Bundler Gemfile.lock files.

Only the ``specs:`` lists of the source sections (GEM, GIT, PATH, PLUGIN
SOURCE) hold resolved gems::

    GEM
      remote: https://rubygems.org/
      specs:
        actionpack (7.0.4)        <- resolved gem, 4 spaces
          rack (~> 2.2, >= 2.2.0) <- its requirement, 6 spaces
        nokogiri (1.13.10-x86_64-linux)
"""

from __future__ import annotations

import re
from enum import Enum, auto
from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import make_dependency, read_lockfile, scan_result
from lockscan.scanner.registry import register_lockfile

_SOURCE_SECTIONS = frozenset({"GEM", "GIT", "PATH", "PLUGIN SOURCE"})

_GEM_SPEC_RE = re.compile(r"^(\S+)\s+\(([^)]+)\)$")


class GemfileState(Enum):
    SEEKING = auto()
    IN_SOURCE = auto()
    IN_SPECS = auto()


def parse_gem_spec(line: str) -> Dependency | None:
    """``rails (7.0.4)`` -> Dependency(rails, 7.0.4); platform suffixes kept."""
    m = _GEM_SPEC_RE.match(line.strip())
    if not m:
        return None
    return make_dependency(m.group(1), m.group(2), Ecosystem.RUBYGEMS)


@register_lockfile("Gemfile.lock", Ecosystem.RUBYGEMS)
def parse_gemfile_lock(path: Path) -> ScanDependencies:
    deps: list[Dependency] = []
    state = GemfileState.SEEKING

    for line in read_lockfile(path).splitlines():
        if not line.strip():
            continue

        # Unindented line starts a new section
        if not line.startswith(" "):
            name = line.strip()
            state = GemfileState.IN_SOURCE if name in _SOURCE_SECTIONS else GemfileState.SEEKING
            continue

        indent = len(line) - len(line.lstrip(" "))

        if state is GemfileState.IN_SOURCE:
            if indent == 2 and line.strip() == "specs:":
                state = GemfileState.IN_SPECS
            continue

        if state is GemfileState.IN_SPECS:
            if indent == 2:
                # Another source attribute after the specs list
                state = GemfileState.IN_SOURCE
            elif indent == 4:
                dep = parse_gem_spec(line)
                if dep is not None:
                    deps.append(dep)

    return scan_result(path, Ecosystem.RUBYGEMS, deps)
