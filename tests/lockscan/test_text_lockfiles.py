"""Tests for Gemfile.lock, mix.lock and Podfile.lock parsing."""

from __future__ import annotations

import pytest

from lockscan.scanner.models import Dependency
from lockscan.scanner.parsers.cocoapods import parse_pod_entry, parse_podfile_lock
from lockscan.scanner.parsers.elixir import parse_mix_lock, parse_mix_lock_line
from lockscan.scanner.parsers.ruby import parse_gem_spec, parse_gemfile_lock


def _pairs(result) -> list[tuple[str, str]]:
    return [(d.name, d.version) for d in result.dependencies]


# ── Gemfile.lock ─────────────────────────────────────────────────────────

GEMFILE_LOCK = """\
GIT
  remote: https://github.com/rails/rails.git
  revision: 0123456789abcdef
  specs:
    rails (7.1.0.alpha)
      actionpack (= 7.1.0.alpha)

GEM
  remote: https://rubygems.org/
  specs:
    actionpack (7.0.4)
      rack (~> 2.2, >= 2.2.0)
    nokogiri (1.13.10-x86_64-linux)
      racc (~> 1.4)
    rack (2.2.6)

PLATFORMS
  x86_64-linux

DEPENDENCIES
  nokogiri (~> 1.13)
  rails!

BUNDLED WITH
   2.4.10
"""


class TestGemfileLock:
    def test_specs_only(self, write_lockfile):
        result = parse_gemfile_lock(write_lockfile("Gemfile.lock", GEMFILE_LOCK))
        assert result.ecosystem == "RubyGems"
        assert _pairs(result) == [
            ("rails", "7.1.0.alpha"),
            ("actionpack", "7.0.4"),
            ("nokogiri", "1.13.10-x86_64-linux"),
            ("rack", "2.2.6"),
        ]

    def test_attribute_after_specs_ends_list(self, write_lockfile):
        content = (
            "PATH\n"
            "  remote: .\n"
            "  specs:\n"
            "    mygem (0.1.0)\n"
            "  other: value\n"
            "    notagem (9.9.9)\n"
        )
        result = parse_gemfile_lock(write_lockfile("Gemfile.lock", content))
        assert _pairs(result) == [("mygem", "0.1.0")]

    def test_parse_gem_spec(self):
        assert parse_gem_spec("    rack (2.2.6)") == Dependency("rack", "2.2.6", "RubyGems")
        assert parse_gem_spec("rails!") is None


# ── mix.lock ─────────────────────────────────────────────────────────────

MIX_LOCK = """\
%{
  "cowboy": {:hex, :cowboy, "2.9.0", "865dd8b6607e14cf03282e10e934023a1bd8be6f6bacf921a7e2a96d800cd452", [:make, :rebar3], [{:cowlib, "2.11.0", [hex: :cowlib, repo: "hexpm", optional: false]}], "hexpm", "2c729f934b4e1aa149aff882f57c6372c15399a20d54f65c8d67bef583021bde"},
  "plug": {:git, "https://github.com/elixir-plug/plug.git", "8a5c0e1", []},
  "my_jason": {:hex, :jason, "1.4.0", "e855647bc964a44e2f67df589ccf49105ae039d4179db7f6271dfd3843dc27e6", [:mix], [], "hexpm", "79a3791085b2a0f743ca04cec0f7be26443738779d09302e01318f97bdb82121"},
  "local_dep": {:path, "../local_dep", []},
}
"""


class TestMixLock:
    def test_hex_entries_only(self, write_lockfile):
        result = parse_mix_lock(write_lockfile("mix.lock", MIX_LOCK))
        assert result.ecosystem == "Hex"
        # renamed app: the Hex package atom is the name
        assert _pairs(result) == [("cowboy", "2.9.0"), ("jason", "1.4.0")]

    def test_single_line_map(self, write_lockfile):
        content = '%{"jason": {:hex, :jason, "1.4.0", "abc", [:mix], [], "hexpm", "def"}}\n'
        assert _pairs(parse_mix_lock(write_lockfile("mix.lock", content))) == [("jason", "1.4.0")]

    def test_lines_after_map_ignored(self, write_lockfile):
        content = MIX_LOCK + '"stray": {:hex, :stray, "0.0.1", "x"},\n'
        assert len(parse_mix_lock(write_lockfile("mix.lock", content)).dependencies) == 2

    def test_parse_line(self):
        dep = parse_mix_lock_line('"decimal": {:hex, :decimal, "2.1.1", "abc", [:mix], [], "hexpm", "d"},')
        assert dep == Dependency("decimal", "2.1.1", "Hex")
        assert parse_mix_lock_line('"plug": {:git, "https://x/plug.git", "abc", []},') is None


# ── Podfile.lock ─────────────────────────────────────────────────────────

PODFILE_LOCK = """\
PODS:
  - Alamofire (5.6.4)
  - Firebase/Analytics (10.5.0):
    - Firebase/Core
    - FirebaseAnalytics (~> 10.5.0)
  - Firebase/Core (10.5.0):
    - Firebase/CoreOnly
  - SDWebImage (5.15.0):
    - SDWebImage/Core (= 5.15.0)

DEPENDENCIES:
  - Alamofire (~> 5.6)
  - Firebase/Analytics
  - SDWebImage

SPEC REPOS:
  trunk:
    - Alamofire
    - SDWebImage

SPEC CHECKSUMS:
  Alamofire: 4e95d97098eacb88856099c4fc79b526a299e48c

PODFILE CHECKSUM: 2a4bb1e1f3b5bd6e3a7c1b3e4d5f6a7b8c9d0e1f

COCOAPODS: 1.12.1
"""


class TestPodfileLock:
    def test_resolved_then_unresolved_requirements(self, write_lockfile):
        result = parse_podfile_lock(write_lockfile("Podfile.lock", PODFILE_LOCK))
        assert result.ecosystem == "CocoaPods"
        assert _pairs(result) == [
            ("Alamofire", "5.6.4"),
            ("Firebase/Analytics", "10.5.0"),
            ("Firebase/Core", "10.5.0"),
            ("SDWebImage", "5.15.0"),
            ("FirebaseAnalytics", "~> 10.5.0"),
            ("Firebase/CoreOnly", "*"),
            ("SDWebImage/Core", "= 5.15.0"),
        ]

    def test_quoted_entries(self, write_lockfile):
        content = 'PODS:\n  - "GoogleUtilities/Environment (7.11.0)":\n    - PromisesObjC (< 3.0, >= 1.2)\n'
        result = parse_podfile_lock(write_lockfile("Podfile.lock", content))
        assert _pairs(result) == [
            ("GoogleUtilities/Environment", "7.11.0"),
            ("PromisesObjC", "< 3.0, >= 1.2"),
        ]

    def test_no_pods_section(self, write_lockfile):
        content = "DEPENDENCIES:\n  - Alamofire (~> 5.6)\n"
        assert parse_podfile_lock(write_lockfile("Podfile.lock", content)).dependencies == []

    @pytest.mark.parametrize(
        "entry, expected",
        [
            ("Alamofire (5.6.4)", ("Alamofire", "5.6.4")),
            ("Firebase/Analytics (10.5.0):", ("Firebase/Analytics", "10.5.0")),
            ('"GoogleUtilities/Environment (7.11.0)":', ("GoogleUtilities/Environment", "7.11.0")),
            ("Firebase/Core", ("Firebase/Core", None)),
        ],
    )
    def test_parse_pod_entry(self, entry, expected):
        assert parse_pod_entry(entry) == expected
