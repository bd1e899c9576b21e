"""Package ecosystems understood by the scanner."""

from __future__ import annotations

from enum import Enum


class Ecosystem(Enum):
    """Package registry families.

    The value is the canonical ecosystem name expected by the OSV API. The
    downstream batch query groups by this exact string, so it must never be
    respelled.
    """

    NPM = "npm"
    CARGO = "crates.io"
    PYPI = "PyPI"
    GO = "Go"
    MAVEN = "Maven"
    NUGET = "NuGet"
    RUBYGEMS = "RubyGems"
    PACKAGIST = "Packagist"
    PUB = "Pub"
    HEX = "Hex"
    COCOAPODS = "CocoaPods"
    SWIFTURL = "SwiftURL"

    @property
    def osv_name(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.value


_DISPLAY_NAMES: dict[Ecosystem, str] = {
    Ecosystem.NPM: "npm",
    Ecosystem.CARGO: "Cargo",
    Ecosystem.PYPI: "pip",
    Ecosystem.GO: "Go",
    Ecosystem.MAVEN: "Maven/Gradle",
    Ecosystem.NUGET: "NuGet",
    Ecosystem.RUBYGEMS: "RubyGems",
    Ecosystem.PACKAGIST: "Composer",
    Ecosystem.PUB: "Pub",
    Ecosystem.HEX: "Hex",
    Ecosystem.COCOAPODS: "CocoaPods",
    Ecosystem.SWIFTURL: "SwiftPM",
}
