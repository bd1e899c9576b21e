"""Parsers for JVM dependency files: gradle.lockfile and Maven pom.xml."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path

from lockscan.scanner.ecosystem import Ecosystem
from lockscan.scanner.errors import LockfileParseError
from lockscan.scanner.models import Dependency, ScanDependencies
from lockscan.scanner.parsers._common import dedupe, make_dependency, read_lockfile, scan_result
from lockscan.scanner.registry import register_lockfile

_PROP_RE = re.compile(r"\$\{([^}]+)\}")


def parse_maven_coordinates(coords: str) -> Dependency | None:
    """``group:artifact:version[:...]`` -> Dependency(name="group:artifact")."""
    parts = coords.strip().split(":")
    if len(parts) < 3 or not parts[0] or not parts[1]:
        return None
    return make_dependency(f"{parts[0]}:{parts[1]}", parts[2], Ecosystem.MAVEN)


@register_lockfile("gradle.lockfile", Ecosystem.MAVEN)
def parse_gradle_lockfile(path: Path) -> ScanDependencies:
    deps: list[Dependency] = []

    for raw_line in read_lockfile(path).splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or line.startswith("empty="):
            continue

        # com.google.guava:guava:31.1-jre=compileClasspath,runtimeClasspath
        coords, sep, _configs = line.partition("=")
        if not sep:
            continue
        dep = parse_maven_coordinates(coords)
        if dep is not None:
            deps.append(dep)

    # One line per artifact, but the same artifact can recur across configurations
    return scan_result(path, Ecosystem.MAVEN, dedupe(deps))


def _resolve_props(value: str, props: dict[str, str]) -> str:
    """Replace ${property} placeholders with values from <properties>."""

    def _replace(m: re.Match) -> str:
        return props.get(m.group(1), m.group(0))  # keep original if not found

    return _PROP_RE.sub(_replace, value)


def _text(element: ET.Element | None) -> str | None:
    if element is None:
        return None
    return element.text.strip() if element.text else None


def _namespace(root: ET.Element) -> str:
    if root.tag.startswith("{"):
        return root.tag.split("}", 1)[0] + "}"
    return ""


def _extract_properties(root: ET.Element, ns: str) -> dict[str, str]:
    """Collect <properties> plus the project's own coordinates."""
    props: dict[str, str] = {}

    project_version = _text(root.find(f"{ns}version")) or _text(
        root.find(f"{ns}parent/{ns}version")
    )
    if project_version:
        props["project.version"] = project_version
        props["version"] = project_version

    props_el = root.find(f"{ns}properties")
    if props_el is not None:
        for child in props_el:
            if not isinstance(child.tag, str):
                continue  # comments
            tag = child.tag.split("}")[-1]
            if child.text:
                props[tag] = child.text.strip()
    return props


@register_lockfile("pom.xml", Ecosystem.MAVEN)
def parse_pom_xml(path: Path) -> ScanDependencies:
    try:
        root = ET.fromstring(read_lockfile(path))
    except ET.ParseError as exc:
        raise LockfileParseError(path, f"invalid XML: {exc}") from exc

    ns = _namespace(root)
    props = _extract_properties(root, ns)

    deps: list[Dependency] = []
    for dep_el in root.iter(f"{ns}dependency"):
        group_id = _text(dep_el.find(f"{ns}groupId"))
        artifact_id = _text(dep_el.find(f"{ns}artifactId"))
        version = _text(dep_el.find(f"{ns}version"))

        # Managed versions (no <version>) cannot be looked up
        if not group_id or not artifact_id or not version:
            continue

        version = _resolve_props(version, props)
        if "${" in version:
            continue

        dep = make_dependency(f"{group_id}:{artifact_id}", version, Ecosystem.MAVEN)
        if dep is not None:
            deps.append(dep)

    return scan_result(path, Ecosystem.MAVEN, deps)
