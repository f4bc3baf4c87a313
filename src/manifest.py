"""Read a plugin's declared sinceBuild/untilBuild from its build files.

Supported sources:
- plugin.xml: <idea-version since-build="..." until-build="..."/>
- gradle.properties: pluginSinceBuild / pluginUntilBuild
- build.gradle.kts / build.gradle: sinceBuild = "..." or sinceBuild.set("...")
"""

from __future__ import annotations

import logging
import os
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Dict, Optional

from constants import Constants
from versioning.errors import ManifestError

logger = logging.getLogger(__name__)

_GRADLE_VALUE = r'\s*(?:=\s*|\.set\(\s*)["\']([^"\']*)["\']'
_GRADLE_SINCE_RE = re.compile(r"\bsinceBuild" + _GRADLE_VALUE)
_GRADLE_UNTIL_RE = re.compile(r"\buntilBuild" + _GRADLE_VALUE)


@dataclass(frozen=True)
class ManifestDeclaration:
    """Declared build range as written in a manifest; values are unparsed."""
    since_build: str
    until_build: Optional[str]
    source: str


def _read_plugin_xml(path: str) -> ManifestDeclaration:
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise ManifestError(f"Couldn't parse {path}: {e}") from e
    node = root if root.tag == "idea-version" else root.find(".//idea-version")
    if node is None or not node.get("since-build"):
        raise ManifestError(f"No <idea-version since-build=...> declaration in {path}")
    return ManifestDeclaration(
        since_build=node.get("since-build"),
        until_build=node.get("until-build") or None,
        source=path,
    )


def _parse_properties(text: str) -> Dict[str, str]:
    props: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(("#", "!")):
            continue
        sep = re.search(r"[=:]", line)
        if sep is None:
            continue
        props[line[:sep.start()].strip()] = line[sep.end():].strip()
    return props


def _read_gradle_properties(path: str) -> ManifestDeclaration:
    with open(path, "r", encoding="utf-8") as fh:
        props = _parse_properties(fh.read())
    since = props.get("pluginSinceBuild")
    if not since:
        raise ManifestError(f"No pluginSinceBuild property in {path}")
    return ManifestDeclaration(
        since_build=since,
        until_build=props.get("pluginUntilBuild") or None,
        source=path,
    )


def _read_gradle_script(path: str) -> ManifestDeclaration:
    with open(path, "r", encoding="utf-8") as fh:
        text = fh.read()
    since = _GRADLE_SINCE_RE.search(text)
    if since is None or not since.group(1):
        raise ManifestError(f"No literal sinceBuild assignment in {path}")
    until = _GRADLE_UNTIL_RE.search(text)
    return ManifestDeclaration(
        since_build=since.group(1),
        until_build=(until.group(1) or None) if until else None,
        source=path,
    )


def _reader_for(path: str):
    name = os.path.basename(path)
    if name.endswith(".xml"):
        return _read_plugin_xml
    if name.endswith(".properties"):
        return _read_gradle_properties
    if name.endswith((".gradle.kts", ".gradle")):
        return _read_gradle_script
    raise ManifestError(f"Unsupported manifest file: {path}")


def _candidates(dir_name: str):
    return [
        os.path.join(dir_name, Constants.PLUGIN_XML_RELATIVE),
        os.path.join(dir_name, Constants.PLUGIN_XML_FILE),
        os.path.join(dir_name, Constants.GRADLE_PROPERTIES_FILE),
        os.path.join(dir_name, Constants.GRADLE_KTS_FILE),
        os.path.join(dir_name, Constants.GRADLE_GROOVY_FILE),
    ]


def read_declaration(path: str) -> ManifestDeclaration:
    """Read the declared range from a manifest file or a project directory.

    For a directory, plugin.xml, gradle.properties, build.gradle.kts and
    build.gradle are tried in that order; the first one declaring a
    sinceBuild wins.

    Raises:
        ManifestError: The path does not exist or nothing declares sinceBuild.
    """
    if os.path.isdir(path):
        for candidate in _candidates(path):
            if not os.path.isfile(candidate):
                continue
            try:
                decl = _reader_for(candidate)(candidate)
            except (ManifestError, OSError) as e:
                logger.debug("Skipping %s: %s", candidate, e)
                continue
            logger.info("Read compatibility declaration from %s", candidate)
            return decl
        raise ManifestError(f"No sinceBuild declaration found under {path}")

    if not os.path.isfile(path):
        raise ManifestError(f"Manifest not found: {path}")
    try:
        return _reader_for(path)(path)
    except OSError as e:
        raise ManifestError(f"Couldn't read {path}: {e}") from e
