"""Parsers turning raw device-listing output into Device records.

Two families of tools are understood:

* ``adb devices -l`` plus ``emulator -list-avds`` (line oriented), and
* ``xcrun xctrace list devices`` (sectioned, several line dialects).

Parsers never raise on malformed lines; anything they do not recognise is
skipped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from functools import reduce
from typing import NamedTuple

from devpanel.models import Device, DeviceCategory

logger = logging.getLogger(__name__)

DEFAULT_ANDROID_NAME = "Android Device"
EMULATOR_ID_PREFIX = "emulator-"
SECTION_PREFIX = "=="

_ADB_LINE = re.compile(r"^(?P<serial>\S+)\s+device(?:\s+(?P<details>.*))?$")
_ADB_MODEL = re.compile(r"model:(?P<model>\S+)")

_STANDARD_LINE = re.compile(
    r"^(?P<name>.+?)\s+(?:\((?P<version>[0-9.]+)\)\s+)?\((?P<id>[^)]+)\)$"
)
_BRACE_PLATFORM = re.compile(r"platform:(?P<value>[^,}]+)")
_BRACE_ID = re.compile(r"(?<![\w])id:(?P<value>[^,}]+)")
_BRACE_OS = re.compile(r"OS:(?P<value>[0-9.]+)")
# names may contain parentheses and spaces, so stop at the next "key:" or "}"
_BRACE_NAME = re.compile(r"name:(?P<value>.+?)\s*(?:,\s*\w+:|\})")
_SIMULATOR_LINE = re.compile(
    r"^(?P<name>.+?) Simulator \((?P<version>[0-9.]+)\) \((?P<id>[^)]+)\)$"
)


# adb / emulator


def parse_adb_devices(output: str) -> list[Device]:
    devices: list[Device] = []
    for raw in output.splitlines():
        line = raw.strip()
        if not line or line.startswith("List of devices"):
            continue
        match = _ADB_LINE.match(line)
        if not match:
            continue
        name = DEFAULT_ANDROID_NAME
        model = _ADB_MODEL.search(match.group("details") or "")
        if model:
            name = model.group("model").replace("_", " ")
        devices.append(
            Device(
                id=match.group("serial"),
                name=name,
                category=DeviceCategory.PHYSICAL,
            )
        )
    return devices


def parse_avd_list(output: str) -> list[Device]:
    return [
        Device(
            id=f"{EMULATOR_ID_PREFIX}{name}",
            name=name,
            category=DeviceCategory.SIMULATOR,
        )
        for name in (line.strip() for line in output.splitlines())
        if name
    ]


# xctrace


class LineGrammar(NamedTuple):
    name: str
    match: Callable[[str, DeviceCategory], Device | None]


def match_standard(line: str, category: DeviceCategory) -> Device | None:
    """``<name> (<version>)? (<id>)``"""
    match = _STANDARD_LINE.match(line)
    if not match:
        return None
    device_id = match.group("id").strip()
    name = match.group("name").strip()
    if not device_id or not name:
        return None
    return Device(
        id=device_id,
        name=name,
        category=category,
        os_version=match.group("version"),
    )


def match_braced(line: str, category: DeviceCategory) -> Device | None:
    """``{ platform:<p>, id:<i>, OS:<v>, name:<n> }`` in any key order."""
    fields: dict[str, str] = {}
    for key, pattern in (
        ("platform", _BRACE_PLATFORM),
        ("id", _BRACE_ID),
        ("os_version", _BRACE_OS),
        ("name", _BRACE_NAME),
    ):
        found = pattern.search(line)
        value = found.group("value").strip() if found else ""
        if not value:
            return None
        fields[key] = value
    return Device(category=category, **fields)


def match_simulator(line: str, category: DeviceCategory) -> Device | None:
    """``<name> Simulator (<version>) (<id>)``"""
    match = _SIMULATOR_LINE.match(line)
    if not match:
        return None
    device_id = match.group("id").strip()
    name = match.group("name").strip()
    if not device_id or not name:
        return None
    return Device(
        id=device_id,
        name=f"{name} Simulator",
        category=category,
        os_version=match.group("version"),
    )


# Tried in order, first match wins.
XCTRACE_GRAMMARS: tuple[LineGrammar, ...] = (
    LineGrammar("standard", match_standard),
    LineGrammar("braced", match_braced),
    LineGrammar("simulator", match_simulator),
)


def section_for_marker(marker: str) -> DeviceCategory | None:
    if marker == "== Devices ==":
        return DeviceCategory.PHYSICAL
    if marker == "== Devices Offline ==":
        return DeviceCategory.OFFLINE
    if "Simulator" in marker:
        return DeviceCategory.SIMULATOR
    return None


def match_line(
    line: str,
    category: DeviceCategory,
    grammars: Iterable[LineGrammar] = XCTRACE_GRAMMARS,
) -> Device | None:
    for grammar in grammars:
        device = grammar.match(line, category)
        if device is not None:
            logger.debug("Matched %r with %s grammar", line, grammar.name)
            return device
    return None


class _ScanState(NamedTuple):
    section: DeviceCategory | None
    devices: tuple[Device, ...]


def _scan_line(state: _ScanState, raw: str) -> _ScanState:
    line = raw.strip()
    if line.startswith(SECTION_PREFIX):
        # unknown markers keep the current section
        return state._replace(section=section_for_marker(line) or state.section)
    if not line or state.section is None:
        return state
    device = match_line(line, state.section)
    if device is None:
        return state
    return state._replace(devices=(*state.devices, device))


def parse_xctrace_devices(output: str) -> list[Device]:
    state = reduce(_scan_line, output.splitlines(), _ScanState(None, ()))
    return list(state.devices)
