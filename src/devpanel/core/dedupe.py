from __future__ import annotations

import re
from collections.abc import Iterable

from devpanel.models import Device

_ID_OS_VERSION = re.compile(r"OS:([0-9.]+)", re.IGNORECASE)
_NAME_OS_VERSION = re.compile(r"\(([0-9.]+)\)")

UNKNOWN_VERSION = "0"


def effective_os_version(device: Device) -> str:
    """Version used for ranking: os_version, then the id, then the name."""
    if device.os_version:
        return device.os_version
    for pattern, text in ((_ID_OS_VERSION, device.id), (_NAME_OS_VERSION, device.name)):
        match = pattern.search(text)
        if match:
            return match.group(1)
    return UNKNOWN_VERSION


def version_key(version: str) -> tuple[int, ...]:
    """Comparable key where missing trailing components count as zero.

    Trailing zeros are dropped, so "17" and "17.0.0" compare equal while plain
    tuple ordering still matches component-wise comparison.
    """
    parts = [int(part) if part.isdigit() else 0 for part in version.split(".")]
    while parts and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def keep_highest_os_version(simulators: Iterable[Device]) -> list[Device]:
    """Keep one simulator per model, the one with the highest OS version.

    Ties go to the first simulator seen. Groups come out in the order their
    model first appeared.
    """
    groups: dict[str, list[Device]] = {}
    for simulator in simulators:
        groups.setdefault(simulator.model_name, []).append(simulator)

    winners = []
    for members in groups.values():
        # max() returns the first maximal element
        best = max(
            members, key=lambda device: version_key(effective_os_version(device))
        )
        version = effective_os_version(best)
        if best.os_version is None and version != UNKNOWN_VERSION:
            best = best.model_copy(update={"os_version": version})
        winners.append(best)
    return winners
