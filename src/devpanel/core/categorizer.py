from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from devpanel.models import CategorizedDevices, Device, DeviceCategory, DeviceSource


class NameRule(NamedTuple):
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    def accepts(self, name: str) -> bool:
        lowered = name.lower()
        if self.include and not any(token in lowered for token in self.include):
            return False
        return not any(token in lowered for token in self.exclude)


# Missing entries keep every device of that category.
NAME_RULES: dict[DeviceSource, dict[DeviceCategory, NameRule]] = {
    DeviceSource.IOS: {
        DeviceCategory.SIMULATOR: NameRule(include=("iphone",)),
        DeviceCategory.PHYSICAL: NameRule(exclude=("macbook", "ipad")),
    },
    DeviceSource.ANDROID: {},
}


def categorize(device: Device, source: DeviceSource) -> Device | None:
    rule = NAME_RULES[source].get(device.category)
    if rule is None or rule.accepts(device.name):
        return device
    return None


def categorize_all(
    devices: Iterable[Device], source: DeviceSource
) -> CategorizedDevices:
    kept = [
        device
        for device in devices
        if categorize(device, source) is not None
    ]
    return CategorizedDevices.from_devices(kept)
