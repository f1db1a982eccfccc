from __future__ import annotations

import enum
import re
from typing import Final, Literal, TypeAlias

from pydantic import BaseModel, Field

_SIMULATOR_SUFFIX = re.compile(r"\s+Simulator$", re.IGNORECASE)
_VERSION_SUFFIX = re.compile(r"\s*\([0-9.]+\)\s*$")


class DeviceSource(str, enum.Enum):
    """Platform whose tooling enumerates the devices."""

    IOS = "ios"
    ANDROID = "android"


class DeviceCategory(str, enum.Enum):
    """Listing section a device was found in."""

    PHYSICAL = "physical"
    OFFLINE = "offline"
    SIMULATOR = "simulator"


class _Default(enum.Enum):
    DEVICE = "default"

    def __repr__(self) -> str:
        return "DEFAULT_DEVICE"


# Returned by the selector when the user asks for the platform's default
# simulator/emulator instead of an explicit device.
DEFAULT_DEVICE: Final = _Default.DEVICE
DefaultDevice: TypeAlias = Literal[_Default.DEVICE]


class Device(BaseModel):
    """Device, simulator or emulator (from a listing command)."""

    model_config = {"frozen": True, "extra": "forbid"}

    id: str = Field(min_length=1)
    name: str
    category: DeviceCategory
    os_version: str | None = None
    platform: str | None = None
    index: int | None = None

    @property
    def model_name(self) -> str:
        """Name without the trailing "Simulator" word and version suffix."""
        name = _SIMULATOR_SUFFIX.sub("", self.name)
        return _VERSION_SUFFIX.sub("", name)

    @property
    def selectable(self) -> bool:
        return self.category is not DeviceCategory.OFFLINE


class CategorizedDevices(BaseModel):
    """Enumerated devices split into physical, offline and simulator buckets."""

    model_config = {"extra": "forbid"}

    physical_devices: list[Device] = Field(default_factory=list)
    offline_devices: list[Device] = Field(default_factory=list)
    simulators: list[Device] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> CategorizedDevices:
        return cls()

    @classmethod
    def from_devices(cls, devices: list[Device]) -> CategorizedDevices:
        buckets = cls()
        for device in devices:
            buckets.bucket(device.category).append(device)
        return buckets

    def bucket(self, category: DeviceCategory) -> list[Device]:
        if category is DeviceCategory.PHYSICAL:
            return self.physical_devices
        if category is DeviceCategory.OFFLINE:
            return self.offline_devices
        return self.simulators

    def all_devices(self) -> list[Device]:
        return [*self.physical_devices, *self.offline_devices, *self.simulators]
