"""Data models for devpanel."""

from devpanel.models.device import (
    DEFAULT_DEVICE,
    CategorizedDevices,
    DefaultDevice,
    Device,
    DeviceCategory,
    DeviceSource,
)
from devpanel.models.environment import EnvironmentStatus

__all__ = [
    "DEFAULT_DEVICE",
    "CategorizedDevices",
    "DefaultDevice",
    "Device",
    "DeviceCategory",
    "DeviceSource",
    "EnvironmentStatus",
]
