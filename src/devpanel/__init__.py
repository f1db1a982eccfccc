"""devpanel - control panel for mobile app workflows: find, pick and target devices."""

from __future__ import annotations

from importlib.metadata import version

from .config import DevicesConfig, EnvironmentConfig, Settings, get_settings
from .models import (
    DEFAULT_DEVICE,
    CategorizedDevices,
    Device,
    DeviceCategory,
    DeviceSource,
)

__all__ = [
    "DEFAULT_DEVICE",
    "CategorizedDevices",
    "Device",
    "DeviceCategory",
    "DeviceSource",
    "DevicesConfig",
    "EnvironmentConfig",
    "Settings",
    "__version__",
    "get_settings",
]

__version__ = version("devpanel")
