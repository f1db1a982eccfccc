from __future__ import annotations

from .categorizer import categorize, categorize_all
from .dedupe import keep_highest_os_version
from .discovery import list_devices
from .environment import EnvironmentManager
from .parsers import parse_adb_devices, parse_avd_list, parse_xctrace_devices
from .runner import ListingCommandError, run_listing_command
from .selector import DeviceSelector, resolve_choice, select_device

__all__ = [
    "DeviceSelector",
    "EnvironmentManager",
    "ListingCommandError",
    "categorize",
    "categorize_all",
    "keep_highest_os_version",
    "list_devices",
    "parse_adb_devices",
    "parse_avd_list",
    "parse_xctrace_devices",
    "resolve_choice",
    "run_listing_command",
    "select_device",
]
