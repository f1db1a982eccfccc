from __future__ import annotations

import logging

from devpanel.config import DevicesConfig
from devpanel.models import CategorizedDevices, Device, DeviceSource

from .categorizer import categorize_all
from .dedupe import keep_highest_os_version
from .parsers import parse_adb_devices, parse_avd_list, parse_xctrace_devices
from .runner import ListingCommandError, ListingRunner, run_listing_command

logger = logging.getLogger(__name__)


async def _enumerate_ios(config: DevicesConfig, run: ListingRunner) -> list[Device]:
    # xctrace writes the listing to stderr
    output = await run(config.ios_command, config.timeout, merge_stderr=True)
    return parse_xctrace_devices(output)


async def _enumerate_android(
    config: DevicesConfig, run: ListingRunner
) -> list[Device]:
    connected = await run(config.adb_command, config.timeout)
    devices = parse_adb_devices(connected)
    avds = await run(config.avd_command, config.timeout)
    devices.extend(parse_avd_list(avds))
    return devices


async def list_devices(
    source: DeviceSource,
    config: DevicesConfig,
    run: ListingRunner = run_listing_command,
) -> CategorizedDevices:
    """Enumerate, filter and deduplicate the devices of one source.

    A failing listing command is logged and yields no devices at all.
    """
    try:
        if source is DeviceSource.IOS:
            raw = await _enumerate_ios(config, run)
        else:
            raw = await _enumerate_android(config, run)
    except ListingCommandError as exc:
        logger.error("Error listing %s devices: %s", source.value, exc)
        return CategorizedDevices.empty()

    categorized = categorize_all(raw, source)
    categorized.simulators = keep_highest_os_version(categorized.simulators)
    logger.debug(
        "Found %d physical, %d offline, %d simulator device(s) for %s",
        len(categorized.physical_devices),
        len(categorized.offline_devices),
        len(categorized.simulators),
        source.value,
    )
    return categorized
