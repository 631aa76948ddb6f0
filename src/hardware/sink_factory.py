# hardware/sink_factory.py

import importlib
from typing import Any, Optional, Sequence

from hardware.sink_interface import DeviceSink
from hardware.virtual_sink import VirtualSink
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.DEVICE)


def create_sink(
    driver: Optional[str],
    zone_ids: Sequence[Any],
    **driver_options: Any,
) -> DeviceSink:
    """
    Build the device sink named by config, never crashing on a dev machine.

    Args:
        driver: Dotted path "package.module:ClassName" or "package.module.ClassName".
            None / "virtual" selects the in-memory VirtualSink.
        zone_ids: Zone ids of the segment layout
        **driver_options: Passed to the driver constructor (app_name, device_name, group_id...)

    Returns:
        Driver instance, or VirtualSink when the driver can't be loaded
    """
    if not driver or driver == "virtual":
        return VirtualSink(zone_ids)

    module_name, _, class_name = driver.replace(":", ".").rpartition(".")
    try:
        module = importlib.import_module(module_name)
        sink_class = getattr(module, class_name)
        sink = sink_class(zone_ids=list(zone_ids), **driver_options)
        log.info(f"Loaded device driver {driver}")
        return sink
    except (ImportError, AttributeError, TypeError, ValueError) as e:
        log.warn(f"Device driver {driver!r} unavailable, using virtual sink", error=e)

    return VirtualSink(zone_ids)
