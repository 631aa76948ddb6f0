"""
main_asyncio.py - Application entry point
-----------------------------------------

Responsible for:
- loading configuration and configuring the logger
- wiring the device sink, event bus and lighting controller
- starting the requested effect
- graceful shutdown on Ctrl+C / SIGTERM (lights blanked) or when the
  effect completes (last frame left on)

Usage:
    python main_asyncio.py [effect_name] [param=value ...]
    python main_asyncio.py gradient_wave color1=red color2=blue run_time=10000
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX
# ---------------------------------------------------------------------------

# Set UTF-8 encoding for output before logging starts (fixes Unicode symbol rendering)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio
import signal
from typing import Any, Dict, List, Tuple

import yaml

from controllers import LightingController
from managers import ConfigManager
from models.enums import LogCategory, LogLevel, StopReason
from models.errors import DomainError
from models.events import EffectStoppedEvent, EventType
from services import EventBus, log_middleware
from utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)

DEFAULT_EFFECT = "rainbow_wave"


def parse_arguments(argv: List[str]) -> Tuple[str, Dict[str, Any]]:
    """
    'effect key=value ...' -> (effect, params)

    Values are read as YAML scalars, so numbers, booleans, lists
    ([255,0,0]) and plain strings all work.
    """
    if not argv:
        return DEFAULT_EFFECT, {}

    effect, params = argv[0], {}
    for arg in argv[1:]:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got {arg!r}")
        params[key.strip()] = yaml.safe_load(value)
    return effect, params


async def main(argv: List[str]) -> int:
    """Main async entry point (dependency injection and event loop startup)."""

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    effect_name, params = parse_arguments(argv)

    log.info("Loading configuration...")
    config_manager = ConfigManager()
    config_manager.load()

    configure_logger(config_manager.get_log_level(), config_manager.logging.get("colors", True))

    # ========================================================================
    # 2. SERVICES & CONTROLLER
    # ========================================================================

    event_bus = EventBus()
    if config_manager.get_log_level() == LogLevel.DEBUG:
        event_bus.add_middleware(log_middleware)

    controller = LightingController.from_config(config_manager, event_bus=event_bus)

    if not await controller.initialize_connection():
        log.error("Device unavailable, exiting")
        return 1

    # ========================================================================
    # 3. SHUTDOWN WIRING
    # ========================================================================

    loop = asyncio.get_running_loop()
    shutdown_event = asyncio.Event()

    def signal_handler(sig: signal.Signals) -> None:
        log.info(f"Signal {sig.name} received → triggering shutdown")
        shutdown_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

    # A naturally finished effect leaves its last frame on the device
    keep_last_frame = False

    def on_effect_stopped(event: EffectStoppedEvent) -> None:
        nonlocal keep_last_frame
        if event.reason in (StopReason.COMPLETED, StopReason.CONNECTION_LOST):
            keep_last_frame = event.reason == StopReason.COMPLETED
            # leave room for delayed final frames
            grace = (controller.context.final_delay_ms * 2) / 1000.0
            loop.call_later(grace, shutdown_event.set)

    event_bus.subscribe(EventType.EFFECT_STOPPED, on_effect_stopped)

    # ========================================================================
    # 4. RUN
    # ========================================================================

    try:
        controller.start_effect(effect_name, **params)
    except DomainError as e:
        log.error(f"Cannot start effect: {e.message}", **e.details)
        controller.shutdown()
        return 2

    log.info("🏁 Effect running. Waiting for exit signal...")
    await shutdown_event.wait()

    controller.shutdown(clear_lights=not keep_last_frame)
    log.info("👋 Shut down cleanly.")
    return 0


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    exit_code = 0
    try:
        exit_code = asyncio.run(main(sys.argv[1:]))
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except (DomainError, ValueError) as e:
        log.error(f"Fatal error: {e}")
        exit_code = 1
    sys.exit(exit_code)
