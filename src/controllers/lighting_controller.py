"""
Lighting Controller (public facade)

Owns the device sink and the effect scheduler. Validates effect requests,
starts/stops runs and publishes lifecycle events on the EventBus.
"""

import asyncio
import random
from dataclasses import asdict
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from effects import EFFECTS, available_effects, create_effect
from effects.base import EffectContext
from engine.frame import Frame
from engine.scheduler import DEFAULT_TICK_INTERVAL_MS, EffectScheduler, EffectState
from engine.timers import AsyncioTimerService, TimerService
from hardware.sink_factory import create_sink
from hardware.sink_interface import DeviceSink
from managers.color_manager import ColorManager
from models.enums import EffectID, LogCategory, StopReason
from models.errors import ConnectionLostError, DomainError, SinkError
from models.events import (
    DeviceConnectedEvent,
    EffectStartedEvent,
    EffectStoppedEvent,
    FrameDeliveryFailedEvent,
)
from models.segments import SegmentLayout
from services.event_bus import EventBus
from utils.logger import get_logger

if TYPE_CHECKING:
    from managers import ConfigManager

log = get_logger().for_category(LogCategory.CONTROLLER)


class LightingController:
    """
    Main controller for zone effects.

    Responsibilities:
    - Connects to the device sink (with settle delay)
    - Resolves and validates effect requests before touching the running effect
    - Starts / stops effects through the single active EffectScheduler
    - Reports sink failures (last_error + FrameDeliveryFailedEvent)
    - Stops the running effect when the connection is lost

    Example:
        controller = LightingController.from_config(config_manager)
        await controller.initialize_connection()
        controller.start_effect("gradient_wave", color1="red", color2="blue")
        controller.stop_current_effect()
        controller.shutdown()
    """

    def __init__(
        self,
        sink: DeviceSink,
        layout: Optional[SegmentLayout] = None,
        timers: Optional[TimerService] = None,
        event_bus: Optional[EventBus] = None,
        color_manager: Optional[ColorManager] = None,
        tick_interval_ms: float = DEFAULT_TICK_INTERVAL_MS,
        final_delay_ms: float = 200,
        settle_delay_ms: float = 1000,
        random_seed: Optional[int] = None,
    ):
        self.sink = sink
        self.layout = layout or SegmentLayout()
        self.timers = timers or AsyncioTimerService()
        self.event_bus = event_bus or EventBus()
        self.color_manager = color_manager or ColorManager({})
        self.settle_delay_ms = settle_delay_ms

        self.context = EffectContext(
            layout=self.layout,
            rng=random.Random(random_seed),
            palette=self.color_manager.palette,
            palette_order=self.color_manager.preset_order,
            tick_interval_ms=tick_interval_ms,
            final_delay_ms=final_delay_ms,
        )

        self.scheduler = EffectScheduler(
            sink=self.sink,
            layout=self.layout,
            timers=self.timers,
            tick_interval_ms=tick_interval_ms,
            on_sink_error=self._on_sink_error,
            on_started=self._on_effect_started,
            on_stopped=self._on_effect_stopped,
        )

        self._last_error: Optional[DomainError] = None

        log.info(
            "LightingController initialized",
            segments=self.layout.count(),
            tick_interval_ms=tick_interval_ms
        )

    @classmethod
    def from_config(
        cls,
        config_manager: "ConfigManager",
        sink: Optional[DeviceSink] = None,
        timers: Optional[TimerService] = None,
        event_bus: Optional[EventBus] = None,
    ) -> "LightingController":
        """
        Build a controller from loaded configuration.

        Without an explicit sink the configured device driver is loaded
        (VirtualSink when none is configured or it can't be imported).
        """
        engine = config_manager.engine
        device = config_manager.device
        layout = config_manager.get_segment_layout()

        if sink is None:
            options = {k: v for k, v in device.items() if k != "driver" and v is not None}
            sink = create_sink(device.get("driver"), layout.ids, **options)

        return cls(
            sink=sink,
            layout=layout,
            timers=timers,
            event_bus=event_bus,
            color_manager=config_manager.color_manager,
            tick_interval_ms=engine["tick_interval_ms"],
            final_delay_ms=engine["final_delay_ms"],
            settle_delay_ms=engine["settle_delay_ms"],
            random_seed=engine["random_seed"],
        )

    # ------------------------------------------------------------------
    # CONNECTION
    # ------------------------------------------------------------------

    async def initialize_connection(self) -> bool:
        """
        Connect to the device, wait for it to settle, then check status.

        Returns:
            True when the device reports itself connected
        """
        log.info("Connecting to device...")
        try:
            connected = self.sink.connect()
        except SinkError as e:
            self._last_error = e
            log.error("Device connection failed", error=e.message)
            await self.event_bus.publish(DeviceConnectedEvent(False))
            return False

        if connected and self.settle_delay_ms > 0:
            await asyncio.sleep(self.settle_delay_ms / 1000.0)

        status = self.sink.status()
        if status.connected:
            log.info(f"Connected to {status.name}", zones=status.zone_count)
        else:
            log.warn("Device not connected after settle delay", detail=status.detail)

        await self.event_bus.publish(DeviceConnectedEvent(status.connected))
        return status.connected

    def shutdown(self, clear_lights: bool = True) -> None:
        """
        Stop the running effect and disconnect.

        With clear_lights=False the device keeps its last frame (a finished
        solid fill or countdown end color stays on).
        """
        log.info("Shutting down lighting controller...", clear_lights=clear_lights)
        if clear_lights:
            self.scheduler.shutdown()
        else:
            self.scheduler.stop(StopReason.SHUTDOWN)
        try:
            self.sink.disconnect()
        except SinkError as e:
            log.warn("Device disconnect failed", error=e.message)
        self.event_bus.publish_nowait(DeviceConnectedEvent(False))

    # ------------------------------------------------------------------
    # EFFECT CONTROL
    # ------------------------------------------------------------------

    def start_effect(self, name: Any, **params: Any) -> EffectState:
        """
        Start effect by name, superseding the running one.

        Name and parameters are validated first; on failure the running
        effect keeps running untouched.

        Raises:
            EffectNotFoundError: Unknown effect name
            InvalidEffectParamsError: Parameters failed validation
        """
        try:
            effect = create_effect(name, params, self.context)
        except DomainError as e:
            log.warn(f"Effect request rejected: {e.message}", code=e.code)
            raise

        return self.scheduler.start(effect)

    def stop_current_effect(self) -> bool:
        """Stop the running effect; the device keeps its last frame"""
        return self.scheduler.stop(StopReason.CANCELLED)

    def set_solid_color(self, color: Any) -> EffectState:
        """Fill every zone with one color (name, hex, [r, g, b] or Color)"""
        return self.start_effect(EffectID.SOLID, color=color)

    def clear_all_lights(self) -> None:
        """Stop the running effect and blank every zone"""
        self.scheduler.stop(StopReason.CANCELLED)
        self.scheduler.deliver(Frame.cleared())

    # ------------------------------------------------------------------
    # INTROSPECTION
    # ------------------------------------------------------------------

    @staticmethod
    def available_effects() -> List[str]:
        return available_effects()

    @staticmethod
    def effect_catalog() -> List[Dict[str, Any]]:
        return [effect_class.describe() for effect_class in EFFECTS.values()]

    def current_effect(self) -> Optional[EffectID]:
        state = self.scheduler.current
        return state.effect_id if state is not None and state.running else None

    @property
    def last_error(self) -> Optional[DomainError]:
        return self._last_error

    def status(self) -> Dict[str, Any]:
        elapsed = self.scheduler.elapsed_ms()
        current = self.current_effect()
        return {
            "state": self.scheduler.state.name,
            "effect": current.name.lower() if current is not None else None,
            "elapsed_ms": round(elapsed) if elapsed is not None else None,
            "frames_committed": self.scheduler.frames_committed,
            "device": asdict(self.sink.status()),
            "last_error": self._last_error.to_dict() if self._last_error is not None else None,
        }

    # ------------------------------------------------------------------
    # SCHEDULER CALLBACKS
    # ------------------------------------------------------------------

    def _on_effect_started(self, state: EffectState) -> None:
        params = state.effect.params.model_dump(mode="json")
        log.info(f"Effect {state.effect_id.name.lower()} started", params=params)
        self.event_bus.publish_nowait(EffectStartedEvent(state.effect_id, params))

    def _on_effect_stopped(self, effect_id: EffectID, reason: StopReason) -> None:
        log.debug(f"Effect {effect_id.name.lower()} stopped", reason=reason.name)
        self.event_bus.publish_nowait(EffectStoppedEvent(effect_id, reason))

    def _on_sink_error(self, error: SinkError) -> None:
        self._last_error = error
        self.event_bus.publish_nowait(FrameDeliveryFailedEvent(error))

        if isinstance(error, ConnectionLostError) and self.scheduler.running:
            log.error("Device connection lost, stopping effect", error=error.message)
            self.scheduler.stop(StopReason.CONNECTION_LOST)
