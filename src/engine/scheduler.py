"""
Effect Scheduler

Runs exactly one effect at a time on a fixed cadence and streams its frames
to the device sink.

    start(effect)  -> cancel previous run, tick #0 now, arm repeating tick
    tick           -> check completion, render, write ops in order, commit once
    stop()         -> cancel timers, keep whatever is on the device
    shutdown()     -> stop, clear all zones, commit

Every timer callback carries the generation it was armed for. start() and
stop() bump the generation, so a callback that was already queued when its
run was cancelled finds a stale generation and does nothing.
"""

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Callable, List, Optional

from engine.frame import Frame, FrameOp
from engine.timers import TimerHandle, TimerService
from hardware.sink_interface import DeviceSink
from models.color import Color
from models.commands import Brightness, ColorTemperature, XYColor
from models.enums import EffectID, FrameTarget, LogCategory, SchedulerState, StopReason
from models.errors import SinkError
from models.segments import SegmentLayout
from utils.logger import get_logger

if TYPE_CHECKING:
    from effects.base import BaseEffect

log = get_logger().for_category(LogCategory.SCHEDULER)

DEFAULT_TICK_INTERVAL_MS = 16

SinkErrorCallback = Callable[[SinkError], None]
StoppedCallback = Callable[[EffectID, StopReason], None]
StartedCallback = Callable[["EffectState"], None]


@dataclass
class EffectState:
    """State of one effect run, owned by the scheduler"""
    effect_id: EffectID
    effect: "BaseEffect"
    start_time_ms: float
    generation: int
    running: bool = True
    ticks: int = 0


class EffectScheduler:
    """
    Single active effect scheduler

    Args:
        sink: Device sink receiving writes and commits
        layout: Segment index -> zone id mapping
        timers: Clock + timer primitives (asyncio or simulated)
        tick_interval_ms: Repeating tick cadence
        on_sink_error: Called once per SinkError raised while delivering a frame
        on_started: Called with the new EffectState right before tick #0
        on_stopped: Called with (effect_id, reason) whenever a run ends
    """

    def __init__(
        self,
        sink: DeviceSink,
        layout: SegmentLayout,
        timers: TimerService,
        tick_interval_ms: float = DEFAULT_TICK_INTERVAL_MS,
        on_sink_error: Optional[SinkErrorCallback] = None,
        on_started: Optional[StartedCallback] = None,
        on_stopped: Optional[StoppedCallback] = None,
    ):
        self.sink = sink
        self.layout = layout
        self.timers = timers
        self.tick_interval_ms = tick_interval_ms
        self.on_sink_error = on_sink_error
        self.on_started = on_started
        self.on_stopped = on_stopped

        self._state: Optional[EffectState] = None
        self._generation = 0
        self._ticker: Optional[TimerHandle] = None
        self._pending: List[TimerHandle] = []

        self.frames_committed = 0

    # ============================================================
    # Introspection
    # ============================================================

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.RUNNING if self.running else SchedulerState.IDLE

    @property
    def running(self) -> bool:
        return self._state is not None and self._state.running

    @property
    def current(self) -> Optional[EffectState]:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def elapsed_ms(self) -> Optional[float]:
        if self._state is None:
            return None
        return self.timers.now_ms() - self._state.start_time_ms

    # ============================================================
    # Core control methods
    # ============================================================

    def start(self, effect: "BaseEffect") -> EffectState:
        """
        Start effect, superseding whatever runs now.

        The previous run's timers are cancelled before the new run renders
        anything, so the previous effect never writes again.
        """
        previous = self._state
        self._cancel_timers()
        self._generation += 1
        self._state = None

        if previous is not None and previous.running:
            previous.running = False
            self._notify_stopped(previous, StopReason.SUPERSEDED)

        generation = self._generation
        state = EffectState(
            effect_id=effect.ID,
            effect=effect,
            start_time_ms=self.timers.now_ms(),
            generation=generation,
        )
        self._state = state

        log.info(f"Started effect {effect.ID.name}", generation=generation)
        if self.on_started is not None:
            self.on_started(state)

        # Tick #0: first frame is visible immediately
        self._tick(generation)

        if self._state is state and state.running:
            self._ticker = self.timers.call_every(
                self.tick_interval_ms,
                partial(self._tick, generation),
            )
        return state

    def stop(self, reason: StopReason = StopReason.CANCELLED) -> bool:
        """
        Stop the running effect, leaving the device as it is.

        Also cancels pending delayed final frames. Returns False (and does
        nothing else) when no effect was running.
        """
        self._cancel_timers()
        self._generation += 1

        state = self._state
        self._state = None
        if state is None or not state.running:
            return False

        state.running = False
        log.info(f"Stopped effect {state.effect_id.name}", reason=reason.name, ticks=state.ticks)
        self._notify_stopped(state, reason)
        return True

    def shutdown(self) -> None:
        """Stop, then blank every zone"""
        self.stop(StopReason.SHUTDOWN)
        self.deliver(Frame.cleared())
        log.info("Scheduler shut down", frames_committed=self.frames_committed)

    # ============================================================
    # Tick
    # ============================================================

    def _tick(self, generation: int) -> None:
        state = self._state
        if state is None or not state.running or state.generation != generation:
            return

        elapsed = self.timers.now_ms() - state.start_time_ms
        effect = state.effect

        try:
            if effect.is_complete(elapsed):
                self._complete(state)
                return
            frame = effect.render(elapsed)
        except Exception as e:
            log.error(f"Effect {state.effect_id.name} failed to render, tick dropped", error=e, elapsed=round(elapsed))
            return

        self.deliver(frame)
        state.ticks += 1

        # A sink error handler may have stopped or replaced this run
        if self._state is not state:
            return

        if effect.ONE_SHOT:
            self._halt(state)
            self._notify_stopped(state, StopReason.COMPLETED)

    def _complete(self, state: EffectState) -> None:
        """Effect reported completion: stop ticking, stage final frames"""
        self._halt(state)
        log.info(f"Effect {state.effect_id.name} completed", ticks=state.ticks)

        for delay_ms, frame in state.effect.final_frames():
            if delay_ms <= 0:
                self.deliver(frame)
            else:
                handle = self.timers.call_later(
                    delay_ms,
                    partial(self._deliver_final, state.generation, frame),
                )
                self._pending.append(handle)

        self._notify_stopped(state, StopReason.COMPLETED)

    def _halt(self, state: EffectState) -> None:
        """Go idle without bumping the generation (delayed finals stay valid)"""
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        state.running = False
        if self._state is state:
            self._state = None

    def _deliver_final(self, generation: int, frame: Frame) -> None:
        if generation != self._generation:
            return
        self.deliver(frame)

    # ============================================================
    # Device writes
    # ============================================================

    def deliver(self, frame: Frame) -> List[SinkError]:
        """
        Write frame ops in order, then commit once.

        Sink errors don't interrupt the frame: remaining writes and the
        commit still happen. Each error is passed to on_sink_error.
        """
        errors: List[SinkError] = []
        for op in frame:
            self._apply(op, errors)

        try:
            self.sink.commit()
            self.frames_committed += 1
        except SinkError as e:
            errors.append(e)

        for error in errors:
            log.warn("Frame delivery failed", code=error.code, error=error.message)
            if self.on_sink_error is not None:
                self.on_sink_error(error)
        return errors

    def _apply(self, op: FrameOp, errors: List[SinkError]) -> None:
        value = op.value
        group = op.target == FrameTarget.GROUP
        zone_id = None if group else self.layout.id_at(op.index)
        sink = self.sink

        if value is None:
            if group:
                self._write(errors, sink.clear_all)
            else:
                self._write(errors, sink.clear_zone, zone_id)

        elif isinstance(value, Color):
            color = value.clamped()
            if group:
                self._write(errors, sink.set_all_zones_color, color)
            else:
                self._write(errors, sink.set_zone_color, zone_id, color)

        elif isinstance(value, ColorTemperature):
            ct = value.clamped()
            if group:
                self._write(errors, sink.set_group_color_temperature, ct.mireds, ct.brightness)
            else:
                self._write(errors, sink.set_zone_color_temperature, zone_id, ct.mireds, ct.brightness)

        elif isinstance(value, XYColor):
            xy = value.clamped()
            if group:
                self._write(errors, sink.set_group_xy, xy.x, xy.y, xy.brightness)
            else:
                self._write(errors, sink.set_zone_xy, zone_id, xy.x, xy.y, xy.brightness)

        elif isinstance(value, Brightness):
            level = value.clamped().level
            zone_ids = self.layout.ids if group else [zone_id]
            for zid in zone_ids:
                self._write(errors, sink.set_zone_brightness, zid, level)

        else:
            raise TypeError(f"Unsupported frame value {type(value).__name__}")

    @staticmethod
    def _write(errors: List[SinkError], method, *args) -> None:
        try:
            method(*args)
        except SinkError as e:
            errors.append(e)

    # ============================================================
    # Internals
    # ============================================================

    def _cancel_timers(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()

    def _notify_stopped(self, state: EffectState, reason: StopReason) -> None:
        if self.on_stopped is not None:
            self.on_stopped(state.effect_id, reason)
