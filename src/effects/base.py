"""
Base Effect Class

All effects inherit from BaseEffect. One instance = ONE run: the scheduler
creates a fresh instance on every start, so any mutable state an effect keeps
between ticks (trail brightness, toggle flags, chase position) dies with the
run.
"""

import math
import random
from dataclasses import dataclass, field
from typing import ClassVar, List, Mapping, Optional, Sequence, Tuple, Type

from effects.params import EffectParams
from engine.frame import Frame, FrameValue
from models.color import Color
from models.enums import EffectID
from models.palette import PALETTE
from models.segments import SegmentLayout

FinalFrames = List[Tuple[float, Frame]]


@dataclass
class EffectContext:
    """
    Everything an effect may read besides its own params

    - layout: segment layout (count and center come from here)
    - rng: shared random source (seeded from engine.random_seed)
    - palette / palette_order: named colors for parsing and random picks
    - tick_interval_ms, final_delay_ms: engine timing
    """
    layout: SegmentLayout = field(default_factory=SegmentLayout)
    rng: random.Random = field(default_factory=random.Random)
    palette: Mapping[str, Color] = field(default_factory=lambda: dict(PALETTE))
    palette_order: Sequence[str] = ()
    tick_interval_ms: float = 16
    final_delay_ms: float = 200

    @property
    def color_names(self) -> List[str]:
        """Palette names in sampling order"""
        return list(self.palette_order) or list(self.palette.keys())


class BaseEffect:
    """
    Base class for all effects

    Subclasses either:
        implement segment(elapsed_ms, index, count) -> value | None
            (per-segment effects, evaluated in ascending index order)
        or override render(elapsed_ms) -> Frame
            (whole-group effects, layered frames, stateful steppers)

    Termination:
        is_complete(elapsed_ms) is checked before every tick, tick #0 included;
        when it returns True the scheduler stops and stages final_frames().
    """

    ID: ClassVar[EffectID]
    Params: ClassVar[Type[EffectParams]] = EffectParams

    # One-shot effects render tick #0 and go idle
    ONE_SHOT: ClassVar[bool] = False

    def __init__(self, params: EffectParams, context: EffectContext):
        self.params = params
        self.context = context
        self.count = context.layout.count()

        seed = getattr(params, "seed", None)
        self.rng = random.Random(seed) if seed is not None else context.rng

    # ------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------

    def render(self, elapsed_ms: float) -> Frame:
        frame = Frame()
        for index in range(self.count):
            value = self.segment(elapsed_ms, index, self.count)
            if value is not None:
                frame.set(index, value)
        return frame

    def segment(self, elapsed_ms: float, index: int, count: int) -> Optional[FrameValue]:
        raise NotImplementedError(f"{type(self).__name__} must implement segment() or render()")

    # ------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------

    def is_complete(self, elapsed_ms: float) -> bool:
        return False

    def final_frames(self) -> FinalFrames:
        """(delay_ms, frame) pairs staged after the effect stops; delay 0 = immediately"""
        return []

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    @property
    def center(self) -> float:
        return (self.count - 1) / 2

    def position(self, index: int) -> float:
        """Index mapped to 0..1 across the layout"""
        return index / max(1, self.count - 1)

    @staticmethod
    def phase(elapsed_ms: float, period_ms: float) -> float:
        """Position within the current period, 0 <= phase < 1"""
        return (elapsed_ms % period_ms) / period_ms

    @classmethod
    def describe(cls) -> dict:
        """Catalog entry: id, one-shot flag, parameter defaults"""
        doc = (cls.__doc__ or "").strip()
        return {
            "id": cls.ID.name,
            "one_shot": cls.ONE_SHOT,
            "description": doc.splitlines()[0] if doc else "",
            "parameters": sorted(cls.Params.model_fields.keys()),
        }


class BoundedEffect(BaseEffect):
    """Time-bounded effect: complete once elapsed passes params.duration"""

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms > self.params.duration

    def progress(self, elapsed_ms: float) -> float:
        return min(1.0, elapsed_ms / self.params.duration)


class PeriodicEffect(BaseEffect):
    """Phase-driven effect, optionally bounded by params.run_time"""

    # Whether hitting run_time blanks the zones
    CLEAR_ON_END: ClassVar[bool] = False

    def is_complete(self, elapsed_ms: float) -> bool:
        run_time = self.params.run_time
        return run_time > 0 and elapsed_ms > run_time

    def final_frames(self) -> FinalFrames:
        if self.CLEAR_ON_END:
            return [(0, Frame.cleared())]
        return []


class SteppedEffect(BaseEffect):
    """
    Event-stepped effect

    Advances step = floor(elapsed / step_ms) and only writes when the step
    index increases. Starts before step 0 so tick #0 writes step 0.
    """

    def __init__(self, params: EffectParams, context: EffectContext):
        super().__init__(params, context)
        self._step = -1

    @property
    def step_ms(self) -> float:
        raise NotImplementedError

    def render(self, elapsed_ms: float) -> Frame:
        step = math.floor(elapsed_ms / self.step_ms)
        if step <= self._step:
            return Frame()
        self._step = step
        return self.step_frame(step)

    def step_frame(self, step: int) -> Frame:
        raise NotImplementedError
