"""
Flash effects

Short bounded fades and event-stepped flash sequences. All of them end
with every zone cleared.
"""

import math
from typing import List

from effects.base import BaseEffect, EffectContext, FinalFrames, SteppedEffect
from effects.params import (
    AcceleratingPulseParams,
    FadeToBlackParams,
    FlagFlashParams,
    FlashFadeParams,
    FlashingSequenceParams,
    RandomColorSequenceParams,
    StrobeParams,
)
from engine.frame import Frame
from models.color import Color
from models.enums import EffectID, LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.EFFECT)

POLICE_COLORS = [Color(255, 0, 0), Color(255, 255, 255), Color(0, 0, 255), Color(255, 255, 255)]
MEXICAN_COLORS = [Color(255, 0, 0), Color(255, 255, 255), Color(80, 200, 120), Color(255, 255, 255)]

RANDOM_FLASH_SPEED = 150


class _ClearingEffect(BaseEffect):
    """Effects that blank every zone when they end"""

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.cleared())]


# ============================================================
# Bounded fades
# ============================================================

class FlashFadeEffect(_ClearingEffect):
    """
    Flash that fades out with squared decay

    Higher segments fade 10% ahead of lower ones.
    """

    ID = EffectID.FLASH_FADE
    Params = FlashFadeParams

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms >= self.params.duration

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        factor = 1 - elapsed_ms / self.params.duration
        brightness = factor ** 2
        return self.params.color.scaled(max(0.0, brightness - index * 0.1))


class FadeToBlackEffect(_ClearingEffect):
    """Linear fade of every zone from color to black"""

    ID = EffectID.FADE_TO_BLACK
    Params = FadeToBlackParams

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms >= self.params.duration

    def render(self, elapsed_ms: float) -> Frame:
        factor = max(0.0, 1 - elapsed_ms / self.params.duration)
        return Frame.filled(self.params.color.scaled(factor))


# ============================================================
# Toggling
# ============================================================

class AcceleratingPulseEffect(_ClearingEffect):
    """
    On/off pulses that speed up

    Pulse k (0-based) stays on, then off, for
        start_speed * (end_speed / start_speed) ** (k / max(1, pulse_count - 1))
    ms. Tick #0 turns pulse 0 on; the run completes when the last pulse
    turns off.
    """

    ID = EffectID.ACCELERATING_PULSE
    Params = AcceleratingPulseParams

    def __init__(self, params, context: EffectContext):
        super().__init__(params, context)
        self.pulse = 0
        self.is_on = False
        self.last_toggle_ms = 0.0
        self.started = False
        self.done = False

    def pulse_speed(self, pulse: int) -> float:
        p = self.params
        progress = pulse / max(1, p.pulse_count - 1)
        return p.start_speed * math.pow(p.end_speed / p.start_speed, progress)

    def is_complete(self, elapsed_ms: float) -> bool:
        return self.done

    def render(self, elapsed_ms: float) -> Frame:
        if not self.started:
            self.started = True
            self.is_on = True
            self.last_toggle_ms = elapsed_ms
            return Frame.filled(self.params.color)

        if elapsed_ms - self.last_toggle_ms < self.pulse_speed(self.pulse):
            return Frame()

        self.last_toggle_ms = elapsed_ms
        if self.is_on:
            self.is_on = False
            if self.pulse >= self.params.pulse_count - 1:
                self.done = True
            return Frame.cleared()

        self.is_on = True
        self.pulse += 1
        return Frame.filled(self.params.color)


class StrobeEffect(_ClearingEffect, SteppedEffect):
    """Fixed rate strobe: on for even steps, off for odd ones; ends off"""

    ID = EffectID.STROBE
    Params = StrobeParams

    @property
    def step_ms(self) -> float:
        return self.params.strobe_speed

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms >= self.params.duration

    def step_frame(self, step: int) -> Frame:
        if step % 2 == 0:
            return Frame.filled(self.params.color)
        return Frame.cleared()


# ============================================================
# Color sequences
# ============================================================

class FlashingSequenceEffect(_ClearingEffect, SteppedEffect):
    """
    Flash through a list of colors, flash_count times

    Step n shows colors[n % len(colors)]; the run completes after
    flash_count * len(colors) steps.
    """

    ID = EffectID.FLASHING_SEQUENCE
    Params = FlashingSequenceParams

    @property
    def colors(self) -> List[Color]:
        return list(self.params.colors)

    @property
    def step_ms(self) -> float:
        return self.params.flash_speed

    def total_steps(self) -> int:
        return self.params.flash_count * len(self.colors)

    def is_complete(self, elapsed_ms: float) -> bool:
        return math.floor(elapsed_ms / self.step_ms) >= self.total_steps()

    def step_frame(self, step: int) -> Frame:
        colors = self.colors
        return Frame.filled(colors[step % len(colors)])


class PoliceFlashEffect(FlashingSequenceEffect):
    """Red, white, blue, white"""

    ID = EffectID.POLICE_FLASH
    Params = FlagFlashParams

    @property
    def colors(self) -> List[Color]:
        return POLICE_COLORS


class MexicanFlagEffect(FlashingSequenceEffect):
    """Red, white, emerald, white"""

    ID = EffectID.MEXICAN_FLAG
    Params = FlagFlashParams

    @property
    def colors(self) -> List[Color]:
        return MEXICAN_COLORS


class RandomColorSequenceEffect(FlashingSequenceEffect):
    """
    Flash 4-6 distinct palette colors picked at random

    flash_count = duration // (n * 150) so the run fits the duration.
    """

    ID = EffectID.RANDOM_COLOR_SEQUENCE
    Params = RandomColorSequenceParams

    def __init__(self, params, context: EffectContext):
        super().__init__(params, context)
        names = context.color_names
        length = min(self.rng.randint(4, 6), len(names))
        self.color_names = self.rng.sample(names, length)
        self._colors = [context.palette[name] for name in self.color_names]
        self.flash_count = int(params.duration // (length * RANDOM_FLASH_SPEED))

        log.info(
            "Random color sequence picked",
            colors=" -> ".join(self.color_names),
            flash_count=self.flash_count,
            duration=params.duration,
        )

    @property
    def colors(self) -> List[Color]:
        return self._colors

    @property
    def step_ms(self) -> float:
        return RANDOM_FLASH_SPEED

    def total_steps(self) -> int:
        return self.flash_count * len(self._colors)
