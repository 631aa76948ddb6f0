"""
Periodic, phase-driven effects

phase = (elapsed % period) / period, offset per segment to make waves,
chases and bounces. They run until stopped unless run_time is set.
"""

import math
from typing import List

from effects.base import EffectContext, PeriodicEffect
from effects.params import (
    BounceParams,
    BreathingParams,
    ChaseParams,
    GradientWaveParams,
    PulseWaveParams,
    PulsingBounceParams,
    RainbowWaveParams,
    RippleParams,
)
from engine.frame import Frame
from models.color import Color
from models.enums import EffectID
from utils.colors import hsv_to_rgb, interpolate


class GradientWaveEffect(PeriodicEffect):
    """Two-color gradient scrolling across the segments"""

    ID = EffectID.GRADIENT_WAVE
    Params = GradientWaveParams

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        phase = self.phase(elapsed_ms, self.params.duration)
        wave_pos = (self.position(index) + phase) % 1
        return interpolate(self.params.color1, self.params.color2, wave_pos)


class RippleEffect(PeriodicEffect):
    """Brightness ring travelling outward from the center"""

    ID = EffectID.RIPPLE
    Params = RippleParams

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        phase = self.phase(elapsed_ms, self.params.duration)
        center = self.center
        distance = abs(index - center) / center if center else 0.0
        brightness = max(0.0, 1 - abs(phase - distance))
        return self.params.color.scaled(brightness)


class BreathingEffect(PeriodicEffect):
    """Static gradient with sinusoidal brightness between 30% and 100%"""

    ID = EffectID.BREATHING
    Params = BreathingParams

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        phase = self.phase(elapsed_ms, self.params.period)
        brightness = 0.3 + 0.7 * (math.sin(phase * math.pi * 2) * 0.5 + 0.5)
        color = interpolate(self.params.color1, self.params.color2, self.position(index))
        return color.scaled(brightness)


class ChaseEffect(PeriodicEffect):
    """
    Bright spot chasing around the segments

    Position advances by speed/1000 segments per tick and wraps, so the
    distance to the spot is measured around the ring.
    """

    ID = EffectID.CHASE
    Params = ChaseParams

    def __init__(self, params, context: EffectContext):
        super().__init__(params, context)
        self.position_value = 0.0

    def render(self, elapsed_ms: float) -> Frame:
        frame = Frame()
        for index in range(self.count):
            distance = wrap_distance(index, self.position_value, self.count)
            frame.set(index, self.params.color.scaled(max(0.0, 1 - distance * 0.4)))

        self.position_value = (self.position_value + self.params.speed / 1000) % self.count
        return frame


class RainbowWaveEffect(PeriodicEffect):
    """Full hue sweep with a fixed hue step between segments"""

    ID = EffectID.RAINBOW_WAVE
    Params = RainbowWaveParams

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        hue_shift = self.phase(elapsed_ms, self.params.speed)
        return hsv_to_rgb((hue_shift + index * self.params.hue_step) % 1, 1, 1)


class PulseWaveEffect(PeriodicEffect):
    """Two-color pulse with squared sine easing, staggered per segment"""

    ID = EffectID.PULSE_WAVE
    Params = PulseWaveParams

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        phase = self.phase(elapsed_ms, self.params.speed)
        seg_phase = (phase + index * 0.25) % 1
        factor = math.sin(seg_phase * math.pi) ** 2
        return interpolate(self.params.color1, self.params.color2, factor)


# ============================================================
# Bounce family
# ============================================================

def wrap_distance(index: int, position: float, count: int) -> float:
    """Distance between index and position on a ring of count segments"""
    return min(
        abs(index - position),
        abs(index - position + count),
        abs(index - position - count),
    )


def bounce_segment(cycle_position: float, count: int) -> int:
    """
    Segment lit by a wave bouncing end to end

    First half of the cycle walks 0 -> N-1, second half walks back.
    """
    steps = count * 2
    if cycle_position < 0.5:
        return math.floor(cycle_position * steps) % count
    return count - 1 - math.floor((cycle_position - 0.5) * steps) % count


def mirrored_bounce_segment(cycle_position: float, count: int) -> int:
    """Bounce travelling the opposite way"""
    steps = count * 2
    if cycle_position < 0.5:
        return count - 1 - math.floor(cycle_position * steps) % count
    return math.floor((cycle_position - 0.5) * steps) % count


class BouncingWaveEffect(PeriodicEffect):
    """Single lit segment bouncing end to end, colored by its position"""

    ID = EffectID.BOUNCING_WAVE
    Params = BounceParams
    CLEAR_ON_END = True

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        active = bounce_segment(self.phase(elapsed_ms, self.params.speed), count)
        if index != active:
            return Color.black()
        return interpolate(self.params.color1, self.params.color2, self.position(index))


class PulsingBounceEffect(PeriodicEffect):
    """Bouncing segment whose brightness pulses independently"""

    ID = EffectID.PULSING_BOUNCE
    Params = PulsingBounceParams
    CLEAR_ON_END = True

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        active = bounce_segment(self.phase(elapsed_ms, self.params.bounce_speed), count)
        if index != active:
            return Color.black()

        pulse_phase = self.phase(elapsed_ms, self.params.pulse_speed)
        brightness = 0.5 + 0.5 * math.sin(pulse_phase * math.pi * 2)
        color = interpolate(self.params.color1, self.params.color2, self.position(index))
        return color.scaled(brightness)


class FadeBounceEffect(PeriodicEffect):
    """Bouncing segment leaving a trail that decays by 15% per tick"""

    ID = EffectID.FADE_BOUNCE
    Params = BounceParams
    CLEAR_ON_END = True

    TRAIL_DECAY = 0.85

    def __init__(self, params, context: EffectContext):
        super().__init__(params, context)
        self.trail: List[float] = [0.0] * self.count

    def render(self, elapsed_ms: float) -> Frame:
        active = bounce_segment(self.phase(elapsed_ms, self.params.speed), self.count)

        frame = Frame()
        for index in range(self.count):
            if index == active:
                self.trail[index] = 1.0
            else:
                self.trail[index] *= self.TRAIL_DECAY

            color = interpolate(self.params.color1, self.params.color2, self.position(index))
            frame.set(index, color.scaled(self.trail[index]))
        return frame


class DoubleBounceEffect(PeriodicEffect):
    """
    Two waves bouncing in opposite directions

    The mirrored wave shows color2 at 80%; where the waves cross it takes
    color2 at full brightness.
    """

    ID = EffectID.DOUBLE_BOUNCE
    Params = BounceParams
    CLEAR_ON_END = True

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        cycle_position = self.phase(elapsed_ms, self.params.speed)
        on_first = index == bounce_segment(cycle_position, count)
        on_second = index == mirrored_bounce_segment(cycle_position, count)

        if on_second:
            return self.params.color2.scaled(1.0 if on_first else 0.8)
        if on_first:
            return self.params.color1
        return Color.black()
