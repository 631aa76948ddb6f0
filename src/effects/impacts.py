"""
Impact effects

Short bounded effects for game style events. Unless noted they leave
their last frame on the device when they end.
"""

import math
from typing import List, Optional

from effects.base import BoundedEffect, EffectContext, FinalFrames
from effects.params import (
    DoubleStrikeParams,
    EnergyBurstParams,
    IceShatterParams,
    LightningParams,
    MeteorShowerParams,
    ShockwaveParams,
    SpiralVortexParams,
    TimedParams,
    TimeRewindParams,
)
from engine.frame import Frame
from models.color import Color
from models.enums import EffectID
from utils.colors import interpolate

ELECTRIC_BLUE = Color(125, 249, 255)
TOXIC_GREEN = Color(80, 200, 120)
ICE_BLUE = Color(176, 224, 230)
DEEP_BLUE = Color(0, 0, 139)


def strike_intensity(progress: float) -> float:
    """Fast attack over the first 30%, linear decay over the rest"""
    if progress < 0.3:
        return progress / 0.3
    return 1 - (progress - 0.3) / 0.7


class MeteorShowerEffect(BoundedEffect):
    """Cascading bright flashes with a dim tail, one meteor every 500 ms"""

    ID = EffectID.METEOR_SHOWER
    Params = MeteorShowerParams

    CYCLE_MS = 500

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        progress = self.phase(elapsed_ms, self.CYCLE_MS)
        seg_phase = (progress + index * 0.3) % 1

        if seg_phase < 0.2:
            intensity = 1 - seg_phase / 0.2
            color = self.params.color1 if index % 2 == 0 else self.params.color2
            return color.scaled(intensity)

        fade = (seg_phase - 0.2) / 0.8
        return self.params.color2.scaled(max(0.0, 0.3 * (1 - fade)))


class DoubleStrikeEffect(BoundedEffect):
    """Two hits; the second one is redder"""

    ID = EffectID.DOUBLE_STRIKE
    Params = DoubleStrikeParams

    def render(self, elapsed_ms: float) -> Frame:
        color = self.params.color
        strike_time = self.params.duration / 2

        if elapsed_ms < strike_time:
            return Frame.filled(color.scaled(strike_intensity(elapsed_ms / strike_time)))

        intensity = strike_intensity((elapsed_ms - strike_time) / strike_time)
        return Frame.filled(Color.from_rgb(
            min(255, color.r * 1.2) * intensity,
            color.g * 0.9 * intensity,
            color.b * 0.9 * intensity,
        ))


class TimeRewindEffect(BoundedEffect):
    """Color progression running backwards through a wobbling time base"""

    ID = EffectID.TIME_REWIND
    Params = TimeRewindParams

    def render(self, elapsed_ms: float) -> Frame:
        progress = elapsed_ms / self.params.duration
        distorted = math.sin(progress * math.pi * 4) * 0.3 + progress
        reverse = 1 - (distorted % 1)
        color = interpolate(self.params.color1, self.params.color2, reverse)
        flicker = math.sin(elapsed_ms * 0.02) * 0.2 + 0.8

        frame = Frame()
        for index in range(self.count):
            seg_phase = (reverse + index * 0.2) % 1
            frame.set(index, color.scaled(flicker * (0.5 + seg_phase * 0.5)))
        return frame


class ShockwaveEffect(BoundedEffect):
    """Intensity peak travelling across the segments, fading as it goes"""

    ID = EffectID.SHOCKWAVE
    Params = ShockwaveParams

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        progress = elapsed_ms / self.params.duration
        wave_position = progress * (count + 1)
        distance = abs(index - wave_position)

        intensity = 0.0
        if distance < 1:
            intensity = (1 - distance) * (1 - progress)
        return self.params.color.scaled(intensity)


class EnergyBurstEffect(BoundedEffect):
    """Overdriven flash, short hold, fast fade"""

    ID = EffectID.ENERGY_BURST
    Params = EnergyBurstParams

    def render(self, elapsed_ms: float) -> Frame:
        progress = elapsed_ms / self.params.duration
        if progress < 0.1:
            intensity = 1.0
        elif progress < 0.3:
            intensity = 0.9
        else:
            intensity = max(0.0, 1 - ((progress - 0.3) / 0.7) * 1.5)

        boost = 1.3 if progress < 0.1 else 1.0
        color = self.params.color
        return Frame.filled(Color.from_rgb(
            min(255, color.r * intensity * boost),
            min(255, color.g * intensity * boost),
            min(255, color.b * intensity * boost),
        ))


class SpiralVortexEffect(BoundedEffect):
    """Two colors rotating around the segments three times per run"""

    ID = EffectID.SPIRAL_VORTEX
    Params = SpiralVortexParams

    ROTATIONS = 3

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        rotation = (elapsed_ms / self.params.duration) * self.ROTATIONS * math.pi * 2
        angle = rotation + index * math.pi * 2 / count
        intensity = (math.sin(angle) + 1) / 2

        depth = math.sin(elapsed_ms * 0.003) * 0.3 + 0.7
        return interpolate(self.params.color1, self.params.color2, intensity).scaled(depth)


class LightningEffect(BoundedEffect):
    """White strike, dimmer second flash, flickering electric blue afterglow"""

    ID = EffectID.LIGHTNING
    Params = LightningParams

    def render(self, elapsed_ms: float) -> Frame:
        progress = elapsed_ms / self.params.duration

        if progress < 0.05:
            return Frame.filled(Color.white())
        if progress < 0.15:
            return Frame.filled(Color.white().scaled(0.7))

        glow = max(0.0, 1 - (progress - 0.15) / 0.85)
        flicker = 1.2 if self.rng.random() > 0.7 else 1.0
        return Frame.filled(ELECTRIC_BLUE.scaled(glow * flicker))


class PoisonDripEffect(BoundedEffect):
    """Toxic green dripping to black, each segment 15% later than the previous"""

    ID = EffectID.POISON_DRIP
    Params = TimedParams

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        progress = elapsed_ms / self.params.duration
        delay = index * 0.15
        if delay < 1:
            seg_progress = max(0.0, min(1.0, (progress - delay) / (1 - delay)))
        else:
            seg_progress = 0.0

        intensity = 1 - seg_progress
        bubble = math.sin((elapsed_ms + index * 500) * 0.005) * 0.2 + 0.8
        level = intensity * bubble
        return Color.from_rgb(
            TOXIC_GREEN.r * level * 0.3,
            TOXIC_GREEN.g * level,
            TOXIC_GREEN.b * level * 0.1,
        )

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.cleared())]


class IceShatterEffect(BoundedEffect):
    """
    Freeze to ice blue, then shatter into deep blue fragments

    Each segment's fragment delay (0-0.2 of the shatter phase) is drawn once
    when the shatter begins; fragments flicker randomly while they break.
    """

    ID = EffectID.ICE_SHATTER
    Params = IceShatterParams

    FREEZE_END = 0.3

    def __init__(self, params, context: EffectContext):
        super().__init__(params, context)
        self.fragment_delays: Optional[List[float]] = None

    def render(self, elapsed_ms: float) -> Frame:
        progress = elapsed_ms / self.params.duration

        if progress < self.FREEZE_END:
            return Frame.filled(ICE_BLUE.scaled(min(1.0, progress / 0.1)))

        if self.fragment_delays is None:
            self.fragment_delays = [self.rng.random() * 0.2 for _ in range(self.count)]

        shatter = (progress - self.FREEZE_END) / (1 - self.FREEZE_END)
        frame = Frame()
        for index, delay in enumerate(self.fragment_delays):
            fragment = max(0.0, min(1.0, (shatter - delay) / (1 - delay)))
            color = interpolate(ICE_BLUE, DEEP_BLUE, fragment)
            flicker = self.rng.random() if fragment < 0.1 else 1.0

            frame.set(index, Color.from_rgb(
                color.r * (1 - fragment * 0.5) * flicker,
                color.g * (1 - fragment * 0.5) * flicker,
                color.b * (1 - fragment * 0.3) * flicker,
            ))
        return frame
