"""
Countdown effects

Pulse faster as time runs out while the color moves start -> mid -> end
over the remaining-time thirds. When time is up: white flash, then the
end color after the engine's final delay (200 ms by default).
"""

import math

from effects.base import BaseEffect, FinalFrames
from effects.params import CountdownPulseParams, SegmentedCountdownParams
from engine.frame import Frame
from models.color import Color
from models.enums import EffectID
from utils.colors import interpolate

COUNTDOWN_MID = Color(255, 200, 0)


def countdown_color(start: Color, end: Color, time_left: float) -> Color:
    """
    Color for the remaining fraction of time

    > 0.66       start color
    0.33 - 0.66  start -> mid
    < 0.33       mid -> end
    """
    if time_left > 0.66:
        return start
    if time_left > 0.33:
        return interpolate(start, COUNTDOWN_MID, (0.66 - time_left) * 3)
    return interpolate(COUNTDOWN_MID, end, (0.33 - time_left) * 3)


def pulse_period(time_left: float) -> float:
    """Pulse period in ms: 2200 at the start, 200 at zero"""
    return 2000 * time_left + 200


class _CountdownBase(BaseEffect):

    @property
    def total_ms(self) -> float:
        return self.params.total_seconds * 1000

    def time_left(self, elapsed_ms: float) -> float:
        return 1 - elapsed_ms / self.total_ms

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms > self.total_ms


class CountdownPulseEffect(_CountdownBase):
    """All zones pulse together, accelerating toward the end"""

    ID = EffectID.COUNTDOWN_PULSE
    Params = CountdownPulseParams

    def render(self, elapsed_ms: float) -> Frame:
        time_left = self.time_left(elapsed_ms)
        period = pulse_period(time_left)
        brightness = 0.2 + 0.8 * math.sin(self.phase(elapsed_ms, period) * math.pi)

        color = countdown_color(self.params.start_color, self.params.end_color, time_left)
        return Frame.filled(color.scaled(brightness))

    def final_frames(self) -> FinalFrames:
        return [
            (0, Frame.filled(Color.white())),
            (self.context.final_delay_ms, Frame.filled(self.params.end_color)),
        ]


class SegmentedCountdownEffect(_CountdownBase):
    """
    Every segment counts down with its own (start, end) colors

    Pulses are phase shifted by index * 0.33 * pi. Color pairs repeat when
    there are more segments than pairs.
    """

    ID = EffectID.SEGMENTED_COUNTDOWN
    Params = SegmentedCountdownParams

    def colors_for(self, index: int):
        pairs = self.params.segment_colors
        return pairs[index % len(pairs)]

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        time_left = self.time_left(elapsed_ms)
        period = pulse_period(time_left)
        phase = self.phase(elapsed_ms, period) + index * 0.33 * math.pi
        brightness = 0.2 + 0.8 * math.sin(phase * math.pi)

        start, end = self.colors_for(index)
        return countdown_color(start, end, time_left).scaled(brightness)

    def final_frames(self) -> FinalFrames:
        settle = Frame()
        for index in range(self.count):
            settle.set(index, self.colors_for(index)[1])
        return [
            (0, Frame.filled(Color.white())),
            (self.context.final_delay_ms, settle),
        ]
