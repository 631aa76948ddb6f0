"""
Native color space effects

These drive the lights with color temperature, CIE xy or plain brightness
instead of RGB.
"""

import math
from typing import List, Tuple

from effects.base import BoundedEffect, EffectContext, FinalFrames, SteppedEffect
from effects.params import (
    BrightnessWaveParams,
    CandlelightParams,
    PoliceFlashProParams,
    TimedParams,
    XYRainbowParams,
)
from engine.frame import Frame, FrameValue
from models.commands import Brightness, ColorTemperature, XYColor
from models.enums import EffectID
from utils.colors import hsv_to_rgb

# Waypoints of the xy rainbow: red, orange, yellow, green, cyan, blue, purple
XY_WAYPOINTS: List[Tuple[float, float]] = [
    (0.640, 0.330),
    (0.450, 0.450),
    (0.400, 0.500),
    (0.300, 0.600),
    (0.150, 0.300),
    (0.150, 0.060),
    (0.280, 0.150),
]


class SunriseEffect(BoundedEffect):
    """Warm 500 mireds at 10% to daylight 153 mireds at full brightness"""

    ID = EffectID.SUNRISE
    Params = TimedParams

    START_CT = 500
    END_CT = 153

    def render(self, elapsed_ms: float) -> Frame:
        progress = elapsed_ms / self.params.duration
        brightness = 0.1 + 0.9 * progress ** 2
        ct = round(self.START_CT - (self.START_CT - self.END_CT) * progress)
        return Frame.filled(ColorTemperature(ct, brightness))

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.filled(ColorTemperature(self.END_CT, 1.0)))]


def day_night_point(progress: float) -> ColorTemperature:
    """Color temperature and brightness across morning, noon, evening, night"""
    if progress < 0.25:
        phase = progress * 4
        return ColorTemperature(round(400 - 150 * phase), 0.3 + 0.7 * phase)
    if progress < 0.5:
        phase = (progress - 0.25) * 4
        return ColorTemperature(round(250 - 97 * phase), 1.0)
    if progress < 0.75:
        phase = (progress - 0.5) * 4
        return ColorTemperature(round(153 + 217 * phase), 1.0 - 0.5 * phase)
    phase = (progress - 0.75) * 4
    return ColorTemperature(round(370 + 80 * phase), 0.5 - 0.3 * phase)


class DayNightEffect(BoundedEffect):
    """Full day in one run; ends on warm evening light"""

    ID = EffectID.DAY_NIGHT
    Params = TimedParams

    def render(self, elapsed_ms: float) -> Frame:
        return Frame.filled(day_night_point(elapsed_ms / self.params.duration))

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.filled(ColorTemperature(370, 0.3)))]


class CandlelightEffect(BoundedEffect):
    """
    Candle flicker per zone

    Brightness 0.6 +/- 0.15 clamped to [0.2, 1.0], color temperature
    450 +/- 25 mireds, redrawn every tick.
    """

    ID = EffectID.CANDLELIGHT
    Params = CandlelightParams

    BASE_CT = 450
    BASE_BRIGHTNESS = 0.6

    def segment(self, elapsed_ms: float, index: int, count: int) -> ColorTemperature:
        flicker = self.rng.random() * 0.3 - 0.15
        brightness = max(0.2, min(1.0, self.BASE_BRIGHTNESS + flicker))
        ct = self.BASE_CT + self.rng.random() * 50 - 25
        return ColorTemperature(ct, brightness)

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.cleared())]


class XYRainbowEffect(BoundedEffect):
    """Rainbow through CIE xy waypoints, segments offset by a third of a cycle"""

    ID = EffectID.XY_RAINBOW
    Params = XYRainbowParams

    def segment(self, elapsed_ms: float, index: int, count: int) -> XYColor:
        phase = self.phase(elapsed_ms, self.params.cycle_ms)
        seg_phase = (phase + index * 0.33) % 1

        scaled = seg_phase * len(XY_WAYPOINTS)
        current = math.floor(scaled) % len(XY_WAYPOINTS)
        following = (current + 1) % len(XY_WAYPOINTS)
        t = scaled % 1

        x0, y0 = XY_WAYPOINTS[current]
        x1, y1 = XY_WAYPOINTS[following]
        return XYColor(x0 + (x1 - x0) * t, y0 + (y1 - y0) * t, 1.0)

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.cleared())]


class BrightnessWaveEffect(BoundedEffect):
    """Fixed color with a sine brightness wave (0.2-1.0) running across zones"""

    ID = EffectID.BRIGHTNESS_WAVE
    Params = BrightnessWaveParams

    def render(self, elapsed_ms: float) -> Frame:
        frame = Frame.filled(self.params.base_color)
        for index in range(self.count):
            phase = elapsed_ms / 500 + index * math.pi / 2
            frame.set(index, Brightness(math.sin(phase) * 0.4 + 0.6))
        return frame

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.filled(self.params.base_color))]


class PoliceFlashProEffect(SteppedEffect):
    """
    Fixed checkpoint sequence in device native values

    red (hue 0), white (366 mireds), blue (hue 46920/65535), white,
    one step every flash_speed ms. Leaves the last step on the device.
    """

    ID = EffectID.POLICE_FLASH_PRO
    Params = PoliceFlashProParams

    WHITE_CT = 366

    def __init__(self, params, context: EffectContext):
        super().__init__(params, context)
        self.sequence: List[FrameValue] = [
            hsv_to_rgb(0, 1.0, 1.0),
            ColorTemperature(self.WHITE_CT, 1.0),
            hsv_to_rgb(46920 / 65535, 1.0, 1.0),
            ColorTemperature(self.WHITE_CT, 1.0),
        ]

    @property
    def step_ms(self) -> float:
        return self.params.flash_speed

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms > self.params.duration

    def step_frame(self, step: int) -> Frame:
        return Frame.filled(self.sequence[step % len(self.sequence)])
