"""
One-shot effects: solid fill and level bar

Both render a single frame at start and leave it on the device.
"""

from effects.base import BaseEffect
from effects.params import PercentageBarParams, SolidParams
from engine.frame import Frame
from models.color import Color
from models.enums import EffectID
from utils.colors import interpolate

# Level bar bands, low to high
BAR_RED = Color(255, 0, 0)
BAR_ORANGE = Color(255, 100, 0)
BAR_AMBER = Color(255, 200, 0)
BAR_LIME = Color(50, 255, 0)
BAR_GREEN = Color(0, 255, 50)


class SolidEffect(BaseEffect):
    """Fill every zone with one color"""

    ID = EffectID.SOLID
    Params = SolidParams
    ONE_SHOT = True

    def render(self, elapsed_ms: float) -> Frame:
        return Frame.filled(self.params.color)


class PercentageBarEffect(BaseEffect):
    """
    Level bar: red (empty) through orange, amber and lime to bright green (full)

    Each segment shows the level shifted by (index - center) * 0.1, so the
    bar reads as a gradient even at a constant level.
    """

    ID = EffectID.PERCENTAGE_BAR
    Params = PercentageBarParams
    ONE_SHOT = True

    def segment(self, elapsed_ms: float, index: int, count: int) -> Color:
        level = self.params.percentage / 100
        return bar_color(max(0.0, min(1.0, level + (index - self.center) * 0.1)))


def bar_color(level: float) -> Color:
    """Color of the level bar at 0..1"""
    if level > 0.8:
        return interpolate(BAR_LIME, BAR_GREEN, (level - 0.8) * 5)
    if level > 0.6:
        return interpolate(BAR_AMBER, BAR_LIME, (level - 0.6) * 5)
    if level > 0.4:
        return interpolate(BAR_ORANGE, BAR_AMBER, (level - 0.4) * 5)
    if level > 0.2:
        return interpolate(BAR_RED, BAR_ORANGE, (level - 0.2) * 5)
    return BAR_RED
