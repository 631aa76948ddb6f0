"""
Alpha blended effects

Each frame fills the base layer first, then stages translucent overlays
on top. The device blends an alpha write with whatever is staged for the
zone in the same frame.
"""

import math

from effects.base import BaseEffect, FinalFrames
from effects.params import ExplosionFlashParams, ExplosionRippleParams, MultiLayerParams
from engine.frame import Frame
from models.color import Color
from models.enums import EffectID

MULTI_LAYER_BASE = Color(255, 165, 0)
MULTI_LAYER_OVERLAY = Color(0, 0, 255)
SWEEP_PERIOD_MS = 1500
SWEEP_WIDTH = 0.3


class ExplosionFlashEffect(BaseEffect):
    """Flash over the base color, fading with squared decay"""

    ID = EffectID.EXPLOSION_FLASH
    Params = ExplosionFlashParams

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms >= min(self.params.duration, self.params.fade_ms)

    def render(self, elapsed_ms: float) -> Frame:
        alpha = max(0.0, 1.0 - elapsed_ms / self.params.fade_ms) ** 2
        return (
            Frame()
            .fill(self.params.base_color)
            .fill(self.params.flash_color.with_alpha(alpha))
        )

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.filled(self.params.base_color))]


class ExplosionRippleEffect(BaseEffect):
    """
    Flash ring expanding from the center

    The ring crosses one segment every duration/4 ms and the whole flash
    decays with (1 - progress)^2.
    """

    ID = EffectID.EXPLOSION_RIPPLE
    Params = ExplosionRippleParams

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms > self.params.duration

    def render(self, elapsed_ms: float) -> Frame:
        p = self.params
        wave_position = elapsed_ms / (p.duration / 4)
        time_decay = (1 - elapsed_ms / p.duration) ** 2

        frame = Frame().fill(p.base_color)
        for index in range(self.count):
            distance = abs(index - self.center)
            intensity = max(0.0, 1 - abs(wave_position - distance))
            alpha = intensity * time_decay
            if alpha > 0.01:
                frame.set(index, p.flash_color.with_alpha(alpha))
        return frame

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.filled(self.params.base_color))]


class MultiLayerEffect(BaseEffect):
    """
    Three layers: orange base, pulsing blue overlay (up to 50%) and a white
    highlight sweeping across the segments every 1.5 s
    """

    ID = EffectID.MULTI_LAYER
    Params = MultiLayerParams

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms > self.params.duration

    def render(self, elapsed_ms: float) -> Frame:
        pulse = math.sin(elapsed_ms * 0.003) * 0.5 + 0.5
        overlay = MULTI_LAYER_OVERLAY.with_alpha(pulse * 0.5)
        sweep = self.phase(elapsed_ms, SWEEP_PERIOD_MS)

        frame = Frame().fill(MULTI_LAYER_BASE)
        for index in range(self.count):
            distance = abs(index / self.count - sweep)
            if distance < SWEEP_WIDTH:
                alpha = (SWEEP_WIDTH - distance) / SWEEP_WIDTH * 0.7
                frame.set(index, Color.white().with_alpha(alpha))
            else:
                frame.set(index, overlay)
        return frame

    def final_frames(self) -> FinalFrames:
        return [(0, Frame.filled(MULTI_LAYER_BASE))]
