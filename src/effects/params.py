"""
Effect parameter schemas

One pydantic model per effect. Every field is optional with a documented
default; invalid values (non-positive durations, out of range percentages,
unknown color names, empty color lists) fail validation before the
scheduler touches the running effect.

Colors accept anything Color.parse() understands. Palette names resolve
against the palette passed in the validation context:
    GradientWaveParams.model_validate(data, context={"palette": palette})
"""

from typing import Annotated, Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, PlainValidator, ValidationInfo

from models.color import Color
from models.palette import PALETTE


def _parse_color(value: Any, info: ValidationInfo) -> Color:
    palette = (info.context or {}).get("palette") or PALETTE
    return Color.parse(value, palette)


ColorField = Annotated[
    Color,
    PlainValidator(_parse_color),
    PlainSerializer(lambda c: c.to_dict(), return_type=dict),
]

Duration = Annotated[float, Field(gt=0, description="Milliseconds")]
RunTime = Annotated[float, Field(ge=0, description="Milliseconds, 0 = run until stopped")]


class EffectParams(BaseModel):
    """Base for all effect parameter models"""
    model_config = ConfigDict(extra="forbid", frozen=True)


class RandomizedParams(EffectParams):
    """Effects drawing random numbers; seed makes a run reproducible"""
    seed: Optional[int] = Field(None, description="Seed for this run's random source")


# ============================================================
# One-shot
# ============================================================

class SolidParams(EffectParams):
    color: ColorField = Color(255, 255, 255)


class PercentageBarParams(EffectParams):
    percentage: float = Field(100, ge=0, le=100)


# ============================================================
# Periodic
# ============================================================

class GradientWaveParams(EffectParams):
    color1: ColorField = Color(255, 0, 0)
    color2: ColorField = Color(0, 0, 255)
    duration: Duration = 2000
    run_time: RunTime = 0


class RippleParams(EffectParams):
    color: ColorField = Color(0, 255, 255)
    duration: Duration = 1000
    run_time: RunTime = 0


class BreathingParams(EffectParams):
    color1: ColorField = Color(128, 0, 255)
    color2: ColorField = Color(0, 255, 255)
    period: Duration = 3000
    run_time: RunTime = 0


class ChaseParams(EffectParams):
    color: ColorField = Color(255, 0, 0)
    speed: float = Field(500, gt=0, description="Position advance per tick, in 1/1000 segment")
    run_time: RunTime = 0


class RainbowWaveParams(EffectParams):
    speed: Duration = 2000
    hue_step: float = 0.25
    run_time: RunTime = 0


class PulseWaveParams(EffectParams):
    color1: ColorField = Color(255, 0, 0)
    color2: ColorField = Color(0, 0, 255)
    speed: Duration = 1000
    run_time: RunTime = 0


class BounceParams(EffectParams):
    color1: ColorField = Color(255, 0, 0)
    color2: ColorField = Color(0, 0, 255)
    speed: Duration = 2000
    run_time: RunTime = 0


class PulsingBounceParams(EffectParams):
    color1: ColorField = Color(255, 0, 0)
    color2: ColorField = Color(0, 0, 255)
    bounce_speed: Duration = 2000
    pulse_speed: Duration = 500
    run_time: RunTime = 0


# ============================================================
# Countdowns
# ============================================================

class CountdownPulseParams(EffectParams):
    total_seconds: float = Field(10, gt=0)
    start_color: ColorField = Color(150, 0, 0)
    end_color: ColorField = Color(0, 255, 50)


class SegmentedCountdownParams(EffectParams):
    total_seconds: float = Field(10, gt=0)
    segment_colors: List[Tuple[ColorField, ColorField]] = Field(
        default_factory=lambda: [
            (Color(255, 0, 0), Color(0, 255, 0)),
            (Color(128, 0, 255), Color(0, 255, 255)),
            (Color(0, 0, 255), Color(255, 255, 0)),
        ],
        min_length=1,
        description="(start, end) pair per segment, cycled when there are more segments",
    )


# ============================================================
# Flashes
# ============================================================

class FlashFadeParams(EffectParams):
    color: ColorField = Color(255, 255, 255)
    duration: Duration = 500


class FadeToBlackParams(EffectParams):
    color: ColorField = Color(100, 0, 0)
    duration: Duration = 960


class AcceleratingPulseParams(EffectParams):
    color: ColorField = Color(255, 0, 0)
    pulse_count: int = Field(5, ge=1)
    start_speed: Duration = 800
    end_speed: Duration = 100


class StrobeParams(EffectParams):
    color: ColorField = Color(255, 255, 255)
    duration: Duration = 1000
    strobe_speed: Duration = 50


class FlashingSequenceParams(EffectParams):
    colors: List[ColorField] = Field(
        default_factory=lambda: [Color(255, 0, 0), Color(255, 255, 255), Color(0, 0, 255), Color(255, 255, 255)],
        min_length=1,
    )
    flash_count: int = Field(6, ge=1)
    flash_speed: Duration = 150


class FlagFlashParams(EffectParams):
    flash_count: int = Field(6, ge=1)
    flash_speed: Duration = 150


class RandomColorSequenceParams(RandomizedParams):
    duration: Duration = 3000


# ============================================================
# Alpha blended
# ============================================================

class ExplosionFlashParams(EffectParams):
    base_color: ColorField = Color(255, 165, 0)
    flash_color: ColorField = Color(255, 255, 255)
    duration: Duration = 1500
    fade_ms: Duration = 480


class ExplosionRippleParams(EffectParams):
    base_color: ColorField = Color(255, 165, 0)
    flash_color: ColorField = Color(255, 255, 255)
    duration: Duration = 2000


class MultiLayerParams(EffectParams):
    duration: Duration = 3000


# ============================================================
# Native color spaces
# ============================================================

class TimedParams(EffectParams):
    duration: Duration = 3000


class CandlelightParams(RandomizedParams):
    duration: Duration = 3000


class XYRainbowParams(EffectParams):
    duration: Duration = 3000
    cycle_ms: Duration = 1000


class BrightnessWaveParams(EffectParams):
    base_color: ColorField = Color(128, 0, 255)
    duration: Duration = 3000


class PoliceFlashProParams(EffectParams):
    duration: Duration = 3000
    flash_speed: Duration = 150


# ============================================================
# Impacts
# ============================================================

class MeteorShowerParams(EffectParams):
    color1: ColorField = Color(255, 255, 255)
    color2: ColorField = Color(135, 206, 235)
    duration: Duration = 2500


class TimeRewindParams(EffectParams):
    color1: ColorField = Color(0, 0, 255)
    color2: ColorField = Color(128, 0, 255)
    duration: Duration = 3000


class SpiralVortexParams(EffectParams):
    color1: ColorField = Color(128, 0, 255)
    color2: ColorField = Color(0, 255, 255)
    duration: Duration = 2000


class DoubleStrikeParams(EffectParams):
    color: ColorField = Color(255, 0, 0)
    duration: Duration = 500


class ShockwaveParams(EffectParams):
    color: ColorField = Color(0, 255, 255)
    duration: Duration = 1500


class EnergyBurstParams(EffectParams):
    color: ColorField = Color(255, 165, 0)
    duration: Duration = 800


class LightningParams(RandomizedParams):
    duration: Duration = 1000


class IceShatterParams(RandomizedParams):
    duration: Duration = 1500
