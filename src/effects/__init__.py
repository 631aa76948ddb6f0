"""
Effect library

Closed catalog of effects keyed by EffectID. create_effect() resolves a
name, validates parameters against the effect's schema and builds a fresh
instance for one run.
"""

from typing import Any, Dict, List, Mapping, Optional, Type, Union

from pydantic import ValidationError

from effects.ambient import (
    BrightnessWaveEffect,
    CandlelightEffect,
    DayNightEffect,
    PoliceFlashProEffect,
    SunriseEffect,
    XYRainbowEffect,
)
from effects.base import BaseEffect, EffectContext
from effects.basic import PercentageBarEffect, SolidEffect
from effects.blends import ExplosionFlashEffect, ExplosionRippleEffect, MultiLayerEffect
from effects.countdown import CountdownPulseEffect, SegmentedCountdownEffect
from effects.flashes import (
    AcceleratingPulseEffect,
    FadeToBlackEffect,
    FlashFadeEffect,
    FlashingSequenceEffect,
    MexicanFlagEffect,
    PoliceFlashEffect,
    RandomColorSequenceEffect,
    StrobeEffect,
)
from effects.impacts import (
    DoubleStrikeEffect,
    EnergyBurstEffect,
    IceShatterEffect,
    LightningEffect,
    MeteorShowerEffect,
    PoisonDripEffect,
    ShockwaveEffect,
    SpiralVortexEffect,
    TimeRewindEffect,
)
from effects.waves import (
    BouncingWaveEffect,
    BreathingEffect,
    ChaseEffect,
    DoubleBounceEffect,
    FadeBounceEffect,
    GradientWaveEffect,
    PulseWaveEffect,
    PulsingBounceEffect,
    RainbowWaveEffect,
    RippleEffect,
)
from models.enums import EffectID
from models.errors import EffectNotFoundError, InvalidEffectParamsError
from utils.enum_helper import EnumHelper


def _build_effect_registry() -> Dict[EffectID, Type[BaseEffect]]:
    """Build effect registry from the effect classes' own IDs"""
    classes = [
        SolidEffect,
        PercentageBarEffect,
        GradientWaveEffect,
        RippleEffect,
        BreathingEffect,
        ChaseEffect,
        RainbowWaveEffect,
        PulseWaveEffect,
        BouncingWaveEffect,
        PulsingBounceEffect,
        FadeBounceEffect,
        DoubleBounceEffect,
        CountdownPulseEffect,
        SegmentedCountdownEffect,
        FlashFadeEffect,
        FadeToBlackEffect,
        AcceleratingPulseEffect,
        StrobeEffect,
        FlashingSequenceEffect,
        PoliceFlashEffect,
        MexicanFlagEffect,
        RandomColorSequenceEffect,
        ExplosionFlashEffect,
        ExplosionRippleEffect,
        MultiLayerEffect,
        SunriseEffect,
        DayNightEffect,
        CandlelightEffect,
        XYRainbowEffect,
        BrightnessWaveEffect,
        PoliceFlashProEffect,
        MeteorShowerEffect,
        DoubleStrikeEffect,
        TimeRewindEffect,
        ShockwaveEffect,
        EnergyBurstEffect,
        SpiralVortexEffect,
        LightningEffect,
        PoisonDripEffect,
        IceShatterEffect,
    ]
    return {cls.ID: cls for cls in classes}


EFFECTS: Dict[EffectID, Type[BaseEffect]] = _build_effect_registry()


def resolve_effect_id(name: Union[str, EffectID]) -> EffectID:
    """
    Turn 'gradient_wave' / 'gradient-wave' / 'gradientWave' / EffectID into EffectID

    Raises:
        EffectNotFoundError: Name is not in the catalog
    """
    if isinstance(name, EffectID):
        effect_id = name
    else:
        try:
            effect_id = EnumHelper.from_string(EffectID, name)
        except ValueError:
            raise EffectNotFoundError(name, available_effects()) from None

    if effect_id not in EFFECTS:
        raise EffectNotFoundError(effect_id.name, available_effects())
    return effect_id


def validate_params(
    effect_id: EffectID,
    params: Optional[Mapping[str, Any]] = None,
    palette: Optional[Mapping] = None,
):
    """
    Validate raw parameters against the effect's schema

    Raises:
        InvalidEffectParamsError: Wraps the pydantic ValidationError details
    """
    effect_class = EFFECTS[effect_id]
    try:
        return effect_class.Params.model_validate(dict(params or {}), context={"palette": palette})
    except ValidationError as e:
        errors = [
            {"field": ".".join(str(x) for x in err["loc"]), "message": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        raise InvalidEffectParamsError(effect_id.name, errors) from e


def create_effect(
    name: Union[str, EffectID],
    params: Optional[Mapping[str, Any]] = None,
    context: Optional[EffectContext] = None,
) -> BaseEffect:
    """
    Resolve, validate and instantiate an effect for one run

    Raises:
        EffectNotFoundError: Unknown effect name
        InvalidEffectParamsError: Parameters failed validation
    """
    context = context or EffectContext()
    effect_id = resolve_effect_id(name)
    validated = validate_params(effect_id, params, context.palette)
    return EFFECTS[effect_id](validated, context)


def available_effects() -> List[str]:
    """Catalog names, lowercase, in catalog order"""
    return [effect_id.name.lower() for effect_id in EFFECTS]


__all__ = [
    "EFFECTS",
    "BaseEffect",
    "EffectContext",
    "create_effect",
    "resolve_effect_id",
    "validate_params",
    "available_effects",
]
