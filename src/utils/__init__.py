"""
Utility functions for the zone effect engine
"""

from .colors import (
    interpolate,
    hsv_to_rgb,
    blend,
    clamp_channel,
    kelvin_to_mireds,
    mireds_to_kelvin,
)

__all__ = [
    'interpolate',
    'hsv_to_rgb',
    'blend',
    'clamp_channel',
    'kelvin_to_mireds',
    'mireds_to_kelvin',
]
