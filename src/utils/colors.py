"""
Color conversion utilities

Pure functions for interpolation, HSV conversion, alpha blending and
color temperature math. Named colors live in models/palette.py and
config/colors.yaml (via ColorManager).
"""

from typing import Optional

from models.color import Color

# Native color temperature range of the lights (mireds)
MIN_MIREDS = 153   # ~6500K, cool daylight
MAX_MIREDS = 500   # 2000K, warm candle


def clamp_channel(value: float) -> int:
    """Clamp a channel value to 0-255 and return it as int"""
    return max(0, min(255, int(value)))


def clamp_unit(value: float) -> float:
    """Clamp to 0.0-1.0"""
    return max(0.0, min(1.0, value))


def interpolate(c1: Color, c2: Color, factor: float) -> Color:
    """
    Linear interpolation between two colors

    Factor is NOT clamped: values outside 0-1 extrapolate, and the
    resulting channels may fall outside 0-255 until the sink boundary
    clamps them.

    Args:
        c1: Color at factor 0
        c2: Color at factor 1
        factor: Mix position

    Returns:
        New opaque Color with rounded channels

    Example:
        interpolate(Color.black(), Color.white(), 0.5)  # Color(128, 128, 128)
    """
    return Color(
        round(c1.r + (c2.r - c1.r) * factor),
        round(c1.g + (c2.g - c1.g) * factor),
        round(c1.b + (c2.b - c1.b) * factor),
    )


def hsv_to_rgb(h: float, s: float, v: float) -> Color:
    """
    Convert HSV (all 0-1) to an RGB Color

    Hue wraps: h=1.0 and h=0.0 are both red, h=1.25 equals h=0.25.

    Example:
        hsv_to_rgb(0.0, 1, 1)    # red
        hsv_to_rgb(1/3, 1, 1)    # green
        hsv_to_rgb(2/3, 1, 1)    # blue
    """
    h = h % 1.0
    sector = int(h * 6)
    f = h * 6 - sector
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    sector %= 6
    if sector == 0:
        r, g, b = v, t, p
    elif sector == 1:
        r, g, b = q, v, p
    elif sector == 2:
        r, g, b = p, v, t
    elif sector == 3:
        r, g, b = p, q, v
    elif sector == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return Color(round(r * 255), round(g * 255), round(b * 255))


def blend(base: Optional[Color], overlay: Color) -> Color:
    """
    Composite overlay onto base using overlay.alpha

    An overlay without alpha replaces the base. A missing base is treated
    as black. Result is always opaque.
    """
    if overlay.alpha is None or base is None and overlay.alpha >= 1.0:
        return overlay.with_alpha(None)

    if base is None:
        base = Color.black()

    a = clamp_unit(overlay.alpha)
    return Color(
        round(base.r * (1 - a) + overlay.r * a),
        round(base.g * (1 - a) + overlay.g * a),
        round(base.b * (1 - a) + overlay.b * a),
    )


def clamp_mireds(mireds: float) -> int:
    """Clamp to the native color temperature range"""
    return max(MIN_MIREDS, min(MAX_MIREDS, round(mireds)))


def kelvin_to_mireds(kelvin: float) -> int:
    """
    Convert Kelvin to mireds (10^6 / K)

    Example:
        kelvin_to_mireds(6500)  # 154
        kelvin_to_mireds(2000)  # 500
    """
    if kelvin <= 0:
        raise ValueError(f"Kelvin must be positive, got {kelvin}")
    return round(1_000_000 / kelvin)


def mireds_to_kelvin(mireds: float) -> int:
    """Convert mireds to Kelvin (10^6 / mired)"""
    if mireds <= 0:
        raise ValueError(f"Mireds must be positive, got {mireds}")
    return round(1_000_000 / mireds)
