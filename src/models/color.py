"""
Color model - RGB(A) value used by every effect

Colors are immutable: every adjustment returns a new Color.
Conversion and interpolation functions live in utils.colors.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Tuple

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class Color:
    """
    RGB color with optional alpha

    Channels are plain ints and are NOT clamped on construction: interpolation
    may extrapolate beyond 0-255. The scheduler clamps every color right before
    it reaches the device sink.

    alpha:
        None  -> opaque, replaces whatever is staged for the zone
        0..1  -> blend with the staged zone color at this opacity

    Examples:
        red = Color.from_rgb(255, 0, 0)
        dim = red.scaled(0.5)            # Color(r=128, g=0, b=0)
        overlay = Color.white().with_alpha(0.3)
    """

    r: int
    g: int
    b: int
    alpha: Optional[float] = None

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> "Color":
        """Create opaque color, rounding float channels to nearest int"""
        return cls(round(r), round(g), round(b))

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Create from '#rrggbb' or 'rrggbb'

        Raises:
            ValueError: If value is not a 6-digit hex string
        """
        match = _HEX_RE.match(value.strip())
        if not match:
            raise ValueError(f"Invalid hex color: {value!r}")
        digits = match.group(1)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @classmethod
    def parse(cls, value: Any, palette: Optional[Mapping[str, "Color"]] = None) -> "Color":
        """
        Build a Color from user supplied parameter data

        Accepts:
            Color instance
            {"r": .., "g": .., "b": .., "alpha": ..}
            [r, g, b] / (r, g, b) / [r, g, b, alpha]
            "#rrggbb"
            palette name ("dark_red", "darkRed", "dark red")

        Raises:
            ValueError: If value can't be interpreted as a color
        """
        if isinstance(value, Color):
            return value

        if isinstance(value, Mapping):
            try:
                return cls(int(value["r"]), int(value["g"]), int(value["b"]), value.get("alpha"))
            except KeyError as ex:
                raise ValueError(f"Color mapping is missing channel {ex}") from ex
            except TypeError as ex:
                raise ValueError(f"Invalid color channel: {ex}") from ex

        if isinstance(value, (list, tuple)):
            try:
                if len(value) == 3:
                    return cls(int(value[0]), int(value[1]), int(value[2]))
                if len(value) == 4:
                    return cls(int(value[0]), int(value[1]), int(value[2]), float(value[3]))
            except TypeError as ex:
                raise ValueError(f"Invalid color channel: {ex}") from ex
            raise ValueError(f"Color sequence must have 3 or 4 items, got {len(value)}")

        if isinstance(value, str):
            if _HEX_RE.match(value.strip()):
                return cls.from_hex(value)
            if palette is None:
                from models.palette import PALETTE
                palette = PALETTE
            key = normalize_color_name(value)
            if key in palette:
                return palette[key]
            raise ValueError(f"Unknown color name: {value!r}")

        raise ValueError(f"Cannot interpret {type(value).__name__} as a color")

    # === ADJUSTMENTS ===

    def scaled(self, factor: float) -> "Color":
        """
        Return color with every channel multiplied by factor (rounded)

        Alpha is preserved.
        """
        return Color(
            round(self.r * factor),
            round(self.g * factor),
            round(self.b * factor),
            self.alpha,
        )

    def with_alpha(self, alpha: Optional[float]) -> "Color":
        """Return same RGB with a new alpha (None = opaque)"""
        return replace(self, alpha=alpha)

    def clamped(self) -> "Color":
        """Return color with channels clamped to 0-255 and alpha to 0-1"""
        alpha = None if self.alpha is None else max(0.0, min(1.0, float(self.alpha)))
        return Color(
            max(0, min(255, int(self.r))),
            max(0, min(255, int(self.g))),
            max(0, min(255, int(self.b))),
            alpha,
        )

    @property
    def is_opaque(self) -> bool:
        return self.alpha is None

    # === SERIALIZATION ===

    def to_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_dict(self) -> dict:
        data = {"r": self.r, "g": self.g, "b": self.b}
        if self.alpha is not None:
            data["alpha"] = self.alpha
        return data

    @staticmethod
    def black() -> "Color":
        return Color(0, 0, 0)

    @staticmethod
    def white() -> "Color":
        return Color(255, 255, 255)

    # === STRING REPRESENTATION ===

    def __str__(self) -> str:
        if self.alpha is None:
            return f"Color(RGB=({self.r},{self.g},{self.b}))"
        return f"Color(RGBA=({self.r},{self.g},{self.b},{self.alpha:.2f}))"


def normalize_color_name(name: str) -> str:
    """'darkRed' / 'dark red' / 'Dark-Red' -> 'dark_red'"""
    name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name.strip())
    return re.sub(r"[\s\-]+", "_", name).lower()
