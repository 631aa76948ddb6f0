"""
Color Manager - Processes color preset definitions

Processes color data from ConfigManager (does NOT load files).
Single responsibility: merge configured presets over the built-in palette
and expose the sampling order used by random color effects.
"""

from typing import Dict, List

from models.color import Color, normalize_color_name
from models.enums import LogCategory
from models.palette import PALETTE
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.COLOR)


class ColorManager:
    """
    Color preset manager (data processor only)

    Does NOT load files - receives data from ConfigManager.

    Example:
        color_mgr = ColorManager(data)
        context = EffectContext(palette=color_mgr.palette, palette_order=color_mgr.preset_order)
    """

    def __init__(self, data: dict):
        """
        Initialize ColorManager with parsed config data

        Args:
            data: Config dict with 'presets' and 'preset_order' keys
                  Example: {
                      'presets': {'warm_white': {'rgb': [255,180,107]}, 'teal': [0,128,128]},
                      'preset_order': ['red', 'warm_white', ...]
                  }

        Raises:
            ValueError: A preset has no usable color
        """
        self.data = data
        self._palette: Dict[str, Color] = {}
        self._process_data()

    def _process_data(self):
        """Process color data and build the palette"""
        presets = self.data.get("presets") or {}

        self._palette = dict(PALETTE)
        for name, preset_data in presets.items():
            value = preset_data.get("rgb", preset_data.get("hex")) if isinstance(preset_data, dict) else preset_data
            self._palette[normalize_color_name(name)] = Color.parse(value)

        unknown = [name for name in self.preset_order if name not in self._palette]
        if unknown:
            raise ValueError(f"preset_order references unknown colors: {unknown}")

        if presets:
            log.info(f"Loaded {len(presets)} color presets", palette_size=len(self._palette))

    @property
    def palette(self) -> Dict[str, Color]:
        """All named colors: built-in palette plus configured presets"""
        return self._palette

    @property
    def preset_order(self) -> List[str]:
        """Get preset sampling order (names normalized to snake_case)"""
        return [normalize_color_name(name) for name in self.data.get("preset_order") or []]
