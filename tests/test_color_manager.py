"""
Unit tests for ColorManager
"""

import pytest

from managers.color_manager import ColorManager
from models.color import Color
from models.palette import PALETTE


@pytest.fixture
def color_data():
    return {
        "presets": {
            "warm_white": {"rgb": [255, 180, 107]},
            "coolWhite": {"rgb": [201, 226, 255]},
            "peach": {"hex": "#ffcba4"},
            "teal": [0, 128, 128],
        },
        "preset_order": ["red", "warmWhite", "teal"],
    }


class TestColorManager:

    def test_presets_merge_over_palette(self, color_data):
        palette = ColorManager(color_data).palette

        assert palette["warm_white"] == Color(255, 180, 107)
        assert palette["peach"] == Color(255, 203, 164)
        assert palette["teal"] == Color(0, 128, 128)
        assert palette["red"] == PALETTE["red"]
        assert len(palette) == len(PALETTE) + 4

    def test_preset_names_are_normalized(self, color_data):
        palette = ColorManager(color_data).palette
        assert palette["cool_white"] == Color(201, 226, 255)
        assert "coolWhite" not in palette

    def test_preset_override_builtin(self):
        cm = ColorManager({"presets": {"red": [200, 0, 0]}})
        assert cm.palette["red"] == Color(200, 0, 0)
        assert PALETTE["red"] == Color(255, 0, 0)

    def test_empty_data_is_builtin_palette(self):
        cm = ColorManager({})
        assert cm.palette == PALETTE
        assert cm.preset_order == []

    def test_preset_order_is_normalized(self, color_data):
        assert ColorManager(color_data).preset_order == ["red", "warm_white", "teal"]

    def test_unknown_name_in_preset_order(self):
        with pytest.raises(ValueError):
            ColorManager({"preset_order": ["red", "plaid"]})

    def test_invalid_preset_value(self):
        with pytest.raises(ValueError):
            ColorManager({"presets": {"broken": {"rgb": [1, 2]}}})
