"""
Rendering tests for the effect library.

Effects are pure apart from their per-run state, so most tests call
render() directly and inspect the staged frame operations.
"""

import math
import random

import pytest

from effects import create_effect
from effects.ambient import day_night_point
from effects.base import EffectContext
from effects.basic import BAR_GREEN, BAR_RED, bar_color
from effects.countdown import COUNTDOWN_MID, countdown_color, pulse_period
from effects.flashes import POLICE_COLORS
from effects.impacts import DEEP_BLUE, ICE_BLUE, TOXIC_GREEN, strike_intensity
from effects.waves import bounce_segment, mirrored_bounce_segment, wrap_distance
from models.color import Color
from models.commands import Brightness, ColorTemperature, XYColor
from models.enums import FrameTarget
from models.segments import SegmentLayout
from utils.colors import interpolate

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


def segments(frame):
    """index -> value for per-segment ops"""
    return {op.index: op.value for op in frame if op.target == FrameTarget.SEGMENT}


def fill_value(frame):
    """Value of the single group fill in frame"""
    ops = list(frame)
    assert len(ops) == 1 and ops[0].target == FrameTarget.GROUP
    return ops[0].value


def is_cleared(frame):
    ops = list(frame)
    return len(ops) == 1 and ops[0].target == FrameTarget.GROUP and ops[0].is_clear


@pytest.fixture
def three_zones():
    return EffectContext(layout=SegmentLayout([0, 1, 2]), rng=random.Random(7))


class TestOneShot:

    def test_solid_fills_every_zone(self, context):
        effect = create_effect("solid", {"color": "gold"}, context)
        assert effect.ONE_SHOT
        assert fill_value(effect.render(0)) == Color(255, 215, 0)

    def test_percentage_bar_full(self, context):
        values = segments(create_effect("percentage_bar", {"percentage": 100}, context).render(0))
        assert values[3] == BAR_GREEN

    def test_percentage_bar_empty(self, context):
        values = segments(create_effect("percentage_bar", {"percentage": 0}, context).render(0))
        assert values[0] == BAR_RED
        assert values[1] == BAR_RED

    def test_bar_color_bands(self):
        assert bar_color(0.1) == BAR_RED
        assert bar_color(0.5) == Color(255, 150, 0)
        assert bar_color(1.0) == BAR_GREEN


class TestWaves:

    def test_gradient_wave_wraps(self, context):
        effect = create_effect("gradient_wave", {"color1": RED, "color2": BLUE}, context)
        values = segments(effect.render(0))
        assert values[0] == RED
        assert values[3] == RED

        # half a period later the first segment sits mid gradient
        assert segments(effect.render(1000))[0] == Color(128, 0, 128)

    def test_ripple_moves_outward(self, context):
        effect = create_effect("ripple", {"color": [0, 255, 255]}, context)
        start = segments(effect.render(0))
        assert start[0] == Color(0, 0, 0)
        assert start[1] == Color(0, 170, 170)

        assert segments(effect.render(500))[0] == Color(0, 128, 128)

    def test_ripple_single_segment(self):
        context = EffectContext(layout=SegmentLayout([9]))
        values = segments(create_effect("ripple", {"color": [0, 255, 255]}, context).render(0))
        assert values[0] == Color(0, 255, 255)

    def test_breathing_peak(self, context):
        effect = create_effect("breathing", {}, context)
        values = segments(effect.render(750))
        assert values[0] == Color(128, 0, 255)
        assert values[3] == Color(0, 255, 255)

    def test_breathing_floor(self, context):
        effect = create_effect("breathing", {"color1": [200, 200, 200]}, context)
        assert segments(effect.render(2250))[0] == Color(60, 60, 60)

    def test_rainbow_hue_steps(self, context):
        values = segments(create_effect("rainbow_wave", {}, context).render(0))
        assert values[0] == Color(255, 0, 0)
        assert values[1] == Color(128, 255, 0)
        assert values[2] == Color(0, 255, 255)
        assert values[3] == Color(128, 0, 255)

    def test_pulse_wave_stagger(self, context):
        values = segments(create_effect("pulse_wave", {"color1": RED, "color2": BLUE}, context).render(0))
        assert values[0] == RED
        assert values[2] == BLUE


class TestChase:

    def test_wrap_distance(self):
        assert wrap_distance(3, 0, 4) == 1
        assert wrap_distance(0, 3.5, 4) == 0.5
        assert wrap_distance(2, 0, 4) == 2

    def test_spot_and_tail(self, context):
        effect = create_effect("chase", {"color": RED}, context)
        values = segments(effect.render(0))
        assert values[0] == RED
        assert values[1] == Color(153, 0, 0)
        assert values[3] == Color(153, 0, 0)
        assert values[2] == Color(51, 0, 0)

    def test_position_advances_per_tick(self, context):
        effect = create_effect("chase", {"color": RED, "speed": 500}, context)
        effect.render(0)
        assert effect.position_value == 0.5
        assert segments(effect.render(16))[0] == Color(204, 0, 0)

    def test_position_wraps(self, context):
        effect = create_effect("chase", {"speed": 1000}, context)
        for tick in range(4):
            effect.render(tick * 16)
        assert effect.position_value == 0.0


class TestBounce:

    @pytest.mark.parametrize("cycle, expected", [
        (0.0, 0), (0.125, 1), (0.375, 3), (0.5, 3), (0.625, 2), (0.875, 0),
    ])
    def test_bounce_segment(self, cycle, expected):
        assert bounce_segment(cycle, 4) == expected

    def test_mirrored_bounce_segment(self):
        assert mirrored_bounce_segment(0.0, 4) == 3
        assert mirrored_bounce_segment(0.5, 4) == 0

    def test_bouncing_wave_lights_one_segment(self, context):
        values = segments(create_effect("bouncing_wave", {"color1": RED, "color2": BLUE}, context).render(0))
        assert values[0] == RED
        assert values[1] == values[2] == values[3] == Color(0, 0, 0)

    def test_bouncing_wave_clears_when_run_time_ends(self, context):
        effect = create_effect("bouncing_wave", {"run_time": 500}, context)
        assert not effect.is_complete(500)
        assert effect.is_complete(501)
        [(delay, frame)] = effect.final_frames()
        assert delay == 0 and is_cleared(frame)

    def test_pulsing_bounce(self, context):
        values = segments(create_effect("pulsing_bounce", {"color1": RED}, context).render(0))
        assert values[0] == Color(128, 0, 0)
        assert values[2] == Color(0, 0, 0)

    def test_fade_bounce_trail_decays(self, context):
        effect = create_effect("fade_bounce", {"color1": RED, "color2": BLUE}, context)
        effect.render(0)

        values = segments(effect.render(250))
        assert values[0] == Color(217, 0, 0)
        assert values[1] == Color(170, 0, 85)
        assert values[3] == Color(0, 0, 0)

    def test_double_bounce_opposite_ends(self, context):
        values = segments(create_effect("double_bounce", {"color1": RED, "color2": BLUE}, context).render(0))
        assert values[0] == RED
        assert values[3] == Color(0, 0, 204)

    def test_double_bounce_crossing_takes_full_color2(self, three_zones):
        effect = create_effect("double_bounce", {"color1": RED, "color2": BLUE, "speed": 600}, three_zones)
        assert segments(effect.render(110))[1] == BLUE


class TestCountdown:

    def test_color_thresholds(self):
        start, end = Color(150, 0, 0), Color(0, 255, 50)
        assert countdown_color(start, end, 0.9) == start
        assert countdown_color(start, end, 0.67) == start
        assert countdown_color(start, end, 0.5) == interpolate(start, COUNTDOWN_MID, (0.66 - 0.5) * 3)
        assert countdown_color(start, end, 0.33) == COUNTDOWN_MID
        assert countdown_color(start, end, 0.2) == interpolate(COUNTDOWN_MID, end, (0.33 - 0.2) * 3)

    def test_pulse_accelerates(self):
        assert pulse_period(1.0) == 2200
        assert pulse_period(0.0) == 200

    def test_countdown_pulse_completion(self, context):
        effect = create_effect("countdown_pulse", {"total_seconds": 2}, context)
        assert not effect.is_complete(2000)
        assert effect.is_complete(2001)

    def test_countdown_pulse_final_frames(self, context):
        effect = create_effect("countdown_pulse", {"end_color": [0, 255, 0]}, context)
        (d0, white), (d1, end) = effect.final_frames()
        assert (d0, d1) == (0, 200)
        assert fill_value(white) == Color(255, 255, 255)
        assert fill_value(end) == Color(0, 255, 0)

    def test_countdown_pulse_starts_dim_in_start_color(self, context):
        effect = create_effect("countdown_pulse", {"start_color": [100, 0, 0]}, context)
        assert fill_value(effect.render(0)) == Color(20, 0, 0)

    def test_segmented_countdown_cycles_color_pairs(self, context):
        effect = create_effect("segmented_countdown", {}, context)
        _, settle = effect.final_frames()[1]
        values = segments(settle)
        assert values[0] == Color(0, 255, 0)
        assert values[2] == Color(255, 255, 0)
        assert values[3] == values[0]


class TestFlashes:

    def test_flash_fade(self, context):
        effect = create_effect("flash_fade", {"duration": 1000}, context)
        values = segments(effect.render(0))
        assert values[0] == Color(255, 255, 255)
        assert values[2] == Color(204, 204, 204)

        assert not effect.is_complete(999)
        assert effect.is_complete(1000)
        assert is_cleared(effect.final_frames()[0][1])

    def test_fade_to_black(self, context):
        effect = create_effect("fade_to_black", {}, context)
        assert fill_value(effect.render(480)) == Color(50, 0, 0)
        assert fill_value(effect.render(960)) == Color(0, 0, 0)

    def test_accelerating_pulse_sequence(self, context):
        effect = create_effect(
            "accelerating_pulse",
            {"color": RED, "pulse_count": 2, "start_speed": 100, "end_speed": 50},
            context,
        )
        assert effect.pulse_speed(0) == 100
        assert effect.pulse_speed(1) == pytest.approx(50)

        assert fill_value(effect.render(0)) == RED
        assert len(effect.render(50)) == 0
        assert is_cleared(effect.render(100))
        # off time matches the on time of the same pulse
        assert len(effect.render(150)) == 0
        assert fill_value(effect.render(200)) == RED
        assert not effect.is_complete(216)
        assert is_cleared(effect.render(250))
        assert effect.is_complete(256)

    def test_strobe_alternates(self, context):
        effect = create_effect("strobe", {"color": BLUE, "strobe_speed": 50}, context)
        assert fill_value(effect.render(0)) == BLUE
        assert len(effect.render(20)) == 0
        assert is_cleared(effect.render(50))
        assert fill_value(effect.render(100)) == BLUE
        assert effect.is_complete(1000)

    def test_flashing_sequence(self, context):
        effect = create_effect(
            "flashing_sequence",
            {"colors": [RED, BLUE], "flash_count": 2, "flash_speed": 100},
            context,
        )
        assert fill_value(effect.render(0)) == RED
        assert fill_value(effect.render(100)) == BLUE
        assert fill_value(effect.render(200)) == RED
        assert not effect.is_complete(399)
        assert effect.is_complete(400)

    def test_police_flash_colors(self, context):
        effect = create_effect("police_flash", {"flash_speed": 100}, context)
        assert fill_value(effect.render(0)) == POLICE_COLORS[0]
        assert fill_value(effect.render(100)) == Color(255, 255, 255)
        assert effect.total_steps() == 24

    def test_mexican_flag_has_emerald(self, context):
        effect = create_effect("mexican_flag", {}, context)
        assert Color(80, 200, 120) in effect.colors

    def test_random_color_sequence_is_seeded(self, context):
        first = create_effect("random_color_sequence", {"seed": 11}, context)
        second = create_effect("random_color_sequence", {"seed": 11}, context)

        assert first.color_names == second.color_names
        assert 4 <= len(first.color_names) <= 6
        assert len(set(first.color_names)) == len(first.color_names)
        assert first.flash_count == 3000 // (len(first.color_names) * 150)


class TestAlphaBlends:

    def test_explosion_flash_layers(self, context):
        effect = create_effect("explosion_flash", {}, context)
        base, overlay = list(effect.render(240))
        assert base.value == Color(255, 165, 0)
        assert overlay.value.to_tuple() == (255, 255, 255)
        assert overlay.value.alpha == pytest.approx(0.25)

    def test_explosion_flash_completes_at_fade(self, context):
        effect = create_effect("explosion_flash", {"duration": 1500, "fade_ms": 480}, context)
        assert not effect.is_complete(479)
        assert effect.is_complete(480)
        assert fill_value(effect.final_frames()[0][1]) == Color(255, 165, 0)

    def test_explosion_ripple_starts_at_center(self, context):
        values = segments(create_effect("explosion_ripple", {}, context).render(0))
        assert set(values) == {1, 2}
        assert values[1].alpha == pytest.approx(0.5)

    def test_multi_layer_overlays_are_translucent(self, context):
        frame = create_effect("multi_layer", {}, context).render(400)
        ops = list(frame)
        assert ops[0].value == Color(255, 165, 0)
        assert all(0 <= op.value.alpha <= 0.7 for op in ops[1:])


class TestNativeColorSpaces:

    def test_sunrise_range(self, context):
        effect = create_effect("sunrise", {"duration": 1000}, context)
        assert fill_value(effect.render(0)) == ColorTemperature(500, pytest.approx(0.1))
        assert fill_value(effect.render(1000)) == ColorTemperature(153, pytest.approx(1.0))
        assert fill_value(effect.final_frames()[0][1]) == ColorTemperature(153, 1.0)

    def test_day_night_points(self):
        assert day_night_point(0.0) == ColorTemperature(400, 0.3)
        assert day_night_point(0.5) == ColorTemperature(153, 1.0)
        assert day_night_point(0.75) == ColorTemperature(370, 0.5)

    def test_candlelight_ranges(self, context):
        effect = create_effect("candlelight", {"seed": 3}, context)
        for elapsed in range(0, 1000, 16):
            for value in segments(effect.render(elapsed)).values():
                assert 425 <= value.mireds <= 475
                assert 0.45 <= value.brightness <= 0.75

    def test_xy_rainbow_starts_at_red(self, context):
        values = segments(create_effect("xy_rainbow", {}, context).render(0))
        assert values[0] == XYColor(0.640, 0.330, 1.0)
        assert all(isinstance(v, XYColor) for v in values.values())

    def test_brightness_wave(self, context):
        ops = list(create_effect("brightness_wave", {}, context).render(0))
        assert ops[0].value == Color(128, 0, 255)
        assert ops[1].value == Brightness(pytest.approx(0.6))
        assert ops[2].value == Brightness(pytest.approx(1.0))

    def test_police_flash_pro_sequence(self, context):
        effect = create_effect("police_flash_pro", {"flash_speed": 100}, context)
        assert fill_value(effect.render(0)) == Color(255, 0, 0)
        assert fill_value(effect.render(100)) == ColorTemperature(366, 1.0)
        assert len(effect.render(150)) == 0
        assert effect.final_frames() == []


class TestImpacts:

    def test_strike_intensity(self):
        assert strike_intensity(0.15) == pytest.approx(0.5)
        assert strike_intensity(0.3) == pytest.approx(1.0)
        assert strike_intensity(1.0) == pytest.approx(0.0)

    def test_double_strike_peaks(self, context):
        effect = create_effect("double_strike", {"color": RED, "duration": 500}, context)
        assert fill_value(effect.render(75)) == RED
        assert fill_value(effect.render(325)) == Color(255, 0, 0)

    def test_shockwave_front(self, context):
        values = segments(create_effect("shockwave", {"color": BLUE}, context).render(0))
        assert values[0] == BLUE
        assert values[1] == Color(0, 0, 0)

    def test_energy_burst_ends_dark(self, context):
        effect = create_effect("energy_burst", {}, context)
        assert fill_value(effect.render(0)).r == 255
        assert fill_value(effect.render(800)) == Color(0, 0, 0)

    def test_lightning_strike_then_glow(self, context):
        effect = create_effect("lightning", {"seed": 1}, context)
        assert fill_value(effect.render(0)) == Color(255, 255, 255)
        assert fill_value(effect.render(100)) == Color.white().scaled(0.7)

    def test_meteor_head(self, context):
        values = segments(create_effect("meteor_shower", {}, context).render(0))
        assert values[0] == Color(255, 255, 255)

    def test_poison_drip(self, context):
        effect = create_effect("poison_drip", {}, context)
        assert segments(effect.render(0))[0] == Color.from_rgb(
            TOXIC_GREEN.r * 0.8 * 0.3, TOXIC_GREEN.g * 0.8, TOXIC_GREEN.b * 0.8 * 0.1
        )
        assert is_cleared(effect.final_frames()[0][1])

    def test_ice_shatter_freeze_then_deep_blue(self, context):
        effect = create_effect("ice_shatter", {"seed": 2, "duration": 1000}, context)
        assert fill_value(effect.render(100)) == ICE_BLUE
        assert effect.fragment_delays is None

        values = segments(effect.render(1000))
        assert len(effect.fragment_delays) == 4
        assert all(v == Color.from_rgb(0, 0, DEEP_BLUE.b * 0.7) for v in values.values())

    @pytest.mark.parametrize("name", ["time_rewind", "spiral_vortex", "meteor_shower", "shockwave"])
    def test_per_segment_impacts_cover_every_zone(self, name, context):
        assert set(segments(create_effect(name, {}, context).render(300))) == {0, 1, 2, 3}

    def test_bounded_effects_complete_after_duration(self, context):
        effect = create_effect("spiral_vortex", {"duration": 1000}, context)
        assert not effect.is_complete(1000)
        assert effect.is_complete(1000.5)
        assert math.isclose(effect.progress(500), 0.5)
