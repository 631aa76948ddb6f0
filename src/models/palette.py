"""
Built-in named colors

Effect parameters may reference these by name ("dark_red", "darkRed").
ColorManager merges extra presets from config/colors.yaml on top.
"""

from typing import Dict

from models.color import Color

PALETTE: Dict[str, Color] = {
    "amber": Color(255, 191, 0),
    "baby_blue": Color(137, 207, 240),
    "black": Color(0, 0, 0),
    "blood_red": Color(100, 0, 0),
    "blue": Color(0, 0, 255),
    "bright_green": Color(0, 255, 50),
    "coral": Color(255, 127, 80),
    "crimson": Color(220, 20, 60),
    "cyan": Color(0, 255, 255),
    "dark_orange": Color(255, 140, 0),
    "dark_red": Color(150, 0, 0),
    "dark_violet": Color(148, 0, 211),
    "deep_blue": Color(0, 0, 139),
    "electric_blue": Color(125, 249, 255),
    "emerald": Color(80, 200, 120),
    "forest_green": Color(34, 139, 34),
    "ghost_white": Color(248, 248, 255),
    "gold": Color(255, 215, 0),
    "green": Color(0, 255, 0),
    "hot_pink": Color(255, 105, 180),
    "ice_blue": Color(176, 224, 230),
    "indigo": Color(75, 0, 130),
    "light_blue": Color(0, 150, 255),
    "light_yellow": Color(255, 255, 100),
    "lime_green": Color(50, 255, 0),
    "magenta": Color(255, 0, 255),
    "orange": Color(255, 165, 0),
    "pink": Color(255, 192, 203),
    "purple": Color(128, 0, 255),
    "red": Color(255, 0, 0),
    "red_orange": Color(255, 69, 0),
    "rose": Color(255, 0, 127),
    "sapphire": Color(15, 82, 186),
    "scarlet": Color(255, 36, 0),
    "sky_blue": Color(135, 206, 235),
    "violet": Color(138, 43, 226),
    "white": Color(255, 255, 255),
    "yellow": Color(255, 255, 0),
}
