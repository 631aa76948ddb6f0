"""
Enums for the zone effect engine
"""

from enum import Enum, auto


class EffectID(Enum):
    """Effect identifiers (operation names exposed by LightingController)"""
    SOLID = auto()
    PERCENTAGE_BAR = auto()

    # Periodic, phase driven
    GRADIENT_WAVE = auto()
    RIPPLE = auto()
    BREATHING = auto()
    CHASE = auto()
    RAINBOW_WAVE = auto()
    PULSE_WAVE = auto()
    BOUNCING_WAVE = auto()
    PULSING_BOUNCE = auto()
    FADE_BOUNCE = auto()
    DOUBLE_BOUNCE = auto()

    # Countdowns
    COUNTDOWN_PULSE = auto()
    SEGMENTED_COUNTDOWN = auto()

    # Flashes (time bounded / event stepped)
    FLASH_FADE = auto()
    FADE_TO_BLACK = auto()
    ACCELERATING_PULSE = auto()
    STROBE = auto()
    FLASHING_SEQUENCE = auto()
    POLICE_FLASH = auto()
    MEXICAN_FLAG = auto()
    RANDOM_COLOR_SEQUENCE = auto()

    # Alpha blended
    EXPLOSION_FLASH = auto()
    EXPLOSION_RIPPLE = auto()
    MULTI_LAYER = auto()

    # Native color spaces (CT / xy / brightness)
    SUNRISE = auto()
    DAY_NIGHT = auto()
    CANDLELIGHT = auto()
    XY_RAINBOW = auto()
    BRIGHTNESS_WAVE = auto()
    POLICE_FLASH_PRO = auto()

    # Impacts
    METEOR_SHOWER = auto()
    DOUBLE_STRIKE = auto()
    TIME_REWIND = auto()
    SHOCKWAVE = auto()
    ENERGY_BURST = auto()
    SPIRAL_VORTEX = auto()
    LIGHTNING = auto()
    POISON_DRIP = auto()
    ICE_SHATTER = auto()


class SchedulerState(Enum):
    """Effect scheduler lifecycle"""
    IDLE = auto()
    RUNNING = auto()


class StopReason(Enum):
    """Why an effect run ended"""
    COMPLETED = auto()        # Effect's own termination condition fired
    CANCELLED = auto()        # stop_current_effect() / clear_all_lights()
    SUPERSEDED = auto()       # Another effect was started
    SHUTDOWN = auto()
    CONNECTION_LOST = auto()


class FrameTarget(Enum):
    """Where a staged frame operation goes"""
    SEGMENT = auto()   # One zone
    GROUP = auto()     # Whole entertainment group


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    SYSTEM = auto()      # Startup, shutdown, errors
    EFFECT = auto()      # Effect parameters, randomized picks
    SCHEDULER = auto()   # Effect start/stop/tick
    DEVICE = auto()      # Device sink writes and commits
    COLOR = auto()       # Palette, color parsing
    EVENT = auto()       # Event bus events and handling
    CONTROLLER = auto()  # Facade operations

    GENERAL = auto()     # Default general category
