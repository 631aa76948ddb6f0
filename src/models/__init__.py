"""
Models package - Data models for the zone effect engine
"""

from .enums import EffectID, SchedulerState, StopReason, LogLevel, LogCategory
from .color import Color

__all__ = [
    'EffectID',
    'SchedulerState',
    'StopReason',
    'LogLevel',
    'LogCategory',
    'Color',
]
