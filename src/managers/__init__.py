"""
Managers for configuration
"""

from .config_manager import ConfigManager
from .color_manager import ColorManager

__all__ = ['ConfigManager', 'ColorManager']
