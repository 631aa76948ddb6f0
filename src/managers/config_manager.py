"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and initializes the color sub-manager.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from managers.color_manager import ColorManager
from models.enums import LogCategory, LogLevel
from models.errors import ConfigError
from models.segments import DEFAULT_ZONE_IDS, SegmentLayout
from utils.enum_helper import EnumHelper
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

ENGINE_DEFAULTS: Dict[str, Any] = {
    "tick_interval_ms": 16,
    "final_delay_ms": 200,
    "settle_delay_ms": 1000,
    "random_seed": None,
}

DEVICE_DEFAULTS: Dict[str, Any] = {
    "driver": None,
    "app_name": "zone-effects",
    "device_name": "virtual",
    "group_id": None,
}

LOGGING_DEFAULTS: Dict[str, Any] = {
    "level": "INFO",
    "colors": True,
}


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML files.
    Missing sections fall back to built-in defaults, so an empty config still
    yields a usable engine.

    Example:
        config = ConfigManager()
        config.load()

        tick = config.engine["tick_interval_ms"]
        layout = config.get_segment_layout()
        palette = config.color_manager.palette
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml", base_dir=None):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to base_dir)
            defaults_path: Path to factory defaults fallback
            base_dir: Directory paths are resolved against (default: src/)
        """
        self.base_dir = Path(base_dir) if base_dir is not None else Path(__file__).parent.parent
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.color_manager = ColorManager({})

    def load(self) -> Dict[str, Any]:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory_defaults.yaml on failure
        5. Initialize ColorManager

        Returns:
            Merged config data dict

        Raises:
            ConfigError: Neither config.yaml nor the factory defaults could be read
        """
        full_path = self.base_dir / self.config_path
        try:
            main_config = self._read_yaml(full_path)

            if "include" in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config["include"], full_path.parent)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except (OSError, yaml.YAMLError, ValueError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            defaults_path = self.base_dir / self.factory_defaults_path
            try:
                self.data = self._read_yaml(defaults_path)
            except (OSError, yaml.YAMLError, ValueError) as defaults_ex:
                raise ConfigError(f"Factory defaults unreadable: {defaults_ex}", path=str(defaults_path)) from defaults_ex

        self._initialize_managers()
        return self.data

    def load_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Use an in-memory config (tests, embedding)"""
        self.data = dict(data)
        self._initialize_managers()
        return self.data

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name} must contain a mapping, got {type(data).__name__}")
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["engine.yaml", "segments.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict (later files win on top-level key clashes)
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                file_data = self._read_yaml(filepath)
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            except (OSError, yaml.YAMLError, ValueError) as ex:
                log.error(f"Error loading {filename}", error=str(ex))
                raise

            if file_data:
                merged.update(file_data)
                log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    def _initialize_managers(self):
        """Initialize ColorManager, falling back to an empty one on bad preset data"""
        try:
            color_data = {
                "presets": self.data.get("presets", {}),
                "preset_order": self.data.get("preset_order", []),
            }
            self.color_manager = ColorManager(color_data)
        except (KeyError, TypeError, ValueError) as ex:
            log.warn("Failed to initialize ColorManager, using empty", error=str(ex))
            self.color_manager = ColorManager({})

    # ===== Section Access =====

    def _section(self, key: str, defaults: Dict[str, Any]) -> Dict[str, Any]:
        section = self.data.get(key) or {}
        return {**defaults, **section}

    @property
    def engine(self) -> Dict[str, Any]:
        return self._section("engine", ENGINE_DEFAULTS)

    @property
    def device(self) -> Dict[str, Any]:
        return self._section("device", DEVICE_DEFAULTS)

    @property
    def logging(self) -> Dict[str, Any]:
        return self._section("logging", LOGGING_DEFAULTS)

    def get_segment_ids(self) -> List[Any]:
        segments = self.data.get("segments") or {}
        ids = segments.get("ids")
        return list(DEFAULT_ZONE_IDS if ids is None else ids)

    def get_segment_layout(self) -> SegmentLayout:
        """
        Build the segment layout

        Raises:
            InvalidSegmentLayoutError: Configured ids are empty or duplicated
        """
        return SegmentLayout(self.get_segment_ids())

    def get_log_level(self) -> LogLevel:
        level = self.logging.get("level", "INFO")
        try:
            return EnumHelper.from_string(LogLevel, str(level))
        except ValueError:
            log.warn(f"Unknown log level '{level}', using INFO")
            return LogLevel.INFO

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self.data.get(key, default)
