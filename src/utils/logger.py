from datetime import datetime
from typing import Optional
from models.enums import LogLevel, LogCategory


# === ANSI STYLES ===
RESET = '\033[0m'
DIM = '\033[2m'

CATEGORY_COLORS = {
    LogCategory.CONFIG: '\033[36m',
    LogCategory.SYSTEM: '\033[97m',
    LogCategory.EFFECT: '\033[93m',
    LogCategory.SCHEDULER: '\033[35m',
    LogCategory.DEVICE: '\033[94m',
    LogCategory.COLOR: '\033[95m',
    LogCategory.EVENT: '\033[96m',
    LogCategory.CONTROLLER: '\033[92m',
}

# level -> (priority, symbol, color)
LEVEL_STYLES = {
    LogLevel.DEBUG: (0, '·', DIM),
    LogLevel.INFO: (1, '✓', '\033[32m'),
    LogLevel.WARN: (2, '⚠', '\033[33m'),
    LogLevel.ERROR: (3, '✗', '\033[31m'),
}

DETAIL_INDENT = " " * 11


# === CORE LOGGER ===
class Logger:
    """
    Structured logger with compact output format

    Format:
    [HH:MM:SS] CATEGORY · Message
               ├─ Detail 1
               └─ Detail 2

    Example:
    [14:23:45] SCHEDULER  ✓ Effect started
               └─ effect: CHASE
    """

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
        self.min_level = min_level
        self.use_colors = use_colors

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_colors else text

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **kwargs
    ):
        """
        Log one message plus optional detail rows

        Keyword arguments become "key: value" rows after any explicit details.

            logger.log(LogCategory.DEVICE, "Zone write failed", LogLevel.WARN, zone=2, error="timeout")

            [14:23:45] DEVICE     ⚠ Zone write failed
                       ├─ zone: 2
                       └─ error: timeout
        """
        priority, symbol, color = LEVEL_STYLES[level]
        if priority < LEVEL_STYLES[self.min_level][0]:
            return

        stamp = datetime.now().strftime('[%H:%M:%S]')
        cat = self._paint(category.name.ljust(10), CATEGORY_COLORS.get(category, RESET))
        print(f"{stamp} {cat} {self._paint(symbol, color)} {self._paint(message, color)}")

        rows = list(details or []) + [f"{k}: {v}" for k, v in kwargs.items()]
        for i, row in enumerate(rows):
            branch = "└─" if i == len(rows) - 1 else "├─"
            print(f"{DETAIL_INDENT}{self._paint(branch, DIM)} {row}")

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a fixed category, used as the module-level `log` everywhere."""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self._category = category

    def debug(self, message: str, **kw): self._base.log(self._category, message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self._base.log(self._category, message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self._base.log(self._category, message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self._base.log(self._category, message, LogLevel.ERROR, **kw)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True):
    """
    Configure the logger singleton in place.

    Bound loggers created before this call keep pointing at the same instance,
    so they pick up the new level and color settings.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
