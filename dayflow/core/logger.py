"""
Unified logging system
Console plus rotating file output, configured from the [logging] section

[logging.levels] maps logger names to levels, so chatty libraries (httpx,
uvicorn access log) can be quieted without lowering the app's own level.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Dict, Mapping, Optional

from dayflow.config.loader import get_config

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

DEFAULT_MODULE_LEVELS: Dict[str, str] = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "uvicorn.access": "WARNING",
}


def parse_level(level: object, default: int = logging.INFO) -> int:
    """Level name (any case) or number to a logging level"""
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), default)


def parse_size(size_str: object) -> int:
    """Parse a file size such as 10MB, 512KB or 1048576"""
    size_str = str(size_str).strip().upper()
    for suffix, factor in (("KB", 1024), ("MB", 1024**2), ("GB", 1024**3)):
        if size_str.endswith(suffix):
            return int(size_str[: -len(suffix)]) * factor
    return int(size_str)


class LoggerManager:
    """Log manager"""

    def __init__(self, level: Optional[str] = None):
        self._loggers: dict = {}
        self._setup_root_logger(level)

    def _setup_root_logger(self, level: Optional[str] = None):
        """(Re)build the root handlers; `level` overrides logging.level"""
        config = get_config()

        logs_dir = Path(config.get("logging.logs_dir", "./logs"))
        max_bytes = parse_size(config.get("logging.max_file_size", "10MB"))
        backup_count = int(config.get("logging.backup_count", 5))
        logs_dir.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(parse_level(level or config.get("logging.level", "INFO")))

        # Clear existing handlers
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)

        root_logger.addHandler(
            self._rotating_handler(logs_dir / "dayflow.log", logging.DEBUG, max_bytes, backup_count)
        )
        root_logger.addHandler(
            self._rotating_handler(logs_dir / "error.log", logging.ERROR, max_bytes, backup_count)
        )

        self._apply_module_levels(config.get("logging.levels", None))

    @staticmethod
    def _rotating_handler(
        path: Path, level: int, max_bytes: int, backup_count: int
    ) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT))
        return handler

    @staticmethod
    def _apply_module_levels(levels: Optional[Mapping[str, str]]) -> None:
        merged = dict(DEFAULT_MODULE_LEVELS)
        merged.update(levels or {})
        for name, level in merged.items():
            logging.getLogger(name).setLevel(parse_level(level, logging.WARNING))

    def get_logger(self, name: str) -> logging.Logger:
        """Get logger with specified name"""
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]


# Lazy initialization to avoid circular imports
_logger_manager: Optional[LoggerManager] = None


def get_logger(name: str) -> logging.Logger:
    """Convenience function to get logger"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager()

    return _logger_manager.get_logger(name)


def setup_logging(level: Optional[str] = None):
    """Re-read the [logging] section, optionally forcing the root level"""
    global _logger_manager

    if _logger_manager is None:
        _logger_manager = LoggerManager(level)
    else:
        _logger_manager._setup_root_logger(level)
