# src/compat_scraper/utils/logging.py
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional

from ..exceptions import ConfigurationError

# Vendors run on worker threads, so the thread name tells their lines apart
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(threadName)s %(name)s - %(message)s"

# Third-party loggers that drown out per-vendor progress at INFO/DEBUG
QUIET_LIBRARIES: Dict[str, int] = {
    "urllib3": logging.WARNING,
    "requests": logging.WARNING,
    "requests_cache": logging.WARNING,
    "selenium": logging.WARNING,
}

def resolve_level(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {name}")
    return level


def _build_handlers(config: Dict[str, Any]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler(sys.stdout))

    log_file = config.get("file")
    if log_file:
        log_file_path = Path(log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=config.get("max_size", 10 * 1024 * 1024),
            backupCount=config.get("backup_count", 5),
            encoding='utf-8'
        ))
    return handlers


def setup_logging(config: Dict[str, Any], level_override: Optional[str] = None) -> logging.Logger:
    """
    Routes all scraper logging through the root logger.

    `config` is the `logging` section: level, console, format, file, max_size
    and backup_count. `level_override` (the --log-level flag) wins over the
    configured level. Calling this again replaces the previous handlers.

    Raises ConfigurationError for an unknown level name.
    """
    log_level_str = (level_override or config.get("level") or "INFO").upper()
    log_level = resolve_level(log_level_str)
    formatter = logging.Formatter(config.get("format") or DEFAULT_LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in _build_handlers(config):
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        root_logger.addHandler(handler)

    for library, library_level in QUIET_LIBRARIES.items():
        logging.getLogger(library).setLevel(max(library_level, log_level))

    app_logger = logging.getLogger("compat_scraper")
    app_logger.debug(f"Logging ready. Level: {log_level_str}, File: {config.get('file') or 'none'}")
    return app_logger
