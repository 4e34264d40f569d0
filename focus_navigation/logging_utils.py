from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from focus_navigation.settings import NavigationSettings

LOGGER_NAME = "FocusNavigation"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a child of it for one concern."""
    if not suffix:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{suffix}")


def resolve_log_level(debug_enabled: bool) -> int:
    """DEBUG when ``FOCUS_NAV_DEBUG`` (or ``settings.debug``) is on, otherwise INFO."""
    return logging.DEBUG if debug_enabled else logging.INFO


def build_rotating_file_handler(
    log_dir: Path,
    filename: str,
    *,
    retention: int = 5,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Rotating utf-8 handler for ``log_dir/filename``; ``retention`` counts the live file."""
    backup_count = max(0, max(1, retention) - 1)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / filename,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    if formatter is not None:
        handler.setFormatter(formatter)
    return handler


def configure_logging(
    settings: NavigationSettings,
    *,
    log_dir: Optional[Path] = None,
    filename: str = "focus-navigation.log",
) -> logging.Logger:
    """Set the package log level and optionally attach a rotating file handler.

    Calling this twice with the same ``log_dir`` does not stack handlers.
    """
    logger = get_logger()
    logger.setLevel(resolve_log_level(settings.debug))
    if log_dir is None:
        return logger
    target = (log_dir / filename).resolve()
    for existing in logger.handlers:
        if isinstance(existing, RotatingFileHandler) and Path(existing.baseFilename).resolve() == target:
            return logger
    handler = build_rotating_file_handler(log_dir, filename, formatter=logging.Formatter(_DEFAULT_FORMAT))
    logger.addHandler(handler)
    return logger
