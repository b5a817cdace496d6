"""
Central logging configuration for calendarpicker.

The picker modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves; applications embedding the picker call
``configure_logging`` (or their own setup) once at startup.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"

PACKAGE_LOGGER = "calendarpicker"


def get_log_level(level_name: str) -> int:
    """Get numeric log level from a level name.

    Args:
        level_name: DEBUG, INFO, WARNING, ERROR or CRITICAL (case insensitive)

    Returns:
        Numeric log level

    Raises:
        ValueError: If the level name is not recognised
    """
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name!r}")
    return level


def configure_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    level: Optional[str] = None,
) -> None:
    """
    Configure the root and calendarpicker log levels.

    Args:
        debug_mode: Whether to enable debug logging for calendarpicker modules
        force_debug: Override debug mode setting (None to use env var detection)
        level: Root log level name, used when no environment override is set

    Environment Variables:
        CALENDARPICKER_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        CALENDARPICKER_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("CALENDARPICKER_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("CALENDARPICKER_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if level:
        root_level = get_log_level(level)
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Keep handlers installed by the host application
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    package_level = logging.DEBUG if final_debug else max(root_level, logging.INFO)
    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)

    logging.getLogger(__name__).debug(
        f"Logging configured: root={logging.getLevelName(root_level)}, "
        f"calendarpicker={logging.getLevelName(package_level)}"
    )
