"""
adr-keeper Logging Configuration

Configurable logging with debug mode support.
"""

import os
import logging
import sys
from pathlib import Path
from typing import Optional


def is_debug_mode() -> bool:
    """Check the ADR_KEEPER_DEBUG environment variable."""
    return os.environ.get("ADR_KEEPER_DEBUG", "").lower() in ("1", "true", "yes")


def _level_from_env() -> int:
    name = os.environ.get("ADR_KEEPER_LOG_LEVEL", "").upper()
    level = logging.getLevelName(name) if name else None
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    quiet: bool = False
) -> logging.Logger:
    """Set up logging configuration.

    Args:
        level: Logging level (default: DEBUG if ADR_KEEPER_DEBUG, else
            ADR_KEEPER_LOG_LEVEL or INFO)
        log_file: Optional path to log file
        quiet: If True, suppress console output

    Returns:
        Configured logger
    """
    debug = is_debug_mode()
    if level is None:
        level = logging.DEBUG if debug else _level_from_env()

    logger = logging.getLogger("adr_keeper")
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if debug:
            console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            console_format = "%(message)s"

        console_handler.setFormatter(logging.Formatter(console_format))
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "adr_keeper") -> logging.Logger:
    """Get a logger with the adr-keeper configuration.

    Args:
        name: Logger name (will be prefixed with 'adr_keeper.')

    Returns:
        Configured logger
    """
    if not name.startswith("adr_keeper"):
        name = f"adr_keeper.{name}"

    logger = logging.getLogger(name)

    # Ensure parent logger is configured
    parent = logging.getLogger("adr_keeper")
    if not parent.handlers:
        setup_logging()

    return logger


# Environment variable documentation
ENV_VARS = {
    "ADR_KEEPER_DEBUG": {
        "description": "Enable debug mode with verbose logging",
        "values": ["1", "true", "yes"],
        "default": "false"
    },
    "ADR_KEEPER_DIR": {
        "description": "Override the record store directory",
        "default": "docs/adr"
    },
    "ADR_KEEPER_LOG_LEVEL": {
        "description": "Set logging level",
        "values": ["DEBUG", "INFO", "WARNING", "ERROR"],
        "default": "INFO"
    }
}
