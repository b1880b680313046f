"""Logging configuration for Survival Grid."""

import logging
import sys


def setup_logging(level: str = "INFO", format_style: str = "simple") -> None:
    """
    Set up logging configuration for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_style: Format style - "simple" or "detailed"
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    formats = {
        "simple": "%(name)s - %(levelname)s - %(message)s",
        "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
    }
    log_format = formats.get(format_style, formats["simple"])

    # stderr keeps the log out of the rendered board on stdout
    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def get_game_logger(module_name: str) -> logging.Logger:
    """
    Get a logger with a shortened name for game modules.

    Args:
        module_name: Full module name (e.g., 'survival.engine_core.reducer')

    Returns:
        Logger with shortened name (e.g., 'engine_core.reducer')
    """
    if module_name.startswith("survival."):
        short_name = module_name[len("survival."):]
    else:
        short_name = module_name

    return logging.getLogger(short_name)
