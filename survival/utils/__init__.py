"""Shared utilities."""

from .logging_config import setup_logging, get_game_logger

__all__ = ["setup_logging", "get_game_logger"]
