"""Utilities shared across the package."""

from cartpole_pid.utils.logger import logger, setup_console_logging

__all__ = ["logger", "setup_console_logging"]
