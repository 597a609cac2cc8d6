"""Configuration: settings and logging."""

from .logging import configure_logging, get_logger
from .settings import HttplanSettings

__all__ = ["HttplanSettings", "configure_logging", "get_logger"]
