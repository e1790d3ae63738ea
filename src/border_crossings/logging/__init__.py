"""
Structured logging setup for the border crossings tool
"""

from border_crossings.logging.setup import get_logger, setup_logging

__all__ = ["setup_logging", "get_logger"]
