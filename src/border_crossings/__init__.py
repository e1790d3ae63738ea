"""
Border Crossings - timeline of border crossings from a location history export
"""

__version__ = "0.1.0"

from border_crossings.config import Settings
from border_crossings.logging import setup_logging

__all__ = ["Settings", "setup_logging"]
