"""
Configuration for the border crossings tool
"""

from border_crossings.config.settings import DEFAULT_RECORDS_MEMBER, Settings

__all__ = ["Settings", "DEFAULT_RECORDS_MEMBER"]
