"""
ledgerbench - Core configuration and logging.
"""

from ledgerbench.core.config import Settings, get_settings, settings
from ledgerbench.core.logging import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "setup_logging",
]
