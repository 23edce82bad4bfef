"""
CLI display modules.
"""

from cli.display.log import setup_logging
from cli.display.tables import display_dro_info, display_events

__all__ = [
    "setup_logging",
    "display_dro_info",
    "display_events",
]
