"""
CLI display modules.
"""

from cli.display.tables import (
    display_grid_summary,
    display_header,
    display_ticks,
)

__all__ = [
    "display_grid_summary",
    "display_header",
    "display_ticks",
]
