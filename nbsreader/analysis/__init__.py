"""Analysis helpers for decoded songs."""

from nbsreader.analysis.summary import GridSummary, summarize_ticks

__all__ = ["GridSummary", "summarize_ticks"]
