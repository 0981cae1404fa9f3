"""Format handlers."""

from nbsreader.formats.nbs import NBSReader

__all__ = ["NBSReader"]
