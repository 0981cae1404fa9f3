"""Note Block Studio format handlers."""

from nbsreader.formats.nbs.grid_decoder import GridState, TickGridDecoder, TickStream
from nbsreader.formats.nbs.header_decoder import decode_header
from nbsreader.formats.nbs.reader import NBSReader, read, read_all

__all__ = [
    "GridState",
    "NBSReader",
    "TickGridDecoder",
    "TickStream",
    "decode_header",
    "read",
    "read_all",
]
