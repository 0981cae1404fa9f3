"""Low-level byte reading utilities."""

from nbsreader.utils.cursor import ByteCursor
from nbsreader.utils.primitives import (
    decode_text,
    read_i8,
    read_i16le,
    read_i32le,
    read_pascal_string,
    unpack_fields,
)

__all__ = [
    "ByteCursor",
    "decode_text",
    "read_i8",
    "read_i16le",
    "read_i32le",
    "read_pascal_string",
    "unpack_fields",
]
