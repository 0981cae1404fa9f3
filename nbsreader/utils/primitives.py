"""
Primitive decoders for NBS fields.

All integers are little-endian two's complement with no alignment padding.
Several adjacent fields are usually pulled from one read and split with a
packed struct format, e.g. the first header block:

    Offset  Size    Field
    0x00    2       zeroes (i16)
    0x02    1       version (i8)
    0x03    1       instrument count (i8)
    0x04    2       song length (i16)
    0x06    2       layer count (i16)

    unpack_fields(cursor, "<hbbhh")

Strings are "Pascal" strings: an i32 length prefix followed by that many
bytes of text. A length of zero or less means the string is absent.
"""

import logging
import struct
from typing import Optional, Tuple

from nbsreader.config import DEFAULT_CONFIG, DecoderConfig
from nbsreader.errors import InvalidEncodingError
from nbsreader.utils.cursor import ByteCursor

logger = logging.getLogger(__name__)

I8 = struct.Struct("<b")
I16 = struct.Struct("<h")
I32 = struct.Struct("<i")


def read_i8(cursor: ByteCursor) -> int:
    """Read a signed 8-bit integer."""
    return I8.unpack(cursor.read_exact(I8.size))[0]


def read_i16le(cursor: ByteCursor) -> int:
    """Read a little-endian signed 16-bit integer."""
    return I16.unpack(cursor.read_exact(I16.size))[0]


def read_i32le(cursor: ByteCursor) -> int:
    """Read a little-endian signed 32-bit integer."""
    return I32.unpack(cursor.read_exact(I32.size))[0]


def unpack_fields(cursor: ByteCursor, fmt: str) -> Tuple[int, ...]:
    """
    Decode several packed fields from a single read.

    Args:
        cursor: Source cursor
        fmt: struct format; must start with "<" so no padding is inserted

    Returns:
        Tuple of decoded values in field order
    """
    block = struct.Struct(fmt)
    return block.unpack(cursor.read_exact(block.size))


def decode_text(
    raw: bytes, config: DecoderConfig = DEFAULT_CONFIG, offset: Optional[int] = None
) -> str:
    """
    Decode a string payload.

    Malformed sequences are replaced (and logged) unless the config asks for
    strict decoding.

    Args:
        raw: Payload bytes
        config: Decoder options
        offset: Payload position, for error messages

    Returns:
        Decoded text

    Raises:
        InvalidEncodingError: On malformed text with strict decoding
    """
    try:
        return raw.decode(config.text_encoding)
    except UnicodeDecodeError as e:
        if config.strict_text:
            raise InvalidEncodingError(raw, config.text_encoding, offset=offset) from e

        logger.warning(
            "Malformed %s text at offset %s, substituting invalid bytes: %s",
            config.text_encoding,
            f"0x{offset:X}" if offset is not None else "?",
            e.reason,
        )
        return raw.decode(config.text_encoding, errors=config.text_errors)


def read_pascal_string(
    cursor: ByteCursor, config: DecoderConfig = DEFAULT_CONFIG
) -> Optional[str]:
    """
    Read an i32 length-prefixed string.

    Args:
        cursor: Source cursor
        config: Decoder options

    Returns:
        The decoded string, or None when the length prefix is <= 0
    """
    length = read_i32le(cursor)
    if length <= 0:
        return None

    offset = cursor.position
    return decode_text(cursor.read_exact(length), config, offset=offset)
