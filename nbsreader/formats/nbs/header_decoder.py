"""
NBS header decoder.

Header layout (all integers little-endian, no padding):
    Size    Description
    8       zeroes:i16, version:i8, instrument_count:i8,
            song_length:i16, layer_count:i16
    var     song_name, song_author, original_song_author,
            song_description (Pascal strings)
    5       song_tempo:i16, auto_save:i8, auto_save_duration:i8,
            time_signature:i8
    20      minutes_spent, left_clicks, right_clicks,
            note_blocks_added, note_blocks_removed (i32 each)
    var     import_file_name (Pascal string)
    4       loop:i8, max_loop_count:i8, loop_start_tick:i16

Offsets are implied by the cumulative reads, so the fields must be consumed
in exactly this order.
"""

import logging
from typing import Optional

from nbsreader.config import DEFAULT_CONFIG, DecoderConfig
from nbsreader.models.header import DEFAULT_AUTHOR, DEFAULT_SONG_NAME, NBSHeader
from nbsreader.utils.cursor import ByteCursor
from nbsreader.utils.primitives import read_pascal_string, unpack_fields

logger = logging.getLogger(__name__)

# Packed struct formats for the fixed-size header blocks
FIRST_BLOCK = "<hbbhh"
TEMPO_BLOCK = "<hbbb"
STATS_BLOCK = "<iiiii"
LOOP_BLOCK = "<bbh"


def _string_or(cursor: ByteCursor, config: DecoderConfig, default: str) -> str:
    value = read_pascal_string(cursor, config)
    return default if value is None else value


def decode_header(cursor: ByteCursor, config: Optional[DecoderConfig] = None) -> NBSHeader:
    """
    Decode the header section of an NBS file.

    Args:
        cursor: Cursor positioned at the start of the file
        config: Decoder options (defaults to DEFAULT_CONFIG)

    Returns:
        Decoded header; the cursor is left at the start of the tick grid

    Raises:
        ShortReadError: If the file ends inside the header
    """
    config = config or DEFAULT_CONFIG

    zeroes, version, instrument_count, song_length, layer_count = unpack_fields(
        cursor, FIRST_BLOCK
    )

    song_name = _string_or(cursor, config, DEFAULT_SONG_NAME)
    song_author = _string_or(cursor, config, DEFAULT_AUTHOR)
    original_song_author = _string_or(cursor, config, DEFAULT_AUTHOR)
    song_description = _string_or(cursor, config, "")

    song_tempo, auto_save, auto_save_duration, time_signature = unpack_fields(
        cursor, TEMPO_BLOCK
    )

    (
        minutes_spent,
        left_clicks,
        right_clicks,
        note_blocks_added,
        note_blocks_removed,
    ) = unpack_fields(cursor, STATS_BLOCK)

    import_file_name = _string_or(cursor, config, "")

    loop, max_loop_count, loop_start_tick = unpack_fields(cursor, LOOP_BLOCK)

    header = NBSHeader(
        zeroes=zeroes,
        version=version,
        instrument_count=instrument_count,
        song_length=song_length,
        layer_count=layer_count,
        song_name=song_name,
        song_author=song_author,
        original_song_author=original_song_author,
        song_description=song_description,
        song_tempo=song_tempo,
        auto_save=auto_save,
        auto_save_duration=auto_save_duration,
        time_signature=time_signature,
        minutes_spent=minutes_spent,
        left_clicks=left_clicks,
        right_clicks=right_clicks,
        note_blocks_added=note_blocks_added,
        note_blocks_removed=note_blocks_removed,
        import_file_name=import_file_name,
        loop=loop,
        max_loop_count=max_loop_count,
        loop_start_tick=loop_start_tick,
    )

    if header.is_legacy_format:
        logger.warning(
            "%s: leading bytes are 0x%04X, not zero; file may use an older layout",
            cursor.name,
            zeroes & 0xFFFF,
        )

    logger.debug(
        "%s: header v%d '%s' ends at offset 0x%X",
        cursor.name,
        version,
        song_name,
        cursor.position,
    )
    return header
