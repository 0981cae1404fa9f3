"""
Display formatting utilities for CLI output.

Provides bar graphics and readable names for note block values.
"""

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Key 0 on the NBS piano is A0, which is MIDI note 21
KEY_TO_MIDI_OFFSET = 21

# Default Note Block Studio instruments, by id
INSTRUMENT_NAMES = [
    "Harp",
    "Double Bass",
    "Bass Drum",
    "Snare Drum",
    "Click",
    "Guitar",
    "Flute",
    "Bell",
    "Chime",
    "Xylophone",
    "Iron Xylophone",
    "Cow Bell",
    "Didgeridoo",
    "Bit",
    "Banjo",
    "Pling",
]


def value_bar(
    value: int,
    max_value: int = 100,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
    show_value: bool = True,
) -> str:
    """
    Create a text-based bar graphic.

    Args:
        value: Current value
        max_value: Maximum value (default 100 for note block velocity)
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion
        show_value: Show numeric value

    Returns:
        Formatted string like " 70 [███████░░░]"
    """
    if max_value <= 0:
        max_value = 1

    clamped = max(0, min(value, max_value))
    fill_count = int((clamped / max_value) * width)

    bar = filled_char * fill_count + empty_char * (width - fill_count)

    if show_value:
        return f"{value:3d} [{bar}]"
    return f"[{bar}]"


def pan_bar(
    panning: int,
    width: int = 11,
    left_char: str = "◀",
    right_char: str = "▶",
    center_char: str = "●",
    empty_char: str = "─",
) -> str:
    """
    Create a centered pan bar graphic.

    Pan encoding (NBS): 0 = full left, 100 = center, 200 = full right.
    The decoded value is a signed byte, so it is unwrapped first.

    Returns:
        Formatted string like "L 40 [──◀──●─────]"
    """
    pan = panning & 0xFF
    center = width // 2

    bar = list(empty_char * width)
    bar[center] = center_char

    if pan == 100:
        position_str = "  C"
    elif pan < 100:
        left_amount = 100 - pan
        pos = max(0, center - int((left_amount / 100) * center))
        bar[pos] = left_char
        position_str = f"L{left_amount:2d}"
    else:
        right_amount = min(pan - 100, 100)
        pos = min(width - 1, center + int((right_amount / 100) * (width - center - 1)))
        bar[pos] = right_char
        position_str = f"R{right_amount:2d}"

    return f"{position_str} [{''.join(bar)}]"


def key_name(key: int) -> str:
    """
    Name a note block key.

    Returns:
        "A0" for key 0, "C8" for key 87
    """
    midi = key + KEY_TO_MIDI_OFFSET
    return f"{NOTE_NAMES[midi % 12]}{midi // 12 - 1}"


def instrument_name(instrument: int) -> str:
    """
    Name an instrument id.

    Returns:
        "Harp", or "Custom 3" for ids beyond the default set
    """
    if 0 <= instrument < len(INSTRUMENT_NAMES):
        return INSTRUMENT_NAMES[instrument]
    return f"Custom {instrument - len(INSTRUMENT_NAMES)}"


def format_pitch(pitch: int) -> str:
    """
    Format fine pitch in cents.

    Returns:
        "+25c", "-100c" or "" when there is no detune
    """
    if pitch == 0:
        return ""
    return f"{pitch:+d}c"


def format_tempo(song_tempo: int) -> str:
    """
    Format tempo with raw value.

    Returns:
        "5.00 t/s (raw: 500)"
    """
    return f"{song_tempo / 100:.2f} t/s (raw: {song_tempo})"


def format_duration(seconds: float) -> str:
    """
    Format a duration.

    Returns:
        "1:05.50"
    """
    minutes, secs = divmod(seconds, 60)
    return f"{int(minutes)}:{secs:05.2f}"


def flag_str(value: int) -> str:
    """Format a 0/1 header flag."""
    return "[green]On[/green]" if value else "[dim]Off[/dim]"
