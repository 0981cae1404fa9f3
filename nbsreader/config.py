"""
Decoder configuration.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DecoderConfig:
    """
    Options controlling how raw bytes are turned into Python values.

    Attributes:
        text_encoding: Codec used for Pascal string payloads
        text_errors: "replace" substitutes malformed sequences and logs a
            warning; "strict" raises InvalidEncodingError
    """

    text_encoding: str = "utf-8"
    text_errors: str = "replace"

    @property
    def strict_text(self) -> bool:
        return self.text_errors == "strict"


DEFAULT_CONFIG = DecoderConfig()
