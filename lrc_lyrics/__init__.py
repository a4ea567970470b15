from lrc_lyrics.config import DEFAULT_OPTIONS, KNOWN_KEYS, LrcOptions
from lrc_lyrics.errors import (
    FormatError,
    IDTagError,
    IndexOutOfRange,
    InvalidKey,
    InvalidLineText,
    InvalidValue,
    LrcError,
    ParseError,
)
from lrc_lyrics.lrc.model import IDTag, Lyrics, TimedLine, TimeTag
from lrc_lyrics.lrc.parse import parse_lrc, parse_lrc_with_stats

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_OPTIONS",
    "KNOWN_KEYS",
    "FormatError",
    "IDTag",
    "IDTagError",
    "IndexOutOfRange",
    "InvalidKey",
    "InvalidLineText",
    "InvalidValue",
    "LrcError",
    "LrcOptions",
    "Lyrics",
    "ParseError",
    "TimeTag",
    "TimedLine",
    "parse_lrc",
    "parse_lrc_with_stats",
]
