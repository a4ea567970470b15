from __future__ import annotations

from dataclasses import dataclass
import logging
import re

from lrc_lyrics.config import DEFAULT_OPTIONS, LrcOptions
from lrc_lyrics.errors import FormatError, LrcError, ParseError

from .model import IDTag, Lyrics, TimeTag, check_line_text

logger = logging.getLogger(__name__)

# [label:text] at the start of a line; label empty for [:] comments
_LEADING_TAG_RE = re.compile(r"^\[([^\[\]:]*):([^\]]*)\]")


@dataclass(frozen=True, slots=True)
class BlankLine:
    pass


@dataclass(frozen=True, slots=True)
class CommentLine:
    pass


@dataclass(frozen=True, slots=True)
class MetadataLine:
    tags: tuple[IDTag, ...]


@dataclass(frozen=True, slots=True)
class TimedLyricLine:
    times: tuple[TimeTag, ...]
    text: str
    tags: tuple[IDTag, ...] = ()


@dataclass(frozen=True, slots=True)
class InvalidLine:
    error: LrcError


ParsedLine = BlankLine | CommentLine | MetadataLine | TimedLyricLine | InvalidLine


@dataclass(frozen=True, slots=True)
class LrcParseStats:
    lines_total: int
    lines_blank: int
    lines_comment: int
    lines_metadata: int
    lines_timed: int
    lines_skipped: int
    timed_lines_total: int


def classify_line(line: str, options: LrcOptions = DEFAULT_OPTIONS) -> ParsedLine:
    """
    Supported:
    - [key: value] ID tags, several per line allowed
    - [mm:ss] / [mm:ss.xx] time tags, several per line, followed by text
    - ID tags mixed into the leading time tags
    - [:] comment tag, drops the rest of the line
    """
    s = line.strip()
    if not s:
        return BlankLine()

    times: list[TimeTag] = []
    tags: list[IDTag] = []
    rest = s
    try:
        while True:
            m = _LEADING_TAG_RE.match(rest)
            if not m:
                break
            label = m.group(1).strip()
            if not label:
                if not times and not tags:
                    return CommentLine()
                rest = ""
                break
            if label.isascii() and label.isdigit():
                times.append(TimeTag.parse(m.group(0)))
            else:
                tags.append(
                    IDTag.from_string(label, m.group(2), known_only=not options.allow_unknown_keys)
                )
            rest = rest[m.end() :].lstrip()

        if times:
            return TimedLyricLine(times=tuple(times), text=check_line_text(rest), tags=tuple(tags))
        if tags:
            if rest:
                raise FormatError(f"Unexpected text after ID tag: {rest!r}")
            return MetadataLine(tags=tuple(tags))
        raise FormatError(f"Unrecognized line: {s!r}")
    except LrcError as e:
        return InvalidLine(error=e)


def parse_lrc(text: str, options: LrcOptions | None = None) -> Lyrics:
    lyrics, _stats = parse_lrc_with_stats(text, options)
    return lyrics


def parse_lrc_with_stats(text: str, options: LrcOptions | None = None) -> tuple[Lyrics, LrcParseStats]:
    """
    Strict mode raises ParseError on the first invalid line and returns
    nothing; lenient mode skips such lines and counts them.
    """
    opts = options or DEFAULT_OPTIONS
    if text.startswith("\ufeff"):
        text = text[1:]

    lyrics = Lyrics()
    total = 0
    blank = 0
    comment = 0
    meta = 0
    timed = 0
    skipped = 0

    for line_no, raw in enumerate(text.splitlines(), start=1):
        total += 1
        parsed = classify_line(raw, opts)

        if isinstance(parsed, BlankLine):
            blank += 1
        elif isinstance(parsed, CommentLine):
            comment += 1
        elif isinstance(parsed, MetadataLine):
            meta += 1
            for tag in parsed.tags:
                lyrics.insert_metadata(tag)
        elif isinstance(parsed, TimedLyricLine):
            timed += 1
            for tag in parsed.tags:
                lyrics.insert_metadata(tag)
            lyrics.add_timed_lines(parsed.times, parsed.text)
        else:
            if opts.strict:
                raise ParseError(line_no, str(parsed.error)) from parsed.error
            logger.warning("Skipping line %d: %s", line_no, parsed.error)
            skipped += 1

    stats = LrcParseStats(
        lines_total=total,
        lines_blank=blank,
        lines_comment=comment,
        lines_metadata=meta,
        lines_timed=timed,
        lines_skipped=skipped,
        timed_lines_total=len(lyrics),
    )
    logger.debug("Parsed LRC: %s", stats)
    return lyrics, stats
