from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
import re
from typing import Iterable

from lrc_lyrics.config import KNOWN_KEYS, LrcOptions
from lrc_lyrics.errors import FormatError, IndexOutOfRange, InvalidKey, InvalidLineText, InvalidValue

_TIME_RE = re.compile(r"^(\d+):(\d{2})(?:\.(\d{2}))?$", re.ASCII)  # mm:ss / mm:ss.xx
_KEY_RE = re.compile(r"^[A-Za-z]+$")
_ID_LINE_RE = re.compile(r"^\[([^\[\]:]*):([^\]]*)\]$")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f\x85\u2028\u2029]")  # tab allowed; all str.splitlines() breaks
_EMBEDDED_TAG_RE = re.compile(r"\[.*:.*\]")


@dataclass(frozen=True, slots=True, order=True)
class TimeTag:
    """
    Timestamp of a lyric line: minutes, seconds and hundredths of a second.

    Field order doubles as the total order, which matches comparing the
    absolute duration since seconds < 60 and fraction < 100.
    """

    minutes: int
    seconds: int
    fraction: int = 0

    def __post_init__(self) -> None:
        for name in ("minutes", "seconds", "fraction"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise FormatError(f"TimeTag.{name} must be an int, got {value!r}")
        if self.minutes < 0:
            raise FormatError(f"Invalid minutes: {self.minutes}")
        if not (0 <= self.seconds <= 59):
            raise FormatError(f"Invalid seconds: {self.seconds}")
        if not (0 <= self.fraction <= 99):
            raise FormatError(f"Invalid hundredths: {self.fraction}")

    @classmethod
    def parse(cls, text: str) -> "TimeTag":
        """Parse `mm:ss.xx` or `mm:ss`, optionally wrapped as `[mm:ss.xx]`."""
        s = text.strip()
        if s.startswith("[") and s.endswith("]"):
            s = s[1:-1].strip()
        m = _TIME_RE.match(s)
        if not m:
            raise FormatError(f"Not a time tag (expected mm:ss.xx): {text!r}")
        frac = m.group(3)
        return cls(int(m.group(1)), int(m.group(2)), int(frac) if frac else 0)

    @classmethod
    def from_hundredths(cls, total: int) -> "TimeTag":
        if total < 0:
            raise FormatError(f"Negative timestamp: {total}")
        m, rem = divmod(total, 6000)
        s, xx = divmod(rem, 100)
        return cls(m, s, xx)

    @classmethod
    def from_ms(cls, ms: int) -> "TimeTag":
        # round half up to the nearest hundredth
        return cls.from_hundredths((ms + 5) // 10)

    @property
    def total_hundredths(self) -> int:
        return self.minutes * 6000 + self.seconds * 100 + self.fraction

    def to_ms(self) -> int:
        return self.total_hundredths * 10

    def format(self) -> str:
        return f"{self.minutes:02d}:{self.seconds:02d}.{self.fraction:02d}"

    def to_tag(self) -> str:
        return f"[{self.format()}]"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True, slots=True)
class IDTag:
    """Metadata tag `[key: value]`. Key is stored lowercase, value stripped."""

    key: str
    value: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not _KEY_RE.match(self.key):
            raise InvalidKey(f"Invalid tag key: {self.key!r}")
        if not isinstance(self.value, str) or "]" in self.value or _CONTROL_RE.search(self.value):
            raise InvalidValue(f"Invalid value for tag {self.key!r}: {self.value!r}")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "value", self.value.strip())

    @classmethod
    def from_string(cls, key: str, value: str, *, known_only: bool = False) -> "IDTag":
        tag = cls(key.strip() if isinstance(key, str) else key, value)
        if known_only and tag.key not in KNOWN_KEYS:
            raise InvalidKey(f"Unknown tag key: {tag.key!r}")
        return tag

    @classmethod
    def parse_line(cls, text: str, *, known_only: bool = False) -> "IDTag":
        m = _ID_LINE_RE.match(text.strip())
        if not m:
            raise FormatError(f"Not an ID tag line (expected [key: value]): {text!r}")
        return cls.from_string(m.group(1), m.group(2), known_only=known_only)

    def format(self) -> str:
        return f"[{self.key}: {self.value}]"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True, slots=True)
class TimedLine:
    time: TimeTag
    text: str


def _entry_time(entry: TimedLine) -> TimeTag:
    return entry.time


def check_line_text(text: str) -> str:
    if not isinstance(text, str):
        raise InvalidLineText(f"Lyric text must be a string, got {text!r}")
    if _CONTROL_RE.search(text):
        raise InvalidLineText(f"Lyric text contains control characters: {text!r}")
    if _EMBEDDED_TAG_RE.search(text):
        raise InvalidLineText(f"Lyric text contains tags: {text!r}")
    return text.strip()


class Lyrics:
    """
    LRC document: ID tag metadata plus time-sorted lyric lines.

    Timed lines stay sorted by time after every mutation; entries with equal
    times keep their insertion order.
    """

    def __init__(self) -> None:
        self._metadata: dict[str, IDTag] = {}
        self._timed_lines: list[TimedLine] = []

    @classmethod
    def from_str(cls, text: str, options: LrcOptions | None = None) -> "Lyrics":
        from lrc_lyrics.lrc.parse import parse_lrc

        return parse_lrc(text, options)

    # Metadata

    @property
    def metadata(self) -> dict[str, IDTag]:
        """Key-sorted copy of the metadata."""
        return dict(sorted(self._metadata.items()))

    def insert_metadata(self, tag: IDTag) -> None:
        self._metadata[tag.key] = tag

    def get_metadata(self, key: str) -> IDTag | None:
        return self._metadata.get(key.strip().lower())

    def remove_metadata(self, key: str) -> IDTag | None:
        return self._metadata.pop(key.strip().lower(), None)

    @property
    def offset_ms(self) -> int:
        tag = self._metadata.get("offset")
        if tag is None or not tag.value:
            return 0
        try:
            return int(tag.value)
        except ValueError as e:
            raise InvalidValue(f"Invalid offset: {tag.value!r}") from e

    # Timed lines

    def add_timed_line(self, time: TimeTag, text: str) -> None:
        self._insert(time, check_line_text(text))

    def add_timed_lines(self, times: Iterable[TimeTag], text: str) -> None:
        text = check_line_text(text)
        for time in times:
            self._insert(time, text)

    def _insert(self, time: TimeTag, text: str) -> None:
        i = bisect_right(self._timed_lines, time, key=_entry_time)
        self._timed_lines.insert(i, TimedLine(time, text))

    def remove_timed_line(self, index: int) -> TimedLine:
        if not (0 <= index < len(self._timed_lines)):
            raise IndexOutOfRange(
                f"Timed line index {index} out of range (have {len(self._timed_lines)})"
            )
        return self._timed_lines.pop(index)

    def find_timed_line_index(self, time: TimeTag) -> int | None:
        """Index of the line to show at `time`: the last one starting at or before it."""
        i = bisect_right(self._timed_lines, time, key=_entry_time) - 1
        return i if i >= 0 else None

    def get_timed_lines(self) -> tuple[TimedLine, ...]:
        return tuple(self._timed_lines)

    # Formatting

    def to_string(self, *, group_time_tags: bool = False) -> str:
        blocks: list[str] = []
        if self._metadata:
            blocks.append("\n".join(tag.format() for _k, tag in sorted(self._metadata.items())))
        if self._timed_lines:
            if group_time_tags:
                lines = self._grouped_lines()
            else:
                lines = [e.time.to_tag() + e.text for e in self._timed_lines]
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)

    def _grouped_lines(self) -> list[str]:
        # only adjacent entries merge, so re-parsing keeps the order of ties
        groups: list[tuple[str, list[TimeTag]]] = []
        for e in self._timed_lines:
            if groups and groups[-1][0] == e.text:
                groups[-1][1].append(e.time)
            else:
                groups.append((e.text, [e.time]))
        return ["".join(t.to_tag() for t in times) + text for text, times in groups]

    def __str__(self) -> str:
        return self.to_string()

    def __len__(self) -> int:
        return len(self._timed_lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Lyrics):
            return NotImplemented
        return self._metadata == other._metadata and self._timed_lines == other._timed_lines

    def __repr__(self) -> str:
        return f"Lyrics(metadata={self.metadata!r}, timed_lines={self._timed_lines!r})"
