from __future__ import annotations

from dataclasses import dataclass

from lrc_lyrics.lrc.model import Lyrics, TimeTag


@dataclass(slots=True)
class LineTracker:
    """
    Current-line lookup for a playback position: O(log n) via
    Lyrics.find_timed_line_index + update only on change.
    """

    lyrics: Lyrics
    last_idx: int = -1

    @classmethod
    def from_lyrics(cls, lyrics: Lyrics) -> "LineTracker":
        return cls(lyrics=lyrics)

    def current_index(self, now_ms: int) -> int:
        if now_ms < 0:
            return -1
        # floor: a line never shows before its own timestamp
        i = self.lyrics.find_timed_line_index(TimeTag.from_hundredths(now_ms // 10))
        return -1 if i is None else i

    def changed_index(self, now_ms: int) -> int | None:
        i = self.current_index(now_ms)
        if i != self.last_idx:
            self.last_idx = i
            return i
        return None
