from __future__ import annotations

import json

from .model import Lyrics


def export_lrc(lyrics: Lyrics, group_time_tags: bool = False) -> str:
    """Canonical LRC text with a trailing newline, ready to be written to a file."""
    text = lyrics.to_string(group_time_tags=group_time_tags)
    return text + ("\n" if text else "")


def export_json(lyrics: Lyrics) -> str:
    return json.dumps(
        {
            "offset_ms": lyrics.offset_ms,
            "metadata": {k: tag.value for k, tag in lyrics.metadata.items()},
            "lines": [
                {"time": e.time.format(), "t_ms": e.time.to_ms(), "text": e.text}
                for e in lyrics.get_timed_lines()
            ],
        },
        ensure_ascii=False,
        indent=2,
    )


def _fmt_srt_time(ms: int) -> str:
    # HH:MM:SS,mmm
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms2:03d}"


def export_srt(lyrics: Lyrics, last_line_duration_ms: int = 2000) -> str:
    """
    End time is next start time, last line ends at +last_line_duration_ms.
    The [offset] tag is applied; shifted times are clamped to 0.
    """
    offset = lyrics.offset_ms
    starts = [max(e.time.to_ms() + offset, 0) for e in lyrics.get_timed_lines()]
    texts = [e.text for e in lyrics.get_timed_lines()]
    if not starts:
        return ""
    out: list[str] = []
    for i, start in enumerate(starts, start=1):
        if i < len(starts):
            end = max(starts[i], start + 1)
        else:
            end = start + last_line_duration_ms
        out.append(str(i))
        out.append(f"{_fmt_srt_time(start)} --> {_fmt_srt_time(end)}")
        out.append(texts[i - 1])
        out.append("")
    return "\n".join(out)
