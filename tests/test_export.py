import json

from lrc_lyrics.lrc.export import export_json, export_lrc, export_srt
from lrc_lyrics.lrc.model import IDTag, Lyrics, TimeTag


def _doc(*lines: tuple[int, str]) -> Lyrics:
    lyrics = Lyrics()
    for ms, text in lines:
        lyrics.add_timed_line(TimeTag.from_ms(ms), text)
    return lyrics


def test_export_srt_basic():
    srt = export_srt(_doc((0, "a"), (1000, "b")), last_line_duration_ms=2000)
    assert "00:00:00,000 --> 00:00:01,000" in srt
    assert "00:00:01,000 --> 00:00:03,000" in srt
    assert "\na\n" in srt
    assert "\nb\n" in srt


def test_export_srt_applies_offset_clamped():
    doc = _doc((1000, "x"), (3000, "y"))
    doc.insert_metadata(IDTag("offset", "-1500"))
    srt = export_srt(doc)
    assert srt.startswith("1\n00:00:00,000 --> 00:00:01,500\nx\n")
    assert "00:00:01,500 --> 00:00:03,500" in srt


def test_export_srt_empty():
    assert export_srt(Lyrics()) == ""


def test_export_json():
    doc = _doc((12000, "A"), (15300, "B"))
    doc.insert_metadata(IDTag("ti", "Y"))
    data = json.loads(export_json(doc))
    assert data["offset_ms"] == 0
    assert data["metadata"] == {"ti": "Y"}
    assert data["lines"] == [
        {"time": "00:12.00", "t_ms": 12000, "text": "A"},
        {"time": "00:15.30", "t_ms": 15300, "text": "B"},
    ]


def test_export_lrc_trailing_newline():
    doc = _doc((12000, "A"), (75000, "A"))
    assert export_lrc(doc) == "[00:12.00]A\n[01:15.00]A\n"
    assert export_lrc(doc, group_time_tags=True) == "[00:12.00][01:15.00]A\n"
    assert export_lrc(Lyrics()) == ""
