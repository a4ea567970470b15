import pytest

from lrc_lyrics.errors import FormatError, LrcError
from lrc_lyrics.lrc.model import TimeTag


def test_parse_with_and_without_fraction():
    assert TimeTag.parse("00:12.00") == TimeTag(0, 12, 0)
    assert TimeTag.parse("12:34") == TimeTag(12, 34, 0)
    assert TimeTag.parse("[01:15.30]") == TimeTag(1, 15, 30)


def test_format_pads_and_keeps_long_minutes():
    assert TimeTag(0, 5, 7).format() == "00:05.07"
    assert str(TimeTag(205, 45, 68)) == "205:45.68"
    assert TimeTag(1, 2, 3).to_tag() == "[01:02.03]"


@pytest.mark.parametrize(
    "text",
    ["abc", "123", "12:34:56", "12:60.00", "99:99.00", "1:2.30", "00:12.5", "00:12.345", "-1:00.00", ""],
)
def test_parse_errors(text):
    with pytest.raises(FormatError):
        TimeTag.parse(text)


def test_constructor_validates_ranges():
    with pytest.raises(FormatError):
        TimeTag(0, 60, 0)
    with pytest.raises(FormatError):
        TimeTag(0, 0, 100)
    with pytest.raises(FormatError):
        TimeTag(-1, 0, 0)
    with pytest.raises(LrcError):
        TimeTag(0, 1.5, 0)
    with pytest.raises(FormatError):
        TimeTag(True, 1)
    with pytest.raises(FormatError):
        TimeTag(0, 1, False)


def test_ordering_is_by_duration():
    tags = [TimeTag(1, 0, 0), TimeTag(0, 59, 99), TimeTag(0, 0, 1), TimeTag(10, 0, 0)]
    assert sorted(tags) == [TimeTag(0, 0, 1), TimeTag(0, 59, 99), TimeTag(1, 0, 0), TimeTag(10, 0, 0)]
    assert TimeTag(0, 59, 99) < TimeTag(1, 0, 0)
    assert TimeTag(2, 3, 4) <= TimeTag(2, 3, 4)


def test_parse_format_round_trip():
    for t in (TimeTag(0, 0, 0), TimeTag(3, 7, 9), TimeTag(59, 59, 99), TimeTag(1234, 1, 50)):
        assert TimeTag.parse(t.format()) == t


def test_millisecond_conversions():
    assert TimeTag.from_ms(0).format() == "00:00.00"
    assert TimeTag.from_ms(14).format() == "00:00.01"
    assert TimeTag.from_ms(17).format() == "00:00.02"
    assert TimeTag.from_ms(1100).format() == "00:01.10"
    assert TimeTag.from_ms(1234567).format() == "20:34.57"
    assert TimeTag.from_ms(12345678).format() == "205:45.68"
    assert TimeTag(1, 2, 30).to_ms() == 62300
    assert TimeTag(1, 2, 30).total_hundredths == 6230
    assert TimeTag.from_hundredths(6230) == TimeTag(1, 2, 30)
    with pytest.raises(FormatError):
        TimeTag.from_ms(-100)
