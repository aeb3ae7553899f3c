import pytest

from rep_annote.domain import TimestampParts
from rep_annote.timeutils import format_timestamp, is_timestamp, parse_timestamp, to_seconds


def test_to_seconds_covers_every_valid_timestamp():
    for m in range(60):
        for s in range(60):
            assert to_seconds(f"{m}:{s:02d}") == m * 60 + s
            assert to_seconds(f"{m:02d}:{s:02d}") == m * 60 + s


def test_parse_timestamp_splits_minute_and_second():
    assert parse_timestamp("1:05") == TimestampParts(minute=1, second=5)
    assert parse_timestamp("00:00") == TimestampParts(minute=0, second=0)
    assert parse_timestamp("59:59").to_dict() == {"minute": 59, "second": 59}


@pytest.mark.parametrize("text", ["1:05", "0:00", "05:40", "59:59", "9:09"])
def test_is_timestamp_accepts(text):
    assert is_timestamp(text)


@pytest.mark.parametrize(
    "text",
    ["", "1:5", "60:00", "1:60", "1:05 ", " 1:05", "1:05:00", "a:10", "105", "-1:05", None],
)
def test_is_timestamp_rejects(text):
    assert not is_timestamp(text)


def test_parse_is_unchecked_and_raises_on_garbage():
    # No bounds check: validation happens before parsing.
    assert to_seconds("99:99") == 99 * 60 + 99
    with pytest.raises(ValueError):
        to_seconds("a:10")
    with pytest.raises(ValueError):
        parse_timestamp("")


def test_format_timestamp():
    assert format_timestamp(0) == "0:00"
    assert format_timestamp(65) == "1:05"
    assert format_timestamp(3599.9) == "59:59"
    assert format_timestamp(-4) == "0:00"
    assert format_timestamp(None) == "0:00"
