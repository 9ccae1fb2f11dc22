from datetime import timedelta
import pytest

from shuttlemap.durations import format_duration, parse_duration


@pytest.mark.parametrize(
    "delta,expected",
    (
        (timedelta(), "0"),
        (timedelta(microseconds=1), "1us"),
        (timedelta(microseconds=250), "250us"),
        (timedelta(milliseconds=1), "1ms"),
        (timedelta(milliseconds=5), "5ms"),
        (timedelta(milliseconds=1, microseconds=200), "1.2ms"),
        (timedelta(seconds=1), "1s"),
        (timedelta(minutes=1, seconds=1), "1m1s"),
        (timedelta(hours=1, milliseconds=250), "1h0.25s"),
        (timedelta(hours=72, minutes=3, milliseconds=500), "72h3m0.5s"),
        (timedelta(milliseconds=-5), "-5ms"),
        (-timedelta(hours=1, minutes=1), "-1h1m"),
    ),
)
def test_format_duration(delta: timedelta, expected: str):
    assert format_duration(delta) == expected


@pytest.mark.parametrize(
    "duration,expected",
    (
        ("0", timedelta()),
        ("-0", timedelta()),
        ("0s", timedelta()),
        ("1us", timedelta(microseconds=1)),
        ("5ms", timedelta(milliseconds=5)),
        ("1.5ms", timedelta(milliseconds=1, microseconds=500)),
        ("2m", timedelta(minutes=2)),
        ("1.5h", timedelta(hours=1, minutes=30)),
        ("2h3m4s", timedelta(hours=2, minutes=3, seconds=4)),
        ("2us3m4s5h", timedelta(hours=5, minutes=3, seconds=4, microseconds=2)),
        ("0.429496s", timedelta(microseconds=429496)),
        ("-3h2m", -timedelta(hours=3, minutes=2)),
    ),
)
def test_parse_duration(duration: str, expected: timedelta):
    assert parse_duration(duration) == expected


@pytest.mark.parametrize("duration", ("", "-", "0.0", ".5s", "0.", "5", "5 ms", "5ks"))
def test_parse_duration_invalid(duration: str):
    with pytest.raises(ValueError):
        parse_duration(duration)
