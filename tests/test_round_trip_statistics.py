import math

import pytest

from ping_command.round_trip_statistics import (
    ParseError,
    RoundTripStatistics,
    parse_round_trip_statistics,
)


def test_parse_summary_line():
    stats = RoundTripStatistics.from_str(
        "round-trip min/avg/max/stddev = 12.445/26.791/61.365/20.049 ms"
    )
    assert stats.min == 12.445
    assert stats.average == 26.791
    assert stats.max == 61.365
    assert stats.standard_deviation == 20.049


def test_average_is_second_number_not_third():
    stats = parse_round_trip_statistics("round-trip min/avg/max/stddev = 1/2/3/4 ms")
    assert stats == RoundTripStatistics(min=1.0, max=3.0, average=2.0, standard_deviation=4.0)


def test_parse_full_multiline_output(macos_output):
    stats = RoundTripStatistics.from_str(macos_output)
    assert stats.average == 26.791
    assert stats.standard_deviation == 20.049


def test_trailing_content_is_ignored():
    stats = RoundTripStatistics.from_str(
        "round-trip min/avg/max/stddev = 0.1/0.2/0.3/0.0 ms, extra\nmore"
    )
    assert stats.max == 0.3


@pytest.mark.parametrize("text", [
    "hello world",
    "",
    "rtt min/avg/max/mdev = 0.089/0.125/0.234/0.052 ms",
    "Round-Trip min/avg/max/stddev = 1/2/3/4 ms",
    "prefix round-trip min/avg/max/stddev = 1/2/3/4 ms",
    "round-trip min/avg/max/stddev = -1/2/3/4 ms",
])
def test_missing_summary_line_raises(text):
    with pytest.raises(ParseError):
        RoundTripStatistics.from_str(text)


def test_parse_error_is_value_error():
    assert issubclass(ParseError, ValueError)


def test_malformed_number_becomes_nan():
    stats = RoundTripStatistics.from_str("round-trip min/avg/max/stddev = 1.2.3/2.5/./4 ms")
    assert math.isnan(stats.min)
    assert stats.average == 2.5
    assert math.isnan(stats.max)
    assert stats.standard_deviation == 4.0


def test_display(sample_stats):
    assert str(sample_stats) == (
        "min: 12.445\n"
        "max: 61.365\n"
        "average: 26.791\n"
        "standard deviation: 20.049"
    )


def test_rendered_values_parse_back():
    original = RoundTripStatistics(min=0.04123, max=9.87654, average=1.5, standard_deviation=0.0004)
    rendered = dict(
        line.split(": ") for line in str(original).splitlines()
    )
    line = "round-trip min/avg/max/stddev = {}/{}/{}/{} ms".format(
        rendered["min"], rendered["average"], rendered["max"], rendered["standard deviation"],
    )
    parsed = RoundTripStatistics.from_str(line)
    assert parsed.min == pytest.approx(original.min, abs=5e-4)
    assert parsed.average == pytest.approx(original.average, abs=5e-4)
    assert parsed.max == pytest.approx(original.max, abs=5e-4)
    assert parsed.standard_deviation == pytest.approx(original.standard_deviation, abs=5e-4)


def test_no_ordering_constraint():
    stats = RoundTripStatistics(min=10.0, max=1.0, average=100.0, standard_deviation=0.0)
    assert stats.min > stats.max


def test_display_nan_field():
    stats = RoundTripStatistics.from_str("round-trip min/avg/max/stddev = 1.2.3/2.5/3/4 ms")
    assert str(stats) == (
        "min: NaN\n"
        "max: 3.000\n"
        "average: 2.500\n"
        "standard deviation: 4.000"
    )
