# =============================================================================
# TELEWIND - Unit Tests: Anemometer page parser
# =============================================================================

from datetime import datetime, timedelta

import pytest

from collector.errors import ParseError
from collector.parser import parse_direction, parse_observations, parse_time


class TestParseObservations:

    def test_parses_all_data_rows(self, anemometer_html):
        observations = parse_observations(anemometer_html)

        assert len(observations) == 5

    def test_keeps_page_order(self, anemometer_html):
        observations = parse_observations(anemometer_html)

        # The page lists the newest row first
        assert observations[0].time > observations[-1].time

    def test_first_row_values(self, anemometer_html):
        first = parse_observations(anemometer_html)[0]

        assert first.time == datetime.fromisoformat("2022-10-29T22:45:00+10:00")
        assert first.direction == 301
        assert first.avg_speed == pytest.approx(4.2)

    def test_time_has_fixed_vladivostok_offset(self, anemometer_html):
        for observation in parse_observations(anemometer_html):
            assert observation.time.utcoffset() == timedelta(hours=10)

    def test_direction_360_is_north(self, anemometer_html):
        observations = parse_observations(anemometer_html)

        assert observations[1].direction == 0

    def test_integer_speed(self, anemometer_html):
        assert parse_observations(anemometer_html)[-1].avg_speed == 2.0

    def test_page_without_table(self):
        assert parse_observations("<html><body>maintenance</body></html>") == []

    def test_missing_column_fails_page(self):
        html = "<table><tr><td>29.10.2022 22:45</td><td>С (10°)</td></tr></table>"

        with pytest.raises(ParseError):
            parse_observations(html)

    def test_bad_speed_fails_page(self):
        html = "<table><tr><td>29.10.2022 22:45</td><td>С (10°)</td><td>n/a</td></tr></table>"

        with pytest.raises(ParseError, match="speed"):
            parse_observations(html)


class TestFieldParsers:

    def test_direction_without_degrees(self):
        with pytest.raises(ParseError):
            parse_direction("штиль")

    def test_direction_above_360(self):
        with pytest.raises(ParseError):
            parse_direction("(400°)")

    def test_time_format(self):
        with pytest.raises(ParseError):
            parse_time("2022-10-29 22:45")

    def test_time_conversion(self):
        assert parse_time(" 01.01.2023 00:05 ").isoformat() == "2023-01-01T00:05:00+10:00"
