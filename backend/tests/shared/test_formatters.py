"""
Tests for display formatters.
"""

from datetime import datetime

from fieldtrack.shared.formatters import (
    format_distance_km,
    format_duration_hours,
    format_last_updated,
)


class TestFormatDurationHours:

    def test_hours_and_minutes(self):
        assert format_duration_hours(2.5) == "2h 30min"

    def test_whole_hours(self):
        assert format_duration_hours(3.0) == "3h"

    def test_minutes_only(self):
        assert format_duration_hours(0.25) == "15min"

    def test_negative(self):
        assert format_duration_hours(-1) == "-"


class TestFormatDistanceKm:

    def test_meters(self):
        assert format_distance_km(0.5) == "500 m"

    def test_kilometers(self):
        assert format_distance_km(12.46) == "12.5 km"


class TestFormatLastUpdated:

    def test_no_data(self):
        assert format_last_updated(None) == "No data"

    def test_timestamp(self):
        assert format_last_updated(datetime(2026, 3, 2, 9, 5, 7)) == "2026-03-02 09:05:07"
