"""
Tests for DistanceAccumulator.

Covers the noise band, baseline handling, closed sessions,
out-of-order fixes and odometer reconciliation.
"""

from datetime import datetime, timedelta

import pytest

from fieldtrack.features.tracking import (
    DistanceAccumulator,
    DutySession,
    Fix,
    FixStatus,
    InvalidFix,
    SessionClosed,
    DEFAULT_MIN_INCREMENT_KM,
    DEFAULT_MAX_JUMP_KM,
)


# =============================================================================
# Test Data
# =============================================================================

START = (12.9716, 77.5946)
T0 = datetime(2026, 3, 2, 9, 0, 0)

# Four ~22 m steps north, one second apart
NORTHWARD_FIXES = [
    Fix(12.9718, 77.5946, T0 + timedelta(seconds=1)),
    Fix(12.9720, 77.5946, T0 + timedelta(seconds=2)),
    Fix(12.9722, 77.5946, T0 + timedelta(seconds=3)),
    Fix(12.9724, 77.5946, T0 + timedelta(seconds=4)),
]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def accumulator():
    return DistanceAccumulator()


@pytest.fixture
def session():
    """Open duty session with nothing travelled yet."""
    return DutySession(
        officer_id="officer-1",
        start_lat=START[0],
        start_lng=START[1],
        started_at=T0,
        total_distance_km=0.0,
    )


@pytest.fixture
def start_fix():
    return Fix(START[0], START[1], T0)


# =============================================================================
# Test Initialization
# =============================================================================

class TestInitialization:
    """Tests for accumulator construction."""

    def test_defaults(self):
        acc = DistanceAccumulator()
        assert acc.min_increment_km == DEFAULT_MIN_INCREMENT_KM == 0.002
        assert acc.max_jump_km == DEFAULT_MAX_JUMP_KM == 100.0

    def test_custom_band(self):
        acc = DistanceAccumulator(min_increment_km=0.01, max_jump_km=5.0)
        assert acc.min_increment_km == 0.01
        assert acc.max_jump_km == 5.0

    def test_inverted_band_rejected(self):
        with pytest.raises(ValueError):
            DistanceAccumulator(min_increment_km=1.0, max_jump_km=0.5)

    def test_from_settings(self):
        acc = DistanceAccumulator.from_settings()
        assert acc.min_increment_km == 0.002
        assert acc.max_jump_km == 100.0


# =============================================================================
# Test record_fix
# =============================================================================

class TestRecordFix:
    """Tests for the per-fix accumulation step."""

    def test_first_fix_sets_baseline(self, accumulator, session, start_fix):
        """First fix of a session only establishes the baseline."""
        result = accumulator.record_fix(session, None, start_fix)

        assert result.status == FixStatus.BASELINE
        assert result.total_km == 0.0
        assert result.advances_baseline
        assert session.total_distance_km == 0.0

    def test_zero_movement_not_counted(self, accumulator, session, start_fix):
        """Identical coordinates add nothing."""
        same = Fix(START[0], START[1], T0 + timedelta(seconds=5))
        result = accumulator.record_fix(session, start_fix, same)

        assert result.status == FixStatus.JITTER
        assert result.increment_km == 0.0
        assert session.total_distance_km == 0.0

    def test_known_geometry(self, accumulator, session, start_fix):
        """0.0002 degree north at 12.97N is ~0.022 km."""
        result = accumulator.record_fix(session, start_fix, NORTHWARD_FIXES[0])

        assert result.status == FixStatus.ACCEPTED
        assert result.increment_km == pytest.approx(0.022, rel=0.1)
        assert session.total_distance_km == pytest.approx(0.022, rel=0.1)

    def test_jitter_rejected(self, accumulator, session, start_fix):
        """A ~1 m wobble stays below the 2 m floor."""
        wobble = Fix(START[0] + 0.00001, START[1], T0 + timedelta(seconds=1))
        result = accumulator.record_fix(session, start_fix, wobble)

        assert result.status == FixStatus.JITTER
        assert 0 < result.increment_km < 0.002
        assert session.total_distance_km == 0.0
        assert result.advances_baseline

    def test_jump_rejected_but_becomes_baseline(self, accumulator, session, start_fix):
        """A >100 km teleport is not counted; the next step is measured from it."""
        teleport = Fix(28.6139, 77.2090, T0 + timedelta(seconds=1))  # Delhi
        result = accumulator.record_fix(session, start_fix, teleport)

        assert result.status == FixStatus.JUMP
        assert result.increment_km > 100
        assert session.total_distance_km == 0.0
        assert result.advances_baseline

        step = Fix(28.6141, 77.2090, T0 + timedelta(seconds=2))
        result = accumulator.record_fix(session, teleport, step)

        assert result.status == FixStatus.ACCEPTED
        assert session.total_distance_km == pytest.approx(0.022, rel=0.1)

    def test_monotonic_total(self, accumulator, session, start_fix):
        """Total never decreases across a mixed sequence."""
        sequence = [
            NORTHWARD_FIXES[0],
            Fix(12.9718, 77.5946, T0 + timedelta(seconds=2)),   # stationary
            Fix(40.0, 70.0, T0 + timedelta(seconds=3)),         # jump
            Fix(40.0003, 70.0, T0 + timedelta(seconds=4)),      # accepted
        ]
        previous = start_fix
        last_total = 0.0
        for fix in sequence:
            result = accumulator.record_fix(session, previous, fix)
            assert result.total_km >= last_total
            last_total = result.total_km
            previous = fix

    def test_closed_session_is_noop(self, accumulator, session, start_fix):
        """Fixes against a closed session change nothing and report it."""
        session.total_distance_km = 3.5
        session.ended_at = T0 + timedelta(hours=8)

        result = accumulator.record_fix(session, start_fix, NORTHWARD_FIXES[0])

        assert result.status == FixStatus.SESSION_CLOSED
        assert result.total_km == 3.5
        assert session.total_distance_km == 3.5
        assert not result.advances_baseline

    @pytest.mark.parametrize("lat,lng", [
        (None, 77.5946),
        (12.9716, None),
        (float("nan"), 77.5946),
        (12.9716, float("inf")),
        (95.0, 77.5946),
    ])
    def test_invalid_fix_raises(self, accumulator, session, start_fix, lat, lng):
        """Bad coordinates raise and leave the session untouched."""
        session.total_distance_km = 1.25
        bad = Fix(lat, lng, T0 + timedelta(seconds=1))

        with pytest.raises(InvalidFix):
            accumulator.record_fix(session, start_fix, bad)
        assert session.total_distance_km == 1.25

    def test_out_of_order_fix_ignored(self, accumulator, session):
        """A fix captured before the previous one is not counted and does not move the baseline."""
        latest = NORTHWARD_FIXES[1]
        stale = Fix(12.9730, 77.5946, T0)

        result = accumulator.record_fix(session, latest, stale)

        assert result.status == FixStatus.OUT_OF_ORDER
        assert session.total_distance_km == 0.0
        assert not result.advances_baseline

    def test_same_timestamp_is_in_order(self, accumulator, session, start_fix):
        """Equal capture times are compared normally."""
        twin = Fix(12.9718, 77.5946, T0)
        result = accumulator.record_fix(session, start_fix, twin)
        assert result.status == FixStatus.ACCEPTED

    def test_missing_timestamps_skip_order_check(self, accumulator, session):
        result = accumulator.record_fix(
            session, Fix(12.9716, 77.5946), Fix(12.9718, 77.5946)
        )
        assert result.status == FixStatus.ACCEPTED

    def test_none_total_treated_as_zero(self, accumulator, start_fix):
        """A session not yet flushed has no column default applied."""
        fresh = DutySession(officer_id="officer-1")
        result = accumulator.record_fix(fresh, start_fix, NORTHWARD_FIXES[0])
        assert result.total_km == pytest.approx(0.022, rel=0.1)

    def test_custom_band_counts_short_steps_as_jitter(self, session, start_fix):
        """Tuning the floor to 50 m turns a 22 m step into jitter."""
        coarse = DistanceAccumulator(min_increment_km=0.05)
        result = coarse.record_fix(session, start_fix, NORTHWARD_FIXES[0])
        assert result.status == FixStatus.JITTER


# =============================================================================
# Test classify
# =============================================================================

class TestClassify:
    """Noise band boundaries are exclusive."""

    def test_boundaries(self, accumulator):
        assert accumulator.classify(0.002) == FixStatus.JITTER
        assert accumulator.classify(0.0021) == FixStatus.ACCEPTED
        assert accumulator.classify(99.99) == FixStatus.ACCEPTED
        assert accumulator.classify(100.0) == FixStatus.JUMP


# =============================================================================
# Test close_session
# =============================================================================

class TestCloseSession:
    """Tests for end-of-day reconciliation."""

    def test_odometer_overrides_gps(self, accumulator, session):
        session.start_odometer = 1000
        session.total_distance_km = 37.3

        final = accumulator.close_session(
            session, Fix(12.98, 77.60, address="Depot"), end_odometer=1042
        )

        assert final == 42
        assert session.total_distance_km == 42
        assert session.end_odometer == 1042
        assert session.end_address == "Depot"
        assert session.ended_at is not None

    def test_gps_total_without_odometer(self, accumulator, session):
        session.total_distance_km = 12.5
        final = accumulator.close_session(session, Fix(12.98, 77.60), end_odometer=None)
        assert final == 12.5

    def test_gps_total_without_start_odometer(self, accumulator, session):
        session.total_distance_km = 12.5
        final = accumulator.close_session(session, None, end_odometer=1042)
        assert final == 12.5
        assert session.end_odometer == 1042

    def test_negative_odometer_delta_keeps_gps(self, accumulator, session):
        session.start_odometer = 1000
        session.total_distance_km = 8.0
        final = accumulator.close_session(session, None, end_odometer=990)
        assert final == 8.0

    def test_closed_at_is_used(self, accumulator, session):
        end = T0 + timedelta(hours=9)
        accumulator.close_session(session, None, closed_at=end)
        assert session.ended_at == end

    def test_close_twice_raises(self, accumulator, session):
        accumulator.close_session(session, None)
        with pytest.raises(SessionClosed):
            accumulator.close_session(session, None)

    def test_no_fixes_after_close(self, accumulator, session, start_fix):
        session.start_odometer = 1000
        accumulator.close_session(session, None, end_odometer=1042)

        result = accumulator.record_fix(session, start_fix, NORTHWARD_FIXES[0])

        assert result.status == FixStatus.SESSION_CLOSED
        assert session.total_distance_km == 42

    def test_invalid_final_fix_raises(self, accumulator, session):
        with pytest.raises(InvalidFix):
            accumulator.close_session(session, Fix(float("nan"), 77.6))
        assert session.ended_at is None


# =============================================================================
# Test End-to-End Scenario
# =============================================================================

class TestScenario:
    """Officer walks ~89 m north in four steps."""

    def test_four_steps_north(self, accumulator, session, start_fix):
        previous = start_fix
        accumulator.record_fix(session, None, start_fix)
        for fix in NORTHWARD_FIXES:
            result = accumulator.record_fix(session, previous, fix)
            assert result.status == FixStatus.ACCEPTED
            assert result.increment_km == pytest.approx(0.0222, rel=0.1)
            previous = fix

        assert session.total_distance_km == pytest.approx(0.089, rel=0.1)

    def test_accumulate_path_matches_stepwise(self, accumulator, start_fix):
        """Replaying the log gives the same total as live accumulation."""
        path = [start_fix] + NORTHWARD_FIXES
        assert accumulator.accumulate_path(path) == pytest.approx(0.089, rel=0.1)

    def test_accumulate_path_skips_noise(self, accumulator, start_fix):
        path = [
            start_fix,
            Fix(None, 77.5946, T0 + timedelta(seconds=1)),           # invalid
            NORTHWARD_FIXES[0],
            Fix(12.9718, 77.5946, T0 + timedelta(seconds=2)),         # stationary
            Fix(12.9900, 77.5946, T0 - timedelta(seconds=5)),         # out of order
        ]
        assert accumulator.accumulate_path(path) == pytest.approx(0.0222, rel=0.1)

    def test_accumulate_path_empty(self, accumulator):
        assert accumulator.accumulate_path([]) == 0.0
