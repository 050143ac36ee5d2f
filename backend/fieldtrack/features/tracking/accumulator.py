"""
Distance Accumulator

Keeps a running travelled-distance total for an open duty session as GPS
fixes arrive, filtering out GPS noise.

For each new fix:
1. Closed session -> no-op (SESSION_CLOSED)
2. Bad coordinates -> InvalidFix, session untouched
3. No previous fix -> new fix becomes the baseline (BASELINE)
4. Captured before the previous fix -> ignored, baseline kept (OUT_OF_ORDER)
5. Haversine distance to the previous fix:
   - d <= min_increment_km  -> JITTER (stationary noise)
   - d >= max_jump_km       -> JUMP (signal teleportation)
   - otherwise              -> ACCEPTED, total += d

The accumulator is synchronous and keeps no state of its own. Callers must
hold exclusive access to the session for the duration of one call
(see fieldtrack.features.tracking.locks).
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from fieldtrack.shared.geo import haversine, is_valid_coordinate
from fieldtrack.shared.timeutils import to_naive_utc
from .exceptions import InvalidFix, SessionClosed

logger = logging.getLogger(__name__)


# Noise band defaults (km)
DEFAULT_MIN_INCREMENT_KM = 0.002
DEFAULT_MAX_JUMP_KM = 100.0


class FixStatus(Enum):
    """What the accumulator did with a fix."""
    BASELINE = "baseline"
    ACCEPTED = "accepted"
    JITTER = "jitter"
    JUMP = "jump"
    OUT_OF_ORDER = "out_of_order"
    SESSION_CLOSED = "session_closed"


@dataclass(frozen=True)
class Fix:
    """A single GPS observation."""
    lat: float
    lng: float
    captured_at: Optional[datetime] = None
    accuracy_m: Optional[float] = None
    address: str = ""


@dataclass
class FixResult:
    """Outcome of recording one fix."""
    status: FixStatus
    increment_km: float     # measured distance to the previous fix (0 if none)
    total_km: float         # accumulated distance after this fix

    @property
    def accepted(self) -> bool:
        return self.status == FixStatus.ACCEPTED

    @property
    def advances_baseline(self) -> bool:
        """Whether the new fix is now the one to compare against."""
        return self.status not in (FixStatus.OUT_OF_ORDER, FixStatus.SESSION_CLOSED)


def _is_numeric(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class DistanceAccumulator:
    """
    Haversine distance accumulator with a jitter/jump band.

    Works on any session object exposing ``ended_at``, ``total_distance_km``,
    ``start_odometer`` / ``end_odometer`` and ``end_lat`` / ``end_lng`` /
    ``end_address`` (the DutySession model does), and on any fix object
    exposing ``lat``, ``lng`` and ``captured_at``.
    """

    def __init__(
        self,
        min_increment_km: Optional[float] = None,
        max_jump_km: Optional[float] = None,
    ):
        """
        Args:
            min_increment_km: Increments at or below this are jitter
            max_jump_km: Increments at or above this are jumps
        """
        self.min_increment_km = (
            min_increment_km if min_increment_km is not None else DEFAULT_MIN_INCREMENT_KM
        )
        self.max_jump_km = max_jump_km if max_jump_km is not None else DEFAULT_MAX_JUMP_KM
        if self.min_increment_km < 0 or self.max_jump_km <= self.min_increment_km:
            raise ValueError(
                f"Invalid noise band: min={self.min_increment_km} max={self.max_jump_km}"
            )

    @classmethod
    def from_settings(cls) -> "DistanceAccumulator":
        """Create accumulator with thresholds from application settings."""
        from fieldtrack.config import settings
        return cls(
            min_increment_km=settings.tracking_min_increment_km,
            max_jump_km=settings.tracking_max_jump_km,
        )

    def classify(self, distance_km: float) -> FixStatus:
        """Place a measured increment inside or outside the noise band."""
        if distance_km <= self.min_increment_km:
            return FixStatus.JITTER
        if distance_km >= self.max_jump_km:
            return FixStatus.JUMP
        return FixStatus.ACCEPTED

    def record_fix(self, session, previous_fix, new_fix) -> FixResult:
        """
        Record a new fix against an open session.

        Args:
            session: Duty session (mutated on accepted increments only)
            previous_fix: Last fix recorded for this session, or None
            new_fix: Fix just captured

        Returns:
            FixResult with the (possibly unchanged) accumulated distance

        Raises:
            InvalidFix: If new_fix coordinates are missing or unusable
        """
        total = session.total_distance_km or 0.0

        if session.ended_at is not None:
            logger.debug("Fix ignored: session already closed")
            return FixResult(FixStatus.SESSION_CLOSED, 0.0, total)

        lat = getattr(new_fix, "lat", None)
        lng = getattr(new_fix, "lng", None)
        if not is_valid_coordinate(lat, lng):
            raise InvalidFix(f"Latitude and longitude required (got lat={lat!r}, lng={lng!r})")

        if previous_fix is None or not is_valid_coordinate(previous_fix.lat, previous_fix.lng):
            return FixResult(FixStatus.BASELINE, 0.0, total)

        prev_at = getattr(previous_fix, "captured_at", None)
        new_at = getattr(new_fix, "captured_at", None)
        if prev_at is not None and new_at is not None:
            if to_naive_utc(new_at) < to_naive_utc(prev_at):
                logger.debug(f"Fix ignored: captured {new_at} before previous fix {prev_at}")
                return FixResult(FixStatus.OUT_OF_ORDER, 0.0, total)

        distance_km = haversine(
            float(previous_fix.lat), float(previous_fix.lng),
            float(lat), float(lng),
        )
        status = self.classify(distance_km)

        if status != FixStatus.ACCEPTED:
            logger.debug(f"Fix not counted ({status.value}): {distance_km:.4f} km")
            return FixResult(status, distance_km, total)

        total += distance_km
        session.total_distance_km = total
        return FixResult(FixStatus.ACCEPTED, distance_km, total)

    def close_session(
        self,
        session,
        final_fix=None,
        end_odometer: Optional[float] = None,
        closed_at: Optional[datetime] = None,
    ) -> float:
        """
        Close a duty session and settle its final distance.

        Odometer readings win over GPS when both start and end are numeric
        and the delta is not negative.

        Args:
            session: Open duty session
            final_fix: Location where the day ended (optional)
            end_odometer: Odometer reading at day end (optional)
            closed_at: End time (defaults to now, UTC)

        Returns:
            Final distance in kilometers

        Raises:
            SessionClosed: If the session was already closed
            InvalidFix: If final_fix is given with unusable coordinates
        """
        if session.ended_at is not None:
            raise SessionClosed("Day already ended", total_km=session.total_distance_km)

        if final_fix is not None and not is_valid_coordinate(final_fix.lat, final_fix.lng):
            raise InvalidFix("End location has invalid coordinates")

        final_km = session.total_distance_km or 0.0
        start_odometer = session.start_odometer

        if _is_numeric(end_odometer) and _is_numeric(start_odometer):
            odometer_km = float(end_odometer) - float(start_odometer)
            if odometer_km >= 0:
                final_km = odometer_km
            else:
                logger.warning(
                    f"End odometer {end_odometer} below start {start_odometer}, "
                    f"keeping GPS distance {final_km:.3f} km"
                )

        if final_fix is not None:
            session.end_lat = float(final_fix.lat)
            session.end_lng = float(final_fix.lng)
            session.end_address = getattr(final_fix, "address", "") or ""
        session.end_odometer = float(end_odometer) if _is_numeric(end_odometer) else None
        session.ended_at = to_naive_utc(closed_at) if closed_at else datetime.utcnow()
        session.total_distance_km = final_km
        return final_km

    def accumulate_path(self, fixes: Iterable) -> float:
        """
        Replay an ordered sequence of fixes through the same filter.

        Invalid fixes are skipped. Useful to check a stored total against
        the fix log.
        """
        total = 0.0
        baseline = None

        for fix in fixes:
            if not is_valid_coordinate(fix.lat, fix.lng):
                continue
            if baseline is None:
                baseline = fix
                continue

            prev_at = getattr(baseline, "captured_at", None)
            new_at = getattr(fix, "captured_at", None)
            if prev_at is not None and new_at is not None:
                if to_naive_utc(new_at) < to_naive_utc(prev_at):
                    continue

            distance_km = haversine(
                float(baseline.lat), float(baseline.lng),
                float(fix.lat), float(fix.lng),
            )
            if self.classify(distance_km) == FixStatus.ACCEPTED:
                total += distance_km
            baseline = fix

        return total
