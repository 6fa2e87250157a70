"""Position lookup at arbitrary times with interpolation between samples."""

from enum import Enum
from typing import Optional, Union

from lofigps.core.exceptions import (
    DegenerateIntervalError,
    EmptyStoreError,
    GapTooLargeError,
    OutOfRangeError,
)
from lofigps.core.logger import log_call, log_result
from lofigps.models.point import GpsPoint
from lofigps.services.track_store import TrackStore


class _Default(Enum):
    """Marks a per-call override as "use the engine default"."""

    TOKEN = 0


_DEFAULT = _Default.TOKEN


def interpolation_fraction(before: GpsPoint, after: GpsPoint, timestamp: int) -> float:
    """Position of timestamp between two samples (0 = before, 1 = after)."""
    span = after.timestamp - before.timestamp
    if span == 0:
        raise DegenerateIntervalError(timestamp)
    return (timestamp - before.timestamp) / span


def lerp(start: float, end: float, fraction: float) -> float:
    return start + (end - start) * fraction


def lerp_optional(start: Optional[float], end: Optional[float], fraction: float) -> Optional[float]:
    """Interpolates only when both sides have a value."""
    if start is None or end is None:
        return None
    return lerp(start, end, fraction)


def lerp_bearing(start: Optional[float], end: Optional[float], fraction: float) -> Optional[float]:
    """Interpolates a heading along the shorter arc, result in [0, 360)."""
    if start is None or end is None:
        return None

    h1 = start % 360
    h2 = end % 360

    # Shortest angular distance
    diff = h2 - h1
    if diff > 180:
        diff -= 360
    elif diff < -180:
        diff += 360

    return (h1 + diff * fraction) % 360


def interpolate(before: GpsPoint, after: GpsPoint, timestamp: int) -> GpsPoint:
    """Builds the estimated point at timestamp between two samples."""
    fraction = interpolation_fraction(before, after, timestamp)

    return GpsPoint(
        timestamp=timestamp,
        lat=lerp(before.lat, after.lat, fraction),
        lon=lerp(before.lon, after.lon, fraction),
        elevation=lerp_optional(before.elevation, after.elevation, fraction),
        accuracy=lerp_optional(before.accuracy, after.accuracy, fraction),
        vertical_accuracy=lerp_optional(before.vertical_accuracy, after.vertical_accuracy, fraction),
        bearing=lerp_bearing(before.bearing, after.bearing, fraction),
        speed=lerp_optional(before.speed, after.speed, fraction),
    )


class TemporalQuery:
    """Answers "where was the device at time T" from a track store."""

    def __init__(self, store: TrackStore, max_gap: Optional[int] = None, extrapolate: bool = False):
        """
        Args:
            store: Store to read from, never modified here
            max_gap: Maximum distance in seconds a query may bridge, None for unbounded
            extrapolate: Hold the nearest sample for times outside the
                recorded range (within max_gap)
        """
        self._check_policy(max_gap, extrapolate)
        self.store = store
        self.max_gap = max_gap
        self.extrapolate = extrapolate

    @staticmethod
    def _check_policy(max_gap: Optional[int], extrapolate: bool) -> None:
        if max_gap is not None and max_gap < 0:
            raise ValueError(f"max_gap must not be negative, got {max_gap}")
        if extrapolate and max_gap is None:
            raise ValueError("Extrapolation needs a max_gap bound")

    def lookup_exact(self, timestamp: int) -> Optional[GpsPoint]:
        return self.store.lookup_exact(timestamp)

    def query_interpolated(
        self,
        timestamp: int,
        max_gap: Union[Optional[int], _Default] = _DEFAULT,
        extrapolate: Union[bool, _Default] = _DEFAULT,
    ) -> GpsPoint:
        """Finds the stored point at timestamp or estimates one.

        Args:
            timestamp: Query time in Unix seconds
            max_gap: Per-call override of the engine's max_gap
            extrapolate: Per-call override of the engine's extrapolate

        Returns:
            The stored point on an exact match, else an interpolated estimate

        Raises:
            EmptyStoreError: If the store holds no points
            OutOfRangeError: If timestamp is outside the samples and
                extrapolation is off or too far
            GapTooLargeError: If the bracketing samples are more than max_gap apart
        """
        if max_gap is _DEFAULT:
            max_gap = self.max_gap
        if extrapolate is _DEFAULT:
            extrapolate = self.extrapolate
        self._check_policy(max_gap, extrapolate)

        log_call("TemporalQuery", "query_interpolated", timestamp=timestamp, max_gap=max_gap)

        if not len(self.store):
            raise EmptyStoreError(timestamp)

        before, after = self.store.bracket(timestamp)

        # Exact match
        if before is not None and before is after:
            log_result("TemporalQuery", "query_interpolated", "exact")
            return before

        if before is None or after is None:
            result = self._extrapolate(timestamp, before or after, max_gap, extrapolate)
            log_result("TemporalQuery", "query_interpolated", f"extrapolated {result}")
            return result

        gap = after.timestamp - before.timestamp
        if max_gap is not None and gap > max_gap:
            raise GapTooLargeError(timestamp, gap, max_gap)

        result = interpolate(before, after, timestamp)
        log_result("TemporalQuery", "query_interpolated", f"interpolated {result}")
        return result

    def _extrapolate(
        self, timestamp: int, edge: GpsPoint, max_gap: Optional[int], extrapolate: bool
    ) -> GpsPoint:
        """Holds the edge sample for a time just outside the recorded range."""
        first = self.store.first
        last = self.store.last

        if not extrapolate:
            raise OutOfRangeError(timestamp, first.timestamp, last.timestamp)

        if abs(timestamp - edge.timestamp) > max_gap:
            raise OutOfRangeError(timestamp, first.timestamp, last.timestamp, max_gap)

        return edge.at(timestamp)
