"""Timestamp-keyed store of canonical GPS points."""

import bisect
import threading
from typing import Dict, Iterator, List, Optional, Tuple

from lofigps.core.exceptions import StoreFrozenError
from lofigps.core.logger import log_call, log_result
from lofigps.models.point import GpsPoint


class TrackStore:
    """Owns all ingested points, one per timestamp.

    A dict holds the points and a sorted list of keys serves bracketing
    lookups. Writes are serialized by a lock and refused once the store
    is frozen; reads never lock.
    """

    def __init__(self):
        self._points: Dict[int, GpsPoint] = {}
        # For binary search we need a sorted list of timestamps
        self._timestamps: List[int] = []
        self._frozen = False
        self.lock = threading.Lock()

    def insert(self, timestamp: int, point: GpsPoint) -> Optional[GpsPoint]:
        """Stores a point under its timestamp, replacing any previous one.

        Args:
            timestamp: Key, must equal point.timestamp
            point: Point to store

        Returns:
            The point that was overwritten, or None

        Raises:
            StoreFrozenError: If the store was frozen
            ValueError: If the key does not match the point's timestamp
        """
        if timestamp != point.timestamp:
            raise ValueError(
                f"Key {timestamp} does not match point timestamp {point.timestamp}"
            )

        with self.lock:
            if self._frozen:
                raise StoreFrozenError()
            previous = self._points.get(timestamp)
            self._points[timestamp] = point
            if previous is None:
                bisect.insort(self._timestamps, timestamp)
            return previous

    def add(self, point: GpsPoint) -> Optional[GpsPoint]:
        """Stores a point keyed by its own timestamp."""
        return self.insert(point.timestamp, point)

    def pop(self, timestamp: int) -> Optional[GpsPoint]:
        """Removes and returns the point at timestamp, if any."""
        with self.lock:
            if self._frozen:
                raise StoreFrozenError()
            point = self._points.pop(timestamp, None)
            if point is not None:
                idx = bisect.bisect_left(self._timestamps, timestamp)
                del self._timestamps[idx]
            return point

    def freeze(self) -> None:
        """Ends the ingestion phase, the store is read-only afterwards."""
        log_call("TrackStore", "freeze", points=len(self))
        with self.lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup_exact(self, timestamp: int) -> Optional[GpsPoint]:
        return self._points.get(timestamp)

    get = lookup_exact

    def bracket(self, timestamp: int) -> Tuple[Optional[GpsPoint], Optional[GpsPoint]]:
        """Finds the nearest points at or before and at or after the time.

        Both sides are the same point on an exact match.
        """
        log_call("TrackStore", "bracket", timestamp=timestamp)

        idx = bisect.bisect_left(self._timestamps, timestamp)

        before = None
        after = None

        # Point after (or exact match)
        if idx < len(self._timestamps):
            after = self._points[self._timestamps[idx]]
            if after.timestamp == timestamp:
                log_result("TrackStore", "bracket", "exact")
                return after, after

        # Point before
        if idx > 0:
            before = self._points[self._timestamps[idx - 1]]

        log_result(
            "TrackStore",
            "bracket",
            f"{before.timestamp if before else None}..{after.timestamp if after else None}",
        )
        return before, after

    @property
    def first(self) -> Optional[GpsPoint]:
        """Earliest stored point."""
        if not self._timestamps:
            return None
        return self._points[self._timestamps[0]]

    @property
    def last(self) -> Optional[GpsPoint]:
        """Latest stored point."""
        if not self._timestamps:
            return None
        return self._points[self._timestamps[-1]]

    def timestamps(self) -> List[int]:
        """Returns all keys in ascending order."""
        return list(self._timestamps)

    def __iter__(self) -> Iterator[GpsPoint]:
        """Iterates points in time order."""
        return (self._points[ts] for ts in list(self._timestamps))

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, timestamp: object) -> bool:
        return timestamp in self._points
