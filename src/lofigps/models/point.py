"""Canonical GPS trackpoint."""

import math
from dataclasses import dataclass, replace
from typing import Optional

EARTH_RADIUS_KM = 6371


@dataclass(frozen=True)
class GpsPoint:
    """One GPS sample, keyed by its Unix timestamp in whole seconds.

    Optional fields are None when the source could not provide them,
    which is not the same as a measured zero.

    Equality compares every field, ordering compares the timestamp only:
    two different samples at the same time are neither equal nor ordered.
    The store keeps at most one of them, so this never arises inside it.
    """

    timestamp: int
    lat: float
    lon: float
    elevation: Optional[float] = None
    accuracy: Optional[float] = None
    vertical_accuracy: Optional[float] = None
    bearing: Optional[float] = None
    speed: Optional[float] = None

    def __lt__(self, other: "GpsPoint") -> bool:
        """Order by time."""
        return self.timestamp < other.timestamp

    def at(self, timestamp: int) -> "GpsPoint":
        """Return a copy of this sample moved to another timestamp."""
        return replace(self, timestamp=timestamp)

    def distance_to(self, other: "GpsPoint") -> float:
        """Calculate distance to other point in km (haversine formula)."""
        lat1 = math.radians(self.lat)
        lat2 = math.radians(other.lat)
        dlat = math.radians(other.lat - self.lat)
        dlon = math.radians(other.lon - self.lon)

        a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return EARTH_RADIUS_KM * c

    def __str__(self) -> str:
        return f"{self.timestamp}: {self.lat:.6f}, {self.lon:.6f}"
