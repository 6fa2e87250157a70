"""Configuration for lofigps."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class TimeUnit(str, Enum):
    """Unit of raw source timestamps. Stored points always use seconds."""

    SECONDS = "s"
    MILLISECONDS = "ms"

    def to_seconds(self, value: int) -> int:
        if self is TimeUnit.MILLISECONDS:
            return value // 1000
        return value


@dataclass
class Config:
    """Configuration for ingesting and querying GPS tracks."""

    # Source files (legacy .json or .gpx), loaded in order
    sources: List[Path] = field(default_factory=list)

    # Unit of the "time" field in legacy JSON logs
    time_unit: TimeUnit = TimeUnit.SECONDS

    # Maximum gap between samples (in seconds) a query may bridge
    max_gap: Optional[int] = None

    # Allow holding the nearest sample outside the recorded range (needs max_gap)
    extrapolate: bool = False

    # Drop the rest of a GPX segment after a point without time
    stop_segment_on_missing_time: bool = False

    # Verbose mode
    verbose: bool = False
