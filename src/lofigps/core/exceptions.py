"""Custom exceptions for lofigps."""

from typing import Optional


class LofiGpsError(Exception):
    """Base exception for lofigps."""

    pass


class GpsParseError(LofiGpsError):
    """A GPS source file could not be ingested."""

    pass


class GpsFileError(GpsParseError):
    """The source file is missing or unreadable."""

    pass


class GpsFormatError(GpsParseError):
    """The source file is malformed or a record is incomplete."""

    pass


class StoreFrozenError(LofiGpsError):
    """Mutation attempted after the track store was frozen."""

    def __init__(self) -> None:
        super().__init__("Track store is frozen, ingestion phase is over")


class QueryError(LofiGpsError):
    """A temporal query could not produce an estimate."""

    def __init__(self, message: str, timestamp: int) -> None:
        super().__init__(message)
        self.timestamp = timestamp


class EmptyStoreError(QueryError):
    """The store holds no points."""

    def __init__(self, timestamp: int) -> None:
        super().__init__(f"No points stored, cannot answer query at {timestamp}", timestamp)


class OutOfRangeError(QueryError):
    """The query time lies outside the recorded samples."""

    def __init__(self, timestamp: int, first: int, last: int, max_gap: Optional[int] = None) -> None:
        message = f"Time {timestamp} is outside recorded range {first}..{last}"
        if max_gap is not None:
            message += f" by more than {max_gap}s"
        super().__init__(message, timestamp)
        self.first = first
        self.last = last
        self.max_gap = max_gap


class GapTooLargeError(QueryError):
    """The bracketing samples are further apart than allowed."""

    def __init__(self, timestamp: int, gap: int, max_gap: int) -> None:
        super().__init__(
            f"Samples around {timestamp} are {gap}s apart, maximum is {max_gap}s",
            timestamp,
        )
        self.gap = gap
        self.max_gap = max_gap


class DegenerateIntervalError(QueryError):
    """Bracketing samples share a timestamp, the fraction is undefined."""

    def __init__(self, timestamp: int) -> None:
        super().__init__(f"Interpolation interval at {timestamp} has zero length", timestamp)
