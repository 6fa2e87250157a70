"""Common interface for GPS source file adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List

from lofigps.core.config import Config
from lofigps.core.exceptions import GpsFormatError
from lofigps.core.logger import log_call, log_result, log_info
from lofigps.models.point import GpsPoint
from lofigps.services.track_store import TrackStore


@dataclass
class IngestReport:
    """Result of loading one file into a store."""

    path: Path
    read: int = 0
    inserted: int = 0
    overwritten: int = 0
    skipped: int = 0


class PointSource(ABC):
    """Produces canonical points from one kind of source file."""

    # Points the last read() dropped on purpose
    skipped: int = 0

    @abstractmethod
    def name(self) -> str:
        """Adapter name used in logs."""
        pass

    @abstractmethod
    def read(self, path: Path) -> List[GpsPoint]:
        """Parses the file and returns its points in file order.

        Raises:
            GpsFileError: If the file cannot be opened
            GpsFormatError: If the content is malformed
        """
        pass

    def load_into(self, path: Path, store: TrackStore) -> IngestReport:
        """Reads the file and inserts every point into the store.

        Later points win over earlier ones with the same timestamp, both
        inside the file and against points already stored.
        """
        log_call(self.name(), "load_into", path=str(path))

        points = self.read(path)
        report = IngestReport(path=Path(path), read=len(points), skipped=self.skipped)

        for point in points:
            previous = store.insert(point.timestamp, point)
            if previous is None:
                report.inserted += 1
            else:
                report.overwritten += 1

        if report.overwritten:
            log_info(f"{report.overwritten} points overwrote an existing timestamp")

        log_result(self.name(), "load_into", f"{report.inserted} new, {report.overwritten} overwritten")
        return report


def get_source(path: Path, config: Config) -> PointSource:
    """Picks the adapter for a file by its suffix."""
    # Imported here, the adapters import this module
    from lofigps.services.gpx_loader import GpxLoader
    from lofigps.services.legacy_loader import LegacyJsonLoader

    suffix = Path(path).suffix.lower()
    if suffix == ".gpx":
        return GpxLoader(stop_segment_on_missing_time=config.stop_segment_on_missing_time)
    if suffix == ".json":
        return LegacyJsonLoader(time_unit=config.time_unit)

    raise GpsFormatError(f"Unknown GPS source type '{suffix}': {path}")
