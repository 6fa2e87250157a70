"""Loading the legacy flat JSON location log."""

import json
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from lofigps.core.config import TimeUnit
from lofigps.core.exceptions import GpsFileError, GpsFormatError
from lofigps.core.logger import log_call, log_result
from lofigps.models.point import GpsPoint
from lofigps.services.source import PointSource


class LegacyLocation(BaseModel):
    """Nested "location" object of a legacy record."""

    model_config = ConfigDict(strict=True)

    latitude: float
    longitude: float
    altitude: float
    accuracy: float
    vertical_accuracy: float = Field(alias="verticalAccuracy")
    bearing: float
    speed: float
    # Metadata, parsed and discarded
    elapsed_ms: Optional[int] = Field(default=None, alias="elapsedMs")
    provider: Optional[str] = None


class LegacyRecord(BaseModel):
    """One entry of the legacy JSON array."""

    model_config = ConfigDict(strict=True)

    time: StrictInt
    location: LegacyLocation


class LegacyJsonLoader(PointSource):
    """Loads the legacy location log: a JSON array of {time, location} records.

    Every field of the location object is mandatory here, so every
    optional field of the produced points is present.
    """

    def __init__(self, time_unit: TimeUnit = TimeUnit.SECONDS):
        """
        Args:
            time_unit: Unit of the "time" values in the file
        """
        self.time_unit = TimeUnit(time_unit)

    def name(self) -> str:
        return "LegacyJsonLoader"

    def read(self, path: Path) -> List[GpsPoint]:
        """Parses the log and returns one point per record, in file order.

        Raises:
            GpsFileError: If the file cannot be opened
            GpsFormatError: If the JSON is invalid or a record is incomplete
        """
        log_call("LegacyJsonLoader", "read", path=str(path), time_unit=self.time_unit.value)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise GpsFormatError(f"Invalid JSON format in {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise GpsFormatError(f"File is not UTF-8 encoded: {path}") from e
        except FileNotFoundError as e:
            raise GpsFileError(f"File not found: {path}") from e
        except OSError as e:
            raise GpsFileError(f"Error reading file {path}: {e}") from e

        if not isinstance(data, list):
            raise GpsFormatError(f"Expected a list of records in {path}")

        points = [self._to_point(index, raw) for index, raw in enumerate(data)]

        log_result("LegacyJsonLoader", "read", f"{len(points)} points")
        return points

    def _to_point(self, index: int, raw: object) -> GpsPoint:
        """Validates one record and converts it to a canonical point."""
        try:
            record = LegacyRecord.model_validate(raw)
        except ValidationError as e:
            raise GpsFormatError(f"Invalid record #{index}: {e}") from e

        location = record.location
        timestamp = self.time_unit.to_seconds(record.time)

        return GpsPoint(
            timestamp=timestamp,
            lat=location.latitude,
            lon=location.longitude,
            elevation=location.altitude,
            accuracy=location.accuracy,
            vertical_accuracy=location.vertical_accuracy,
            bearing=location.bearing,
            speed=location.speed,
        )
