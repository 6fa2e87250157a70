"""Loading GPX track files."""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List
from xml.etree import ElementTree

import gpxpy
import gpxpy.gpx
import gpxpy.gpxfield

from lofigps.core.exceptions import GpsFileError, GpsFormatError
from lofigps.core.logger import log_call, log_result, log_warning
from lofigps.models.point import GpsPoint
from lofigps.services.source import PointSource

XML_ENCODING = re.compile(rb"(?:\xef\xbb\xbf)?\s*<\?xml[^>]*encoding\s*=\s*[\"']([A-Za-z0-9._-]+)[\"']")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def to_unix_seconds(time: datetime) -> int:
    """Converts a GPX point time to whole Unix seconds (UTC).

    Naive times are taken as UTC, sub-second parts are truncated.
    """
    if time.tzinfo is None:
        time = time.replace(tzinfo=timezone.utc)
    utc = time.astimezone(timezone.utc).replace(microsecond=0)
    return int(utc.timestamp())


class GpxLoader(PointSource):
    """Extracts trackpoints from all tracks and segments of a GPX file."""

    def __init__(self, stop_segment_on_missing_time: bool = False):
        """
        Args:
            stop_segment_on_missing_time: Drop the rest of a segment after
                the first point without time instead of just that point
        """
        self.stop_segment_on_missing_time = stop_segment_on_missing_time

    def name(self) -> str:
        return "GpxLoader"

    def read(self, path: Path) -> List[GpsPoint]:
        """Parses the GPX file and returns its timed trackpoints in file order.

        The file is read as bytes, its XML declaration decides the encoding
        (UTF-8 when it names none).

        Raises:
            GpsFileError: If the file cannot be opened
            GpsFormatError: If the file is not valid GPX or a time is malformed
        """
        log_call("GpxLoader", "read", path=str(path))

        try:
            with open(path, "rb") as f:
                raw = f.read()
        except FileNotFoundError as e:
            raise GpsFileError(f"File not found: {path}") from e
        except OSError as e:
            raise GpsFileError(f"Error reading file {path}: {e}") from e

        self._check_times(raw, path)

        try:
            gpx = gpxpy.parse(self._decode(raw, path))
        except gpxpy.gpx.GPXException as e:
            raise GpsFormatError(f"Invalid GPX in {path}: {e}") from e

        points = self._extract_points(gpx)

        if self.skipped:
            log_warning(f"{self.skipped} trackpoints without time skipped in {path}")

        log_result("GpxLoader", "read", f"{len(points)} points")
        return points

    @staticmethod
    def _decode(raw: bytes, path: Path) -> str:
        match = XML_ENCODING.match(raw)
        encoding = match.group(1).decode("ascii") if match else "utf-8"
        if encoding.lower().replace("_", "-") in ("utf-8", "utf8"):
            # Drops a byte order mark
            encoding = "utf-8-sig"
        try:
            return raw.decode(encoding)
        except (LookupError, UnicodeDecodeError) as e:
            raise GpsFormatError(f"Cannot decode {path} as {encoding}: {e}") from e

    @staticmethod
    def _check_times(raw: bytes, path: Path) -> None:
        """Fails on any trackpoint time that is present but unparseable.

        gpxpy reads such a time as missing, only an absent or empty
        <time> may count as one.
        """
        try:
            root = ElementTree.fromstring(raw)
        except ElementTree.ParseError as e:
            raise GpsFormatError(f"Invalid GPX in {path}: {e}") from e

        for trkpt in root.iter():
            if _local_name(trkpt.tag) != "trkpt":
                continue
            for child in trkpt:
                if _local_name(child.tag) != "time" or not (child.text or "").strip():
                    continue
                try:
                    gpxpy.gpxfield.parse_time(child.text.strip())
                except (gpxpy.gpx.GPXException, ValueError) as e:
                    raise GpsFormatError(
                        f"Malformed trackpoint time '{child.text.strip()}' in {path}"
                    ) from e

    def _extract_points(self, gpx: gpxpy.gpx.GPX) -> List[GpsPoint]:
        points = []
        self.skipped = 0

        for track in gpx.tracks:
            for segment in track.segments:
                for idx, trkpt in enumerate(segment.points):
                    if trkpt.time is None:
                        if self.stop_segment_on_missing_time:
                            self.skipped += len(segment.points) - idx
                            break
                        self.skipped += 1
                        continue
                    points.append(self._to_point(trkpt))

        return points

    def _to_point(self, trkpt: gpxpy.gpx.GPXTrackPoint) -> GpsPoint:
        # GPX gives no bearing; dilution of precision stands in for accuracy
        return GpsPoint(
            timestamp=to_unix_seconds(trkpt.time),
            lat=trkpt.latitude,
            lon=trkpt.longitude,
            elevation=trkpt.elevation,
            accuracy=trkpt.position_dilution,
            vertical_accuracy=trkpt.vertical_dilution,
            bearing=None,
            speed=trkpt.speed,
        )
