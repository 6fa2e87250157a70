"""Services for lofigps."""

from lofigps.services.track_store import TrackStore
from lofigps.services.source import PointSource, IngestReport, get_source
from lofigps.services.legacy_loader import LegacyJsonLoader
from lofigps.services.gpx_loader import GpxLoader
from lofigps.services.temporal_query import TemporalQuery

__all__ = [
    "TrackStore",
    "PointSource",
    "IngestReport",
    "get_source",
    "LegacyJsonLoader",
    "GpxLoader",
    "TemporalQuery",
]
