"""Ingestion pipeline building a frozen track store from source files."""

from pathlib import Path
from typing import Callable, List, Optional

from lofigps.core.config import Config
from lofigps.core.logger import set_verbose
from lofigps.services.source import IngestReport, get_source
from lofigps.services.temporal_query import TemporalQuery
from lofigps.services.track_store import TrackStore


class Pipeline:
    """Loads every configured source into one store, in order."""

    def __init__(
        self,
        config: Config,
        progress_callback: Optional[Callable[[int, int, str, str], None]] = None,
    ):
        """
        Args:
            config: Configuration
            progress_callback: Callback for progress (current, total, path, status)
        """
        self.config = config
        self.progress_callback = progress_callback
        self.reports: List[IngestReport] = []

        if config.verbose:
            set_verbose(True)

    def run(self) -> TrackStore:
        """Ingests all sources and returns the frozen store.

        Raises:
            GpsParseError: On the first file that cannot be ingested
        """
        store = TrackStore()
        self.reports = []

        total = len(self.config.sources)
        for idx, path in enumerate(self.config.sources, 1):
            self._report_progress(idx, total, path, "Loading...")
            source = get_source(path, self.config)
            self.reports.append(source.load_into(path, store))
            self._report_progress(idx, total, path, "Done")

        store.freeze()
        return store

    def query_engine(self, store: TrackStore) -> TemporalQuery:
        """Creates a query engine with the configured gap policy."""
        return TemporalQuery(store, max_gap=self.config.max_gap, extrapolate=self.config.extrapolate)

    def _report_progress(self, current: int, total: int, path: Path, status: str) -> None:
        if self.progress_callback:
            self.progress_callback(current, total, str(path), status)
