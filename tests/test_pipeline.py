"""Tests for the ingestion pipeline."""

import pytest
from conftest import T0, legacy_record
from lofigps.core.config import Config
from lofigps.core.exceptions import GpsFormatError
from lofigps.core.pipeline import Pipeline
from lofigps.services.gpx_loader import GpxLoader
from lofigps.services.legacy_loader import LegacyJsonLoader
from lofigps.services.source import get_source

GPX_SEGMENT = (
    "<trkseg>"
    '<trkpt lat="51.0" lon="13.0"><time>2022-05-01T12:00:00Z</time></trkpt>'
    '<trkpt lat="51.2" lon="13.2"><time>2022-05-01T12:00:20Z</time></trkpt>'
    "</trkseg>"
)


class TestGetSource:
    """Tests for adapter selection."""

    def test_by_suffix(self, tmp_path):
        """Suffix picks the adapter."""
        config = Config(stop_segment_on_missing_time=True)

        gpx = get_source(tmp_path / "a.GPX", config)
        legacy = get_source(tmp_path / "a.json", config)

        assert isinstance(gpx, GpxLoader)
        assert gpx.stop_segment_on_missing_time
        assert isinstance(legacy, LegacyJsonLoader)

    def test_unknown_suffix(self, tmp_path):
        """Unknown files are a format error."""
        with pytest.raises(GpsFormatError):
            get_source(tmp_path / "a.csv", Config())


class TestPipeline:
    """Tests for Pipeline."""

    def test_merges_sources_in_order(self, write_legacy, write_gpx):
        """Later files overwrite earlier ones at the same timestamp."""
        gpx = write_gpx([GPX_SEGMENT])
        legacy = write_legacy([legacy_record(T0 + 10, lat=51.1, lon=13.1), legacy_record(T0 + 20, lat=0.0)])
        pipeline = Pipeline(Config(sources=[gpx, legacy]))

        store = pipeline.run()

        assert store.frozen
        assert store.timestamps() == [T0, T0 + 10, T0 + 20]
        assert store.lookup_exact(T0 + 20).lat == 0.0
        assert store.lookup_exact(T0 + 20).bearing == 90.0
        assert [r.overwritten for r in pipeline.reports] == [0, 1]

    def test_query_engine_uses_config(self, write_gpx):
        """Gap policy comes from the config."""
        pipeline = Pipeline(Config(sources=[write_gpx([GPX_SEGMENT])], max_gap=30))
        engine = pipeline.query_engine(pipeline.run())

        result = engine.query_interpolated(T0 + 5)

        assert engine.max_gap == 30
        assert result.lat == pytest.approx(51.05)
        assert result.accuracy is None

    def test_progress_callback(self, write_gpx):
        """Progress is reported per file."""
        calls = []
        path = write_gpx([GPX_SEGMENT])
        pipeline = Pipeline(Config(sources=[path]), progress_callback=lambda *args: calls.append(args))

        pipeline.run()

        assert calls == [(1, 1, str(path), "Loading..."), (1, 1, str(path), "Done")]

    def test_bad_file_aborts(self, write_legacy, write_gpx):
        """A broken source stops the run."""
        broken = write_legacy("not json")
        pipeline = Pipeline(Config(sources=[write_gpx([GPX_SEGMENT]), broken]))

        with pytest.raises(GpsFormatError):
            pipeline.run()
