"""Tests for the legacy JSON loader."""

import pytest
from conftest import T0, legacy_record
from lofigps.core.config import TimeUnit
from lofigps.core.exceptions import GpsFileError, GpsFormatError
from lofigps.services.legacy_loader import LegacyJsonLoader
from lofigps.services.track_store import TrackStore


class TestLegacyJsonLoader:
    """Tests for LegacyJsonLoader."""

    def test_read_maps_all_fields(self, write_legacy):
        """Every location field lands in the canonical point."""
        path = write_legacy([legacy_record(T0, lat=51.0, lon=13.7)])

        (point,) = LegacyJsonLoader().read(path)

        assert point.timestamp == T0
        assert point.lat == pytest.approx(51.0)
        assert point.lon == pytest.approx(13.7)
        assert point.elevation == pytest.approx(112.0)
        assert point.accuracy == pytest.approx(4.0)
        assert point.vertical_accuracy == pytest.approx(3.0)
        assert point.bearing == pytest.approx(90.0)
        assert point.speed == pytest.approx(5.0)

    def test_zero_values_stay_present(self, write_legacy):
        """A measured zero is not absence."""
        path = write_legacy([legacy_record(T0, bearing=0, speed=0)])

        (point,) = LegacyJsonLoader().read(path)

        assert point.bearing == 0.0
        assert point.speed == 0.0

    def test_metadata_optional(self, write_legacy):
        """elapsedMs and provider are not required."""
        record = legacy_record(T0)
        del record["location"]["elapsedMs"]
        del record["location"]["provider"]
        path = write_legacy([record])

        assert len(LegacyJsonLoader().read(path)) == 1

    def test_load_into_counts_records(self, write_legacy):
        """N well-formed records give N entries."""
        path = write_legacy([legacy_record(T0 + i) for i in range(5)])
        store = TrackStore()

        report = LegacyJsonLoader().load_into(path, store)

        assert len(store) == 5
        assert report.read == 5
        assert report.inserted == 5
        assert report.overwritten == 0

    def test_duplicate_timestamps_last_wins(self, write_legacy):
        """Duplicates collapse in file order."""
        path = write_legacy([
            legacy_record(T0, lat=1.0),
            legacy_record(T0 + 1),
            legacy_record(T0, lat=2.0),
        ])
        store = TrackStore()

        report = LegacyJsonLoader().load_into(path, store)

        assert len(store) == 2
        assert report.overwritten == 1
        assert store.lookup_exact(T0).lat == 2.0

    def test_milliseconds(self, write_legacy):
        """Millisecond logs are converted to seconds."""
        path = write_legacy([legacy_record(T0 * 1000 + 999)])

        (point,) = LegacyJsonLoader(time_unit=TimeUnit.MILLISECONDS).read(path)

        assert point.timestamp == T0

    def test_missing_field(self, write_legacy):
        """A record without a required field fails the whole file."""
        bad = legacy_record(T0 + 1)
        del bad["location"]["verticalAccuracy"]
        path = write_legacy([legacy_record(T0), bad])

        with pytest.raises(GpsFormatError, match="#1"):
            LegacyJsonLoader().read(path)

    def test_missing_time(self, write_legacy):
        """Time is required."""
        record = legacy_record(T0)
        del record["time"]
        path = write_legacy([record])

        with pytest.raises(GpsFormatError):
            LegacyJsonLoader().read(path)

    def test_time_must_be_integer(self, write_legacy):
        """A string time is rejected."""
        path = write_legacy([legacy_record(str(T0))])

        with pytest.raises(GpsFormatError):
            LegacyJsonLoader().read(path)

    @pytest.mark.parametrize(
        "field, value",
        [("latitude", "51.0"), ("bearing", True), ("speed", "5"), ("verticalAccuracy", None)],
    )
    def test_wrongly_typed_field(self, write_legacy, field, value):
        """Values are not coerced: strings, bools and nulls fail the file."""
        path = write_legacy([legacy_record(T0, **{field: value})])

        with pytest.raises(GpsFormatError, match="#0"):
            LegacyJsonLoader().read(path)

    def test_integer_coordinates_accepted(self, write_legacy):
        """JSON integers are valid floats."""
        path = write_legacy([legacy_record(T0, lat=51, lon=13)])

        (point,) = LegacyJsonLoader().read(path)

        assert point.lat == 51.0
        assert isinstance(point.lat, float)

    def test_invalid_json(self, write_legacy):
        """Broken JSON."""
        path = write_legacy("[{\"time\": 1,")

        with pytest.raises(GpsFormatError):
            LegacyJsonLoader().read(path)

    def test_not_a_list(self, write_legacy):
        """Top level must be an array."""
        path = write_legacy({"time": T0})

        with pytest.raises(GpsFormatError):
            LegacyJsonLoader().read(path)

    def test_file_not_found(self, tmp_path):
        """Missing file is an I/O error."""
        with pytest.raises(GpsFileError):
            LegacyJsonLoader().read(tmp_path / "missing.json")
