"""Shared fixtures for lofigps tests."""

import json

import pytest

# 2022-05-01T12:00:00Z
T0 = 1651406400


def legacy_record(time, lat=51.05, lon=13.74, **overrides):
    """One legacy log record with every location field present."""
    location = {
        "latitude": lat,
        "longitude": lon,
        "altitude": 112.0,
        "accuracy": 4.0,
        "verticalAccuracy": 3.0,
        "bearing": 90.0,
        "speed": 5.0,
        "elapsedMs": 1200,
        "provider": "gps",
    }
    location.update(overrides)
    return {"time": time, "location": location}


@pytest.fixture
def write_legacy(tmp_path):
    """Writes a list of records (or raw text) as a legacy JSON file."""

    def _write(records, name="locations.json"):
        path = tmp_path / name
        text = records if isinstance(records, str) else json.dumps(records)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_gpx(tmp_path):
    """Writes trkseg bodies into a GPX 1.1 document (one track per list item)."""

    def _write(tracks, name="track.gpx", version="1.1"):
        ns = "http://www.topografix.com/GPX/1/1" if version == "1.1" else "http://www.topografix.com/GPX/1/0"
        body = "".join(f"<trk>{track}</trk>" for track in tracks)
        path = tmp_path / name
        path.write_text(
            f'<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<gpx version="{version}" creator="lofigps-tests" xmlns="{ns}">{body}</gpx>',
            encoding="utf-8",
        )
        return path

    return _write
