"""Common test fixtures for border crossing tests."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from border_crossings.boundaries import GeoJSONBoundaryLookup
from border_crossings.models import BorderCrossing, LocationSample, RawRecord, Source
from border_crossings.regions import decode_region_code

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)

# lat/lon inside each test region
PARIS = (48.85, 2.35)
FRANKFURT = (50.1, 8.7)
SACRAMENTO = (38.5, -121.5)
LAS_VEGAS = (36.1, -115.1)
PRAGUE = (50.08, 14.42)
ATLANTIS = (-10.0, -20.0)
OPEN_OCEAN = (0.0, -30.0)


def _box(code, min_lon, min_lat, max_lon, max_lat):
    return {
        "type": "Feature",
        "properties": {"id": code},
        "geometry": {
            "type": "Polygon",
            "coordinates": [
                [
                    [min_lon, min_lat],
                    [max_lon, min_lat],
                    [max_lon, max_lat],
                    [min_lon, max_lat],
                    [min_lon, min_lat],
                ]
            ],
        },
    }


BOUNDARIES = {
    "type": "FeatureCollection",
    "features": [
        _box("FR", 0.0, 45.0, 5.0, 50.0),
        _box("DE", 6.0, 48.0, 10.0, 52.0),
        _box("US", -125.0, 32.0, -110.0, 42.0),
        _box("US-CA", -125.0, 32.0, -118.0, 42.0),
        _box("US-NV", -118.0, 32.0, -110.0, 42.0),
        _box("CSHH", 12.0, 48.5, 22.0, 51.0),
        _box("XX-ATL", -25.0, -15.0, -15.0, -5.0),
    ],
}


def e7(value: float) -> int:
    return int(round(value * 1e7))


def make_record(point, timestamp, source=None) -> RawRecord:
    """Raw Takeout record at ``point`` (lat, lon)."""
    data = {
        "latitudeE7": e7(point[0]),
        "longitudeE7": e7(point[1]),
        "timestamp": timestamp.isoformat() if isinstance(timestamp, datetime) else timestamp,
    }
    if source is not None:
        data["source"] = source
    return RawRecord.model_validate(data)


def make_sample(timestamp, *codes, source=Source.GPS) -> LocationSample:
    """Sample with regions decoded from ``codes`` (no boundary lookup)."""
    return LocationSample(
        latitude=0.0,
        longitude=0.0,
        timestamp=timestamp,
        source=source,
        regions=frozenset(decode_region_code(code) for code in codes),
    )


def make_crossing(timestamp, *codes) -> BorderCrossing:
    return BorderCrossing(
        timestamp=timestamp,
        new_regions=frozenset(decode_region_code(code) for code in codes),
    )


def hours(n: float) -> timedelta:
    return timedelta(hours=n)


def days(n: float) -> timedelta:
    return timedelta(days=n)


@pytest.fixture
def boundaries_collection():
    """In-memory GeoJSON boundaries built from rectangles."""
    return BOUNDARIES


@pytest.fixture
def lookup(boundaries_collection):
    """Boundary lookup over the test rectangles."""
    return GeoJSONBoundaryLookup.from_feature_collection(boundaries_collection)


@pytest.fixture
def boundaries_file(tmp_path, boundaries_collection):
    """The test boundaries written to a GeoJSON file."""
    path = tmp_path / "boundaries.geojson"
    path.write_text(json.dumps(boundaries_collection), encoding="utf-8")
    return path


@pytest.fixture
def sample_takeout_document():
    """A small Records.json payload: Paris, a gap, then Frankfurt."""
    return {
        "locations": [
            {
                "latitudeE7": e7(PARIS[0]),
                "longitudeE7": e7(PARIS[1]),
                "accuracy": 20,
                "source": "GPS",
                "timestamp": "2024-01-01T00:00:00Z",
            },
            {
                "accuracy": 30,
                "source": "WIFI",
                "timestamp": "2024-01-01T06:00:00.123Z",
            },
            {
                "latitudeE7": e7(PARIS[0]),
                "longitudeE7": e7(PARIS[1]),
                "source": "WIFI",
                "timestamp": "2024-01-01T12:00:00.5Z",
            },
            {
                "latitudeE7": e7(FRANKFURT[0]),
                "longitudeE7": e7(FRANKFURT[1]),
                "verticalAccuracy": 3,
                "timestamp": "2024-01-04T12:00:00Z",
            },
        ]
    }
