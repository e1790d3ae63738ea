"""Unit tests for data models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from border_crossings.errors import BoundaryLookupError, RecordParseError
from border_crossings.models import (
    BorderCrossing,
    LocationSample,
    RawRecord,
    Source,
    build_samples,
    parse_timestamp,
)
from border_crossings.regions import MISSING_DATA, decode_region_code
from conftest import OPEN_OCEAN, PARIS, SACRAMENTO, T0, days, make_record, make_sample


class TestSource:
    """Test normalisation of Takeout sources."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("WIFI", Source.WIFI),
            ("GPS", Source.GPS),
            ("CELL", Source.CELL),
            ("gps", Source.GPS),
            ("UNKNOWN", Source.UNKNOWN),
            ("VISIT_ARRIVAL", Source.UNKNOWN),
            ("MANUAL", Source.UNKNOWN),
            (None, Source.NONE),
        ],
    )
    def test_from_takeout(self, value, expected):
        """Test each Takeout value maps to its source."""
        assert Source.from_takeout(value) == expected

    def test_none_is_not_unknown(self):
        """Test a missing source is distinct from an unrecognised one."""
        assert Source.from_takeout(None) != Source.from_takeout("SOMETHING_NEW")


class TestRawRecord:
    """Test the raw Takeout record shape."""

    def test_aliases(self):
        """Test camelCase Takeout keys populate the record."""
        record = RawRecord.model_validate(
            {
                "latitudeE7": 488500000,
                "longitudeE7": 23500000,
                "accuracy": 12,
                "verticalAccuracy": 4,
                "source": "WIFI",
                "timestamp": "2024-01-01T00:00:00Z",
                "deviceTag": 12345,
            }
        )
        assert record.latitude_e7 == 488500000
        assert record.longitude_e7 == 23500000
        assert record.vertical_accuracy == 4
        assert record.source == "WIFI"

    def test_optional_fields(self):
        """Test only the timestamp is required."""
        record = RawRecord.model_validate({"timestamp": "2024-01-01T00:00:00Z"})
        assert record.latitude_e7 is None
        assert record.longitude_e7 is None
        assert record.source is None

    def test_missing_timestamp(self):
        """Test a record without any timestamp is rejected."""
        with pytest.raises(ValidationError):
            RawRecord.model_validate({"latitudeE7": 1, "longitudeE7": 1})

    def test_timestamp_ms(self):
        """Test older exports with timestampMs are accepted."""
        record = RawRecord.model_validate(
            {"latitudeE7": 1, "longitudeE7": 1, "timestampMs": "1704067200000"}
        )
        assert parse_timestamp(record.timestamp) == T0


class TestParseTimestamp:
    """Test timestamp parsing."""

    def test_zulu(self):
        """Test a Z suffixed timestamp."""
        assert parse_timestamp("2024-01-01T00:00:00Z") == T0

    def test_fractional_seconds(self):
        """Test fractional seconds are kept."""
        parsed = parse_timestamp("2024-01-01T00:00:00.123Z")
        assert parsed.microsecond == 123000

    def test_offset_normalised_to_utc(self):
        """Test offsets are converted to UTC."""
        parsed = parse_timestamp("2024-01-01T02:00:00+02:00")
        assert parsed == T0
        assert parsed.tzinfo == timezone.utc

    def test_naive_assumed_utc(self):
        """Test a timestamp without offset is treated as UTC."""
        assert parse_timestamp("2024-01-01T00:00:00") == T0

    def test_invalid(self):
        """Test an unparseable timestamp is fatal."""
        with pytest.raises(RecordParseError, match="not-a-time"):
            parse_timestamp("not-a-time")

    @pytest.mark.parametrize(
        "raw",
        ["0", "1700000000", "1704067200000", "2024-01-01", "2024-01-01T00:00", "2024-01-01T00:00:00Z\n"],
    )
    def test_rejects_non_rfc3339(self, raw):
        """Test numbers, bare dates and partial times are not accepted."""
        with pytest.raises(RecordParseError):
            parse_timestamp(raw)

    def test_space_separator(self):
        """Test a space may separate date and time."""
        assert parse_timestamp("2024-01-01 00:00:00Z") == T0


class TestLocationSample:
    """Test LocationSample construction."""

    def test_from_raw(self, lookup):
        """Test coordinates are scaled and regions resolved."""
        record = make_record(SACRAMENTO, T0, source="GPS")
        sample = LocationSample.from_raw(record, lookup)

        assert sample.latitude == pytest.approx(SACRAMENTO[0])
        assert sample.longitude == pytest.approx(SACRAMENTO[1])
        assert sample.timestamp == T0
        assert sample.source == Source.GPS
        assert sample.regions == frozenset(
            {decode_region_code("US"), decode_region_code("US-CA")}
        )

    def test_no_source(self, lookup):
        """Test a record without source gets Source.NONE."""
        sample = LocationSample.from_raw(make_record(PARIS, T0), lookup)
        assert sample.source == Source.NONE

    @pytest.mark.parametrize("missing", ["latitudeE7", "longitudeE7"])
    def test_missing_coordinate_dropped(self, lookup, missing):
        """Test records lacking a coordinate produce no sample."""
        data = {"latitudeE7": 1, "longitudeE7": 1, "timestamp": "2024-01-01T00:00:00Z"}
        del data[missing]
        assert LocationSample.from_raw(RawRecord.model_validate(data), lookup) is None

    def test_missing_coordinate_skips_timestamp(self, lookup):
        """Test a dropped record is not parsed any further."""
        record = RawRecord.model_validate({"timestamp": "garbage"})
        assert LocationSample.from_raw(record, lookup) is None

    def test_bad_timestamp_is_fatal(self, lookup):
        """Test an unparseable timestamp raises instead of skipping."""
        record = make_record(PARIS, "yesterday")
        with pytest.raises(RecordParseError):
            LocationSample.from_raw(record, lookup)

    def test_invalid_coordinate_is_fatal(self, lookup):
        """Test an out of range coordinate raises."""
        record = RawRecord.model_validate(
            {"latitudeE7": 950000000, "longitudeE7": 0, "timestamp": "2024-01-01T00:00:00Z"}
        )
        with pytest.raises(BoundaryLookupError):
            LocationSample.from_raw(record, lookup)

    def test_empty_region_set(self, lookup):
        """Test a point outside every boundary has no regions."""
        sample = LocationSample.from_raw(make_record(OPEN_OCEAN, T0), lookup)
        assert sample.regions == frozenset()

    def test_immutable(self):
        """Test samples cannot be modified."""
        sample = make_sample(T0, "FR")
        with pytest.raises(ValidationError):
            sample.regions = frozenset()


class TestBuildSamples:
    """Test building samples from raw records."""

    def test_drops_records_without_coordinates(self, lookup):
        """Test only records with both coordinates survive, in order."""
        records = [
            make_record(PARIS, T0),
            RawRecord.model_validate({"timestamp": "2024-01-01T01:00:00Z"}),
            make_record(SACRAMENTO, T0 + days(1)),
        ]
        samples = build_samples(records, lookup)
        assert [s.timestamp for s in samples] == [T0, T0 + days(1)]


class TestBorderCrossing:
    """Test BorderCrossing helpers."""

    def test_from_sample_uses_full_region_set(self):
        """Test a crossing carries every region of its sample."""
        sample = make_sample(T0, "US", "US-CA")
        crossing = BorderCrossing.from_sample(sample)
        assert crossing.timestamp == T0
        assert crossing.new_regions == sample.regions

    def test_missing_data(self):
        """Test the synthetic missing data crossing."""
        crossing = BorderCrossing.missing_data(T0)
        assert crossing.new_regions == frozenset({MISSING_DATA})
        assert crossing.is_missing_data

    def test_real_crossing_is_not_missing_data(self):
        """Test a real region set is not missing data."""
        assert not BorderCrossing.from_sample(make_sample(T0, "FR")).is_missing_data

    def test_duration_until(self):
        """Test the interval between two crossings."""
        first = BorderCrossing.missing_data(T0)
        second = BorderCrossing.missing_data(T0 + days(2))
        assert first.duration_until(second) == days(2)

    def test_timestamp_keeps_timezone(self):
        """Test crossings keep their timezone."""
        crossing = BorderCrossing.missing_data(datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert crossing.timestamp.tzinfo is not None
