"""Data models for border crossing detection"""

import re
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from .boundaries import BoundaryLookup
from .errors import RecordParseError
from .logging import get_logger
from .regions import MISSING_DATA, Region, decode_region_code

logger = get_logger(__name__)

E7 = 1e7

_datetime_adapter = TypeAdapter(datetime)

# full date-time with seconds; the offset is optional and defaults to UTC
RFC3339_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?"
)


class Source(str, Enum):
    """Technology that produced a location fix."""

    WIFI = "WIFI"
    GPS = "GPS"
    CELL = "CELL"
    UNKNOWN = "UNKNOWN"  # explicit but unrecognised source value
    NONE = "NONE"  # no source recorded

    @classmethod
    def from_takeout(cls, value: Optional[str]) -> "Source":
        """Normalise a Takeout source string; anything unrecognised is UNKNOWN"""
        if value is None:
            return cls.NONE
        name = value.strip().upper()
        if name in (cls.WIFI.value, cls.GPS.value, cls.CELL.value):
            return cls(name)
        return cls.UNKNOWN


class RawRecord(BaseModel):
    """One entry of the ``locations`` array of a Takeout Records.json"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    latitude_e7: Optional[int] = Field(default=None, alias="latitudeE7")
    longitude_e7: Optional[int] = Field(default=None, alias="longitudeE7")
    accuracy: Optional[int] = None
    vertical_accuracy: Optional[int] = Field(default=None, alias="verticalAccuracy")
    source: Optional[str] = None
    timestamp: str

    @model_validator(mode="before")
    @classmethod
    def timestamp_from_millis(cls, data: Any) -> Any:
        # older exports carry timestampMs instead of an RFC 3339 timestamp
        if isinstance(data, dict) and "timestamp" not in data and "timestampMs" in data:
            try:
                millis = int(data["timestampMs"])
            except (TypeError, ValueError):
                return data
            moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
            data = {**data, "timestamp": moment.isoformat()}
        return data


class TakeoutDocument(BaseModel):
    """Top level of a Takeout Records.json"""

    model_config = ConfigDict(extra="ignore")

    locations: List[RawRecord]


def parse_timestamp(raw: str) -> datetime:
    """
    Parse an RFC 3339 timestamp and normalise it to UTC.

    Raises:
        RecordParseError: if the string is not a timestamp
    """
    # pydantic alone would read "0" as unix time and "2024-01-01" as midnight
    if not RFC3339_PATTERN.fullmatch(raw):
        raise RecordParseError(f"could not parse timestamp {raw!r}: not an RFC 3339 date-time")
    try:
        moment = _datetime_adapter.validate_python(raw)
    except ValidationError as e:
        raise RecordParseError(f"could not parse timestamp {raw!r}: {e}") from e
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class LocationSample(BaseModel):
    """A single location fix with the full set of regions enclosing it"""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    timestamp: datetime
    source: Source
    regions: FrozenSet[Region]

    @classmethod
    def from_raw(
        cls, record: RawRecord, lookup: BoundaryLookup
    ) -> Optional["LocationSample"]:
        """
        Build a sample from a raw record, resolving its regions immediately.

        Returns None for records lacking latitude or longitude.

        Raises:
            RecordParseError: if the timestamp cannot be parsed
            BoundaryLookupError: if the lookup cannot resolve the coordinate
        """
        if record.latitude_e7 is None or record.longitude_e7 is None:
            return None

        latitude = record.latitude_e7 / E7
        longitude = record.longitude_e7 / E7
        timestamp = parse_timestamp(record.timestamp)
        codes = lookup.resolve_regions(latitude, longitude)

        return cls(
            latitude=latitude,
            longitude=longitude,
            timestamp=timestamp,
            source=Source.from_takeout(record.source),
            regions=frozenset(decode_region_code(code) for code in codes),
        )


class BorderCrossing(BaseModel):
    """The moment a new set of regions came into effect"""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    new_regions: FrozenSet[Region]

    @classmethod
    def from_sample(cls, sample: LocationSample) -> "BorderCrossing":
        return cls(timestamp=sample.timestamp, new_regions=sample.regions)

    @classmethod
    def missing_data(cls, timestamp: datetime) -> "BorderCrossing":
        return cls(timestamp=timestamp, new_regions=frozenset({MISSING_DATA}))

    @property
    def is_missing_data(self) -> bool:
        return self.new_regions == frozenset({MISSING_DATA})

    def duration_until(self, other: "BorderCrossing") -> timedelta:
        return other.timestamp - self.timestamp


def build_samples(
    records: Sequence[RawRecord], lookup: BoundaryLookup
) -> List[LocationSample]:
    """Convert raw records to samples, dropping records without coordinates"""
    samples: List[LocationSample] = []
    for record in records:
        sample = LocationSample.from_raw(record, lookup)
        if sample is None:
            logger.debug("Dropping record without coordinates", timestamp=record.timestamp)
            continue
        samples.append(sample)

    dropped = len(records) - len(samples)
    if dropped:
        logger.info(
            "Dropped records without coordinates",
            dropped=dropped,
            retained=len(samples),
        )
    return samples
