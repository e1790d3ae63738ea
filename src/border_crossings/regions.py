"""Region identities and decoding of boundary codes.

A region is one of five variants: an ISO 3166-1 country, an ISO 3166-2
subdivision, an ISO 3166-3 obsolete country, a code none of the tables know,
or the missing-data marker. Each variant is a frozen pydantic model so that
regions compare and hash by variant and payload and can live in frozensets.
"""

from functools import lru_cache
from typing import Literal, Tuple, Union

import pycountry
from pydantic import BaseModel, ConfigDict

MISSING_DATA_NAME = "Missing Data"


class CountryCode(BaseModel):
    """ISO 3166-1 country."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["country"] = "country"
    alpha_2: str
    name: str

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def is_subregion(self) -> bool:
        return False


class Subdivision(BaseModel):
    """ISO 3166-2 subdivision (state, province, region...)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["subdivision"] = "subdivision"
    code: str
    name: str
    country_code: str

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def is_subregion(self) -> bool:
        return True


class ObsoleteCode(BaseModel):
    """ISO 3166-3 country code that has been retired."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["obsolete"] = "obsolete"
    code: str
    name: str

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def is_subregion(self) -> bool:
        return False


class UnknownCode(BaseModel):
    """Boundary code that matched none of the ISO tables."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unknown"] = "unknown"
    code: str

    @property
    def display_name(self) -> str:
        return self.code

    @property
    def is_subregion(self) -> bool:
        return False


class MissingDataMarker(BaseModel):
    """Not a place: no location data was available for the interval."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["missing_data"] = "missing_data"

    @property
    def display_name(self) -> str:
        return MISSING_DATA_NAME

    @property
    def is_subregion(self) -> bool:
        return False


Region = Union[CountryCode, Subdivision, ObsoleteCode, UnknownCode, MissingDataMarker]

MISSING_DATA = MissingDataMarker()

_KIND_ORDER = {
    "country": 0,
    "subdivision": 1,
    "obsolete": 2,
    "unknown": 3,
    "missing_data": 4,
}


def region_sort_key(region: Region) -> Tuple[int, str]:
    """Stable display order: coarse regions first, then by name."""
    return _KIND_ORDER[region.kind], region.display_name


@lru_cache(maxsize=None)
def decode_region_code(code: str) -> Region:
    """
    Classify a boundary code against the ISO tables.

    Tables are consulted in the order country, subdivision, obsolete, so a
    code that is a valid alpha-2 country code is always a CountryCode.

    Args:
        code: Region code as returned by the boundary lookup (e.g. "FR", "US-CA")

    Returns:
        The decoded region; UnknownCode when no table matches
    """
    country = pycountry.countries.get(alpha_2=code)
    if country is not None:
        return CountryCode(alpha_2=country.alpha_2, name=country.name)

    subdivision = pycountry.subdivisions.get(code=code)
    if subdivision is not None:
        return Subdivision(
            code=subdivision.code,
            name=subdivision.name,
            country_code=subdivision.country_code,
        )

    historic = pycountry.historic_countries.get(alpha_4=code)
    if historic is not None:
        return ObsoleteCode(code=historic.alpha_4, name=historic.name)

    return UnknownCode(code=code)
