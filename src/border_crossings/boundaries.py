"""Boundary lookup: which region codes contain a coordinate"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Protocol, Set, Union

from shapely.geometry import Point, shape
from shapely.geometry.base import BaseGeometry
from shapely.strtree import STRtree

from .errors import BoundaryLookupError
from .logging import get_logger

logger = get_logger(__name__)


class BoundaryLookup(Protocol):
    """Anything that can resolve a coordinate to the codes of its enclosing regions."""

    def resolve_regions(self, latitude: float, longitude: float) -> Set[str]:
        ...


def validate_coordinate(latitude: float, longitude: float) -> None:
    """Raise BoundaryLookupError if the coordinate is not a valid WGS84 point"""
    if not -90.0 <= latitude <= 90.0:
        raise BoundaryLookupError(
            f"could not find region codes for ({latitude}, {longitude}): "
            f"latitude must be between -90 and 90"
        )
    if not -180.0 <= longitude <= 180.0:
        raise BoundaryLookupError(
            f"could not find region codes for ({latitude}, {longitude}): "
            f"longitude must be between -180 and 180"
        )


class GeoJSONBoundaryLookup:
    """Resolves points against region polygons from a GeoJSON FeatureCollection.

    Every feature must carry its ISO region code in ``id_property`` (looked up
    in the feature's properties, falling back to the feature ``id``). A point
    lying exactly on a border belongs to both neighbours.
    """

    def __init__(self, codes: List[str], geometries: List[BaseGeometry]):
        if len(codes) != len(geometries):
            raise ValueError("codes and geometries must have the same length")
        self.codes = codes
        self.geometries = geometries
        self._tree = STRtree(geometries)

    @classmethod
    def from_feature_collection(
        cls, collection: Mapping[str, Any], id_property: str = "id"
    ) -> "GeoJSONBoundaryLookup":
        """Build a lookup from an already-parsed GeoJSON mapping"""
        if collection.get("type") == "FeatureCollection":
            features = collection.get("features", [])
        elif collection.get("type") == "Feature":
            features = [collection]
        else:
            raise BoundaryLookupError(
                f"No FeatureCollection found in boundary data (type={collection.get('type')!r})"
            )

        codes: List[str] = []
        geometries: List[BaseGeometry] = []
        for index, feature in enumerate(features):
            properties: Dict[str, Any] = feature.get("properties") or {}
            code = properties.get(id_property, feature.get("id"))
            if not code:
                raise BoundaryLookupError(
                    f"boundary feature #{index} has no {id_property!r} property"
                )
            geometry = feature.get("geometry")
            if not geometry:
                raise BoundaryLookupError(f"boundary feature {code!r} has no geometry")
            try:
                geometries.append(shape(geometry))
            except Exception as e:
                raise BoundaryLookupError(
                    f"could not read geometry of boundary feature {code!r}: {e}"
                ) from e
            codes.append(str(code))

        logger.info("Loaded boundary features", feature_count=len(codes))
        return cls(codes, geometries)

    @classmethod
    def from_path(
        cls, path: Union[str, Path], id_property: str = "id"
    ) -> "GeoJSONBoundaryLookup":
        """Load a GeoJSON file of region boundaries"""
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                collection = json.load(f)
        except (OSError, ValueError) as e:
            raise BoundaryLookupError(f"could not read boundaries {str(path)!r}: {e}") from e
        return cls.from_feature_collection(collection, id_property=id_property)

    def resolve_regions(self, latitude: float, longitude: float) -> Set[str]:
        """Return the code of every region whose boundary contains the point"""
        validate_coordinate(latitude, longitude)
        point = Point(longitude, latitude)
        indices = self._tree.query(point, predicate="intersects")
        return {self.codes[i] for i in indices}
