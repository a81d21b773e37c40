"""Feature and FeatureCollection dataclasses for decoded GeoJSON documents.

All points are stored in local ENU meters relative to the collection datum,
whatever CRS the source document was written in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from geoframe.geodesy import CRS, Datum, Euler


@dataclass(frozen=True)
class Point:
    """A single local position in meters."""

    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class Line:
    """A two-point segment."""

    start: Point
    end: Point


@dataclass(frozen=True)
class Path:
    """An ordered polyline.

    A two-point polyline is always a Line, so a Path holds 0, 1, or 3+
    points.  Points are stored as a tuple.
    """

    points: tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))
        if len(self.points) == 2:
            raise ValueError("A two-point Path must be represented as a Line")


@dataclass(frozen=True)
class Polygon:
    """Outer boundary ring of a polygon.  Holes are not represented."""

    ring: tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "ring", tuple(self.ring))


Geometry = Union[Point, Line, Path, Polygon]


@dataclass
class Feature:
    """One geometry with its string-valued attributes.

    Attributes:
        geometry: A Point, Line, Path, or Polygon.
        properties: Attribute bag.  Non-string source values are kept as
            their JSON text.
    """

    geometry: Geometry
    properties: dict[str, str] = field(default_factory=dict)


@dataclass
class FeatureCollection:
    """A set of features sharing one local frame.

    Attributes:
        datum: Geodetic anchor of the local frame.
        heading: Frame orientation; only yaw is used.
        crs: CRS the collection is labelled with when written.
        global_properties: Collection-level passthrough attributes.
        features: Ordered list of Feature instances.
    """

    datum: Datum = field(default_factory=Datum)
    heading: Euler = field(default_factory=Euler)
    crs: CRS = CRS.WGS
    global_properties: dict[str, str] = field(default_factory=dict)
    features: list[Feature] = field(default_factory=list)


def geometry_kind(geometry: Geometry) -> str:
    """Upper-case label for a geometry variant."""
    if isinstance(geometry, Point):
        return "POINT"
    if isinstance(geometry, Line):
        return "LINE"
    if isinstance(geometry, Path):
        return "PATH"
    if isinstance(geometry, Polygon):
        return "POLYGON"
    raise TypeError(f"Unsupported geometry: {type(geometry).__name__}")


def summarize(collection: FeatureCollection) -> str:
    """Human-readable overview of a collection's header and features."""
    datum = collection.datum
    lines = [
        f"DATUM: {datum.lat}, {datum.lon}, {datum.alt}",
        f"HEADING: {collection.heading.yaw}",
        f"FEATURES: {len(collection.features)}",
    ]
    for feature in collection.features:
        lines.append(f"  {geometry_kind(feature.geometry)}")
        if feature.properties:
            lines.append(f"    PROPS: {len(feature.properties)}")
    return "\n".join(lines)
