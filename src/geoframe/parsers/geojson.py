"""Parse GeoJSON (RFC 7946 shape, plus a collection header) to FeatureCollection.

Accepts a FeatureCollection, a single Feature, or a bare geometry object.
The top-level ``properties`` block must declare ``crs``, ``datum`` and
``heading``; every coordinate is converted into local ENU meters on the way
in, so nothing downstream needs to know which CRS the file used.
"""

from __future__ import annotations

import json
import math
from typing import Any, NamedTuple

from loguru import logger

from geoframe.collection import (
    Feature,
    FeatureCollection,
    Geometry,
    Line,
    Path,
    Point,
    Polygon,
)
from geoframe.config import Settings, settings as default_settings
from geoframe.errors import (
    CRSError,
    FormatError,
    NestingDepthError,
    SchemaError,
    UnsupportedGeometryError,
)
from geoframe.geodesy import CRS, Datum, Euler, wgs_to_enu

# Keys in the top-level properties block that are not passed through
RESERVED_KEYS = ("crs", "datum", "heading")

_CRS_NAMES = {
    "EPSG:4326": CRS.WGS,
    "WGS84": CRS.WGS,
    "WGS": CRS.WGS,
    "ENU": CRS.ENU,
    "ECEF": CRS.ENU,
}


class Metadata(NamedTuple):
    """Collection-level header fields."""

    datum: Datum
    heading: Euler
    crs: CRS
    global_properties: dict[str, str]


def _is_number(value: Any) -> bool:
    """Finite JSON number.  Booleans and ints too large for a float are not."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def _reject_constant(name: str) -> float:
    raise FormatError(f"Non-standard JSON constant: {name}")


def loads_geojson(text: str) -> Any:
    """Decode JSON text, rejecting NaN / Infinity tokens.

    Raises:
        FormatError: If the text is not valid JSON.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except FormatError:
        raise
    except ValueError as e:
        raise FormatError(f"Invalid JSON: {e}") from e


# ---------------------------------------------------------------------------
# Document shape
# ---------------------------------------------------------------------------

def unwrap(document: Any) -> dict:
    """Normalize any accepted top-level shape into a FeatureCollection dict.

    A Feature is wrapped as the only member of a new collection; anything
    else with a ``type`` is treated as a bare geometry and wrapped into a
    Feature with empty properties first.  Neither path synthesizes a
    top-level ``properties`` block.

    Raises:
        FormatError: If the document is not an object with a string ``type``.
    """
    if not isinstance(document, dict):
        raise FormatError(
            f"Top-level value must be an object, got {type(document).__name__}"
        )
    doc_type = document.get("type")
    if not isinstance(doc_type, str):
        raise FormatError("Top-level object has no string 'type' field")

    if doc_type == "FeatureCollection":
        return document
    if doc_type == "Feature":
        return {"type": "FeatureCollection", "features": [document]}

    feature = {"type": "Feature", "geometry": document, "properties": {}}
    return {"type": "FeatureCollection", "features": [feature]}


# ---------------------------------------------------------------------------
# Collection header
# ---------------------------------------------------------------------------

def parse_crs(name: str) -> CRS:
    """Map a CRS label to the CRS enum.

    Raises:
        CRSError: For any label outside the known set.
    """
    try:
        return _CRS_NAMES[name]
    except KeyError:
        raise CRSError(name) from None


def parse_metadata(document: dict) -> Metadata:
    """Validate and extract crs, datum, heading and passthrough properties.

    Raises:
        SchemaError: If ``properties`` or one of its required fields is
            missing or has the wrong type.
        CRSError: If ``crs`` is a string but not a recognized one.
    """
    props = document.get("properties")
    if not isinstance(props, dict):
        raise SchemaError("properties", "Missing top-level 'properties' object")

    crs_name = props.get("crs")
    if not isinstance(crs_name, str):
        raise SchemaError("crs", "'properties' missing string 'crs'")
    crs = parse_crs(crs_name)

    raw_datum = props.get("datum")
    if (
        not isinstance(raw_datum, list)
        or len(raw_datum) < 3
        or not all(_is_number(v) for v in raw_datum[:3])
    ):
        raise SchemaError("datum", "'properties' missing array 'datum' of >= 3 numbers")
    datum = Datum(
        lat=float(raw_datum[0]), lon=float(raw_datum[1]), alt=float(raw_datum[2]),
    )

    yaw = props.get("heading")
    if not _is_number(yaw):
        raise SchemaError("heading", "'properties' missing numeric 'heading'")
    heading = Euler(roll=0.0, pitch=0.0, yaw=float(yaw))

    global_properties = parse_properties(
        {k: v for k, v in props.items() if k not in RESERVED_KEYS}
    )
    return Metadata(datum, heading, crs, global_properties)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def parse_properties(raw: Any) -> dict[str, str]:
    """Flatten a JSON object into a string-valued attribute bag.

    Strings are kept verbatim; every other value is stored as its compact
    JSON text.  ``None`` yields an empty bag.
    """
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise FormatError(f"'properties' must be an object, got {type(raw).__name__}")
    result: dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            result[key] = value
        else:
            result[key] = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return result


# ---------------------------------------------------------------------------
# Coordinates and geometry
# ---------------------------------------------------------------------------

def parse_point(coords: Any, datum: Datum, crs: CRS) -> Point:
    """Convert one coordinate tuple into a local Point.

    ENU tuples are taken as (x, y[, z]); WGS tuples as (lon, lat[, alt]) and
    projected onto the tangent plane at ``datum``.  A missing third
    component is 0.
    """
    if (
        not isinstance(coords, list)
        or len(coords) not in (2, 3)
        or not all(_is_number(c) for c in coords)
    ):
        raise FormatError(f"Invalid coordinate tuple: {coords!r}")

    a, b = float(coords[0]), float(coords[1])
    c = float(coords[2]) if len(coords) > 2 else 0.0

    if crs is CRS.ENU:
        return Point(a, b, c)
    x, y, z = wgs_to_enu(lat=b, lon=a, alt=c, datum=datum)
    return Point(x, y, z)


def _coordinate_list(coords: Any, what: str) -> list:
    if not isinstance(coords, list):
        raise FormatError(f"{what} coordinates must be an array")
    return coords


def parse_line_string(coords: Any, datum: Datum, crs: CRS) -> Line | Path:
    """Exactly two tuples become a Line; any other count becomes a Path."""
    points = [
        parse_point(c, datum, crs)
        for c in _coordinate_list(coords, "LineString")
    ]
    if len(points) == 2:
        return Line(points[0], points[1])
    return Path(points)


def parse_polygon(
    coords: Any, datum: Datum, crs: CRS, settings: Settings | None = None,
) -> Polygon:
    """Build a Polygon from the outer ring.  Inner rings are not supported."""
    settings = settings or default_settings
    rings = _coordinate_list(coords, "Polygon")
    if not rings:
        raise FormatError("Polygon has no rings")
    if len(rings) > 1:
        if settings.strict_geometry:
            raise UnsupportedGeometryError(
                f"Polygon has {len(rings) - 1} inner ring(s); holes are not supported"
            )
        logger.warning(f"Dropping {len(rings) - 1} inner polygon ring(s)")
    ring = _coordinate_list(rings[0], "Polygon ring")
    return Polygon([parse_point(c, datum, crs) for c in ring])


def parse_geometry(
    geometry: Any,
    datum: Datum,
    crs: CRS,
    *,
    settings: Settings | None = None,
    depth: int = 0,
) -> list[Geometry]:
    """Decode a GeoJSON geometry object into a flat list of geometries.

    Multi-geometries and GeometryCollections expand to one entry per member,
    in document order.

    Args:
        geometry: GeoJSON geometry dict.
        datum: Anchor of the local frame.
        crs: CRS the coordinates are written in.
        settings: Strictness and depth limits (defaults to module settings).
        depth: Current GeometryCollection nesting level.

    Returns:
        List of decoded geometries.  Empty for unknown types in permissive
        mode.
    """
    settings = settings or default_settings
    if not isinstance(geometry, dict):
        raise FormatError(f"Geometry must be an object, got {type(geometry).__name__}")
    geom_type = geometry.get("type")
    if not isinstance(geom_type, str):
        raise FormatError("Geometry has no string 'type' field")

    if geom_type == "GeometryCollection":
        if depth >= settings.max_collection_depth:
            raise NestingDepthError(
                f"GeometryCollection nesting exceeds {settings.max_collection_depth}"
            )
        members = geometry.get("geometries")
        if not isinstance(members, list):
            raise FormatError("GeometryCollection 'geometries' must be an array")
        out: list[Geometry] = []
        for member in members:
            out.extend(
                parse_geometry(member, datum, crs, settings=settings, depth=depth + 1)
            )
        return out

    if geom_type not in (
        "Point", "LineString", "Polygon",
        "MultiPoint", "MultiLineString", "MultiPolygon",
    ):
        if settings.strict_geometry:
            raise UnsupportedGeometryError(f"Unsupported geometry type: {geom_type}")
        logger.warning(f"Dropping unsupported geometry type: {geom_type}")
        return []

    if "coordinates" not in geometry:
        raise FormatError(f"{geom_type} has no 'coordinates'")
    coords = geometry["coordinates"]

    if geom_type == "Point":
        return [parse_point(coords, datum, crs)]
    if geom_type == "LineString":
        return [parse_line_string(coords, datum, crs)]
    if geom_type == "Polygon":
        return [parse_polygon(coords, datum, crs, settings)]
    if geom_type == "MultiPoint":
        return [parse_point(c, datum, crs) for c in _coordinate_list(coords, geom_type)]
    if geom_type == "MultiLineString":
        return [
            parse_line_string(c, datum, crs)
            for c in _coordinate_list(coords, geom_type)
        ]
    # MultiPolygon
    return [
        parse_polygon(c, datum, crs, settings)
        for c in _coordinate_list(coords, geom_type)
    ]


# ---------------------------------------------------------------------------
# Whole documents
# ---------------------------------------------------------------------------

def parse_feature_collection(
    document: Any,
    *,
    metadata: dict | None = None,
    settings: Settings | None = None,
) -> FeatureCollection:
    """Decode a parsed JSON document into a FeatureCollection.

    Args:
        document: Parsed JSON value (collection, feature, or bare geometry).
        metadata: Top-level properties to use when the document carries
            none, e.g. for a bare Feature or geometry.
        settings: Decode settings (defaults to module settings).

    Returns:
        FeatureCollection with every point in local ENU meters.
    """
    settings = settings or default_settings
    doc = unwrap(document)
    if metadata is not None and not isinstance(doc.get("properties"), dict):
        doc = {**doc, "properties": metadata}

    datum, heading, crs, global_properties = parse_metadata(doc)

    raw_features = doc.get("features", [])
    if not isinstance(raw_features, list):
        raise FormatError("'features' must be an array")

    features: list[Feature] = []
    for idx, raw in enumerate(raw_features):
        if not isinstance(raw, dict):
            raise FormatError(f"Feature {idx} is not an object")
        geometry = raw.get("geometry")
        if geometry is None:
            logger.debug(f"Skipping feature {idx} with null geometry")
            continue
        geometries = parse_geometry(geometry, datum, crs, settings=settings)
        properties = parse_properties(raw.get("properties"))
        for geom in geometries:
            features.append(Feature(geometry=geom, properties=dict(properties)))

    logger.debug(
        f"Decoded {len(features)} feature(s) from {len(raw_features)} "
        f"source feature(s), crs={crs.name}"
    )
    return FeatureCollection(
        datum=datum,
        heading=heading,
        crs=crs,
        global_properties=global_properties,
        features=features,
    )


def parse_geojson(
    geojson_string: str,
    *,
    metadata: dict | None = None,
    settings: Settings | None = None,
) -> FeatureCollection:
    """Parse a GeoJSON string into a FeatureCollection.

    Raises:
        FormatError: If the text is not valid JSON or not a valid document.
    """
    data = loads_geojson(geojson_string)
    return parse_feature_collection(data, metadata=metadata, settings=settings)
