"""Export FeatureCollection to a GeoJSON dict / text.

Stored local points are reprojected to [lon, lat, alt] around the collection
datum.  Unless ``encode_native_crs`` is enabled this happens for ENU
collections too, so the output coordinates are always geographic.
"""

from __future__ import annotations

import json

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
from geoframe.errors import FormatError
from geoframe.geodesy import CRS, Datum, enu_to_wgs
from geoframe.parsers.geojson import RESERVED_KEYS

CRS_LABELS = {
    CRS.WGS: "EPSG:4326",
    CRS.ENU: "ENU",
}


def point_to_coordinates(point: Point, datum: Datum) -> list[float]:
    """Reproject a local point to a GeoJSON [lon, lat, alt] tuple."""
    lat, lon, alt = enu_to_wgs(point.x, point.y, point.z, datum)
    return [lon, lat, alt]


def _native_coordinates(point: Point, datum: Datum) -> list[float]:
    return [point.x, point.y, point.z]


def geometry_to_json(
    geometry: Geometry,
    datum: Datum,
    crs: CRS = CRS.WGS,
    *,
    settings: Settings | None = None,
) -> dict:
    """Convert one geometry to a GeoJSON geometry dict.

    Lines and Paths both become LineStrings; a Polygon becomes a single-ring
    Polygon.

    Raises:
        TypeError: If ``geometry`` is not one of the supported variants.
    """
    settings = settings or default_settings
    if settings.encode_native_crs and crs is CRS.ENU:
        coords = _native_coordinates
    else:
        coords = point_to_coordinates

    if isinstance(geometry, Point):
        return {"type": "Point", "coordinates": coords(geometry, datum)}
    if isinstance(geometry, Line):
        return {
            "type": "LineString",
            "coordinates": [coords(geometry.start, datum), coords(geometry.end, datum)],
        }
    if isinstance(geometry, Path):
        return {
            "type": "LineString",
            "coordinates": [coords(p, datum) for p in geometry.points],
        }
    if isinstance(geometry, Polygon):
        return {
            "type": "Polygon",
            "coordinates": [[coords(p, datum) for p in geometry.ring]],
        }
    raise TypeError(f"Unsupported geometry: {type(geometry).__name__}")


def feature_to_json(
    feature: Feature,
    datum: Datum,
    crs: CRS = CRS.WGS,
    *,
    settings: Settings | None = None,
) -> dict:
    """Convert a Feature to a GeoJSON Feature dict."""
    return {
        "type": "Feature",
        "properties": {k: str(v) for k, v in feature.properties.items()},
        "geometry": geometry_to_json(feature.geometry, datum, crs, settings=settings),
    }


def export_geojson(
    collection: FeatureCollection, settings: Settings | None = None,
) -> dict:
    """Export a FeatureCollection to a GeoJSON FeatureCollection dict.

    The header carries the CRS label, the datum as [lat, lon, alt], the yaw
    heading, then any global properties.
    """
    datum = collection.datum
    properties: dict = {
        "crs": CRS_LABELS[collection.crs],
        "datum": [datum.lat, datum.lon, datum.alt],
        "heading": collection.heading.yaw,
    }
    for key, value in collection.global_properties.items():
        if key not in RESERVED_KEYS:
            properties[key] = value

    features = [
        feature_to_json(f, datum, collection.crs, settings=settings)
        for f in collection.features
    ]
    return {
        "type": "FeatureCollection",
        "properties": properties,
        "features": features,
    }


def dumps_geojson(
    collection: FeatureCollection, settings: Settings | None = None,
) -> str:
    """Serialize a FeatureCollection to indented GeoJSON text.

    Raises:
        FormatError: If a coordinate or header value is NaN or infinite.
    """
    settings = settings or default_settings
    doc = export_geojson(collection, settings)
    try:
        text = json.dumps(doc, indent=settings.indent, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise FormatError(f"Collection is not representable as JSON: {e}") from e
    return text + "\n"
