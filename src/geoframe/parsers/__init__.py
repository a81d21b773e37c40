"""GeoJSON decoding."""

from geoframe.parsers.geojson import (
    parse_feature_collection,
    parse_geojson,
    parse_geometry,
    parse_metadata,
    parse_point,
    parse_properties,
    unwrap,
)

__all__ = [
    "parse_feature_collection",
    "parse_geojson",
    "parse_geometry",
    "parse_metadata",
    "parse_point",
    "parse_properties",
    "unwrap",
]
