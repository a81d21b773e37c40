"""GeoJSON encoding."""

from geoframe.exporters.geojson import (
    dumps_geojson,
    export_geojson,
    feature_to_json,
    geometry_to_json,
)

__all__ = ["dumps_geojson", "export_geojson", "feature_to_json", "geometry_to_json"]
