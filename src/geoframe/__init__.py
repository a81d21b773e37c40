"""GeoJSON <-> local ENU feature collections.

Reads GeoJSON documents declared in WGS84 or local ENU coordinates and holds
every point in meters relative to the collection datum.  Writing goes the
other way.
"""

from geoframe.collection import (
    Feature,
    FeatureCollection,
    Geometry,
    Line,
    Path,
    Point,
    Polygon,
    summarize,
)
from geoframe.config import Settings
from geoframe.errors import (
    CRSError,
    FormatError,
    GeoFrameError,
    GeoIOError,
    NestingDepthError,
    SchemaError,
    UnsupportedGeometryError,
)
from geoframe.exporters.geojson import dumps_geojson, export_geojson
from geoframe.files import read_feature_collection, write_feature_collection
from geoframe.geodesy import CRS, Datum, Euler
from geoframe.parsers.geojson import parse_feature_collection, parse_geojson

__all__ = [
    "CRS",
    "CRSError",
    "Datum",
    "Euler",
    "Feature",
    "FeatureCollection",
    "FormatError",
    "GeoFrameError",
    "GeoIOError",
    "Geometry",
    "Line",
    "NestingDepthError",
    "Path",
    "Point",
    "Polygon",
    "SchemaError",
    "Settings",
    "UnsupportedGeometryError",
    "dumps_geojson",
    "export_geojson",
    "parse_feature_collection",
    "parse_geojson",
    "read_feature_collection",
    "summarize",
    "write_feature_collection",
]
