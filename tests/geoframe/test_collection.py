"""Tests for geoframe.collection — geometry variants and summaries."""

import dataclasses

import pytest

from geoframe.collection import (
    Feature,
    FeatureCollection,
    Line,
    Path,
    Point,
    Polygon,
    geometry_kind,
    summarize,
)
from geoframe.geodesy import CRS, Datum, Euler


class TestGeometry:
    """Geometry variant construction."""

    def test_point_default_z(self):
        assert Point(1.0, 2.0) == Point(1.0, 2.0, 0.0)

    def test_line_endpoints(self):
        line = Line(Point(0, 0), Point(1, 1))
        assert line.start == Point(0, 0)
        assert line.end == Point(1, 1)

    @pytest.mark.parametrize("count", [0, 1, 3, 5])
    def test_path_accepts_non_two_counts(self, count):
        path = Path([Point(i, i) for i in range(count)])
        assert len(path.points) == count

    def test_path_rejects_two_points(self):
        """A two-point polyline must be a Line."""
        with pytest.raises(ValueError):
            Path([Point(0, 0), Point(1, 1)])

    def test_polygon_ring(self):
        ring = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 0)]
        assert Polygon(ring).ring == tuple(ring)

    def test_path_is_immutable(self):
        """A Path cannot be grown into a two-point polyline after construction."""
        path = Path([Point(0, 0)])
        assert isinstance(path.points, tuple)
        with pytest.raises(AttributeError):
            path.points.append(Point(1, 1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            path.points = (Point(0, 0), Point(1, 1))

    def test_polygon_is_immutable(self):
        polygon = Polygon([Point(0, 0), Point(1, 0), Point(0, 1)])
        assert isinstance(polygon.ring, tuple)
        with pytest.raises(dataclasses.FrozenInstanceError):
            polygon.ring = ()


class TestFeatureCollection:
    """FeatureCollection defaults."""

    def test_defaults(self):
        fc = FeatureCollection()
        assert fc.datum == Datum()
        assert fc.heading == Euler()
        assert fc.crs is CRS.WGS
        assert fc.global_properties == {}
        assert fc.features == []

    def test_feature_default_properties(self):
        assert Feature(Point(0, 0)).properties == {}


class TestSummarize:
    """Human-readable overview."""

    def test_geometry_kind_labels(self):
        assert geometry_kind(Point(0, 0)) == "POINT"
        assert geometry_kind(Line(Point(0, 0), Point(1, 0))) == "LINE"
        assert geometry_kind(Path([])) == "PATH"
        assert geometry_kind(Polygon([])) == "POLYGON"

    def test_geometry_kind_rejects_unknown(self):
        with pytest.raises(TypeError):
            geometry_kind("not a geometry")

    def test_summary_lines(self):
        fc = FeatureCollection(
            datum=Datum(52.0, 5.0, 1.0),
            heading=Euler(yaw=0.5),
            features=[
                Feature(Point(0, 0), {"name": "A", "kind": "b"}),
                Feature(Polygon([Point(0, 0), Point(1, 0), Point(0, 1)])),
            ],
        )
        text = summarize(fc)
        lines = text.splitlines()
        assert lines[0] == "DATUM: 52.0, 5.0, 1.0"
        assert lines[1] == "HEADING: 0.5"
        assert lines[2] == "FEATURES: 2"
        assert "  POINT" in lines
        assert "    PROPS: 2" in lines
        assert lines[-1] == "  POLYGON"
