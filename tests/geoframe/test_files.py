"""Tests for file read/write and the command line."""

import json
import sys

import pytest
from loguru import logger

from geoframe.__main__ import main
from geoframe.collection import Feature, FeatureCollection, Point
from geoframe.config import Settings
from geoframe.errors import FormatError, GeoIOError, UnsupportedGeometryError
from geoframe.files import read_feature_collection, write_feature_collection
from geoframe.geodesy import CRS, Datum

DOC = {
    "type": "FeatureCollection",
    "properties": {"crs": "ENU", "datum": [52.0, 5.0, 0.0], "heading": 0.0, "site": "A"},
    "features": [
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [1.0, 2.0, 3.0]},
            "properties": {"name": "HQ"},
        },
        {
            "type": "Feature",
            "geometry": {"type": "Circle", "coordinates": [0.0, 0.0]},
            "properties": {},
        },
    ],
}


@pytest.fixture
def doc_path(tmp_path):
    path = tmp_path / "site.geojson"
    path.write_text(json.dumps(DOC), encoding="utf-8")
    return path


@pytest.fixture
def restore_logger():
    """The CLI replaces loguru sinks; put a default stderr sink back."""
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestReadFeatureCollection:
    """Reading from disk."""

    def test_read(self, doc_path):
        fc = read_feature_collection(doc_path)
        assert fc.crs is CRS.ENU
        assert fc.global_properties == {"site": "A"}
        assert len(fc.features) == 1
        assert fc.features[0].geometry == Point(1.0, 2.0, 3.0)

    def test_read_str_path(self, doc_path):
        assert len(read_feature_collection(str(doc_path)).features) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(GeoIOError):
            read_feature_collection(tmp_path / "missing.geojson")

    def test_io_error_is_oserror(self, tmp_path):
        with pytest.raises(OSError):
            read_feature_collection(tmp_path / "missing.geojson")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.geojson"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(FormatError):
            read_feature_collection(path)

    def test_strict_settings(self, doc_path):
        with pytest.raises(UnsupportedGeometryError):
            read_feature_collection(doc_path, settings=Settings(strict_geometry=True))

    def test_bare_geometry_with_metadata(self, tmp_path):
        path = tmp_path / "point.geojson"
        path.write_text(json.dumps({"type": "Point", "coordinates": [1, 2]}), encoding="utf-8")
        fc = read_feature_collection(
            path, metadata={"crs": "ENU", "datum": [0, 0, 0], "heading": 0},
        )
        assert fc.features[0].geometry == Point(1.0, 2.0, 0.0)
        assert fc.features[0].properties == {}


class TestWriteFeatureCollection:
    """Writing to disk."""

    def test_write_then_read(self, tmp_path):
        fc = FeatureCollection(
            datum=Datum(52.0, 5.0, 0.0),
            crs=CRS.WGS,
            features=[Feature(Point(10.0, 20.0, 1.0), {"name": "A"})],
        )
        path = tmp_path / "out.geojson"
        write_feature_collection(fc, path)

        text = path.read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert '\n  "properties": {' in text

        back = read_feature_collection(path)
        point = back.features[0].geometry
        assert point.x == pytest.approx(10.0, abs=1e-5)
        assert point.y == pytest.approx(20.0, abs=1e-5)
        assert point.z == pytest.approx(1.0, abs=1e-5)
        assert back.features[0].properties == {"name": "A"}

    def test_unwritable_path(self, tmp_path):
        with pytest.raises(GeoIOError):
            write_feature_collection(FeatureCollection(), tmp_path / "no" / "such" / "dir.json")

    def test_write_failure_after_open(self, tmp_path, monkeypatch):
        """A failure while writing (e.g. a full disk) is a GeoIOError too."""

        class FullDisk:
            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def write(self, text):
                raise OSError(28, "No space left on device")

        monkeypatch.setattr("geoframe.files.open", lambda *a, **kw: FullDisk(), raising=False)
        with pytest.raises(GeoIOError, match="Failed to write"):
            write_feature_collection(FeatureCollection(), tmp_path / "out.geojson")


class TestCommandLine:
    """python -m geoframe."""

    def test_info(self, doc_path, capsys, restore_logger):
        assert main(["info", str(doc_path)]) == 0
        out = capsys.readouterr().out
        assert "DATUM: 52.0, 5.0, 0.0" in out
        assert "FEATURES: 1" in out

    def test_convert(self, doc_path, tmp_path, restore_logger):
        dst = tmp_path / "converted.geojson"
        assert main(["convert", str(doc_path), str(dst)]) == 0
        written = json.loads(dst.read_text(encoding="utf-8"))
        assert written["properties"]["crs"] == "ENU"
        assert written["properties"]["site"] == "A"
        assert len(written["features"]) == 1

    def test_strict_reports_error(self, doc_path, capsys, restore_logger):
        assert main(["info", str(doc_path), "--strict"]) == 1
        assert "Unsupported geometry type" in capsys.readouterr().err

    def test_convert_strict_after_paths(self, doc_path, tmp_path, capsys, restore_logger):
        dst = tmp_path / "converted.geojson"
        assert main(["convert", str(doc_path), str(dst), "--strict"]) == 1
        assert "Unsupported geometry type" in capsys.readouterr().err
        assert not dst.exists()

    def test_missing_file_reports_error(self, tmp_path, capsys, restore_logger):
        assert main(["info", str(tmp_path / "missing.geojson")]) == 1
        assert "error:" in capsys.readouterr().err
