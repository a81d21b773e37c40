"""Read and write GeoJSON collections by filesystem path."""

from __future__ import annotations

import os

from loguru import logger

from geoframe.collection import FeatureCollection
from geoframe.config import Settings
from geoframe.errors import FormatError, GeoIOError
from geoframe.exporters.geojson import dumps_geojson
from geoframe.parsers.geojson import loads_geojson, parse_feature_collection


def read_feature_collection(
    path: str | os.PathLike,
    *,
    metadata: dict | None = None,
    settings: Settings | None = None,
) -> FeatureCollection:
    """Read a GeoJSON file into a FeatureCollection.

    Args:
        path: File to read (UTF-8).
        metadata: Top-level properties to use when the file has none.
        settings: Decode settings.

    Raises:
        GeoIOError: If the file cannot be opened.
        FormatError: If the content is not UTF-8 JSON or not a valid document.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise FormatError(f"{os.fspath(path)!r} is not UTF-8 text: {e}") from e
    except OSError as e:
        raise GeoIOError(f"Cannot open {os.fspath(path)!r} for read: {e}") from e

    data = loads_geojson(content)

    collection = parse_feature_collection(data, metadata=metadata, settings=settings)
    logger.info(f"Read {len(collection.features)} feature(s) from {os.fspath(path)}")
    return collection


def write_feature_collection(
    collection: FeatureCollection,
    path: str | os.PathLike,
    *,
    settings: Settings | None = None,
) -> None:
    """Write a FeatureCollection to a GeoJSON file (UTF-8, indented).

    Raises:
        GeoIOError: If the file cannot be opened or written.
    """
    text = dumps_geojson(collection, settings)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise GeoIOError(f"Failed to write {os.fspath(path)!r}: {e}") from e
    logger.info(f"Wrote {len(collection.features)} feature(s) to {os.fspath(path)}")
