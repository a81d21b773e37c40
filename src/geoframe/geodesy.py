"""Geodesy — coordinate transforms between WGS84 lon/lat/alt and local ENU meters.

The datum (anchor point) grounds every local coordinate to a real-world
position.  Geometry is held in local meters; lon/lat is only produced when a
collection is written back out.

Convention:
    - Local origin (0, 0, 0) = datum (lat, lon, alt)
    - 1 local unit = 1 meter
    - +X = East, +Y = North, +Z = Up (tangent plane at the datum)
    - Heading is yaw only, in radians; roll and pitch are always 0

Geodetic <-> ECEF goes through pyproj (EPSG:4979 <-> EPSG:4978); the ECEF <->
ENU step is a plain rotation about the datum.
"""

from __future__ import annotations

import enum
import math
import threading
from dataclasses import dataclass

import numpy as np
from pyproj import Transformer

# 3D geographic WGS84 (lon, lat, ellipsoidal height) and WGS84 geocentric
_GEODETIC_CRS = "EPSG:4979"
_ECEF_CRS = "EPSG:4978"


class CRS(enum.Enum):
    """Coordinate reference system a document's coordinates are written in."""

    WGS = "wgs"  # lon, lat, alt in degrees / meters
    ENU = "enu"  # local meters relative to the datum


@dataclass(frozen=True)
class Datum:
    """Geodetic anchor of the local frame."""

    lat: float = 0.0
    lon: float = 0.0
    alt: float = 0.0  # meters above the ellipsoid


@dataclass(frozen=True)
class Euler:
    """Orientation of the local frame.  Only yaw is ever non-zero."""

    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0


# pyproj transformers are not shared across threads
_local = threading.local()


def _transformers() -> tuple[Transformer, Transformer]:
    pair = getattr(_local, "pair", None)
    if pair is None:
        forward = Transformer.from_crs(_GEODETIC_CRS, _ECEF_CRS, always_xy=True)
        inverse = Transformer.from_crs(_ECEF_CRS, _GEODETIC_CRS, always_xy=True)
        pair = (forward, inverse)
        _local.pair = pair
    return pair


def _rotation(datum: Datum) -> np.ndarray:
    """ECEF -> ENU rotation matrix at the datum."""
    lat = math.radians(datum.lat)
    lon = math.radians(datum.lon)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    sin_lon, cos_lon = math.sin(lon), math.cos(lon)
    return np.array([
        [-sin_lon, cos_lon, 0.0],
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat],
    ])


def _to_ecef(lat: float, lon: float, alt: float) -> np.ndarray:
    forward, _ = _transformers()
    x, y, z = forward.transform(lon, lat, alt)
    return np.array([x, y, z], dtype=float)


# ---------------------------------------------------------------------------
# Coordinate transforms
# ---------------------------------------------------------------------------

def wgs_to_enu(
    lat: float, lon: float, alt: float, datum: Datum,
) -> tuple[float, float, float]:
    """Convert WGS84 lat/lon/alt to local meters (x=East, y=North, z=Up).

    Returns (x, y, z) tuple.
    """
    delta = _to_ecef(lat, lon, alt) - _to_ecef(datum.lat, datum.lon, datum.alt)
    east, north, up = _rotation(datum) @ delta
    return (float(east), float(north), float(up))


def enu_to_wgs(
    x: float, y: float, z: float, datum: Datum,
) -> tuple[float, float, float]:
    """Convert local meters (x=East, y=North, z=Up) to WGS84 lat/lon/alt.

    Returns (lat, lon, alt) tuple.
    """
    _, inverse = _transformers()
    origin = _to_ecef(datum.lat, datum.lon, datum.alt)
    ecef = _rotation(datum).T @ np.array([x, y, z], dtype=float) + origin
    lon, lat, alt = inverse.transform(ecef[0], ecef[1], ecef[2])
    return (float(lat), float(lon), float(alt))
