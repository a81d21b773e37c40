"""Error taxonomy for reading and writing GeoJSON collections.

Every failure is raised at first detection and aborts the whole operation;
no partial collection is ever returned.
"""

from __future__ import annotations


class GeoFrameError(Exception):
    """Base class for all geoframe errors."""


class GeoIOError(GeoFrameError, OSError):
    """Raised when a path cannot be opened for reading or writing."""


class FormatError(GeoFrameError, ValueError):
    """Raised when the document structure is not valid GeoJSON."""


class UnsupportedGeometryError(FormatError):
    """Raised in strict mode for geometry that would otherwise be dropped."""


class NestingDepthError(FormatError):
    """Raised when GeometryCollections nest deeper than allowed."""


class SchemaError(GeoFrameError, ValueError):
    """Raised when a required collection property is missing or mistyped."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class CRSError(GeoFrameError, ValueError):
    """Raised when the declared CRS string is not recognized."""

    def __init__(self, crs: str) -> None:
        super().__init__(f"Unknown CRS string: {crs!r}")
        self.crs = crs
