"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Decode/encode behaviour, loaded from GEOFRAME_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GEOFRAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Geometry handling.  Permissive mode drops unknown geometry types and
    # polygon holes; strict mode raises UnsupportedGeometryError instead.
    strict_geometry: bool = False

    # Maximum GeometryCollection nesting accepted during decode
    max_collection_depth: int = 32

    # Write stored ENU coordinates as-is for ENU collections instead of
    # reprojecting them to lon/lat/alt.
    encode_native_crs: bool = False

    # Output
    indent: int = 2

    # Logging (CLI sink level)
    log_level: str = "WARNING"


settings = Settings()
