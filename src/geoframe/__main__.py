"""Command line for inspecting and re-encoding GeoJSON collections.

Usage:
    python -m geoframe info FILE [--strict]
    python -m geoframe convert SRC DST [--strict]
"""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from geoframe.collection import summarize
from geoframe.config import Settings
from geoframe.errors import GeoFrameError
from geoframe.files import read_feature_collection, write_feature_collection


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="geoframe", description="GeoJSON <-> local ENU collections",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--strict", action="store_true",
        help="Reject unsupported geometry instead of dropping it",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", parents=[common], help="Print a collection summary")
    info.add_argument("path")

    convert = sub.add_parser(
        "convert", parents=[common], help="Decode and re-encode a collection",
    )
    convert.add_argument("src")
    convert.add_argument("dst")

    args = parser.parse_args(argv)

    settings = Settings()
    if args.strict:
        settings = settings.model_copy(update={"strict_geometry": True})

    logger.remove()
    logger.add(sys.stderr, level=settings.log_level.upper())

    try:
        collection = read_feature_collection(
            args.path if args.command == "info" else args.src, settings=settings,
        )
        if args.command == "info":
            print(summarize(collection))
        else:
            write_feature_collection(collection, args.dst, settings=settings)
    except GeoFrameError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
