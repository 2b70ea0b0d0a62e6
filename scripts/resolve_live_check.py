"""Manual live check against the public Nominatim service.

Run from the repository root with:
  PYTHONPATH=src python scripts/resolve_live_check.py Warsaw 52.2319 21.0187

Optional environment variables:
  PARKING_GEOCODER_URL
  PARKING_CATALOG_URL
  PARKING_USER_AGENT
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from pyparkingzones import Client, Coordinate, PyParkingZonesError, StaticPositionProvider, ZoneMatch


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve a coordinate to a parking zone.")
    parser.add_argument("city")
    parser.add_argument("latitude", type=float)
    parser.add_argument("longitude", type=float)
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


async def main(argv: list[str]) -> int:
    args = _parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    client = Client(
        geocoder_url=os.getenv("PARKING_GEOCODER_URL"),
        catalog_url=os.getenv("PARKING_CATALOG_URL"),
        user_agent=os.getenv("PARKING_USER_AGENT") or "pyparkingzones-live-check",
    )
    try:
        async with client:
            position = StaticPositionProvider(Coordinate(args.latitude, args.longitude))
            result = await client.resolve(args.city, position)
    except PyParkingZonesError as exc:
        print(f"Error [{exc.error_code}]: {exc}", file=sys.stderr)
        return 1

    if isinstance(result, ZoneMatch):
        for key, value in result.as_display().items():
            print(f"{key}: {value if value is not None else '-'}")
        return 0
    print(result.user_message)
    return 3


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main(sys.argv[1:])))
