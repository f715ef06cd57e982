"""Command line front end: list element sets and locate satellites."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone

from satprop.gravity import Gravity
from satprop.satellite import new_satellite_from_tle
from satprop.tle import TLEError, read_tle_file


def _parse_time(text: str) -> datetime:
    try:
        when = datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO time: {text!r}") from None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="satprop", description="Read two-line element sets and locate satellites."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    listing = commands.add_parser("tle", help="list the element sets in a file")
    listing.add_argument("path", help="file of element sets")

    locate = commands.add_parser("locate", help="locate a satellite from a file")
    locate.add_argument("path", help="file of element sets")
    locate.add_argument("--index", type=int, default=0, help="which element set to use")
    locate.add_argument(
        "--gravity",
        choices=[model.value for model in Gravity],
        default=Gravity.WGS84.value,
        help="gravity model",
    )
    locate.add_argument(
        "--at", type=_parse_time, default=None, help="UTC time in ISO format (default: now)"
    )
    return parser


def _epoch_text(tle) -> str:
    line = tle.line1.line_string
    return line[18:20].strip() + line[20:32].strip()


def _list(path: str) -> int:
    tles = read_tle_file(path)
    if not tles:
        raise ValueError(f"no element sets in {path}")
    for tle in tles:
        print(tle)
    first = tles[0]
    print("TLEs read successfully.")
    print("Number of TLEs:", len(tles))
    print("First TLE Name:", first.name)
    print("First TLE Line 1:", first.line1.line_string)
    print("First TLE Line 2:", first.line2.line_string)
    print(f"First TLE Epoch:{_epoch_text(first)}")
    return 0


def _format_location(prefix: str, location: tuple[float, float, float, float]) -> str:
    lat, lon, alt, vel = location
    return (
        f"{prefix}Latitude: {lat:f}, Longitude: {lon:f}, "
        f"Altitude: {alt:f}, Velocity: {vel:f}"
    )


def _locate(path: str, index: int, gravity: str, when: datetime | None) -> int:
    tles = read_tle_file(path)
    if not 0 <= index < len(tles):
        raise ValueError(f"no element set number {index} in {path}")
    tle = tles[index]
    sat = new_satellite_from_tle(tle, gravity)

    print("Satellite Name:", tle.name)
    print("Satellite Line 1:", tle.line1.line_string)
    print("Satellite Line 2:", tle.line2.line_string)
    epoch = tle.time()
    print("Satellite Epoch:", epoch)
    print(_format_location("TLE ", sat.locate(epoch)))

    if when is None:
        when = datetime.now(timezone.utc)
    print("Current UTC Time:", when)
    print(_format_location("", sat.locate(when)))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        if args.command == "tle":
            return _list(args.path)
        return _locate(args.path, args.index, args.gravity, args.at)
    except (OSError, ValueError, TLEError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())