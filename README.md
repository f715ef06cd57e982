# satprop

Read two-line element sets (TLEs) and propagate satellite orbits with the
SGP4/SDP4 model, covering both near-Earth and deep-space objects. The package
has no dependencies beyond the standard library.

## Installation

    pip install .

Add the `test` extra to pull in pytest:

    pip install ".[test]"

## Reading TLEs

```python
from satprop.tle import parse_tle, read_tle_file

tle = parse_tle(
    "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927",
    "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537",
    "ISS (ZARYA)",
)
print(tle.line2.inclination)   # "51.6416"
print(tle.time())              # epoch as an aware UTC datetime

tles = read_tle_file("stations.txt")   # optional name line, then lines 1 and 2
```

`TLELine1` and `TLELine2` keep every fixed-width field as text; the drag and
mean-motion derivative fields are rewritten in ordinary scientific notation
(`-11606-4` becomes `-.11606e-4`) and the eccentricity gets a leading `0.`.
A line shorter than 69 characters, or an epoch that cannot be read, raises
`satprop.tle.TLEError` (a `ValueError`).

`satprop.tleutils` holds lower-level helpers:

- `verify_checksum(line)` checks the modulo-10 checksum in column 69.
- `validate_tle(line1, line2)` checks lengths, line numbers, matching
  catalogue numbers and checksums, raising `ValueError` on the first problem.
- `parse_scientific_notation`, `normalize_angle`, `day_of_year_to_month_day`,
  `days_to_mdhms`, `parse_float` and `parse_int`.

## Propagating an orbit

```python
from datetime import datetime, timezone

from satprop.gravity import Gravity
from satprop.satellite import new_satellite_from_tle, tle_to_sat

sat = new_satellite_from_tle(tles[0], Gravity.WGS84)
lat, lon, alt, vel = sat.locate(datetime.now(timezone.utc))
```

`Satellite.locate` returns geodetic latitude and longitude in radians,
altitude in kilometres and the circular orbital speed in km/s; a naive
datetime is taken as UTC, and the record is left unchanged.
`satprop.conversions.lat_long_deg` turns a `LatLong` in radians into degrees.

`tle_to_sat(line1, line2, gravity)` does the same from the two raw lines.
`satprop.satellite.parse_tle` only reads the elements, keeping them in the
units of the element set (degrees, revolutions per day).

For raw position and velocity vectors in the TEME frame (km and km/s), use
`satprop.sgp4.sgp4(sat, minutes_since_epoch)` or
`satprop.sgp4.propagate(sat, year, month, day, hours, minutes, seconds)`.
Problems found during propagation (negative mean motion, eccentricity out of
range, decay and the like) do not raise: they are recorded on the record as
`sat.error` (0 when all is well) and `sat.error_message`.

Three gravity models are available through `satprop.gravity.Gravity`:
`WGS72OLD`, `WGS72` and `WGS84`. `get_grav_const` returns the constants of a
model and raises `ValueError` for an unknown name.

## Coordinate helpers

`satprop.conversions` holds Julian date and sidereal time functions (`jday`,
`gstime`, `gstime_from_date`, `theta_g_jd`), conversions between inertial,
Earth-fixed and geodetic coordinates (`eci_to_lla`, `lla_to_eci`,
`eci_to_ecef`), and observer look angles (`eci_to_look_angles`). The value
types `LatLong`, `Vector3` and `LookAngles` live in `satprop.geometry`.

## Command line

List the element sets in a file, followed by a summary of the first one:

    satprop tle stations.txt

Print where a satellite was at its epoch and where it is at a given time
(now, by default):

    satprop locate stations.txt --index 0 --gravity wgs84 --at 2025-01-18T04:16:17

`--at` takes an ISO time; without a time zone it is read as UTC. Errors are
reported on standard error with exit status 1.

## What it does not do

The package works on element sets you already have: it does not download
TLEs, and it does not predict passes over an observer.

## Tests

    pytest