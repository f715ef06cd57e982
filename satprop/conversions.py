"""Time and coordinate conversions for satellite positions."""

from __future__ import annotations

import math

from satprop.geometry import DEG2RAD, TWOPI, LatLong, LookAngles, Vector3

_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_MONTH_LENGTHS_LEAP = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def days2mdhms(year: int, epoch_days: float) -> tuple[float, float, float, float, float]:
    """Convert a fractional day of the year into month, day, hour, minute, second.

    Every fourth year is treated as a leap year. Raises ValueError when the
    day lies beyond the end of the year.
    """
    lengths = _MONTH_LENGTHS_LEAP if year % 4 == 0 else _MONTH_LENGTHS
    day_of_year = math.floor(epoch_days)

    elapsed = 0.0
    month = 1
    for length in lengths:
        if day_of_year <= elapsed + length:
            break
        elapsed += length
        month += 1
    else:
        raise ValueError(f"day {epoch_days} lies beyond the end of year {year}")

    day = day_of_year - elapsed
    temp = (epoch_days - day_of_year) * 24.0
    hour = math.floor(temp)
    temp = (temp - hour) * 60.0
    minute = math.floor(temp)
    second = (temp - minute) * 60.0
    return float(month), float(day), float(hour), float(minute), second


def jday(year: float, mon: float, day: float, hr: float, minute: float, sec: float) -> float:
    """Return the Julian date of a calendar date and time."""
    return (
        367.0 * year
        - math.floor((7 * (year + math.floor((mon + 9) / 12.0))) * 0.25)
        + math.floor(275 * mon / 9.0)
        + day
        + 1721013.5
        + ((sec / 60.0 + minute) / 60.0 + hr) / 24.0
    )


def gstime(jdut1: float) -> float:
    """Return Greenwich sidereal time (IAU-82) in radians for a UT1 Julian date."""
    tut1 = (jdut1 - 2451545.0) / 36525.0
    temp = (
        -6.2e-6 * tut1 * tut1 * tut1
        + 0.093104 * tut1 * tut1
        + (876600.0 * 3600 + 8640184.812866) * tut1
        + 67310.54841
    )
    temp = math.fmod(temp * DEG2RAD / 240.0, TWOPI)
    if temp < 0.0:
        temp += TWOPI
    return temp


def gstime_from_date(
    year: float, mon: float, day: float, hr: float, minute: float, sec: float
) -> float:
    """Return Greenwich sidereal time in radians for a calendar date and time."""
    return gstime(jday(year, mon, day, hr, minute, sec))


def eci_to_lla(eci: Vector3, gmst: float) -> tuple[float, float, LatLong]:
    """Convert inertial coordinates to ``(altitude, velocity, LatLong)``.

    Altitude is in km, velocity is the circular orbital speed in km/s and
    latitude/longitude are in radians.
    """
    a = 6378.137
    b = 6356.7523142
    f = (a - b) / a
    e2 = 2 * f - f**2

    sqx2y2 = math.hypot(eci.x, eci.y)
    longitude = math.atan2(eci.y, eci.x) - gmst
    latitude = math.atan2(eci.z, sqx2y2)

    c = 0.0
    for _ in range(20):
        c = 1 / math.sqrt(1 - e2 * (math.sin(latitude) * math.sin(latitude)))
        latitude = math.atan2(eci.z + a * c * e2 * math.sin(latitude), sqx2y2)

    altitude = sqx2y2 / math.cos(latitude) - a * c
    velocity = math.sqrt(398600.4418 / (altitude + 6378.137))
    return altitude, velocity, LatLong(latitude=latitude, longitude=longitude)


def lat_long_deg(rad: LatLong) -> LatLong:
    """Convert a LatLong in radians to degrees.

    Raises ValueError when the latitude lies outside [-pi/2, pi/2].
    """
    longitude = math.fmod(rad.longitude / math.pi * 180, 360)
    if longitude > 180:
        longitude = 360 - longitude
    elif longitude < -180:
        longitude = 360 + longitude

    if rad.latitude < -math.pi / 2 or rad.latitude > math.pi / 2:
        raise ValueError("Latitude not within bounds -pi/2 to +pi/2")
    return LatLong(latitude=rad.latitude / math.pi * 180, longitude=longitude)


def theta_g_jd(jday: float) -> float:
    """Return Greenwich mean sidereal time in radians for a Julian date."""
    ut = math.modf(jday + 0.5)[0]
    jday = jday - ut
    tu = (jday - 2451545.0) / 36525.0
    gmst = 24110.54841 + tu * (8640184.812866 + tu * (0.093104 - tu * 6.2e-6))
    gmst = math.fmod(gmst + 86400.0 * 1.00273790934 * ut, 86400.0)
    return 2 * math.pi * gmst / 86400.0


def lla_to_eci(obs_coords: LatLong, alt: float, jday: float) -> Vector3:
    """Convert latitude, longitude (radians) and altitude (km) to inertial km."""
    re = 6378.137
    theta = math.fmod(theta_g_jd(jday) + obs_coords.longitude, TWOPI)
    r = (re + alt) * math.cos(obs_coords.latitude)
    return Vector3(
        x=r * math.cos(theta),
        y=r * math.sin(theta),
        z=(re + alt) * math.sin(obs_coords.latitude),
    )


def eci_to_ecef(eci: Vector3, gmst: float) -> Vector3:
    """Rotate inertial coordinates into Earth-fixed coordinates."""
    cos_g = math.cos(gmst)
    sin_g = math.sin(gmst)
    return Vector3(
        x=eci.x * cos_g + eci.y * sin_g,
        y=eci.x * -sin_g + eci.y * cos_g,
        z=eci.z,
    )


def _ratio(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _asin(value: float) -> float:
    return math.asin(value) if -1.0 <= value <= 1.0 else math.nan


def eci_to_look_angles(
    eci_sat: Vector3, obs_coords: LatLong, obs_alt: float, jday: float
) -> LookAngles:
    """Return azimuth, elevation (radians) and range (km) of a satellite.

    The observer altitude is in km.
    """
    theta = math.fmod(theta_g_jd(jday) + obs_coords.longitude, 2 * math.pi)
    obs_pos = lla_to_eci(obs_coords, obs_alt, jday)

    rx = eci_sat.x - obs_pos.x
    ry = eci_sat.y - obs_pos.y
    rz = eci_sat.z - obs_pos.z

    sin_lat = math.sin(obs_coords.latitude)
    cos_lat = math.cos(obs_coords.latitude)
    sin_t = math.sin(theta)
    cos_t = math.cos(theta)

    top_s = sin_lat * cos_t * rx + sin_lat * sin_t * ry - cos_lat * rz
    top_e = -sin_t * rx + cos_t * ry
    top_z = cos_lat * cos_t * rx + cos_lat * sin_t * ry + sin_lat * rz

    az = math.atan(_ratio(-top_e, top_s))
    if top_s > 0:
        az += math.pi
    if az < 0:
        az += 2 * math.pi
    rg = math.sqrt(rx * rx + ry * ry + rz * rz)
    el = _asin(_ratio(top_z, rg))
    return LookAngles(az=az, el=el, rg=rg)