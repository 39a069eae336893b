import math

from ..models.observer import GeoCoordinate
from ..models.positions import EclipticPosition, EquatorialPosition, HorizontalPosition


def to_equatorial(
    position: EclipticPosition, obliquity: float
) -> EquatorialPosition:
    """Convert ecliptic longitude/latitude to right ascension/declination.

    Args:
        position: Ecliptic position in degrees
        obliquity: Obliquity of the ecliptic in degrees (true obliquity for
            apparent positions)

    Returns:
        EquatorialPosition with right ascension in [0, 360) degrees
    """
    lam = math.radians(position.longitude)
    beta = math.radians(position.latitude)
    eps = math.radians(obliquity)

    ra_rad = math.atan2(
        math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps),
        math.cos(lam),
    )
    dec_rad = math.asin(
        math.sin(beta) * math.cos(eps)
        + math.cos(beta) * math.sin(eps) * math.sin(lam)
    )

    return EquatorialPosition(
        right_ascension=math.degrees(ra_rad) % 360.0,
        declination=math.degrees(dec_rad),
    )


def hour_angle(position: EquatorialPosition, sidereal_time: float) -> float:
    """Local hour angle in degrees, normalized to [-180, 180)."""
    return (sidereal_time - position.right_ascension + 180.0) % 360.0 - 180.0


def to_horizontal(
    position: EquatorialPosition,
    observer: GeoCoordinate,
    sidereal_time: float,
) -> HorizontalPosition:
    """Geometric altitude and azimuth from equatorial coordinates.

    Args:
        position: Geocentric equatorial position
        observer: Observer location (latitude is used here)
        sidereal_time: Local apparent sidereal time in degrees

    Returns:
        HorizontalPosition with azimuth measured from north through east.
        No parallax or refraction is applied.
    """
    lat_rad = math.radians(observer.latitude)
    ha_rad = math.radians(hour_angle(position, sidereal_time))
    dec_rad = math.radians(position.declination)

    alt_rad = math.asin(
        math.sin(lat_rad) * math.sin(dec_rad)
        + math.cos(lat_rad) * math.cos(dec_rad) * math.cos(ha_rad)
    )
    az_rad = math.atan2(
        -math.sin(ha_rad),
        math.cos(lat_rad) * math.tan(dec_rad) - math.sin(lat_rad) * math.cos(ha_rad),
    )

    return HorizontalPosition(
        altitude=math.degrees(alt_rad),
        azimuth=math.degrees(az_rad) % 360.0,
    )


def angular_separation(a: EquatorialPosition, b: EquatorialPosition) -> float:
    """Angular distance between two equatorial positions in degrees."""
    dec_a = math.radians(a.declination)
    dec_b = math.radians(b.declination)
    delta_ra = math.radians(a.right_ascension - b.right_ascension)

    cos_sep = math.sin(dec_a) * math.sin(dec_b) + math.cos(dec_a) * math.cos(
        dec_b
    ) * math.cos(delta_ra)
    return math.degrees(math.acos(max(-1.0, min(1.0, cos_sep))))
