from datetime import datetime, timezone

import numpy as np
import pytest

from hisab.ephemeris import lunar_coordinates, moon_position, solar_coordinates, sun_position
from hisab.ephemeris import lunar, solar
from hisab.ephemeris.series import evaluate_periodic, evaluate_power_series, periodic_table
from hisab.geometry.frames import julian_centuries, true_obliquity
from hisab.geometry.transforms import to_equatorial

ARCSEC = 1.0 / 3600.0


class TestSeriesEvaluation:
    def test_periodic_sum(self):
        table = periodic_table([[2.0, 0.0, 0.0], [1.0, np.pi, 0.0]])
        assert evaluate_periodic(table, 0.3) == pytest.approx(1.0)

    def test_power_series_weights_by_tau(self):
        constant = periodic_table([[1.0, 0.0, 0.0]])
        tables = (constant, constant, constant)
        assert evaluate_power_series(tables, 2.0) == pytest.approx(1.0 + 2.0 + 4.0)

    def test_tables_are_read_only(self):
        with pytest.raises(ValueError):
            solar.EARTH_LONGITUDE[0][0, 0] = 0.0
        with pytest.raises(ValueError):
            lunar._LONGITUDE_DISTANCE_TERMS[0, 4] = 0.0


class TestSunMatchesMeeus:
    """Meeus example 25.b, 1992 October 13.0 TD."""

    JDE = 2448908.5

    def test_radius_vector(self):
        position = solar.geometric_coordinates(self.JDE)
        assert position.distance_unit == "au"
        assert position.distance == pytest.approx(0.99760775, abs=1e-6)

    def test_geometric_longitude_fk5(self):
        position = solar.geometric_coordinates(self.JDE)
        assert position.longitude == pytest.approx(199.907347, abs=ARCSEC)

    def test_geometric_latitude(self):
        position = solar.geometric_coordinates(self.JDE)
        assert position.latitude / ARCSEC == pytest.approx(0.62, abs=0.1)

    def test_apparent_longitude(self):
        # 199 deg 54' 21.818"
        position = solar_coordinates(self.JDE)
        assert position.longitude == pytest.approx(199.906060, abs=ARCSEC)

    def test_apparent_equatorial(self):
        # alpha = 13h13m30.749s, delta = -7 deg 47' 01.74"
        position = solar_coordinates(self.JDE)
        equatorial = to_equatorial(position, true_obliquity(julian_centuries(self.JDE)))
        assert equatorial.right_ascension == pytest.approx(198.378121, abs=2 * ARCSEC)
        assert equatorial.declination == pytest.approx(-7.783817, abs=2 * ARCSEC)


class TestMoonMatchesMeeus:
    """Meeus example 47.a, 1992 April 12.0 TD."""

    JDE = 2448724.5

    def test_fundamental_arguments(self):
        args = lunar.fundamental_arguments(julian_centuries(self.JDE))
        assert args["L"] == pytest.approx(134.290182, abs=1e-5)
        assert args["D"] == pytest.approx(113.842304, abs=1e-5)
        assert args["M"] == pytest.approx(97.643514, abs=1e-5)
        assert args["Mp"] == pytest.approx(5.150833, abs=1e-5)
        assert args["F"] == pytest.approx(219.889721, abs=1e-5)

    def test_geometric_longitude(self):
        position = lunar.geometric_coordinates(self.JDE)
        assert position.longitude == pytest.approx(133.162655, abs=ARCSEC)

    def test_latitude(self):
        position = lunar_coordinates(self.JDE)
        assert position.latitude == pytest.approx(-3.229126, abs=ARCSEC)

    def test_distance_km(self):
        position = lunar_coordinates(self.JDE)
        assert position.distance_unit == "km"
        assert position.distance == pytest.approx(368409.7, abs=0.1)
        assert position.distance_km == position.distance

    def test_apparent_longitude(self):
        position = lunar_coordinates(self.JDE)
        assert position.longitude == pytest.approx(133.167265, abs=ARCSEC)

    def test_apparent_equatorial(self):
        position = lunar_coordinates(self.JDE)
        equatorial = to_equatorial(position, true_obliquity(julian_centuries(self.JDE)))
        assert equatorial.right_ascension == pytest.approx(134.688470, abs=ARCSEC)
        assert equatorial.declination == pytest.approx(13.768368, abs=ARCSEC)


class TestInstantEntryPoints:
    def test_moon_position_uses_delta_t(self):
        # 0h UT is about a minute before 0h TD; the Moon moves ~0.5"/s
        position = moon_position(datetime(1992, 4, 12, tzinfo=timezone.utc))
        assert position.longitude == pytest.approx(133.167265, abs=0.02)

    def test_sun_position_idempotent(self):
        instant = datetime(2024, 3, 10, 11, 5, tzinfo=timezone.utc)
        assert sun_position(instant) == sun_position(instant)

    def test_sun_near_equinox(self):
        # March equinox 2024 was 03:06 UTC on March 20
        position = sun_position(datetime(2024, 3, 20, 3, 6, tzinfo=timezone.utc))
        difference = (position.longitude + 180.0) % 360.0 - 180.0
        assert abs(difference) < 0.01

    @pytest.mark.parametrize("year", [1000, 1900, 2100, 3000])
    def test_far_instants_do_not_raise(self, year):
        instant = datetime(year, 6, 1, tzinfo=timezone.utc)
        sun = sun_position(instant)
        moon = moon_position(instant)
        assert 0.0 <= sun.longitude < 360.0
        assert 0.0 <= moon.longitude < 360.0
        assert 356000.0 < moon.distance < 407000.0
