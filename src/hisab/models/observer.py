from dataclasses import dataclass, replace

from ..errors import InvalidCoordinateError


@dataclass(frozen=True)
class GeoCoordinate:
    latitude: float
    longitude: float
    altitude_m: float = 0.0

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidCoordinateError("latitude", self.latitude, "[-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidCoordinateError("longitude", self.longitude, "[-180, 180]")
        if self.altitude_m < 0.0:
            raise InvalidCoordinateError("altitude_m", self.altitude_m, ">= 0")

    def with_altitude(self, altitude_m: float) -> "GeoCoordinate":
        return replace(self, altitude_m=altitude_m)
