from dataclasses import dataclass
from typing import Literal

AU_KM = 149_597_870.7


@dataclass(frozen=True)
class EclipticPosition:
    longitude: float
    latitude: float
    distance: float
    distance_unit: Literal["au", "km"]

    @property
    def distance_km(self) -> float:
        if self.distance_unit == "au":
            return self.distance * AU_KM
        return self.distance


@dataclass(frozen=True)
class EquatorialPosition:
    right_ascension: float
    declination: float


@dataclass(frozen=True)
class HorizontalPosition:
    altitude: float
    azimuth: float
