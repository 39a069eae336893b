from .solar import solar_coordinates, sun_position
from .lunar import lunar_coordinates, moon_position

__all__ = [
    "solar_coordinates",
    "sun_position",
    "lunar_coordinates",
    "moon_position",
]
