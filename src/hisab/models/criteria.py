from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..errors import InvalidCriteriaError


@dataclass(frozen=True)
class VisibilityCriteria:
    min_altitude: float
    min_elongation: float
    name: Optional[str] = None

    def __post_init__(self):
        if self.min_altitude < 0.0:
            raise InvalidCriteriaError("min_altitude", self.min_altitude)
        if self.min_elongation < 0.0:
            raise InvalidCriteriaError("min_elongation", self.min_elongation)


@dataclass(frozen=True)
class VisibilityReport:
    instant: datetime
    moon_altitude: float
    sun_altitude: float
    elongation: float
    horizon_dip: float
    meets_criteria: bool
    criteria: VisibilityCriteria


CRITERIA_PRESETS = {
    "mabims": VisibilityCriteria(
        min_altitude=3.0,
        min_elongation=6.4,
        name="MABIMS",
    ),
    "wujudul_hilal": VisibilityCriteria(
        min_altitude=0.0,
        min_elongation=0.0,
        name="Wujudul Hilal",
    ),
    "turkey_2016": VisibilityCriteria(
        min_altitude=5.0,
        min_elongation=8.0,
        name="Turkey 2016",
    ),
}
