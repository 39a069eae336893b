from dataclasses import dataclass

STANDARD_PRESSURE_HPA = 1010.0
STANDARD_TEMPERATURE_C = 10.0


@dataclass(frozen=True)
class AtmosphericConditions:
    """Surface weather used to scale the refraction formula."""

    pressure_hpa: float = STANDARD_PRESSURE_HPA
    temperature_c: float = STANDARD_TEMPERATURE_C

    @property
    def refraction_factor(self) -> float:
        return (self.pressure_hpa / 1010.0) * (283.0 / (273.0 + self.temperature_c))


STANDARD_ATMOSPHERE = AtmosphericConditions()
