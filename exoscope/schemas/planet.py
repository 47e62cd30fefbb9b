from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Mapping, Optional
import logging
import math

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = (
    "mass", "radius", "temperature", "orbital_period", "distance",
    "habitability_score", "ai_confidence", "follow_up_observations",
)
TEXT_FIELDS = (
    "name", "host_star", "atmosphere", "confirmed_status",
    "discovery_method", "discovery_telescope",
)


def to_finite_float(value: Any) -> Optional[float]:
    """Read a value as a finite float, or None when it is not a readable number"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


class PlanetRecord(BaseModel):
    """Planet as supplied by the catalog layer.

    Every field is optional. Values that cannot be read are stored as None so that
    construction never fails on malformed catalog rows; defaults are applied later
    by the consumers.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, example="Kepler-442 b", description="Planet name")
    host_star: Optional[str] = Field(None, example="Kepler-442", description="Host star name")
    mass: Optional[float] = Field(None, example=2.3, description="Planet Mass (M⊕)")
    radius: Optional[float] = Field(None, example=1.34, description="Planet Radius (R⊕)")
    temperature: Optional[float] = Field(None, example=233, description="Equilibrium Temperature (K)")
    orbital_period: Optional[float] = Field(None, example=112.3, description="Orbital Period (days)")
    distance: Optional[float] = Field(None, example=370, description="Distance (light-years)")
    atmosphere: Optional[str] = Field(None, example="N2/O2", description="Atmosphere descriptor, 'Unknown' allowed")
    habitability_score: Optional[float] = Field(None, example=0.84, description="Habitability score (0-1)")
    ai_confidence: Optional[float] = Field(None, example=0.9, description="Catalog AI confidence (0-1)")
    follow_up_observations: Optional[float] = Field(None, example=12, description="Number of follow-up observations")
    confirmed_status: Optional[str] = Field(None, example="Confirmed", description="Confirmed or Candidate")
    discovery_year: Optional[int] = Field(None, example=2015, description="Discovery year")
    discovery_method: Optional[str] = Field(None, example="Transit", description="Discovery method")
    discovery_telescope: Optional[str] = Field(None, example="kepler", description="Discovery telescope")

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _lenient_number(cls, value):
        return to_finite_float(value)

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _lenient_text(cls, value):
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @field_validator("discovery_year", mode="before")
    @classmethod
    def _lenient_year(cls, value):
        number = to_finite_float(value)
        return int(number) if number is not None else None

    @classmethod
    def from_any(cls, planet: Any) -> "PlanetRecord":
        """Build a record from a PlanetRecord, a mapping, another pydantic model, or anything else (empty record)"""
        if isinstance(planet, PlanetRecord):
            return planet
        if isinstance(planet, Mapping):
            return cls.model_validate(dict(planet))
        if isinstance(planet, BaseModel):
            return cls.model_validate(planet.model_dump())
        if planet is not None:
            logger.warning("Unsupported planet payload %r, using an empty record", type(planet))
        return cls()


class FeatureVector(BaseModel):
    """Normalized numeric view of a planet used by the classifier"""
    mass: float = Field(..., description="Planet mass (M⊕), default 1")
    radius: float = Field(..., description="Planet radius (R⊕), default 1")
    temperature: float = Field(..., description="Temperature (K), default 288")
    orbital_period: float = Field(..., description="Orbital period (days), default 365")
    distance: float = Field(..., description="Distance (light-years), default 100")
    atmosphere: int = Field(..., description="1 when an atmosphere is described, else 0")
    follow_up: float = Field(..., description="Follow-up observation count, default 0")
    ai_confidence: float = Field(..., description="Catalog AI confidence, default 0.75")
