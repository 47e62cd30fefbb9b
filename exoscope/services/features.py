"""
Feature extraction for the heuristic services.

All numeric defaulting happens here: a missing, zero, NaN or non-numeric input is
replaced with the documented default before any scoring formula sees it.
"""

from types import MappingProxyType
from typing import Any, Mapping
from exoscope.schemas import PlanetRecord, FeatureVector

FEATURE_DEFAULTS: Mapping[str, float] = MappingProxyType({
    "mass": 1.0,
    "radius": 1.0,
    "temperature": 288.0,
    "orbital_period": 365.0,
    "distance": 100.0,
    "follow_up": 0.0,
    "ai_confidence": 0.75,
})

UNKNOWN_ATMOSPHERE = "Unknown"


def has_atmosphere(atmosphere) -> bool:
    return bool(atmosphere) and atmosphere != UNKNOWN_ATMOSPHERE


def mentions_water(atmosphere) -> bool:
    """Whether an atmosphere descriptor carries a water signature"""
    return bool(atmosphere) and "h2o" in atmosphere.lower()


def to_feature_vector(planet: Any) -> FeatureVector:
    """Build the classifier feature vector, substituting defaults for unusable values"""
    record = PlanetRecord.from_any(planet)
    return FeatureVector(
        mass=record.mass or FEATURE_DEFAULTS["mass"],
        radius=record.radius or FEATURE_DEFAULTS["radius"],
        temperature=record.temperature or FEATURE_DEFAULTS["temperature"],
        orbital_period=record.orbital_period or FEATURE_DEFAULTS["orbital_period"],
        distance=record.distance or FEATURE_DEFAULTS["distance"],
        atmosphere=1 if has_atmosphere(record.atmosphere) else 0,
        follow_up=record.follow_up_observations or FEATURE_DEFAULTS["follow_up"],
        ai_confidence=record.ai_confidence or FEATURE_DEFAULTS["ai_confidence"],
    )


def _fingerprint_part(value) -> str:
    return "" if value is None else repr(value)


def planet_fingerprint(planet: Any) -> str:
    """Cache key built from name, mass, radius, temperature and atmosphere"""
    record = PlanetRecord.from_any(planet)
    return "|".join([
        record.name or "unknown",
        _fingerprint_part(record.mass),
        _fingerprint_part(record.radius),
        _fingerprint_part(record.temperature),
        record.atmosphere or "na",
    ])
