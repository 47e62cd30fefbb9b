from typing import Any, Optional
from exoscope.schemas import PlanetRecord, HabitabilityAssessment


class HabitabilityCalculator:
    """Catalog-level habitability heuristics"""

    @staticmethod
    def calculate_habitability_score(planet: Any) -> float:
        """
        Calculate habitability score from temperature, mass and distance
        """
        record = PlanetRecord.from_any(planet)
        score = 0.0

        # Liquid water range (273K - 373K)
        temperature = record.temperature or 300
        if 273 < temperature < 373:
            score += 0.4

        # Rocky mass range (0.5 - 5 M⊕)
        if record.mass is not None and 0.5 < record.mass < 5:
            score += 0.3

        # Nearby systems are easier to characterize
        if record.distance and record.distance < 100:
            score += 0.3

        return round(min(1.0, score), 3)

    @staticmethod
    def research_priority(score: float) -> str:
        if score > 0.8:
            return "Critical"
        elif score > 0.6:
            return "High"
        elif score > 0.4:
            return "Medium"
        else:
            return "Low"

    @staticmethod
    def climate_zone(temperature: Optional[float]) -> str:
        temperature = temperature or 300
        if temperature > 373:
            return "Hot"
        elif temperature < 273:
            return "Cold"
        else:
            return "Temperate"

    @staticmethod
    def determine_planet_type(mass: Optional[float], radius: Optional[float]) -> str:
        """
        Determine planet type from mass and radius
        """
        if not mass or not radius:
            return "Unknown"
        if mass < 2:
            return "Terrestrial" if radius < 1.5 else "Super Earth"
        elif mass < 17:
            return "Super Earth" if radius < 3.5 else "Mini-Neptune"
        else:
            return "Neptune-like" if radius < 6 else "Gas Giant"

    @classmethod
    def assess(cls, planet: Any) -> HabitabilityAssessment:
        record = PlanetRecord.from_any(planet)
        score = cls.calculate_habitability_score(record)
        return HabitabilityAssessment(
            habitability_score=score,
            research_priority=cls.research_priority(score),
            climate_zone=cls.climate_zone(record.temperature),
            planet_type=cls.determine_planet_type(record.mass, record.radius),
        )
