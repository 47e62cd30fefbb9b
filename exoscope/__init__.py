"""Heuristic AI services for an exoplanet dashboard."""

from exoscope.services import (
    ExoplanetClassifier, SpectralAnalyzer, PredictiveScorer, HabitabilityCalculator
)

__version__ = "1.0.0"

__all__ = ["ExoplanetClassifier", "SpectralAnalyzer", "PredictiveScorer", "HabitabilityCalculator"]
