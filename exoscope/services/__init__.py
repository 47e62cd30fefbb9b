from .cache import ResultCache
from .features import FEATURE_DEFAULTS, to_feature_vector, planet_fingerprint
from .molecules import MOLECULE_WINDOWS
from .classifier_service import ExoplanetClassifier, PLANET_TYPES
from .spectral_service import SpectralAnalyzer
from .predictive_service import PredictiveScorer
from .habitability import HabitabilityCalculator

__all__ = [
    "ResultCache", "FEATURE_DEFAULTS", "to_feature_vector", "planet_fingerprint",
    "MOLECULE_WINDOWS", "ExoplanetClassifier", "PLANET_TYPES", "SpectralAnalyzer",
    "PredictiveScorer", "HabitabilityCalculator"
]
