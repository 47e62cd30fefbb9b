from .planet import PlanetRecord, FeatureVector, to_finite_float
from .classification import TopFactor, ClassificationExplanation, ModelMeta, ClassificationResult
from .batch import BatchClassificationRequest, BatchClassificationResponse
from .spectroscopy import (
    SpectralSample, WindowDetection, MoleculeMatch, DetectedMolecule, SpectralFeatures,
    BiosignatureAssessment, NormalizedPoint, SyntheticModelPoint, SpectroscopyResult,
    SpectroscopyRequest
)
from .predictive import (
    YearCount, Forecast, MethodCount, TelescopeCount, TrendSummary, DiscoveryTrends,
    ObservationPlan, PriorityScoreResponse, TrendRequest
)
from .habitability import HabitabilityAssessment

__all__ = [
    "PlanetRecord", "FeatureVector", "to_finite_float",
    "TopFactor", "ClassificationExplanation", "ModelMeta", "ClassificationResult",
    "BatchClassificationRequest", "BatchClassificationResponse",
    "SpectralSample", "WindowDetection", "MoleculeMatch", "DetectedMolecule", "SpectralFeatures",
    "BiosignatureAssessment", "NormalizedPoint", "SyntheticModelPoint", "SpectroscopyResult",
    "SpectroscopyRequest",
    "YearCount", "Forecast", "MethodCount", "TelescopeCount", "TrendSummary", "DiscoveryTrends",
    "ObservationPlan", "PriorityScoreResponse", "TrendRequest",
    "HabitabilityAssessment"
]
