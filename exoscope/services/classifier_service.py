"""
Heuristic exoplanet type classifier.

Scores every planet type with fixed piecewise formulas, turns the scores into a
probability distribution, blends in the catalog AI confidence and applies a
Platt-style calibration before renormalizing.
"""

import logging
import math
import threading
from collections.abc import Iterable as IterableABC
from concurrent.futures import ThreadPoolExecutor
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from exoscope.schemas import (
    PlanetRecord, FeatureVector, TopFactor, ClassificationExplanation, ModelMeta,
    ClassificationResult
)
from exoscope.settings import settings
from .cache import ResultCache
from .features import to_feature_vector, planet_fingerprint, mentions_water

logger = logging.getLogger(__name__)

ENGINE_NAME = "heuristic-sim-v2"

PLANET_TYPES = (
    "Terrestrial", "Super Earth", "Mini-Neptune", "Gas Giant", "Hot Jupiter",
    "Ice Giant", "Puffy Planet", "Ocean World", "Desert World",
)

DEFAULT_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "temperature": 0.35,
    "mass": 0.25,
    "distance": 0.2,
    "atmosphere": 0.15,
    "other": 0.05,
})

_DEFAULT_CALIBRATION = object()


class ExoplanetClassifier:
    """Calibrated heuristic classifier with a per-instance result cache"""

    def __init__(self, calibration: Any = _DEFAULT_CALIBRATION,
                 weights: Optional[Mapping[str, float]] = None,
                 labels: Optional[Iterable[str]] = None,
                 cache: Optional[ResultCache] = None,
                 max_workers: Optional[int] = None):
        if calibration is _DEFAULT_CALIBRATION:
            calibration = {
                "a": settings.classifier_calibration_a,
                "b": settings.classifier_calibration_b,
            }
        # None (or an empty mapping) turns calibration off
        self.calibration = MappingProxyType(dict(calibration)) if calibration else None
        self.weights = MappingProxyType({**DEFAULT_WEIGHTS, **(weights or {})})
        self.labels = tuple(labels) if labels else PLANET_TYPES
        self.cache = cache if cache is not None else ResultCache(
            capacity=settings.classifier_cache_capacity,
            ttl_seconds=settings.classifier_cache_ttl_seconds,
        )
        self.max_workers = max_workers if max_workers is not None else settings.batch_max_workers
        self.model_loaded = False
        self._load_lock = threading.Lock()

    def load_model(self) -> bool:
        """Initialize the classifier; later calls are no-ops"""
        with self._load_lock:
            if self.model_loaded:
                return True
            self.model_loaded = True
        logger.info(f"Classifier model loaded ({ENGINE_NAME}, {len(self.labels)} labels)")
        return True

    def _calibrate(self, prob: float) -> float:
        """Affine-then-logistic remapping of a probability"""
        if not self.calibration:
            return prob
        a = self.calibration.get("a", 1.0)
        b = self.calibration.get("b", 0.0)
        x = max(1e-6, min(1 - 1e-6, prob))
        z = a * (x - 0.5) + b
        return 1 / (1 + math.exp(-z))

    @staticmethod
    def _base_scores(f: FeatureVector, atmosphere: Optional[str]) -> Dict[str, float]:
        base = {
            "Terrestrial": 0.6 - abs(f.mass - 1) * 0.12 - abs(f.radius - 1) * 0.08,
            "Super Earth": 0.25 + (0.15 if f.mass > 1.5 else 0) + (0.1 if f.radius > 1.2 else 0),
            "Mini-Neptune": 0.12 + (0.12 if f.radius > 1.8 else 0),
            "Gas Giant": (0.7 if f.mass > 15 else 0.05) + (0.2 if f.radius > 3 else 0),
            "Hot Jupiter": 0.4 if f.orbital_period < 10 else 0.01,
            "Ice Giant": 0.25 if f.temperature < 180 else 0.01,
            "Puffy Planet": 0.2 if f.mass < 10 and f.radius > 6 else 0.01,
            "Ocean World": 0.35 if mentions_water(atmosphere) else 0.02,
            "Desert World": 0.2 if f.temperature > 400 else 0.02,
        }
        return {label: max(0.0, score) for label, score in base.items()}

    @staticmethod
    def _explain_features(f: FeatureVector) -> Dict[str, float]:
        """Heuristic per-feature importance, normalized to sum to one"""
        importances = {
            "temperature": abs(0.5 - math.exp(-(((f.temperature - 288) / 60) ** 2))),
            "mass": abs(math.log(max(0.1, f.mass)) - math.log(1)),
            "distance": min(1.0, f.distance / 500),
            "atmosphere": 0.1 if f.atmosphere else 0.02,
            "follow_up": min(1.0, f.follow_up / 20),
        }
        total = sum(importances.values()) or 1
        return {name: round(value / total, 3) for name, value in importances.items()}

    def classify_planet(self, planet: Any = None) -> ClassificationResult:
        """
        Classify a single planet.

        Results are cached by fingerprint, so repeated calls for the same planet
        return the very same result object until the cache is cleared.
        """
        if not self.model_loaded:
            self.load_model()
        record = PlanetRecord.from_any(planet)
        key = planet_fingerprint(record)
        return self.cache.get_or_compute(key, lambda: self._classify(record))

    def _classify(self, record: PlanetRecord) -> ClassificationResult:
        f = to_feature_vector(record)
        base = self._base_scores(f, record.atmosphere)

        total = sum(base.values()) or 1
        raw = {label: score / total for label, score in base.items()}

        # ai_confidence blending followed by calibration
        smoothed = {
            label: self._calibrate(prob * (0.6 + 0.4 * f.ai_confidence))
            for label, prob in raw.items()
        }
        total = sum(smoothed.values()) or 1
        probabilities = {label: round(value / total, 4) for label, value in smoothed.items()}

        # stable sort keeps enumeration order on ties
        ranked = sorted(probabilities.items(), key=lambda item: item[1], reverse=True)
        predicted_type, top_probability = ranked[0]
        confidence = min(0.999, 0.45 + top_probability * 0.45 + (f.ai_confidence - 0.7) * 0.25)

        explanation = ClassificationExplanation(
            features=f,
            importances=self._explain_features(f),
            top_factors=[TopFactor(label=label, prob=round(prob, 4)) for label, prob in ranked[:3]],
        )

        return ClassificationResult(
            predicted_type=predicted_type,
            probabilities=probabilities,
            confidence=round(confidence, 3),
            explanation=explanation,
            model_meta=ModelMeta(
                engine=ENGINE_NAME,
                labels=list(self.labels),
                weights=dict(self.weights),
                calibration=dict(self.calibration) if self.calibration else None,
            ),
        )

    def classify_batch(self, planets: Optional[Iterable[Any]] = None) -> List[ClassificationResult]:
        """Classify planets in parallel, keeping the input order"""
        if not self.model_loaded:
            self.load_model()
        if planets is None:
            return []
        if isinstance(planets, (str, bytes, Mapping)) or not isinstance(planets, IterableABC):
            logger.warning(f"Batch must be a sequence of planets, got {type(planets).__name__}")
            return []
        items = list(planets)
        if not items:
            return []
        logger.info(f"Classifying batch of {len(items)} planets")
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(self.classify_planet, items))

    def clear_cache(self) -> None:
        self.cache.clear()
