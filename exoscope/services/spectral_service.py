"""
Spectral analysis for transmission/emission spectra.

Pipeline: moving-average smoothing, percentile continuum envelope, continuum
normalization, per-window equivalent widths and template matching against the
molecule window table, then a rule-based biosignature verdict.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from exoscope.schemas import (
    PlanetRecord, SpectralSample, WindowDetection, MoleculeMatch, DetectedMolecule,
    SpectralFeatures, BiosignatureAssessment, NormalizedPoint, SyntheticModelPoint,
    SpectroscopyResult, to_finite_float
)
from exoscope.settings import settings
from .molecules import MOLECULE_WINDOWS, freeze_windows

logger = logging.getLogger(__name__)

ABSORPTION_THRESHOLD = 0.98
CONTINUUM_PERCENTILE = 0.9
CONTINUUM_FLOOR = 1e-6


def _format_number(value: float) -> str:
    """Render a number with at most two decimals and no trailing zeros"""
    return f"{value:.2f}".rstrip("0").rstrip(".")


class SpectralAnalyzer:
    """Detect molecules and assess biosignature potential from spectral samples"""

    def __init__(self, min_snr_for_detection: Optional[float] = None,
                 smoothing_window: Optional[int] = None,
                 molecule_windows: Optional[Mapping] = None):
        self.min_snr_for_detection = (
            min_snr_for_detection if min_snr_for_detection is not None else settings.spectral_min_snr
        )
        window = smoothing_window if smoothing_window is not None else settings.spectral_smoothing_window
        if window < 1:
            raise ValueError("smoothing_window must be a positive odd integer")
        if window % 2 == 0:
            logger.warning(f"Smoothing window {window} is even, using {window + 1}")
            window += 1
        self.smoothing_window = window
        self.template_windows = freeze_windows(molecule_windows or MOLECULE_WINDOWS)

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    @staticmethod
    def _read_sample(sample: Any) -> Optional[Tuple[float, float, float]]:
        if isinstance(sample, SpectralSample):
            return sample.wavelength, sample.intensity, sample.snr
        if isinstance(sample, Mapping):
            wavelength, intensity, snr = sample.get("wavelength"), sample.get("intensity"), sample.get("snr")
        elif isinstance(sample, Sequence) and not isinstance(sample, str) and len(sample) >= 2:
            wavelength, intensity = sample[0], sample[1]
            snr = sample[2] if len(sample) > 2 else None
        else:
            return None
        wavelength, intensity = to_finite_float(wavelength), to_finite_float(intensity)
        if wavelength is None or intensity is None:
            return None
        return wavelength, intensity, to_finite_float(snr) or 0.0

    def _prepare_samples(self, samples: Any) -> Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
        """Turn samples into wavelength/intensity/snr arrays sorted by wavelength"""
        if isinstance(samples, (str, bytes)) or not isinstance(samples, Sequence):
            if samples is not None:
                logger.warning(f"Spectral samples must be a sequence, got {type(samples).__name__}")
            return None

        rows = [row for row in (self._read_sample(s) for s in samples) if row is not None]
        if len(rows) < len(samples):
            logger.warning(f"Skipped {len(samples) - len(rows)} unreadable spectral samples")
        if not rows:
            return None

        data = np.array(rows, dtype=float)
        wavelength, intensity, snr = data[:, 0], data[:, 1], data[:, 2]
        if np.any(np.diff(wavelength) < 0):
            logger.warning("Spectral samples are not sorted by wavelength, sorting them")
            order = np.argsort(wavelength, kind="stable")
            wavelength, intensity, snr = wavelength[order], intensity[order], snr[order]
        return wavelength, intensity, snr

    # ------------------------------------------------------------------
    # Signal processing
    # ------------------------------------------------------------------

    def _smooth(self, intensity: np.ndarray) -> np.ndarray:
        """Centered moving average, truncated at the edges"""
        n = len(intensity)
        if n < self.smoothing_window:
            return intensity.copy()
        half = self.smoothing_window // 2
        smoothed = np.empty(n)
        for i in range(n):
            window = intensity[max(0, i - half):min(n - 1, i + half) + 1]
            smoothed[i] = window.sum() / len(window)
        return np.round(smoothed, 6)

    @staticmethod
    def _continuum_envelope(smoothed: np.ndarray) -> np.ndarray:
        """90th percentile of a sliding window, robust to deep absorption dips"""
        n = len(smoothed)
        window = max(11, (n // 20) | 1)
        half = window // 2
        envelope = np.empty(n)
        for i in range(n):
            local = np.sort(smoothed[max(0, i - half):min(n - 1, i + half) + 1])
            envelope[i] = max(CONTINUUM_FLOOR, local[math.floor(len(local) * CONTINUUM_PERCENTILE)])
        return envelope

    def _normalize(self, intensity: np.ndarray, smoothed: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        continuum = self._continuum_envelope(smoothed)
        return continuum, np.round(intensity / continuum, 6)

    @staticmethod
    def _equivalent_width(wavelength: np.ndarray, intensity_norm: np.ndarray) -> float:
        """Trapezoidal integral of the fractional absorption depth"""
        if len(wavelength) < 2:
            return 0.0
        depth = 1 - np.minimum(1.0, intensity_norm)
        widths = np.abs(np.diff(wavelength))
        areas = np.maximum(0.0, (depth[:-1] + depth[1:]) / 2 * widths)
        return round(float(areas.sum()), 4)

    def _detect_in_range(self, wavelength: np.ndarray, snr: np.ndarray, intensity_norm: np.ndarray,
                         min_w: float, max_w: float) -> Optional[WindowDetection]:
        mask = (wavelength >= min_w) & (wavelength <= max_w)
        points = int(mask.sum())
        if points == 0:
            return None
        mean_snr = float(snr[mask].mean())
        ew = self._equivalent_width(wavelength[mask], intensity_norm[mask])
        absorption_fraction = float((intensity_norm[mask] < ABSORPTION_THRESHOLD).sum()) / points
        detected = (
            mean_snr >= self.min_snr_for_detection
            and ew > 0.01
            and absorption_fraction > 0.06
        )
        return WindowDetection(
            window_nm=[min_w, max_w],
            ew=ew,
            mean_snr=round(mean_snr, 2),
            absorption_fraction=round(absorption_fraction, 3),
            detected=detected,
            points=points,
        )

    def _match_templates(self, wavelength: np.ndarray, snr: np.ndarray,
                         intensity_norm: np.ndarray) -> Dict[str, MoleculeMatch]:
        results = {}
        for molecule, ranges in self.template_windows.items():
            per_range = [
                detection for detection in (
                    self._detect_in_range(wavelength, snr, intensity_norm, lo, hi) for lo, hi in ranges
                )
                if detection is not None
            ]
            if not per_range:
                results[molecule] = MoleculeMatch(detected=False, confidence=0.0, windows=[])
                continue

            wins_detected = sum(1 for d in per_range if d.detected)
            sum_ew = sum(d.ew for d in per_range)
            avg_snr = sum(d.mean_snr for d in per_range) / len(per_range)
            confidence = math.tanh(
                wins_detected * 0.8 + min(3, sum_ew) * 0.18 + min(1, avg_snr / 50) * 0.4
            )
            if avg_snr < self.min_snr_for_detection:
                confidence *= 0.5
            results[molecule] = MoleculeMatch(
                detected=wins_detected > 0,
                confidence=round(confidence, 3),
                windows=per_range,
            )
        return results

    # ------------------------------------------------------------------
    # Interpretation
    # ------------------------------------------------------------------

    def _assess_biosignature(self, detected: List[DetectedMolecule], avg_snr: float) -> BiosignatureAssessment:
        """First matching rule wins"""
        present = {d.molecule.upper(): d.confidence for d in detected}

        def has(molecule: str) -> bool:
            return present.get(molecule.upper(), 0) > 0.25

        if has("O2") and has("CH4"):
            return BiosignatureAssessment(level="High", reason="Possible disequilibrium (O2 + CH4)")
        if has("H2O") and (has("CO2") or has("N2")):
            return BiosignatureAssessment(level="Medium", reason="Water + major background gas detected")
        if len(detected) >= 3 and avg_snr > 12:
            return BiosignatureAssessment(level="Medium", reason="Multiple species with good S/N")
        if avg_snr < self.min_snr_for_detection:
            return BiosignatureAssessment(level="Low", reason="Low average S/N")
        return BiosignatureAssessment(level="Low", reason="No clear biosignature pattern")

    def suggest_follow_ups(self, avg_snr: Optional[float] = None, biosignature_level: Optional[str] = None,
                           planet: Any = None) -> List[str]:
        """Rule-based follow-up recommendations"""
        if avg_snr is None:
            return ["Acquire baseline spectrum."]
        recommendations = []
        if avg_snr < 10:
            recommendations.append("Increase exposure time to reach avg S/N > 15 or co-add more transits.")
        if biosignature_level == "High":
            recommendations.append("Immediate multi-epoch high-resolution follow-up.")
        recommendations.append("Observe reference stars to remove telluric features.")
        distance = PlanetRecord.from_any(planet).distance
        if distance and distance > 500:
            recommendations.append("Use space-based instruments (JWST) for highest sensitivity.")
        return recommendations

    @staticmethod
    def _no_data_result() -> SpectroscopyResult:
        return SpectroscopyResult(
            detected_molecules=[],
            molecule_confidences={},
            features=SpectralFeatures(absorption_lines=0, avg_snr=0.0, spectral_points=0),
            biosignature_potential=BiosignatureAssessment(level="Low", reason="No data"),
            recommendations=[],
            confidence=0.0,
            summary="No data",
        )

    def analyze_spectrum(self, samples: Any = None, planet: Any = None) -> SpectroscopyResult:
        """
        Analyze a spectrum for the given planet.

        Samples are mappings (or SpectralSample / (wavelength, intensity, snr) tuples)
        expected in ascending wavelength order. Empty or malformed input yields the
        "No data" result instead of raising.
        """
        prepared = self._prepare_samples(samples)
        if prepared is None:
            logger.info("No usable spectral samples, returning empty analysis")
            return self._no_data_result()
        wavelength, intensity, snr = prepared

        smoothed = self._smooth(intensity)
        continuum, intensity_norm = self._normalize(intensity, smoothed)

        avg_snr = float(snr.mean())
        absorption_count = int((intensity_norm < ABSORPTION_THRESHOLD).sum())

        matches = self._match_templates(wavelength, snr, intensity_norm)
        molecule_confidences = {molecule: match.confidence for molecule, match in matches.items()}
        detected = [
            DetectedMolecule(molecule=molecule, confidence=match.confidence, windows=match.windows)
            for molecule, match in matches.items()
            if match.detected and match.confidence > 0.2
        ]

        biosignature = self._assess_biosignature(detected, avg_snr)

        mean_confidence = sum(d.confidence for d in detected) / len(detected) if detected else 0
        overall_confidence = min(0.999, max(0.05, 0.2 * (avg_snr / 40) + 0.75 * mean_confidence))

        normalized_data = [
            NormalizedPoint(
                wavelength=float(w), intensity=float(i), snr=float(s),
                intensity_smoothed=float(sm), continuum=float(c), intensity_norm=float(n),
            )
            for w, i, s, sm, c, n in zip(wavelength, intensity, snr, smoothed, continuum, intensity_norm)
        ]
        synthetic_model = [
            SyntheticModelPoint(wavelength=float(w), model_intensity=round(float(n + 0.01 * math.sin(w / 10)), 6))
            for w, n in zip(wavelength, intensity_norm)
        ]

        logger.debug(f"Analyzed {len(wavelength)} samples, {len(detected)} molecules detected")
        return SpectroscopyResult(
            detected_molecules=detected,
            molecule_confidences=molecule_confidences,
            features=SpectralFeatures(
                absorption_lines=absorption_count,
                avg_snr=round(avg_snr, 2),
                spectral_points=len(wavelength),
            ),
            biosignature_potential=biosignature,
            recommendations=self.suggest_follow_ups(avg_snr, biosignature.level, planet),
            confidence=round(overall_confidence, 3),
            summary=(
                f"{len(detected)} molecule(s), avg S/N {_format_number(avg_snr)}, "
                f"biosignature: {biosignature.level}"
            ),
            normalized_data=normalized_data,
            synthetic_model=synthetic_model,
        )
