"""Shared fixtures: planets and synthetic spectra.

All fixtures are deterministic and require no network or file I/O.
"""

from __future__ import annotations

import pytest

from exoscope.services import ExoplanetClassifier, ResultCache, SpectralAnalyzer, PredictiveScorer


def make_spectrum(start: int = 400, stop: int = 1000, snr: float = 30.0,
                  dips: tuple = (), depth: float = 0.5) -> list[dict]:
    """Flat spectrum sampled every nanometre with box-shaped absorption dips.

    ``dips`` is a sequence of inclusive (min, max) wavelength ranges.
    """
    samples = []
    for wavelength in range(start, stop + 1):
        in_dip = any(lo <= wavelength <= hi for lo, hi in dips)
        samples.append({
            "wavelength": float(wavelength),
            "intensity": 1.0 - depth if in_dip else 1.0,
            "snr": snr,
        })
    return samples


# Dips chosen to sit inside a single molecule's windows
O2_DIPS = ((689, 693), (761, 765))
CH4_DIPS = ((540, 544), (790, 794))
H2O_DIPS = ((594, 596), (950, 954))
CO2_DIPS = ((667, 671),)


@pytest.fixture
def earth_like() -> dict:
    return {
        "name": "Earth Twin",
        "mass": 1.0,
        "radius": 1.0,
        "temperature": 288,
        "orbital_period": 365,
        "distance": 50,
        "atmosphere": "N2/O2",
        "ai_confidence": 0.9,
    }


@pytest.fixture
def classifier() -> ExoplanetClassifier:
    return ExoplanetClassifier(calibration={"a": 1.0, "b": 0.0}, cache=ResultCache())


@pytest.fixture
def analyzer() -> SpectralAnalyzer:
    return SpectralAnalyzer(min_snr_for_detection=8, smoothing_window=7)


@pytest.fixture
def scorer() -> PredictiveScorer:
    return PredictiveScorer(time_window_years=10)
