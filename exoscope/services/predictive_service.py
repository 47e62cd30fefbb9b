"""
Predictive analytics: discovery trends, observation priority and observation plans.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, List, Optional

import pandas as pd

from exoscope.schemas import (
    PlanetRecord, YearCount, Forecast, MethodCount, TelescopeCount, TrendSummary,
    DiscoveryTrends, ObservationPlan
)
from exoscope.settings import settings
from .features import mentions_water

logger = logging.getLogger(__name__)

SMOOTHING_ALPHA = 0.4
FORECAST_YEARS = 3
FORECAST_GROWTH_PER_YEAR = 0.03
TOP_TELESCOPES = 6
UNKNOWN = "Unknown"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class PredictiveScorer:
    """Trend analysis, simple forecasting and priority scoring"""

    def __init__(self, time_window_years: Optional[int] = None):
        self.time_window_years = (
            time_window_years if time_window_years is not None else settings.trend_window_years
        )

    @staticmethod
    def _as_history(history: Any) -> List[Any]:
        """Planet list of a history argument; anything that is not a collection of planets is empty"""
        if history is None:
            return []
        if isinstance(history, (str, bytes, Mapping)) or not isinstance(history, Iterable):
            logger.warning(f"Discovery history must be a sequence of planets, got {type(history).__name__}")
            return []
        return list(history)

    def _history_frame(self, history: Iterable[Any]) -> pd.DataFrame:
        current_year = datetime.now().year
        records = [PlanetRecord.from_any(p) for p in history]
        return pd.DataFrame({
            "year": [r.discovery_year or current_year for r in records],
            "method": [r.discovery_method or UNKNOWN for r in records],
            "telescope": [r.discovery_telescope or UNKNOWN for r in records],
        }, columns=["year", "method", "telescope"])

    @staticmethod
    def _ranking(frame: pd.DataFrame, column: str) -> pd.Series:
        """Counts by descending frequency, ties kept in first-seen order"""
        counts = frame.groupby(column, sort=False).size()
        return counts.sort_values(ascending=False, kind="stable")

    def analyze_discovery_patterns(self, history: Optional[Iterable[Any]] = None) -> DiscoveryTrends:
        """
        Summarize discoveries per year and forecast the next three years.

        The trailing window is smoothed with single exponential smoothing
        (alpha=0.4) and the resulting level is extrapolated with a small yearly
        growth factor.
        """
        frame = self._history_frame(self._as_history(history))
        total = len(frame)

        if total:
            counts_by_year = frame.groupby("year").size().sort_index()
            recent = counts_by_year.iloc[-self.time_window_years:]
        else:
            recent = pd.Series(dtype="int64")
        series = [YearCount(year=int(year), count=int(count)) for year, count in recent.items()]

        level = series[0].count if series else 0
        for point in series[1:]:
            level = SMOOTHING_ALPHA * point.count + (1 - SMOOTHING_ALPHA) * level

        last_year = series[-1].year if series else datetime.now().year
        forecasts = []
        base = level
        for k in range(1, FORECAST_YEARS + 1):
            base = SMOOTHING_ALPHA * base + (1 - SMOOTHING_ALPHA) * base
            forecasts.append(Forecast(
                year=last_year + k,
                predicted=_round_half_up(base * (1 + k * FORECAST_GROWTH_PER_YEAR)),
            ))

        if total:
            method_ranking = [
                MethodCount(method=str(method), count=int(count))
                for method, count in self._ranking(frame, "method").items()
            ]
            top_telescopes = [
                TelescopeCount(telescope=str(telescope), count=int(count))
                for telescope, count in self._ranking(frame, "telescope").head(TOP_TELESCOPES).items()
            ]
        else:
            method_ranking, top_telescopes = [], []

        if len(series) > 1:
            recent_growth = (series[-1].count - series[0].count) / max(1, series[0].count)
        else:
            recent_growth = 0.0

        logger.debug(f"Analyzed discovery history of {total} planets over {len(series)} years")
        return DiscoveryTrends(
            series=series,
            forecasts=forecasts,
            method_ranking=method_ranking,
            top_telescopes=top_telescopes,
            summary=TrendSummary(total_planets=total, recent_growth=recent_growth),
        )

    def calculate_priority_score(self, planet: Any = None) -> float:
        """Combine habitability, confidence, follow-ups, proximity and novelty into [0, 0.999]"""
        record = PlanetRecord.from_any(planet)
        habitability = record.habitability_score or 0
        ai_confidence = record.ai_confidence or 0.7
        follow_ups = min(1, (record.follow_up_observations or 0) / 20)
        distance_penalty = math.exp(-min(1500, record.distance or 100) / 500)
        novelty = 0.12 if record.confirmed_status == "Candidate" else 0

        score = (
            habitability * 0.5
            + ai_confidence * 0.2
            + follow_ups * 0.1
            + distance_penalty * 0.08
            + novelty
        )
        return round(max(0.0, min(0.999, score)), 3)

    def recommend_observation_plan(self, planet: Any = None) -> ObservationPlan:
        """Pick instruments and cadence by distance tier"""
        record = PlanetRecord.from_any(planet)
        distance = record.distance or 200
        instruments: List[str] = []

        if distance < 100:
            instruments.append("Ground-based high-resolution spectrograph (e.g., HARPS/HARPS-N)")
            exposure, cadence = 1.5, "Weekly"
            rationale = "Nearby target; ground-based facilities sufficient for high S/N."
        elif distance < 500:
            instruments.append("JWST NIRSpec / NIRISS")
            exposure, cadence = 3, "Monthly"
            rationale = "Moderate distance; space-based IR yields better molecular access."
        else:
            instruments.append("JWST deep spectroscopy + ALMA (for sub-mm)")
            exposure, cadence = 6, "Per-transit stacking"
            rationale = "Distant target; requires deep integrations and multi-epoch stacking."

        if mentions_water(record.atmosphere):
            instruments.append("High-resolution optical for water-line cross correlation")

        return ObservationPlan(
            target=record.name or UNKNOWN,
            recommended_instruments=instruments,
            exposure_estimate_hours=exposure,
            suggested_cadence=cadence,
            rationale=rationale,
        )
