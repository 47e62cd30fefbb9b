"""Tests for discovery trends, priority scores and observation plans."""

from __future__ import annotations

import math
from datetime import datetime

import pytest

from exoscope.services import PredictiveScorer


def history(counts: dict, method: str = "Transit", telescope: str = "Kepler") -> list[dict]:
    planets = []
    for year, n in counts.items():
        planets.extend(
            {"name": f"P-{year}-{i}", "discovery_year": year,
             "discovery_method": method, "discovery_telescope": telescope}
            for i in range(n)
        )
    return planets


class TestDiscoveryTrends:
    @pytest.mark.parametrize("planets", [42, "Kepler", b"Kepler", {"discovery_year": 2015}, object()])
    def test_non_sequence_history_is_empty(self, scorer, planets):
        trends = scorer.analyze_discovery_patterns(planets)
        assert trends.series == []
        assert trends.method_ranking == []
        assert trends.summary.total_planets == 0
        assert [f.predicted for f in trends.forecasts] == [0, 0, 0]

    def test_series_forecast_and_growth(self, scorer):
        trends = scorer.analyze_discovery_patterns(history({2015: 2, 2016: 4, 2017: 6}))
        assert [(p.year, p.count) for p in trends.series] == [(2015, 2), (2016, 4), (2017, 6)]
        # smoothed level 4.08 grows 3% per forecast year
        assert [(f.year, f.predicted) for f in trends.forecasts] == [(2018, 4), (2019, 4), (2020, 4)]
        assert trends.summary.total_planets == 12
        assert trends.summary.recent_growth == pytest.approx(2.0)

    def test_unsorted_history(self, scorer):
        planets = history({2017: 6, 2015: 2, 2016: 4})
        trends = scorer.analyze_discovery_patterns(list(reversed(planets)))
        assert [p.year for p in trends.series] == [2015, 2016, 2017]

    def test_trailing_window(self):
        trends = PredictiveScorer(time_window_years=2).analyze_discovery_patterns(
            history({2010: 1, 2011: 3, 2012: 5})
        )
        assert [p.year for p in trends.series] == [2011, 2012]
        assert trends.summary.total_planets == 9
        assert trends.summary.recent_growth == pytest.approx((5 - 3) / 3)

    def test_forecast_rounds_half_up(self, scorer):
        # single year: level 50, forecast 50 * 1.03 = 51.5 -> 52
        trends = scorer.analyze_discovery_patterns(history({2020: 50}))
        assert trends.forecasts[0].predicted == 52
        assert trends.summary.recent_growth == 0

    def test_method_ranking_keeps_first_seen_order_on_ties(self, scorer):
        methods = ["Transit", "Radial Velocity", "Imaging", "Radial Velocity", "Transit"]
        planets = [{"discovery_year": 2020, "discovery_method": m} for m in methods]
        trends = scorer.analyze_discovery_patterns(planets)
        assert [(m.method, m.count) for m in trends.method_ranking] == [
            ("Transit", 2), ("Radial Velocity", 2), ("Imaging", 1),
        ]

    def test_top_telescopes_limited_to_six(self, scorer):
        planets = []
        for i in range(8):
            planets += [{"discovery_year": 2020, "discovery_telescope": f"T{i}"}] * (8 - i)
        trends = scorer.analyze_discovery_patterns(planets)
        assert [t.telescope for t in trends.top_telescopes] == ["T0", "T1", "T2", "T3", "T4", "T5"]
        assert trends.top_telescopes[0].count == 8

    def test_missing_fields_default(self, scorer):
        trends = scorer.analyze_discovery_patterns([{"name": "Anon"}])
        assert trends.series[0].year == datetime.now().year
        assert trends.method_ranking[0].method == "Unknown"
        assert trends.top_telescopes[0].telescope == "Unknown"

    @pytest.mark.parametrize("planets", [None, []])
    def test_empty_history(self, scorer, planets):
        trends = scorer.analyze_discovery_patterns(planets)
        current = datetime.now().year
        assert trends.series == []
        assert [(f.year, f.predicted) for f in trends.forecasts] == [
            (current + 1, 0), (current + 2, 0), (current + 3, 0),
        ]
        assert trends.method_ranking == []
        assert trends.top_telescopes == []
        assert trends.summary.total_planets == 0
        assert trends.summary.recent_growth == 0


class TestPriorityScore:
    def test_defaults(self, scorer):
        expected = 0.7 * 0.2 + math.exp(-100 / 500) * 0.08
        assert scorer.calculate_priority_score({}) == round(expected, 3) == 0.205
        assert scorer.calculate_priority_score(None) == 0.205

    def test_increases_with_habitability(self, scorer):
        scores = [scorer.calculate_priority_score({"habitability_score": h}) for h in (0.1, 0.4, 0.8)]
        assert scores == sorted(scores)
        assert len(set(scores)) == 3

    def test_candidates_get_novelty_bonus(self, scorer):
        base = {"habitability_score": 0.5, "distance": 50}
        confirmed = scorer.calculate_priority_score({**base, "confirmed_status": "Confirmed"})
        candidate = scorer.calculate_priority_score({**base, "confirmed_status": "Candidate"})
        assert candidate - confirmed == pytest.approx(0.12, abs=1e-3)

    def test_follow_ups_saturate(self, scorer):
        twenty = scorer.calculate_priority_score({"follow_up_observations": 20})
        hundred = scorer.calculate_priority_score({"follow_up_observations": 100})
        assert twenty == hundred

    def test_huge_values_fall_back_to_defaults(self, scorer):
        assert scorer.calculate_priority_score({"habitability_score": 10**400, "distance": 10**400}) == 0.205

    def test_clamped(self, scorer):
        best = {
            "habitability_score": 1, "ai_confidence": 1, "follow_up_observations": 40,
            "distance": 1, "confirmed_status": "Candidate",
        }
        assert scorer.calculate_priority_score(best) == 0.999
        assert scorer.calculate_priority_score({"habitability_score": -5}) == 0


class TestObservationPlan:
    @pytest.mark.parametrize("distance, cadence, hours", [
        (50, "Weekly", 1.5),
        (300, "Monthly", 3),
        (800, "Per-transit stacking", 6),
        (None, "Monthly", 3),
    ])
    def test_distance_tiers(self, scorer, distance, cadence, hours):
        plan = scorer.recommend_observation_plan({"name": "Target", "distance": distance})
        assert plan.suggested_cadence == cadence
        assert plan.exposure_estimate_hours == hours
        assert len(plan.recommended_instruments) == 1
        assert plan.target == "Target"

    def test_water_adds_cross_correlation(self, scorer):
        plan = scorer.recommend_observation_plan({"distance": 50, "atmosphere": "N2, h2O"})
        assert plan.recommended_instruments == [
            "Ground-based high-resolution spectrograph (e.g., HARPS/HARPS-N)",
            "High-resolution optical for water-line cross correlation",
        ]
        assert plan.target == "Unknown"
