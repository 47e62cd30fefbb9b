from fastapi import APIRouter, HTTPException
from exoscope.schemas import (
    PlanetRecord, TrendRequest, DiscoveryTrends, ObservationPlan, PriorityScoreResponse
)
from exoscope.services import PredictiveScorer
import logging

logger = logging.getLogger(__name__)

router = APIRouter()
scorer = PredictiveScorer()


@router.post("/trends", response_model=DiscoveryTrends)
async def discovery_trends(request: TrendRequest):
    """
    Discovery counts of the trailing years, a three year forecast and the
    ranking of discovery methods and telescopes.
    """
    try:
        return scorer.analyze_discovery_patterns(request.planets)

    except Exception as e:
        logger.exception("Trend analysis failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/priority", response_model=PriorityScoreResponse)
async def priority_score(request: PlanetRecord):
    """Observation priority combining habitability, confidence, follow-ups, distance and novelty"""
    try:
        return PriorityScoreResponse(
            name=request.name,
            priority_score=scorer.calculate_priority_score(request)
        )

    except Exception as e:
        logger.exception("Priority scoring failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/plan", response_model=ObservationPlan)
async def observation_plan(request: PlanetRecord):
    """Instruments, exposure and cadence recommended for the target"""
    try:
        return scorer.recommend_observation_plan(request)

    except Exception as e:
        logger.exception("Observation planning failed")
        raise HTTPException(status_code=500, detail=str(e))
