from fastapi import APIRouter, HTTPException
from exoscope.schemas import PlanetRecord, HabitabilityAssessment
from exoscope.services import HabitabilityCalculator
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=HabitabilityAssessment)
async def assess_habitability(request: PlanetRecord):
    """
    Habitability score, research priority, climate zone and planet type
    """
    try:
        return HabitabilityCalculator.assess(request)

    except Exception as e:
        logger.exception("Habitability assessment failed")
        raise HTTPException(status_code=500, detail=str(e))
