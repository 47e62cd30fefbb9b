from fastapi import APIRouter, HTTPException
from exoscope.schemas import (
    PlanetRecord, ClassificationResult, BatchClassificationRequest, BatchClassificationResponse
)
from exoscope.services import ExoplanetClassifier
from exoscope.settings import settings
import logging
import time

logger = logging.getLogger(__name__)

router = APIRouter()
classifier = ExoplanetClassifier()


@router.post("/", response_model=ClassificationResult)
async def classify_planet(request: PlanetRecord):
    """
    Classify a planet into one of the nine heuristic planet types.

    Returns the calibrated probability of every type, the predicted type, a
    confidence value and the explanation of the decision. Results are cached per
    planet fingerprint.
    """
    try:
        return classifier.classify_planet(request)

    except Exception as e:
        logger.exception("Classification failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/batch", response_model=BatchClassificationResponse)
async def classify_batch(request: BatchClassificationRequest):
    """
    Classify several planets at once. Results keep the order of the request.
    """
    if len(request.planets) > settings.max_batch_size:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum of {settings.max_batch_size} planets per batch. To process more, divide into smaller batches."
        )

    try:
        start_time = time.time()
        results = classifier.classify_batch(request.planets)
        processing_time = time.time() - start_time

        return BatchClassificationResponse(
            results=results,
            total_processed=len(results),
            processing_time_seconds=processing_time
        )

    except Exception as e:
        logger.exception("Batch classification failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/cache")
async def clear_cache():
    """Drop every cached classification"""
    classifier.clear_cache()
    return {"cleared": True}
