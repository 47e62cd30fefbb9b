from pydantic import BaseModel
from typing import List
from pydantic import Field
from .planet import PlanetRecord
from .classification import ClassificationResult


class BatchClassificationRequest(BaseModel):
    planets: List[PlanetRecord] = Field(..., description="Planets to classify")


class BatchClassificationResponse(BaseModel):
    results: List[ClassificationResult] = Field(..., description="Results in input order")
    total_processed: int = Field(..., description="Total planets processed")
    processing_time_seconds: float = Field(..., description="Processing time in seconds")
