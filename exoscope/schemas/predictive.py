from pydantic import BaseModel
from typing import List, Optional
from pydantic import Field
from .planet import PlanetRecord


class YearCount(BaseModel):
    year: int = Field(..., description="Discovery year")
    count: int = Field(..., description="Discoveries in that year")


class Forecast(BaseModel):
    year: int = Field(..., description="Forecast year")
    predicted: int = Field(..., description="Predicted number of discoveries")


class MethodCount(BaseModel):
    method: str = Field(..., description="Discovery method")
    count: int = Field(..., description="Number of planets")


class TelescopeCount(BaseModel):
    telescope: str = Field(..., description="Discovery telescope")
    count: int = Field(..., description="Number of planets")


class TrendSummary(BaseModel):
    total_planets: int = Field(..., description="Size of the analysed history")
    recent_growth: float = Field(..., description="Relative growth between first and last windowed year")


class DiscoveryTrends(BaseModel):
    series: List[YearCount] = Field(..., description="Counts of the trailing window, by year")
    forecasts: List[Forecast] = Field(..., description="Forecast for the next three years")
    method_ranking: List[MethodCount] = Field(..., description="Discovery methods by frequency")
    top_telescopes: List[TelescopeCount] = Field(..., description="Six most productive telescopes")
    summary: TrendSummary = Field(..., description="Summary statistics")


class ObservationPlan(BaseModel):
    target: str = Field(..., description="Target name")
    recommended_instruments: List[str] = Field(..., description="Recommended instruments")
    exposure_estimate_hours: float = Field(..., description="Estimated exposure (hours)")
    suggested_cadence: str = Field(..., description="Suggested observation cadence")
    rationale: str = Field(..., description="Why this plan was chosen")


class PriorityScoreResponse(BaseModel):
    name: Optional[str] = Field(None, description="Planet name")
    priority_score: float = Field(..., description="Observation priority (0-0.999)")


class TrendRequest(BaseModel):
    planets: List[PlanetRecord] = Field(..., description="Historical planet records")
