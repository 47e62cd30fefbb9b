from pydantic import BaseModel
from pydantic import Field


class HabitabilityAssessment(BaseModel):
    habitability_score: float = Field(..., example=0.7, description="Habitability score (0-1)")
    research_priority: str = Field(..., example="High", description="Critical, High, Medium or Low")
    climate_zone: str = Field(..., example="Temperate", description="Hot, Cold or Temperate")
    planet_type: str = Field(..., example="Terrestrial", description="Heuristic planet type")
