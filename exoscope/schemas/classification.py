from pydantic import BaseModel
from typing import Dict, List, Optional
from pydantic import Field
from .planet import FeatureVector


class TopFactor(BaseModel):
    label: str = Field(..., description="Planet type label")
    prob: float = Field(..., description="Calibrated probability of the label")


class ClassificationExplanation(BaseModel):
    features: FeatureVector = Field(..., description="Feature vector used for the classification")
    importances: Dict[str, float] = Field(..., description="Normalized heuristic feature importances")
    top_factors: List[TopFactor] = Field(..., description="Three most probable labels")


class ModelMeta(BaseModel):
    engine: str = Field(..., example="heuristic-sim-v2", description="Classification engine")
    labels: List[str] = Field(..., description="Label set of the classifier")
    weights: Dict[str, float] = Field(..., description="Configured feature weights")
    calibration: Optional[Dict[str, float]] = Field(None, description="Calibration coefficients (a, b)")


class ClassificationResult(BaseModel):
    predicted_type: str = Field(..., example="Terrestrial", description="Most probable planet type")
    probabilities: Dict[str, float] = Field(..., description="Calibrated probability per planet type")
    confidence: float = Field(..., example=0.712, description="Confidence in the predicted type (may be negative)")
    explanation: ClassificationExplanation = Field(..., description="Explanation of the decision")
    model_meta: ModelMeta = Field(..., description="Classifier metadata")
