from pydantic import BaseModel
from typing import Any, Dict, List
from pydantic import Field
from .planet import PlanetRecord


class SpectralSample(BaseModel):
    wavelength: float = Field(..., example=760.0, description="Wavelength (nm), ascending order expected")
    intensity: float = Field(..., example=0.97, description="Measured intensity")
    snr: float = Field(default=0.0, example=25.0, description="Signal-to-noise ratio")


class WindowDetection(BaseModel):
    window_nm: List[float] = Field(..., description="Absorption window [min, max] (nm)")
    ew: float = Field(..., description="Equivalent width over the window")
    mean_snr: float = Field(..., description="Mean signal-to-noise ratio in the window")
    absorption_fraction: float = Field(..., description="Fraction of points below 0.98 of the continuum")
    detected: bool = Field(..., description="Whether the window passes the detection thresholds")
    points: int = Field(..., description="Number of samples inside the window")


class MoleculeMatch(BaseModel):
    detected: bool = Field(..., description="At least one window detected")
    confidence: float = Field(..., description="Combined confidence for the molecule")
    windows: List[WindowDetection] = Field(default_factory=list, description="Per-window detections")


class DetectedMolecule(BaseModel):
    molecule: str = Field(..., example="O2", description="Molecule name")
    confidence: float = Field(..., description="Combined confidence for the molecule")
    windows: List[WindowDetection] = Field(..., description="Per-window detections")


class SpectralFeatures(BaseModel):
    absorption_lines: int = Field(..., description="Points below 0.98 of the continuum")
    avg_snr: float = Field(..., description="Average signal-to-noise ratio")
    spectral_points: int = Field(..., description="Number of analysed samples")


class BiosignatureAssessment(BaseModel):
    level: str = Field(..., example="Low", description="Low, Medium or High")
    reason: str = Field(..., description="Why the level was assigned")


class NormalizedPoint(BaseModel):
    wavelength: float
    intensity: float
    snr: float
    intensity_smoothed: float
    continuum: float
    intensity_norm: float


class SyntheticModelPoint(BaseModel):
    wavelength: float
    model_intensity: float


class SpectroscopyResult(BaseModel):
    detected_molecules: List[DetectedMolecule] = Field(..., description="Molecules passing detection")
    molecule_confidences: Dict[str, float] = Field(..., description="Confidence per configured molecule")
    features: SpectralFeatures = Field(..., description="Global spectrum features")
    biosignature_potential: BiosignatureAssessment = Field(..., description="Biosignature verdict")
    recommendations: List[str] = Field(..., description="Follow-up recommendations")
    confidence: float = Field(..., description="Overall analysis confidence")
    summary: str = Field("", description="One line summary")
    normalized_data: List[NormalizedPoint] = Field(default_factory=list, description="Continuum-normalized samples")
    synthetic_model: List[SyntheticModelPoint] = Field(default_factory=list, description="Model curve for plotting")


class SpectroscopyRequest(BaseModel):
    samples: List[Dict[str, Any]] = Field(..., description="Samples with wavelength, intensity and snr")
    planet: PlanetRecord = Field(default_factory=PlanetRecord, description="Planet descriptor")
