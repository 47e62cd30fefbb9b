from fastapi import APIRouter, HTTPException
from exoscope.schemas import SpectroscopyRequest, SpectroscopyResult
from exoscope.services import SpectralAnalyzer
import logging

logger = logging.getLogger(__name__)

router = APIRouter()
analyzer = SpectralAnalyzer()


@router.post("/analyze", response_model=SpectroscopyResult)
async def analyze_spectrum(request: SpectroscopyRequest):
    """
    Analyze a spectrum of the given planet.

    Each sample carries `wavelength` (nm, ascending), `intensity` and `snr`.
    Returns detected molecules, a confidence per molecule, the biosignature
    verdict and follow-up recommendations. An empty sample list yields the
    "No data" analysis.
    """
    try:
        return analyzer.analyze_spectrum(request.samples, request.planet)

    except Exception as e:
        logger.exception("Spectral analysis failed")
        raise HTTPException(status_code=500, detail=str(e))
