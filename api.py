from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI
from exoscope import __version__
from exoscope.api.router import api_router
from exoscope.api.v1.endpoints.classify import classifier
from exoscope.settings import settings, configure_logging
import logging

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Exoscope AI Services API",
    description="""
    **Heuristic AI services for exoplanet exploration**

    Deterministic analysis layer behind the exoplanet dashboard. It turns catalog and
    spectral records into classifications, habitability and priority scores,
    molecular detections and short-term discovery forecasts.

    ## **Main Features:**

    ### **Planet Classification**
    - Nine planet types (Terrestrial, Super Earth, Mini-Neptune, Gas Giant, ...)
    - Calibrated probabilities with explanation
    - Cached results and parallel batch classification

    ### **Spectroscopy**
    - Continuum normalization and equivalent widths
    - Template matching for H2O, CO2, CH4, O2, N2, SO2, NH3, Na, K, O3
    - Biosignature potential and follow-up recommendations

    ### **Predictive Analytics**
    - Discovery trends and three year forecast
    - Observation priority score
    - Observation plans by distance tier

    ## **Available Endpoints:**

    - **`/api/v1/classify/`** - Planet classification
    - **`/api/v1/spectroscopy/analyze`** - Spectral analysis
    - **`/api/v1/predictive/`** - Trends, priority and observation plans
    - **`/api/v1/habitability/`** - Habitability assessment
    """,
    version=__version__,
    docs_url="/docs" if settings.enable_docs else None,
    redoc_url="/redoc" if settings.enable_redoc else None
)

app.add_middleware(
    CORSMiddleware,
    **settings.get_cors_config()
)

app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("Loading classifier model...")
    classifier.load_model()


@app.get("/")
async def root():
    return {
        "message": "Exoscope AI Services API Running ...",
        "version": __version__,
        "status": "operational",
        "features": {
            "classification": "Active",
            "spectroscopy": "Active",
            "predictive_analytics": "Active",
            "habitability": "Active"
        },
        "endpoints": {
            "classification": "/api/v1/classify/",
            "spectroscopy": "/api/v1/spectroscopy/analyze",
            "predictive": "/api/v1/predictive/",
            "habitability": "/api/v1/habitability/"
        },
        "documentation": "/docs"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level,
        reload=settings.api_reload
    )
