from fastapi import APIRouter
from exoscope.api.v1.endpoints import (
    classify,
    spectroscopy,
    predictive,
    habitability
)

api_router = APIRouter(prefix="/v1")

api_router.include_router(
    classify.router,
    prefix="/classify",
    tags=["Classification"]
)

api_router.include_router(
    spectroscopy.router,
    prefix="/spectroscopy",
    tags=["Spectroscopy"]
)

api_router.include_router(
    predictive.router,
    prefix="/predictive",
    tags=["Predictive Analytics"]
)

api_router.include_router(
    habitability.router,
    prefix="/habitability",
    tags=["Habitability"]
)
