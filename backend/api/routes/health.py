"""Service health and index endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter

from backend.api.models.schemas import HealthResponse
from backend.core.config import settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        service=settings.SERVICE_NAME,
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/")
async def index():
    """Service index with the calculation body documentation."""
    calculate_url = f"{settings.API_V1_STR}/underfloor/calculate"
    return {
        "message": f"{settings.SERVICE_NAME} - calculation and advisory service",
        "version": settings.VERSION,
        "endpoints": {
            "health": "/health",
            "calculate": f"POST {calculate_url}",
        },
        "documentation": {
            "calculate": {
                "method": "POST",
                "url": calculate_url,
                "body": {
                    "area": "number (m2)",
                    "cargaTermicaRequerida": "number (W/m2)",
                    "tipoDeSuelo": "PETREO | MADERA_MACIZA | MADERA_FLOTANTE | MOQUETA",
                    "distanciaAlColector": "number (m)",
                    "distanciaAlimentacion": "number (m, optional)",
                },
            },
        },
    }
