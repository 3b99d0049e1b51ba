"""
HemoScan - Health Routes

Health check та інформація про систему.
"""

from fastapi import APIRouter, Depends

import hemoscan
from ..dependencies import ServicesManager, get_services
from ..models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(services: ServicesManager = Depends(get_services)) -> HealthResponse:
    """
    Перевірка стану сервера.

    - ok: модель навчена
    - training: навчання ще триває (скринінг дочекається його)
    - degraded: навчання завершилось помилкою
    """
    service = services.service
    return HealthResponse(
        status=services.status,
        version=hemoscan.__version__,
        model_trained=services.is_trained,
        remote_configured=service.remote.is_configured,
        archive_backend=service.archive.backend_name,
        error=services.error,
    )


@router.get("/")
async def root():
    """Головна сторінка API"""
    return {
        "name": "HemoScan API",
        "version": hemoscan.__version__,
        "description": "Hybrid anemia risk screening",
        "docs": "/docs",
        "health": "/health",
    }
