"""
HemoScan - API Routes

Експорт всіх роутерів.
"""

from .health import router as health_router
from .screenings import router as screenings_router
from .patients import router as patients_router
from .extraction import router as extraction_router
from .model import router as model_router

__all__ = [
    'health_router',
    'screenings_router',
    'patients_router',
    'extraction_router',
    'model_router',
]
