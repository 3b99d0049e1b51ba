"""
HemoScan - REST API модуль

FastAPI REST API для гібридного скринінгу анемії.

Компоненти:
- app.py: FastAPI application (create_app)
- routes/: API endpoints
- models.py: Pydantic models
- dependencies.py: ServicesManager (сервіс скринінгу + фонове навчання)

Запуск:
    uvicorn hemoscan.api.app:app --port 8000

Документація:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)

Endpoints:
    GET  /                                   - Root info
    GET  /health                             - Health check

    POST /api/screenings                     - Скринінг запису
    GET  /api/patients/{id}/reports          - Звіти пацієнта
    GET  /api/patients/{id}/recovery         - Плани відновлення
    GET  /api/patients/{id}/history          - Історія гемоглобіну
    POST /api/extractions                    - Розпізнати звіт (файл)
    POST /api/model/predict                  - Передбачення локальної моделі
"""

from .app import app, create_app
from .config import APIConfig
from .dependencies import ServicesManager, get_services


__all__ = [
    "app",
    "create_app",
    "APIConfig",
    "ServicesManager",
    "get_services",
]
