"""
HemoScan - FastAPI Application

Головний файл FastAPI додатку.

Запуск:
    uvicorn hemoscan.api.app:app --host 0.0.0.0 --port 8000

    або:

    python scripts/run_api.py
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import hemoscan
from hemoscan.errors import (
    DatasetLoadError,
    ExtractionError,
    RemoteErrorKind,
    ReportNotFoundError,
)
from .config import APIConfig, config as default_config
from .dependencies import ServicesManager
from .models import ErrorResponse
from .routes import (
    health_router,
    screenings_router,
    patients_router,
    extraction_router,
    model_router,
)


logger = logging.getLogger(__name__)

EXTRACTION_STATUS = {
    RemoteErrorKind.MISSING_CREDENTIALS: 503,
    RemoteErrorKind.UNSUPPORTED_MEDIA: 415,
}


def create_app(
    services: Optional[ServicesManager] = None,
    api_config: Optional[APIConfig] = None
) -> FastAPI:
    """
    Створити FastAPI додаток.

    Args:
        services: Менеджер сервісів (тести передають власний з fake-залежностями)
        api_config: Налаштування сервера
    """
    api_config = api_config or default_config
    services = services if services is not None else ServicesManager()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle manager: навчання моделі у фоні при старті"""
        logger.info("HemoScan API %s starting", hemoscan.__version__)
        if api_config.train_on_startup:
            services.start(background=True)
        logger.info("Swagger UI: http://%s:%s/docs", api_config.host, api_config.port)

        yield

        logger.info("HemoScan API stopping")
        services.close()

    app = FastAPI(
        title=api_config.api_title,
        description=api_config.api_description,
        version=hemoscan.__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.services = services

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=api_config.cors_allow_credentials,
        allow_methods=api_config.cors_allow_methods,
        allow_headers=api_config.cors_allow_headers,
    )

    # Middleware для логування запитів
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time

        # Логуємо тільки API запити
        if request.url.path.startswith(api_config.api_prefix):
            logger.info(
                "%s %s -> %d (%.1fms)",
                request.method, request.url.path, response.status_code, process_time * 1000
            )

        return response

    @app.exception_handler(ExtractionError)
    async def extraction_error_handler(request: Request, exc: ExtractionError):
        body = ErrorResponse(error=exc.message, kind=exc.kind.value)
        return JSONResponse(status_code=EXTRACTION_STATUS.get(exc.kind, 502), content=body.model_dump())

    @app.exception_handler(ReportNotFoundError)
    async def report_not_found_handler(request: Request, exc: ReportNotFoundError):
        return JSONResponse(status_code=404, content=ErrorResponse(error=str(exc)).model_dump())

    @app.exception_handler(DatasetLoadError)
    async def dataset_error_handler(request: Request, exc: DatasetLoadError):
        logger.error("Dataset unavailable: %s", exc)
        body = ErrorResponse(
            error="Risk model is unavailable: training dataset could not be loaded",
            detail=str(exc) if api_config.debug else None,
        )
        return JSONResponse(status_code=503, content=body.model_dump())

    # Глобальний обробник помилок
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = ErrorResponse(
            error="Internal server error",
            detail=str(exc) if api_config.debug else None,
        )
        return JSONResponse(status_code=500, content=body.model_dump())

    # Підключаємо роутери
    app.include_router(health_router)
    app.include_router(screenings_router, prefix=api_config.api_prefix)
    app.include_router(patients_router, prefix=api_config.api_prefix)
    app.include_router(extraction_router, prefix=api_config.api_prefix)
    app.include_router(model_router, prefix=api_config.api_prefix)

    return app


app = create_app()
