"""
HemoScan - API Dependencies

Один ScreeningService на процес: модель навчається один раз,
архів спільний для всіх запитів.
"""

import logging
import threading
from typing import Optional

from fastapi import Request

from hemoscan.config import HemoScanConfig, get_default_config
from hemoscan.pipeline import ScreeningService


logger = logging.getLogger(__name__)


class ServicesManager:
    """
    Менеджер сервісів: створює ScreeningService та навчає модель у фоні.

    Приклад використання:
        manager = ServicesManager()
        manager.start(background=True)

        manager.status      # "training" → "ok"
        manager.service.screen("patient-1", record)
    """

    def __init__(
        self,
        service: Optional[ScreeningService] = None,
        config: Optional[HemoScanConfig] = None
    ):
        self._service = service
        self.config = config
        self.error: Optional[str] = None
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def service(self) -> ScreeningService:
        if self._service is None:
            with self._lock:
                if self._service is None:
                    self._service = ScreeningService.from_config(self.config or get_default_config())
        return self._service

    def start(self, background: bool = True):
        """Запустити навчання моделі (у фоні або синхронно)"""
        if not background:
            self._warm_up()
            return

        self._thread = threading.Thread(target=self._warm_up, name="hemoscan-warm-up", daemon=True)
        self._thread.start()

    def _warm_up(self):
        try:
            self.service.warm_up()
            self.error = None
        except Exception as e:
            self.error = str(e)
            logger.exception("Model warm-up failed")

    @property
    def is_trained(self) -> bool:
        return self.service.model.is_trained

    @property
    def status(self) -> str:
        if self.error:
            return "degraded"
        return "ok" if self.is_trained else "training"

    def close(self):
        if self._service is not None:
            self._service.archive.close()


def get_services(request: Request) -> ServicesManager:
    """Dependency: менеджер сервісів поточного додатку"""
    return request.app.state.services
