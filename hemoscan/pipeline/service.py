"""
HemoScan - Сервіс скринінгу (наскрізний потік)

PatientRecord → HybridCombiner → архів → RecoveryAnalyzer → ScreeningOutcome
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from hemoscan.archive import InMemoryArchive, ReportArchive, create_archive
from hemoscan.config import HemoScanConfig
from hemoscan.recovery import RecoveryAnalyzer
from hemoscan.remote import GeminiAdapter
from hemoscan.risk_model import LinearRiskModel
from hemoscan.schemas import ArchivedReport, PatientRecord, RecoveryRecord, ScreeningResult

from .combiner import HybridCombiner


logger = logging.getLogger(__name__)


@dataclass
class ScreeningOutcome:
    """Результат одного скринінгу"""
    record: PatientRecord
    result: ScreeningResult

    # None, якщо persist=False
    report: Optional[ArchivedReport] = None

    # None для першого звіту пацієнта (немає з чим порівняти)
    recovery: Optional[RecoveryRecord] = None

    @property
    def is_persisted(self) -> bool:
        return self.report is not None


class ScreeningService:
    """
    Точка входу для шару представлення.

    Приклад використання:
        service = ScreeningService.from_config(HemoScanConfig.from_env())
        service.warm_up()

        outcome = service.screen("patient-1", record)
        print(outcome.result.classification)

        # З async коду (FastAPI)
        outcome = await service.ascreen("patient-1", record)
    """

    def __init__(
        self,
        model: LinearRiskModel,
        remote: GeminiAdapter,
        archive: Optional[ReportArchive] = None,
        analyzer: Optional[RecoveryAnalyzer] = None
    ):
        self.model = model
        self.remote = remote
        self.archive = archive if archive is not None else InMemoryArchive()
        self.analyzer = analyzer if analyzer is not None else RecoveryAnalyzer(self.archive)
        self.combiner = HybridCombiner(model, remote)

    @classmethod
    def from_config(cls, config: HemoScanConfig) -> "ScreeningService":
        archive = create_archive(config.archive)
        return cls(
            model=LinearRiskModel(config.risk_model),
            remote=GeminiAdapter(config.remote),
            archive=archive,
            analyzer=RecoveryAnalyzer(archive, config.recovery),
        )

    def warm_up(self):
        """Навчити модель (ідемпотентно)"""
        self.model.train()

    def screen(self, patient_id: str, record: PatientRecord, persist: bool = True) -> ScreeningOutcome:
        result = self.combiner.classify(record)
        outcome = ScreeningOutcome(record=record, result=result)

        if not persist:
            return outcome

        outcome.report = self.archive.save_report(patient_id, record, result)
        logger.info("Saved report %s for patient %s", outcome.report.report_id, patient_id)

        outcome.recovery = self.analyzer.generate(
            patient_id, record, result, report_id=outcome.report.report_id
        )
        return outcome

    async def ascreen(self, patient_id: str, record: PatientRecord, persist: bool = True) -> ScreeningOutcome:
        """screen() у потоці, щоб не блокувати event loop"""
        return await asyncio.to_thread(self.screen, patient_id, record, persist)
