"""
HemoScan - Інтерфейс архіву звітів

Ядро працює з архівом лише через цей інтерфейс, тому реалізацію
(пам'ять, SQLite, зовнішній сервіс) можна підмінити у тестах.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from hemoscan.schemas import ArchivedReport, PatientRecord, RecoveryPath, RecoveryRecord, ScreeningResult


class ReportArchive(ABC):
    """
    Архів звітів та планів відновлення.

    Кожен запис зберігається однією атомарною вставкою.
    Списки повертаються від найновішого до найстарішого.
    """

    backend_name = "abstract"

    @abstractmethod
    def save_report(self, patient_id: str, record: PatientRecord, result: ScreeningResult) -> ArchivedReport:
        """Зберегти звіт, повернути його з призначеним report_id"""

    @abstractmethod
    def list_reports_for_patient(self, patient_id: str) -> List[ArchivedReport]:
        """Всі звіти пацієнта, найновіший першим"""

    @abstractmethod
    def save_recovery_path(self, patient_id: str, report_id: str, path: RecoveryPath) -> RecoveryRecord:
        """
        Прив'язати план відновлення до звіту.

        Raises:
            ReportNotFoundError: звіту з таким report_id у пацієнта немає
        """

    @abstractmethod
    def list_recovery_paths(self, patient_id: str) -> List[RecoveryRecord]:
        """Всі плани пацієнта, найновіший першим"""

    def latest_report(self, patient_id: str) -> Optional[ArchivedReport]:
        reports = self.list_reports_for_patient(patient_id)
        return reports[0] if reports else None

    def close(self):
        pass
