"""HemoScan - Архів у пам'яті процесу"""

import threading
from typing import Dict, List

from hemoscan.errors import ReportNotFoundError
from hemoscan.schemas import ArchivedReport, PatientRecord, RecoveryPath, RecoveryRecord, ScreeningResult

from .base import ReportArchive


class InMemoryArchive(ReportArchive):
    """
    Потокобезпечний архів у пам'яті.

    Порядок "найновіший першим" визначається порядком вставки.
    """

    backend_name = "memory"

    def __init__(self):
        self._lock = threading.Lock()
        self._reports: Dict[str, List[ArchivedReport]] = {}
        self._recovery: Dict[str, List[RecoveryRecord]] = {}

    def save_report(self, patient_id: str, record: PatientRecord, result: ScreeningResult) -> ArchivedReport:
        report = ArchivedReport(patient_id=patient_id, record=record, result=result)
        with self._lock:
            self._reports.setdefault(patient_id, []).append(report)
        return report

    def list_reports_for_patient(self, patient_id: str) -> List[ArchivedReport]:
        with self._lock:
            return list(reversed(self._reports.get(patient_id, [])))

    def save_recovery_path(self, patient_id: str, report_id: str, path: RecoveryPath) -> RecoveryRecord:
        with self._lock:
            known = {r.report_id for r in self._reports.get(patient_id, [])}
            if report_id not in known:
                raise ReportNotFoundError(f"Report {report_id} not found for patient {patient_id}")

            entry = RecoveryRecord(patient_id=patient_id, report_id=report_id, path=path)
            self._recovery.setdefault(patient_id, []).append(entry)
        return entry

    def list_recovery_paths(self, patient_id: str) -> List[RecoveryRecord]:
        with self._lock:
            return list(reversed(self._recovery.get(patient_id, [])))

    def __len__(self) -> int:
        with self._lock:
            return sum(len(v) for v in self._reports.values())
