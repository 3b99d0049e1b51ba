"""
HemoScan - SQLite архів

Кожен документ зберігається як JSON payload поруч з індексованими
колонками. JSON зберігає float без втрат, тому значення аналізів
повертаються рівно такими, як були збережені.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import List

from hemoscan.errors import ArchiveError, ReportNotFoundError
from hemoscan.schemas import ArchivedReport, PatientRecord, RecoveryPath, RecoveryRecord, ScreeningResult

from .base import ReportArchive


logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS patient_reports (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    report_id TEXT UNIQUE NOT NULL,
    patient_id TEXT NOT NULL,
    created_at TEXT NOT NULL,
    payload TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_reports_patient ON patient_reports (patient_id);

CREATE TABLE IF NOT EXISTS recovery_paths (
    seq INTEGER PRIMARY KEY AUTOINCREMENT,
    recovery_id TEXT UNIQUE NOT NULL,
    patient_id TEXT NOT NULL,
    report_id TEXT NOT NULL REFERENCES patient_reports (report_id),
    created_at TEXT NOT NULL,
    payload TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_recovery_patient ON recovery_paths (patient_id);
"""


class SQLiteArchive(ReportArchive):
    """
    Архів у файлі SQLite.

    Приклад використання:
        archive = SQLiteArchive("hemoscan.db")
        saved = archive.save_report("patient-1", record, result)
        archive.list_reports_for_patient("patient-1")[0].report_id == saved.report_id
    """

    backend_name = "sqlite"

    def __init__(self, path: str):
        self.path = str(path)
        self._lock = threading.Lock()

        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        # Одне з'єднання на архів; доступ серіалізовано через _lock
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        with self._cursor() as cur:
            cur.executescript(SCHEMA)
        logger.info("SQLite archive ready at %s", self.path)

    @contextmanager
    def _cursor(self):
        with self._lock:
            try:
                cur = self._conn.cursor()
                yield cur
                self._conn.commit()
            except sqlite3.Error as e:
                self._conn.rollback()
                raise ArchiveError(f"SQLite archive error: {e}") from e

    def save_report(self, patient_id: str, record: PatientRecord, result: ScreeningResult) -> ArchivedReport:
        report = ArchivedReport(patient_id=patient_id, record=record, result=result)
        with self._cursor() as cur:
            cur.execute(
                "INSERT INTO patient_reports (report_id, patient_id, created_at, payload) VALUES (?,?,?,?)",
                (report.report_id, patient_id, report.created_at.isoformat(), report.model_dump_json()),
            )
        return report

    def list_reports_for_patient(self, patient_id: str) -> List[ArchivedReport]:
        with self._cursor() as cur:
            rows = cur.execute(
                "SELECT payload FROM patient_reports WHERE patient_id = ? ORDER BY seq DESC",
                (patient_id,),
            ).fetchall()
        return [ArchivedReport.model_validate_json(row[0]) for row in rows]

    def save_recovery_path(self, patient_id: str, report_id: str, path: RecoveryPath) -> RecoveryRecord:
        entry = RecoveryRecord(patient_id=patient_id, report_id=report_id, path=path)
        with self._cursor() as cur:
            found = cur.execute(
                "SELECT 1 FROM patient_reports WHERE report_id = ? AND patient_id = ?",
                (report_id, patient_id),
            ).fetchone()
            if found is None:
                raise ReportNotFoundError(f"Report {report_id} not found for patient {patient_id}")

            cur.execute(
                "INSERT INTO recovery_paths (recovery_id, patient_id, report_id, created_at, payload) "
                "VALUES (?,?,?,?,?)",
                (entry.recovery_id, patient_id, report_id, entry.created_at.isoformat(), entry.model_dump_json()),
            )
        return entry

    def list_recovery_paths(self, patient_id: str) -> List[RecoveryRecord]:
        with self._cursor() as cur:
            rows = cur.execute(
                "SELECT payload FROM recovery_paths WHERE patient_id = ? ORDER BY seq DESC",
                (patient_id,),
            ).fetchall()
        return [RecoveryRecord.model_validate_json(row[0]) for row in rows]

    def close(self):
        with self._lock:
            self._conn.close()
