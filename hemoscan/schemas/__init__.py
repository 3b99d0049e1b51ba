"""
HemoScan - Модуль схем даних (schemas)

Pydantic моделі для валідації та серіалізації даних.

Компоненти:
- patient.py: Gender, PatientRecord
- screening.py: RiskLevel, LocalRiskBand, AnemiaType, LocalPrediction, ScreeningResult
- recovery.py: RecoveryStatus, HemoglobinTrend, RecoveryPath, ArchivedReport, RecoveryRecord

Приклад використання:
    from hemoscan.schemas import PatientRecord, Gender

    record = PatientRecord(
        name="Alex Johnson",
        age=34,
        gender=Gender.MALE,
        hemoglobin=11.8, mcv=78, mch=25, mchc=31,
    )

    # Серіалізація в JSON
    json_data = record.model_dump_json()

    # Десеріалізація з JSON
    record_loaded = PatientRecord.model_validate_json(json_data)
"""

# Patient schemas
from .patient import (
    Gender,
    PatientRecord,
)

# Screening schemas
from .screening import (
    RiskLevel,
    LocalRiskBand,
    AnemiaType,
    AnalysisMode,
    LocalPrediction,
    ScreeningResult,
)

# Recovery / archive schemas
from .recovery import (
    RecoveryStatus,
    HemoglobinTrend,
    RecoveryPath,
    ArchivedReport,
    RecoveryRecord,
    HistoryPoint,
)


__all__ = [
    "Gender",
    "PatientRecord",
    "RiskLevel",
    "LocalRiskBand",
    "AnemiaType",
    "AnalysisMode",
    "LocalPrediction",
    "ScreeningResult",
    "RecoveryStatus",
    "HemoglobinTrend",
    "RecoveryPath",
    "ArchivedReport",
    "RecoveryRecord",
    "HistoryPoint",
]
