"""
HemoScan - Схеми плану відновлення та архіву

Pydantic моделі для:
- RecoveryStatus / HemoglobinTrend
- RecoveryPath: план відновлення (похідний від скринінгу + попереднього звіту)
- ArchivedReport / RecoveryRecord: збережені документи архіву
- HistoryPoint: точка часової серії для графіків
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .patient import PatientRecord
from .screening import ScreeningResult


class RecoveryStatus(str, Enum):
    """Стан пацієнта. CRITICAL домінує над трендом."""
    IMPROVING = "Improving"
    STABLE = "Stable"
    DECLINING = "Declining"
    CRITICAL = "Critical"

    @property
    def severity(self) -> int:
        return [
            RecoveryStatus.IMPROVING,
            RecoveryStatus.STABLE,
            RecoveryStatus.DECLINING,
            RecoveryStatus.CRITICAL,
        ].index(self)


class HemoglobinTrend(str, Enum):
    """Напрямок зміни гемоглобіну"""
    INCREASING = "Increasing"
    STABLE = "Stable"
    DECREASING = "Decreasing"


class RecoveryPath(BaseModel):
    """
    План відновлення.

    Створюється один раз на скринінг і ніколи не змінюється -
    наступний скринінг створює власний план.
    """
    model_config = ConfigDict(frozen=True)

    current_status: RecoveryStatus
    hemoglobin_trend: Optional[HemoglobinTrend] = None
    improvement_percentage: Optional[float] = None

    recommendations: List[str] = Field(default_factory=list)
    dietary_suggestions: List[str] = Field(default_factory=list)
    lifestyle_changes: List[str] = Field(default_factory=list)

    follow_up_date: date
    needs_dosage_review: bool = False
    ai_insights: Optional[str] = None


class ArchivedReport(BaseModel):
    """Збережений звіт: запис + результат + ідентифікатор архіву"""
    model_config = ConfigDict(frozen=True)

    report_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    patient_id: str
    record: PatientRecord
    result: ScreeningResult
    created_at: datetime = Field(default_factory=datetime.now)


class RecoveryRecord(BaseModel):
    """Збережений план відновлення, прив'язаний до звіту"""
    model_config = ConfigDict(frozen=True)

    recovery_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    patient_id: str
    report_id: str
    path: RecoveryPath
    created_at: datetime = Field(default_factory=datetime.now)


class HistoryPoint(BaseModel):
    """Точка історії гемоглобіну (для графіка)"""
    observed_at: datetime
    hemoglobin: float
    mcv: float
    confidence_score: float
    risk_level: str
