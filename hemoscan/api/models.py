"""
HemoScan API - Pydantic Models

Моделі для запитів та відповідей REST API.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from hemoscan.schemas import (
    ArchivedReport,
    Gender,
    HistoryPoint,
    LocalRiskBand,
    PatientRecord,
    RecoveryRecord,
    ScreeningResult,
)


# === Request Models ===

class ScreeningRequest(BaseModel):
    """Запит на скринінг"""
    patient_id: str = Field(
        ...,
        min_length=1,
        description="Ідентифікатор пацієнта в архіві",
        examples=["patient-1"]
    )
    record: PatientRecord = Field(
        ...,
        description="Значення аналізу крові"
    )
    persist: bool = Field(
        default=True,
        description="Зберегти звіт та згенерувати план відновлення"
    )


class PredictRequest(BaseModel):
    """Запит на передбачення локальної моделі"""
    gender: Gender = Field(..., description="male / female / other")
    hemoglobin: float = Field(..., ge=0.0, le=30.0, description="g/dL")
    mcv: float = Field(..., ge=0.0, le=200.0, description="fL")
    mch: float = Field(..., ge=0.0, le=100.0, description="pg")
    mchc: float = Field(..., ge=0.0, le=60.0, description="g/dL")

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v):
        return Gender.parse(v)


# === Response Models ===

class ScreeningResponse(BaseModel):
    """Результат скринінгу"""
    patient_id: str
    record: PatientRecord
    result: ScreeningResult
    report_id: Optional[str] = None
    recovery: Optional[RecoveryRecord] = None


class PredictResponse(BaseModel):
    """Передбачення локальної моделі"""
    score: float
    label: str
    is_anemic: bool
    confidence: float
    risk_band: LocalRiskBand


class ReportsResponse(BaseModel):
    patient_id: str
    reports: List[ArchivedReport]
    total: int


class RecoveryPathsResponse(BaseModel):
    patient_id: str
    recovery_paths: List[RecoveryRecord]
    total: int


class HistoryResponse(BaseModel):
    patient_id: str
    points: List[HistoryPoint]


class HealthResponse(BaseModel):
    """Стан сервера"""
    status: str = Field(..., description="ok | training | degraded")
    version: str
    model_trained: bool
    remote_configured: bool
    archive_backend: str
    error: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseModel):
    """Тіло відповіді для всіх обробників помилок"""
    error: str
    kind: Optional[str] = None
    detail: Optional[str] = None
