"""
HemoScan - Результати віддаленого AI

- RemoteClassification: строго провалідована відповідь класифікації
- RemoteSuccess / RemoteFailure: явний результат виклику (без exception control flow)
- ExtractedReport: санітизовані значення з лабораторного звіту
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hemoscan.errors import RemoteErrorKind
from hemoscan.schemas import Gender, PatientRecord, RiskLevel


class RemoteClassification(BaseModel):
    """
    Схема відповіді класифікації ризику.

    Будь-яке відхилення (відсутнє поле, confidence поза [0,1],
    невідомий riskLevel) - це MALFORMED_RESPONSE.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    classification: str = Field(..., min_length=1)
    confidence_score: float = Field(..., alias="confidenceScore", ge=0.0, le=1.0)
    risk_level: RiskLevel = Field(..., alias="riskLevel")
    analysis_summary: str = Field(..., alias="analysisSummary")

    @field_validator("classification")
    @classmethod
    def strip_classification(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("classification must not be blank")
        return v

    @field_validator("risk_level", mode="before")
    @classmethod
    def parse_risk_level(cls, v):
        return RiskLevel.parse(v)


@dataclass(frozen=True)
class RemoteSuccess:
    """Віддалена класифікація отримана та провалідована"""
    classification: RemoteClassification


@dataclass(frozen=True)
class RemoteFailure:
    """Віддалена класифікація недоступна (очікувана, не фатальна умова)"""
    kind: RemoteErrorKind
    message: str


RemoteOutcome = Union[RemoteSuccess, RemoteFailure]


class ExtractedReport(BaseModel):
    """Значення, витягнуті з фото/PDF лабораторного звіту (вже санітизовані)"""
    model_config = ConfigDict(frozen=True)

    name: str
    age: int = Field(..., ge=1, le=149)
    gender: str = Field(..., pattern="^[MFO]$")
    hemoglobin: float = Field(..., ge=0.0, le=30.0)
    mcv: float = Field(..., ge=0.0, le=200.0)
    mch: float = Field(..., ge=0.0, le=100.0)
    mchc: float = Field(..., ge=28.0, le=38.0)
    test_date: date

    # Поля, для яких підставлено дефолт (значення відсутнє у звіті)
    defaulted_fields: List[str] = Field(default_factory=list)

    def to_patient_record(self, record_id: Optional[str] = None) -> PatientRecord:
        """Готовий PatientRecord для скринінгу"""
        data = dict(
            name=self.name,
            age=self.age,
            gender=Gender.parse(self.gender),
            hemoglobin=self.hemoglobin,
            mcv=self.mcv,
            mch=self.mch,
            mchc=self.mchc,
            observed_at=datetime.combine(self.test_date, time()),
        )
        if record_id:
            data["id"] = record_id
        return PatientRecord(**data)
