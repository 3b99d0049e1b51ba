"""
HemoScan - Схеми даних пацієнта

Pydantic моделі для:
- Gender: стать пацієнта (+ бінарний код для моделі)
- PatientRecord: одне спостереження (CBC панель)
"""

import uuid
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Gender(str, Enum):
    """Стать пацієнта"""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @classmethod
    def parse(cls, value) -> "Gender":
        """
        Розпізнати стать з довільного запису.

        Приймає "male"/"female"/"other", а також скорочення з форм та OCR:
        "M", "F", "O", "Other".
        """
        if isinstance(value, Gender):
            return value
        text = str(value).strip().lower()
        if text in ("m", "male", "man"):
            return cls.MALE
        if text in ("f", "female", "woman"):
            return cls.FEMALE
        if text in ("o", "other"):
            return cls.OTHER
        raise ValueError(f"Unknown gender: {value!r}")

    @property
    def code(self) -> int:
        """Бінарна ознака для моделі: 0 = female, 1 = male/other"""
        return 0 if self is Gender.FEMALE else 1

    @property
    def hemoglobin_lower_limit(self) -> float:
        """Нижня межа норми гемоглобіну (g/dL)"""
        return 12.0 if self is Gender.FEMALE else 13.0


class PatientRecord(BaseModel):
    """
    Одне спостереження пацієнта.

    Незмінне: новий скринінг завжди створює новий запис.

    Приклад:
        record = PatientRecord(
            name="Alex Johnson",
            age=34,
            gender="M",
            hemoglobin=11.8,
            mcv=78,
            mch=25,
            mchc=31,
        )
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="ID запису")
    name: str = Field(..., min_length=1, description="Ім'я пацієнта")
    age: int = Field(..., gt=0, lt=150, description="Вік (роки)")
    gender: Gender = Field(..., description="Стать")

    hemoglobin: float = Field(..., ge=0.0, le=30.0, description="Гемоглобін (g/dL)")
    mcv: float = Field(..., ge=0.0, le=200.0, description="MCV (fL)")
    mch: float = Field(..., ge=0.0, le=100.0, description="MCH (pg)")
    mchc: float = Field(..., ge=0.0, le=60.0, description="MCHC (g/dL)")

    observed_at: datetime = Field(default_factory=datetime.now, description="Дата аналізу")

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v):
        return Gender.parse(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @property
    def gender_code(self) -> int:
        return self.gender.code

    @property
    def features(self) -> list:
        """Вектор ознак у порядку навчання: gender, Hb, MCV, MCH, MCHC"""
        return [float(self.gender_code), self.hemoglobin, self.mcv, self.mch, self.mchc]

    @property
    def is_hemoglobin_low(self) -> bool:
        return self.hemoglobin < self.gender.hemoglobin_lower_limit
