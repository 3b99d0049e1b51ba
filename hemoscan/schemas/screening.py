"""
HemoScan - Схеми результату скринінгу

Pydantic моделі для:
- RiskLevel: фінальний рівень ризику (Low < Moderate < High < Critical)
- LocalRiskBand: грубіша шкала локальної моделі (без CRITICAL)
- AnemiaType: словник класифікацій
- LocalPrediction: вихід лінійної моделі
- ScreeningResult: фінальний результат скринінгу
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class RiskLevel(str, Enum):
    """Рівень ризику (впорядкований)"""
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def severity(self) -> int:
        return _RISK_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity >= other.severity

    @classmethod
    def parse(cls, value) -> "RiskLevel":
        """Регістронезалежний розбір ("high", "HIGH", "High")"""
        if isinstance(value, RiskLevel):
            return value
        text = str(value).strip().lower()
        for level in cls:
            if level.value.lower() == text:
                return level
        raise ValueError(f"Unknown risk level: {value!r}")


_RISK_ORDER = [RiskLevel.LOW, RiskLevel.MODERATE, RiskLevel.HIGH, RiskLevel.CRITICAL]


class LocalRiskBand(str, Enum):
    """Шкала ризику локальної моделі. CRITICAL локальна модель не призначає."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"

    def to_risk_level(self) -> RiskLevel:
        return RiskLevel(self.value.capitalize())


class AnemiaType(str, Enum):
    """
    Словник класифікацій.

    Перші чотири значення видає rule-based fallback,
    решта - типові мітки віддаленого AI.
    """
    NO_ANEMIA = "Normal – No Anemia Detected"
    MICROCYTIC = "Microcytic Anemia (Iron Deficiency Likely)"
    MACROCYTIC = "Macrocytic Anemia (Vitamin B12/Folate Deficiency Likely)"
    NORMOCYTIC = "Normocytic Anemia"

    NORMAL = "Normal"
    IRON_DEFICIENCY = "Iron Deficiency Anemia"
    VITAMIN_DEFICIENCY = "Vitamin B12/Folate Deficiency"
    APLASTIC = "Aplastic Anemia"
    HEMOLYTIC = "Hemolytic Anemia"
    CHRONIC_DISEASE = "Anemia of Chronic Disease"


class AnalysisMode(str, Enum):
    """Як отримано результат"""
    HYBRID = "hybrid"      # локальна модель + віддалений AI
    ML_ONLY = "ml_only"    # тільки локальна модель (fallback)


class LocalPrediction(BaseModel):
    """
    Вихід лінійної моделі ризику.

    score - ймовірність анемії [0, 1];
    confidence = |score − 0.5| × 2.
    """
    model_config = ConfigDict(frozen=True)

    score: float = Field(..., ge=0.0, le=1.0)
    is_anemic: bool
    confidence: float = Field(..., ge=0.0, le=1.0)
    risk_band: LocalRiskBand

    @property
    def label(self) -> str:
        return "Anemic" if self.is_anemic else "Normal"


class ScreeningResult(BaseModel):
    """
    Фінальний результат скринінгу для одного PatientRecord.

    analysis_summary завжди явно вказує режим (hybrid / ML-only).
    """
    model_config = ConfigDict(frozen=True)

    classification: str = Field(..., min_length=1)
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    risk_level: RiskLevel
    analysis_summary: str
    mode: AnalysisMode
    local_prediction: LocalPrediction
