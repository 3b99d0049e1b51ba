"""
HemoScan - Санітизація витягнутих значень

OCR/LLM може повернути пропущені або нереалістичні числа.
Кожне значення замінюється дефолтом, якщо відсутнє (None, 0, не число),
і обрізається до фізіологічно допустимого діапазону.
"""

import math
from datetime import date
from typing import Any, Dict, Optional, Tuple

from .results import ExtractedReport


# поле → (min, max, default)
NUMERIC_RANGES: Dict[str, Tuple[float, float, float]] = {
    "age": (1, 149, 30),
    "hemoglobin": (0.0, 30.0, 12.0),
    "mcv": (0.0, 200.0, 90.0),
    "mch": (0.0, 100.0, 30.0),
    "mchc": (28.0, 38.0, 33.0),
}

DEFAULT_NAME = "Unknown Patient"
DEFAULT_GENDER = "M"


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number == 0:
        return None
    return number


def clamp(value: Any, low: float, high: float, default: float) -> float:
    """Дефолт для відсутнього значення, інакше обрізати до [low, high]"""
    number = _as_number(value)
    if number is None:
        number = default
    return max(low, min(high, number))


def _gender(value: Any) -> str:
    if not value:
        return DEFAULT_GENDER
    letter = str(value).strip()[:1].upper()
    if letter in ("M", "F"):
        return letter
    return "O" if letter else DEFAULT_GENDER


def _test_date(value: Any, today: date) -> date:
    if not value:
        return today
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return today


def sanitize_extraction(raw: Dict[str, Any], today: Optional[date] = None) -> ExtractedReport:
    """
    Привести сирий JSON витягування до ExtractedReport.

    Приклад:
        sanitize_extraction({"mchc": 50, "age": 200}).mchc  # 38.0
    """
    today = today or date.today()
    raw = raw or {}

    values = {}
    defaulted = []
    for field_name, (low, high, default) in NUMERIC_RANGES.items():
        if _as_number(raw.get(field_name)) is None:
            defaulted.append(field_name)
        values[field_name] = clamp(raw.get(field_name), low, high, default)

    name = raw.get("name")
    name = str(name).strip() if name else ""

    return ExtractedReport(
        name=name or DEFAULT_NAME,
        age=int(round(values["age"])),
        gender=_gender(raw.get("gender")),
        hemoglobin=values["hemoglobin"],
        mcv=values["mcv"],
        mch=values["mch"],
        mchc=values["mchc"],
        test_date=_test_date(raw.get("testDate") or raw.get("test_date"), today),
        defaulted_fields=defaulted,
    )
