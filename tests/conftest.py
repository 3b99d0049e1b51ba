"""
Спільні fixtures для тестів HemoScan

Fake-залежності:
- StubRiskModel: детермінована "навчена" модель з фіксованим score
- FakeGenaiClient: замінник google-genai клієнта (.models.generate_content)
- InMemoryArchive: архів без зовнішніх сервісів
"""

import json
from types import SimpleNamespace

import pytest
from google.genai.errors import APIError


class StubRiskModel:
    """Модель з фіксованим score (замість навчання на CSV)"""

    def __init__(self, score: float = 0.8):
        from hemoscan.risk_model import LinearRiskModel

        self.fixed_score = score
        self._interpreter = LinearRiskModel()
        self.train_calls = 0

    @property
    def is_trained(self) -> bool:
        return True

    def train(self, samples=None, verbose=False):
        self.train_calls += 1

    def predict(self, gender_code, hemoglobin, mcv, mch, mchc):
        return self._interpreter.interpret(self.fixed_score)

    def predict_record(self, record):
        return self._interpreter.interpret(self.fixed_score)


class FakeAPIError(APIError):
    """APIError з довільним кодом, без розбору HTTP відповіді"""

    def __init__(self, code: int, message: str = "error"):
        Exception.__init__(self, message)
        self.code = code
        self.message = message
        self.status = None
        self.details = None


class FakeModels:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if not self.responses:
            raise AssertionError("FakeGenaiClient has no more responses")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, dict):
            item = json.dumps(item)
        return SimpleNamespace(text=item)


class FakeGenaiClient:
    """
    Відповіді видаються по черзі: dict → JSON text, str → text як є,
    виняток → кидається з generate_content.
    """

    def __init__(self, *responses):
        self.models = FakeModels(responses)

    @property
    def calls(self):
        return self.models.calls


def make_record(**overrides):
    from hemoscan.schemas import PatientRecord

    data = dict(
        name="Alex Johnson",
        age=34,
        gender="female",
        hemoglobin=10.4,
        mcv=74.0,
        mch=24.0,
        mchc=31.0,
    )
    data.update(overrides)
    return PatientRecord(**data)


def make_result(risk_level="Moderate", classification="Iron Deficiency Anemia", confidence=0.8):
    from hemoscan.schemas import AnalysisMode, LocalPrediction, LocalRiskBand, RiskLevel, ScreeningResult

    return ScreeningResult(
        classification=classification,
        confidence_score=confidence,
        risk_level=RiskLevel.parse(risk_level),
        analysis_summary="Test summary",
        mode=AnalysisMode.HYBRID,
        local_prediction=LocalPrediction(
            score=0.8, is_anemic=True, confidence=0.6, risk_band=LocalRiskBand.HIGH
        ),
    )


REMOTE_OK = {
    "classification": "Iron Deficiency Anemia",
    "confidenceScore": 0.9,
    "riskLevel": "High",
    "analysisSummary": "Low Hb with microcytosis suggests iron deficiency.",
}


@pytest.fixture
def record():
    return make_record()


@pytest.fixture
def stub_model():
    return StubRiskModel(score=0.8)


@pytest.fixture
def archive():
    from hemoscan.archive import InMemoryArchive
    return InMemoryArchive()


@pytest.fixture
def offline_adapter():
    """Адаптер без ключа: класифікація завжди у ML-only режимі"""
    from hemoscan.config import RemoteConfig
    from hemoscan.remote import GeminiAdapter
    return GeminiAdapter(RemoteConfig(api_key=None))


@pytest.fixture
def small_model_config():
    """Швидке навчання на вбудованому датасеті"""
    from hemoscan.config import RiskModelConfig
    return RiskModelConfig(epochs=15, batch_size=64)
