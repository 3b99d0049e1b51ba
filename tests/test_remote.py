"""
Тести для модуля remote

Gemini замінено FakeGenaiClient, тому мережа не потрібна.

Запуск: pytest tests/test_remote.py -v
"""

from datetime import date, datetime

import httpx
import pytest

from conftest import REMOTE_OK, FakeAPIError, FakeGenaiClient, make_record


def _adapter(client, **config):
    from hemoscan.config import RemoteConfig
    from hemoscan.remote import GeminiAdapter

    params = dict(api_key="AIza-test", max_retries=3, retry_base_delay=0.0)
    params.update(config)
    return GeminiAdapter(RemoteConfig(**params), client=client, sleep=lambda _: None)


def _local(score=0.8):
    from hemoscan.risk_model import LinearRiskModel
    return LinearRiskModel().interpret(score)


# =============================================================================
# Класифікація
# =============================================================================

def test_classify_success():
    """Валідна відповідь → RemoteSuccess"""
    from hemoscan.remote import RemoteSuccess
    from hemoscan.schemas import RiskLevel

    client = FakeGenaiClient(REMOTE_OK)
    outcome = _adapter(client).classify_risk(make_record(), _local())

    assert isinstance(outcome, RemoteSuccess)
    assert outcome.classification.classification == "Iron Deficiency Anemia"
    assert outcome.classification.confidence_score == 0.9
    assert outcome.classification.risk_level is RiskLevel.HIGH

    call = client.calls[0]
    assert call["model"] == "gemini-2.5-flash"
    assert "ANEMIC" in call["contents"]
    assert "60.0%" in call["contents"]
    assert call["config"].response_mime_type == "application/json"

    print("✓ Remote classification accepted")


def test_classify_without_key_is_not_attempted():
    """Без ключа → MISSING_CREDENTIALS, без виклику сервісу"""
    from hemoscan.config import RemoteConfig
    from hemoscan.errors import RemoteErrorKind
    from hemoscan.remote import GeminiAdapter, RemoteFailure

    adapter = GeminiAdapter(RemoteConfig(api_key="your_api_key_here"))
    outcome = adapter.classify_risk(make_record(), _local())

    assert isinstance(outcome, RemoteFailure)
    assert outcome.kind is RemoteErrorKind.MISSING_CREDENTIALS

    print("✓ Missing key → RemoteFailure")


@pytest.mark.parametrize("payload", [
    {"classification": "Iron Deficiency Anemia", "riskLevel": "High", "analysisSummary": "x"},
    {**REMOTE_OK, "confidenceScore": 1.7},
    {**REMOTE_OK, "riskLevel": "Severe"},
    {**REMOTE_OK, "classification": "   "},
    "not json at all",
    "[1, 2, 3]",
    "",
])
def test_classify_malformed_response(payload):
    """Відповідь поза схемою → MALFORMED_RESPONSE (не виняток)"""
    from hemoscan.errors import RemoteErrorKind
    from hemoscan.remote import RemoteFailure

    outcome = _adapter(FakeGenaiClient(payload)).classify_risk(make_record(), _local())

    assert isinstance(outcome, RemoteFailure)
    assert outcome.kind is RemoteErrorKind.MALFORMED_RESPONSE


def test_classify_case_insensitive_risk_level():
    from hemoscan.remote import RemoteSuccess
    from hemoscan.schemas import RiskLevel

    outcome = _adapter(FakeGenaiClient({**REMOTE_OK, "riskLevel": "critical"})).classify_risk(
        make_record(), _local()
    )

    assert isinstance(outcome, RemoteSuccess)
    assert outcome.classification.risk_level is RiskLevel.CRITICAL


def test_retry_on_overload_then_success():
    """503 повторюється з backoff"""
    from hemoscan.remote import RemoteSuccess

    delays = []
    client = FakeGenaiClient(FakeAPIError(503, "overloaded"), FakeAPIError(429, "quota"), REMOTE_OK)
    adapter = _adapter(client)
    adapter._sleep = delays.append

    outcome = adapter.classify_risk(make_record(), _local())

    assert isinstance(outcome, RemoteSuccess)
    assert len(client.calls) == 3
    assert len(delays) == 2

    print(f"✓ Retried {len(delays)} times")


def test_retries_exhausted_is_transport_failure():
    from hemoscan.errors import RemoteErrorKind
    from hemoscan.remote import RemoteFailure

    client = FakeGenaiClient(*[FakeAPIError(503, "overloaded")] * 3)
    outcome = _adapter(client).classify_risk(make_record(), _local())

    assert isinstance(outcome, RemoteFailure)
    assert outcome.kind is RemoteErrorKind.TRANSPORT
    assert len(client.calls) == 3


@pytest.mark.parametrize("error, kind", [
    (FakeAPIError(400, "API key not valid. Please pass a valid API key."), "INVALID_CREDENTIALS"),
    (FakeAPIError(403, "Permission denied"), "INVALID_CREDENTIALS"),
    (FakeAPIError(500, "Internal"), "TRANSPORT"),
    (httpx.ConnectError("connection refused"), "TRANSPORT"),
    (RuntimeError("unexpected SDK failure"), "TRANSPORT"),
])
def test_error_classification(error, kind):
    """Транспортні помилки не виходять за межі адаптера"""
    from hemoscan.remote import RemoteFailure

    outcome = _adapter(FakeGenaiClient(error)).classify_risk(make_record(), _local())

    assert isinstance(outcome, RemoteFailure)
    assert outcome.kind.name == kind


# =============================================================================
# Санітизація
# =============================================================================

def test_sanitize_clamps_and_defaults():
    """MCHC 50 → 38, MCHC відсутній → 33, вік 200 → 149"""
    from hemoscan.remote import sanitize_extraction

    today = date(2024, 1, 1)

    clamped = sanitize_extraction({"mchc": 50, "age": 200, "hemoglobin": 45, "mcv": -3}, today=today)
    assert clamped.mchc == 38.0
    assert clamped.age == 149
    assert clamped.hemoglobin == 30.0
    assert clamped.mcv == 0.0

    defaults = sanitize_extraction({"mchc": None}, today=today)
    assert defaults.mchc == 33.0
    assert defaults.age == 30
    assert defaults.hemoglobin == 12.0
    assert defaults.mcv == 90.0
    assert defaults.mch == 30.0
    assert defaults.name == "Unknown Patient"
    assert defaults.gender == "M"
    assert defaults.test_date == today
    assert set(defaults.defaulted_fields) == {"age", "hemoglobin", "mcv", "mch", "mchc"}

    low = sanitize_extraction({"mchc": 20}, today=today)
    assert low.mchc == 28.0

    print("✓ Sanitization clamps and defaults")


def test_sanitize_gender_and_date():
    from hemoscan.remote import sanitize_extraction

    today = date(2024, 1, 1)

    assert sanitize_extraction({"gender": "female"}, today=today).gender == "F"
    assert sanitize_extraction({"gender": "Male"}, today=today).gender == "M"
    assert sanitize_extraction({"gender": "other"}, today=today).gender == "O"
    assert sanitize_extraction({"testDate": "2023-11-05T10:00:00"}, today=today).test_date == date(2023, 11, 5)
    assert sanitize_extraction({"testDate": "yesterday"}, today=today).test_date == today


# =============================================================================
# Витягування зі звіту
# =============================================================================

def test_extract_report_success():
    """Фото звіту → санітизовані значення"""
    client = FakeGenaiClient({
        "hemoglobin": 10.2, "mcv": 71.5, "mch": 23.1, "mchc": 52,
        "gender": "Female", "age": 41, "name": "Maria Lopez", "testDate": "2024-03-02",
    })
    extracted = _adapter(client).extract_report(b"\x89PNG fake", "image/png")

    assert extracted.hemoglobin == 10.2
    assert extracted.mchc == 38.0
    assert extracted.gender == "F"
    assert extracted.name == "Maria Lopez"
    assert extracted.test_date == date(2024, 3, 2)
    assert extracted.defaulted_fields == []

    record = extracted.to_patient_record()
    assert record.gender_code == 0
    assert record.hemoglobin == 10.2
    assert record.observed_at == datetime(2024, 3, 2)

    print("✓ Report extracted")


def test_extract_without_key_fails():
    """Без ключа витягування неможливе (немає локальної альтернативи)"""
    from hemoscan.config import RemoteConfig
    from hemoscan.errors import ExtractionError, RemoteErrorKind
    from hemoscan.remote import GeminiAdapter

    with pytest.raises(ExtractionError) as exc_info:
        GeminiAdapter(RemoteConfig(api_key=None)).extract_report(b"data", "image/jpeg")

    assert exc_info.value.kind is RemoteErrorKind.MISSING_CREDENTIALS
    assert "not configured" in exc_info.value.message


def test_extract_unsupported_media():
    from hemoscan.errors import ExtractionError, RemoteErrorKind

    client = FakeGenaiClient()
    with pytest.raises(ExtractionError) as exc_info:
        _adapter(client).extract_report(b"GIF89a", "image/gif")

    assert exc_info.value.kind is RemoteErrorKind.UNSUPPORTED_MEDIA
    assert client.calls == []


def test_extract_remote_failure_is_fatal():
    """Збій сервісу під час витягування → ExtractionError, без вигаданих значень"""
    from hemoscan.errors import ExtractionError, RemoteErrorKind

    with pytest.raises(ExtractionError) as exc_info:
        _adapter(FakeGenaiClient(FakeAPIError(500, "boom"))).extract_report(b"%PDF-1.4", "application/pdf")
    assert exc_info.value.kind is RemoteErrorKind.TRANSPORT

    with pytest.raises(ExtractionError) as exc_info:
        _adapter(FakeGenaiClient({"name": "No Values"})).extract_report(b"%PDF-1.4", "application/pdf")
    assert exc_info.value.kind is RemoteErrorKind.MALFORMED_RESPONSE

    with pytest.raises(ExtractionError) as exc_info:
        _adapter(FakeGenaiClient(FakeAPIError(401, "bad key"))).extract_report(b"img", "image/webp")
    assert exc_info.value.kind is RemoteErrorKind.INVALID_CREDENTIALS
    assert "Invalid Gemini API key" in exc_info.value.message
