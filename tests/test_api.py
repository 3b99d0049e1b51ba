"""
Тести для модуля api

Сервіси підмінені fake-залежностями (stub модель, fake Gemini,
архів у пам'яті), тому тести не потребують мережі та навчання.

Запуск: pytest tests/test_api.py -v
"""

from fastapi.testclient import TestClient

from conftest import REMOTE_OK, FakeGenaiClient, StubRiskModel


RECORD = {
    "name": "Alex Johnson",
    "age": 34,
    "gender": "female",
    "hemoglobin": 10.0,
    "mcv": 74,
    "mch": 24,
    "mchc": 31,
}


def _client(*remote_responses, api_key="AIza-test", score=0.8):
    """TestClient з fake-сервісами; без відповідей - Gemini не налаштовано"""
    from hemoscan.api import APIConfig, ServicesManager, create_app
    from hemoscan.archive import InMemoryArchive
    from hemoscan.config import RemoteConfig
    from hemoscan.pipeline import ScreeningService
    from hemoscan.remote import GeminiAdapter

    if remote_responses:
        remote = GeminiAdapter(
            RemoteConfig(api_key=api_key, max_retries=1),
            client=FakeGenaiClient(*remote_responses),
            sleep=lambda _: None,
        )
    else:
        remote = GeminiAdapter(RemoteConfig(api_key=None))

    service = ScreeningService(StubRiskModel(score=score), remote, InMemoryArchive())
    app = create_app(ServicesManager(service=service), APIConfig(train_on_startup=False))
    return TestClient(app)


def test_root_endpoint():
    """Тест кореневого endpoint"""
    with _client() as client:
        response = client.get("/")

    assert response.status_code == 200
    assert response.json()["name"] == "HemoScan API"

    print("✓ Root endpoint")


def test_health_endpoint():
    """Тест health check"""
    with _client() as client:
        data = client.get("/health").json()

    assert data["status"] == "ok"
    assert data["model_trained"] is True
    assert data["remote_configured"] is False
    assert data["archive_backend"] == "memory"

    print(f"✓ Health: {data['status']}")


def test_health_reports_training():
    """Поки модель навчається - status = training"""
    from hemoscan.api import ServicesManager
    from hemoscan.config import HemoScanConfig

    manager = ServicesManager(config=HemoScanConfig())
    assert manager.status == "training"
    assert not manager.is_trained


def test_screening_ml_only():
    """Скринінг без Gemini → ML-only результат, звіт збережено"""
    with _client() as client:
        response = client.post("/api/screenings", json={"patient_id": "p1", "record": RECORD})

    assert response.status_code == 200
    data = response.json()
    assert data["result"]["mode"] == "ml_only"
    assert data["result"]["risk_level"] == "High"
    assert data["result"]["classification"] == "Microcytic Anemia (Iron Deficiency Likely)"
    assert data["report_id"]
    assert data["recovery"] is None

    print(f"✓ ML-only screening: {data['result']['classification']}")


def test_screening_hybrid_then_recovery_and_history():
    """Два скринінги → план відновлення та історія"""
    with _client(REMOTE_OK, REMOTE_OK) as client:
        first = client.post("/api/screenings", json={"patient_id": "p1", "record": RECORD})
        second = client.post(
            "/api/screenings",
            json={"patient_id": "p1", "record": {**RECORD, "hemoglobin": 10.6}},
        )
        reports = client.get("/api/patients/p1/reports").json()
        recovery = client.get("/api/patients/p1/recovery").json()
        history = client.get("/api/patients/p1/history").json()

    assert first.status_code == 200 and second.status_code == 200
    assert second.json()["result"]["mode"] == "hybrid"
    assert abs(second.json()["result"]["confidence_score"] - 0.75) < 1e-9

    assert reports["total"] == 2
    assert reports["reports"][0]["report_id"] == second.json()["report_id"]

    assert recovery["total"] == 1
    path = recovery["recovery_paths"][0]["path"]
    assert path["current_status"] == "Improving"
    assert path["hemoglobin_trend"] == "Increasing"
    assert path["improvement_percentage"] == 6.0

    assert [p["hemoglobin"] for p in history["points"]] == [10.0, 10.6]

    print("✓ Hybrid screening + recovery path")


def test_screening_validation_error():
    """Нереалістичний Hb → 422"""
    with _client() as client:
        response = client.post(
            "/api/screenings",
            json={"patient_id": "p1", "record": {**RECORD, "hemoglobin": 55}},
        )

    assert response.status_code == 422


def test_model_predict():
    with _client(score=0.2) as client:
        response = client.post(
            "/api/model/predict",
            json={"gender": "M", "hemoglobin": 15.2, "mcv": 90, "mch": 30, "mchc": 34},
        )

    assert response.status_code == 200
    data = response.json()
    assert data["label"] == "Normal"
    assert data["risk_band"] == "LOW"
    assert abs(data["confidence"] - 0.6) < 1e-9


def test_extraction_without_key_is_503():
    """Без ключа Gemini розпізнавання звіту недоступне"""
    with _client() as client:
        response = client.post(
            "/api/extractions",
            files={"file": ("report.png", b"\x89PNG fake", "image/png")},
        )

    assert response.status_code == 503
    assert response.json()["kind"] == "missing_credentials"

    print("✓ Extraction without key → 503")


def test_extraction_success_and_unsupported_media():
    with _client({"hemoglobin": 9.9, "mcv": 70, "mch": 22, "mchc": 29.5, "age": 200}) as client:
        ok = client.post(
            "/api/extractions",
            files={"file": ("report.pdf", b"%PDF-1.4 fake", "application/pdf")},
        )
        bad = client.post(
            "/api/extractions",
            files={"file": ("report.gif", b"GIF89a", "image/gif")},
        )

    assert ok.status_code == 200
    data = ok.json()
    assert data["hemoglobin"] == 9.9
    assert data["age"] == 149
    assert data["name"] == "Unknown Patient"

    assert bad.status_code == 415
    assert bad.json()["kind"] == "unsupported_media"
    assert set(bad.json()) == {"error", "kind", "detail"}


def test_default_services_screening(small_model_config):
    """ServicesManager з конфігурації за замовчуванням проводить два скринінги"""
    from hemoscan.api import APIConfig, ServicesManager, create_app
    from hemoscan.config import HemoScanConfig

    services = ServicesManager(config=HemoScanConfig(risk_model=small_model_config))
    app = create_app(services, APIConfig(train_on_startup=False))

    with TestClient(app) as client:
        first = client.post("/api/screenings", json={"patient_id": "p9", "record": RECORD})
        second = client.post(
            "/api/screenings",
            json={"patient_id": "p9", "record": {**RECORD, "hemoglobin": 11.0}},
        )
        reports = client.get("/api/patients/p9/reports").json()

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["result"]["mode"] == "ml_only"
    assert second.json()["recovery"]["report_id"] == second.json()["report_id"]
    assert reports["total"] == 2

    print("✓ Default services screening")


def test_warm_up_failure_marks_degraded():
    """Будь-який збій навчання у фоні → status "degraded" з текстом помилки"""
    from hemoscan.api import ServicesManager
    from hemoscan.archive import InMemoryArchive
    from hemoscan.config import RemoteConfig
    from hemoscan.pipeline import ScreeningService
    from hemoscan.remote import GeminiAdapter

    class BrokenModel(StubRiskModel):
        def train(self, *args, **kwargs):
            raise RuntimeError("CUDA out of memory")

    service = ScreeningService(BrokenModel(), GeminiAdapter(RemoteConfig(api_key=None)), InMemoryArchive())
    manager = ServicesManager(service=service)
    manager.start(background=False)

    assert manager.status == "degraded"
    assert "CUDA out of memory" in manager.error
