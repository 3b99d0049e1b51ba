#!/usr/bin/env python3
"""
HemoScan - Перевірка запущеного API

Запуск:
    1. Спочатку запусти сервер:
       python scripts/run_api.py

    2. В іншому терміналі:
       python scripts/smoke_api.py
       python scripts/smoke_api.py --url http://localhost:8080

Або з curl:
    curl http://localhost:8000/health
"""

import argparse
import sys
import uuid

import requests

BASE_URL = "http://localhost:8000"


def print_header(title):
    print("\n" + "=" * 60)
    print(f"{title}")
    print("=" * 60)


def print_result(success, message):
    icon = "OK  " if success else "FAIL"
    print(f"   [{icon}] {message}")


def check_health(base_url):
    """Перевірка 1: Health check"""
    print_header("CHECK 1: Health")

    r = requests.get(f"{base_url}/health", timeout=10)
    data = r.json()

    print_result(r.status_code == 200, f"Status: {r.status_code}")
    print_result(data.get("status") in ("ok", "training"), f"API status: {data.get('status')}")
    print(f"   Model trained: {data.get('model_trained')}")
    print(f"   Remote AI configured: {data.get('remote_configured')}")
    print(f"   Archive: {data.get('archive_backend')}")

    return r.status_code == 200


def check_predict(base_url):
    """Перевірка 2: Передбачення локальної моделі"""
    print_header("CHECK 2: Local Model Predict")

    payload = {"gender": "female", "hemoglobin": 9.1, "mcv": 71, "mch": 22, "mchc": 30}
    r = requests.post(f"{base_url}/api/model/predict", json=payload, timeout=120)
    data = r.json()

    print_result(r.status_code == 200, f"Status: {r.status_code}")
    print(f"   {data.get('label')} score={data.get('score'):.3f} band={data.get('risk_band')}")

    return r.status_code == 200


def check_screening_flow(base_url):
    """Перевірка 3: Два скринінги одного пацієнта → план відновлення"""
    print_header("CHECK 3: Screening + Recovery Path")

    patient_id = f"smoke-{uuid.uuid4().hex[:8]}"
    records = [
        {"name": "Smoke Test", "age": 40, "gender": "female",
         "hemoglobin": 9.4, "mcv": 72, "mch": 23, "mchc": 31},
        {"name": "Smoke Test", "age": 40, "gender": "female",
         "hemoglobin": 10.6, "mcv": 76, "mch": 25, "mchc": 32},
    ]

    ok = True
    for i, record in enumerate(records, 1):
        r = requests.post(
            f"{base_url}/api/screenings",
            json={"patient_id": patient_id, "record": record},
            timeout=180,
        )
        data = r.json()
        ok &= r.status_code == 200
        print_result(r.status_code == 200, f"Screening {i}: {r.status_code}")
        if r.status_code == 200:
            result = data["result"]
            print(f"   {result['mode']}: {result['classification']} "
                  f"({result['risk_level']}, {result['confidence_score']:.1%})")

    r = requests.get(f"{base_url}/api/patients/{patient_id}/recovery", timeout=10)
    data = r.json()
    print_result(r.status_code == 200 and data.get("total") == 1, f"Recovery paths: {data.get('total')}")
    if data.get("recovery_paths"):
        path = data["recovery_paths"][0]["path"]
        print(f"   Status: {path['current_status']}, trend: {path['hemoglobin_trend']}, "
              f"follow-up: {path['follow_up_date']}")

    return ok


def main():
    parser = argparse.ArgumentParser(description='HemoScan API smoke test')
    parser.add_argument('--url', default=BASE_URL, help=f'Base URL (default: {BASE_URL})')
    args = parser.parse_args()

    checks = [check_health, check_predict, check_screening_flow]
    results = []
    for check in checks:
        try:
            results.append(check(args.url))
        except requests.RequestException as e:
            print_result(False, f"Error: {e}")
            results.append(False)

    print_header(f"RESULT: {sum(results)}/{len(results)} passed")
    sys.exit(0 if all(results) else 1)


if __name__ == "__main__":
    main()
