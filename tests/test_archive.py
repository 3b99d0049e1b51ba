"""
Тести для модуля archive (in-memory та SQLite)

Запуск: pytest tests/test_archive.py -v
"""

import threading

import pytest

from conftest import make_record, make_result


@pytest.fixture(params=["memory", "sqlite"])
def any_archive(request, tmp_path):
    from hemoscan.archive import create_archive
    from hemoscan.config import ArchiveBackend, ArchiveConfig

    config = ArchiveConfig(backend=ArchiveBackend(request.param), sqlite_path=str(tmp_path / "reports.db"))
    archive = create_archive(config)
    yield archive
    archive.close()


def test_round_trip_is_exact(any_archive):
    """Збережені значення повертаються без втрат"""
    record = make_record(hemoglobin=10.123456789012345, mcv=78.3, mch=0.1 + 0.2, mchc=31.7)
    result = make_result(confidence=0.7333333333333333)

    saved = any_archive.save_report("p1", record, result)
    loaded = any_archive.list_reports_for_patient("p1")[0]

    assert loaded.report_id == saved.report_id
    assert loaded.record == record
    assert loaded.record.mch == 0.1 + 0.2
    assert loaded.result.confidence_score == 0.7333333333333333
    assert loaded.result == result

    print(f"✓ Round trip ({any_archive.backend_name})")


def test_newest_first_and_patient_isolation(any_archive):
    ids = [any_archive.save_report("p1", make_record(hemoglobin=9 + i), make_result()).report_id for i in range(3)]
    any_archive.save_report("p2", make_record(), make_result())

    reports = any_archive.list_reports_for_patient("p1")

    assert [r.report_id for r in reports] == list(reversed(ids))
    assert any_archive.latest_report("p1").report_id == ids[-1]
    assert len(any_archive.list_reports_for_patient("p2")) == 1
    assert any_archive.list_reports_for_patient("p3") == []
    assert any_archive.latest_report("p3") is None


def test_recovery_path_requires_report(any_archive):
    from datetime import date

    from hemoscan.errors import ReportNotFoundError
    from hemoscan.schemas import RecoveryPath, RecoveryStatus

    path = RecoveryPath(current_status=RecoveryStatus.STABLE, follow_up_date=date(2024, 2, 1))

    with pytest.raises(ReportNotFoundError):
        any_archive.save_recovery_path("p1", "missing-report", path)

    report = any_archive.save_report("p1", make_record(), make_result())
    saved = any_archive.save_recovery_path("p1", report.report_id, path)

    # звіт іншого пацієнта не підходить
    with pytest.raises(ReportNotFoundError):
        any_archive.save_recovery_path("p2", report.report_id, path)

    loaded = any_archive.list_recovery_paths("p1")
    assert len(loaded) == 1
    assert loaded[0].recovery_id == saved.recovery_id
    assert loaded[0].path == path


def test_concurrent_writes(any_archive):
    """Паралельні записи не губляться"""
    def writer(i):
        any_archive.save_report("p1", make_record(hemoglobin=8 + i * 0.1), make_result())

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(any_archive.list_reports_for_patient("p1")) == 20


def test_sqlite_persists_between_instances(tmp_path):
    from hemoscan.archive import SQLiteArchive

    path = tmp_path / "nested" / "reports.db"
    first = SQLiteArchive(str(path))
    saved = first.save_report("p1", make_record(), make_result())
    first.close()

    second = SQLiteArchive(str(path))
    assert second.latest_report("p1").report_id == saved.report_id
    second.close()
