"""
HemoScan - Модуль архіву звітів

Компоненти:
- ReportArchive: Абстрактний інтерфейс (save/list звітів і планів)
- InMemoryArchive: Реалізація у пам'яті (за замовчуванням, тести)
- SQLiteArchive: Реалізація у файлі SQLite
- create_archive: Фабрика з ArchiveConfig

Приклад використання:
    from hemoscan.archive import create_archive
    from hemoscan.config import ArchiveConfig

    archive = create_archive(ArchiveConfig())
    saved = archive.save_report("patient-1", record, result)
    reports = archive.list_reports_for_patient("patient-1")  # найновіший першим
"""

from typing import Optional

from hemoscan.config import ArchiveBackend, ArchiveConfig

from .base import ReportArchive
from .memory import InMemoryArchive
from .sqlite import SQLiteArchive


def create_archive(config: Optional[ArchiveConfig] = None) -> ReportArchive:
    """Створити архів за конфігурацією"""
    config = config or ArchiveConfig()
    if config.backend == ArchiveBackend.SQLITE:
        return SQLiteArchive(config.sqlite_path)
    return InMemoryArchive()


__all__ = [
    "ReportArchive",
    "InMemoryArchive",
    "SQLiteArchive",
    "create_archive",
]
