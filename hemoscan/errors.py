"""
HemoScan - Ієрархія винятків

Всі помилки ядра наслідуються від HemoScanError, щоб API та скрипти
могли перехоплювати їх одним except.

Таксономія:
- DatasetLoadError: датасет недоступний - навчання неможливе
- ModelNotTrainedError / ModelInvariantError: стан локальної моделі
- RemoteServiceError / ExtractionError: віддалений AI сервіс
- ArchiveError / ReportNotFoundError: архів звітів
"""

from enum import Enum


class HemoScanError(Exception):
    """Базова помилка HemoScan"""


class DatasetLoadError(HemoScanError):
    """Датасет не вдалося завантажити (файл відсутній, немає колонок)"""


class ModelNotTrainedError(HemoScanError):
    """Звернення до параметрів моделі до завершення навчання"""


class ModelInvariantError(HemoScanError):
    """Локальна математика моделі дала нескінченні/NaN значення"""


class RemoteErrorKind(str, Enum):
    """Класифікація збоїв віддаленого сервісу"""
    MISSING_CREDENTIALS = "missing_credentials"
    INVALID_CREDENTIALS = "invalid_credentials"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT = "transport"
    UNSUPPORTED_MEDIA = "unsupported_media"


class RemoteServiceError(HemoScanError):
    """
    Збій виклику віддаленого AI сервісу.

    Attributes:
        kind: Категорія збою (RemoteErrorKind)
    """

    def __init__(self, kind: RemoteErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class ExtractionError(RemoteServiceError):
    """Не вдалося витягти значення з лабораторного звіту"""


class ArchiveError(HemoScanError):
    """Помилка читання/запису архіву звітів"""


class ReportNotFoundError(ArchiveError):
    """Немає збереженого звіту, до якого можна прив'язати план відновлення"""
