"""
HemoScan - Завантаження датасету

Читає табличний датасет анемії (CSV) та повертає список TrainingSample.

Очікувані колонки:
    Gender, Hemoglobin, MCV, MCH, MCHC, Result

Gender: 0 = female, 1 = male (також приймаються "F"/"M"/"Female"/"Male")
Result: 0 = normal, 1 = anemic

Рядки без Gender або Hemoglobin пропускаються (вважаються пошкодженими),
так само як рядки з нечисловими значеннями інших ознак.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from hemoscan.config import DEFAULT_DATASET_PATH
from hemoscan.errors import DatasetLoadError
from hemoscan.schemas import Gender


logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["Gender", "Hemoglobin", "MCV", "MCH", "MCHC", "Result"]
FEATURE_NAMES = ["gender", "hemoglobin", "mcv", "mch", "mchc"]


@dataclass(frozen=True)
class TrainingSample:
    """Один навчальний приклад"""
    gender_code: int
    hemoglobin: float
    mcv: float
    mch: float
    mchc: float
    label: int  # 1 = anemic, 0 = normal

    @property
    def features(self) -> List[float]:
        return [float(self.gender_code), self.hemoglobin, self.mcv, self.mch, self.mchc]


def _gender_code(value) -> Optional[int]:
    # Змішана колонка ("1", "F") читається pandas як рядки
    number = pd.to_numeric(value, errors="coerce")
    if not pd.isna(number):
        if number in (0, 1):
            return int(number)
        return None
    try:
        return Gender.parse(value).code
    except ValueError:
        return None


class DatasetLoader:
    """
    Завантажувач датасету анемії.

    Приклад використання:
        loader = DatasetLoader("hemoscan/data/anemia_dataset.csv")
        samples = loader.load()

        print(f"Прикладів: {len(samples)}")
        X, y = samples_to_arrays(samples)
    """

    def __init__(self, path: Optional[str] = None):
        """
        Args:
            path: Шлях до CSV файлу. Якщо None, використовує датасет з пакету.
        """
        self.path = Path(path or DEFAULT_DATASET_PATH)
        self.skipped_rows = 0

    def load(self) -> List[TrainingSample]:
        """
        Завантажити та провалідувати приклади.

        Raises:
            DatasetLoadError: файл відсутній, не читається або немає потрібних колонок
        """
        if not self.path.exists():
            raise DatasetLoadError(f"Dataset file not found: {self.path}")

        try:
            df = pd.read_csv(self.path)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DatasetLoadError(f"Failed to read dataset {self.path}: {e}") from e

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise DatasetLoadError(f"Dataset {self.path} is missing columns: {missing}")

        samples = []
        self.skipped_rows = 0

        for row in df[REQUIRED_COLUMNS].itertuples(index=False):
            sample = self._parse_row(row)
            if sample is None:
                self.skipped_rows += 1
                continue
            samples.append(sample)

        if self.skipped_rows:
            logger.warning("Skipped %d malformed rows in %s", self.skipped_rows, self.path)
        logger.info("Loaded %d samples from %s", len(samples), self.path.name)

        return samples

    def _parse_row(self, row) -> Optional[TrainingSample]:
        gender, hemoglobin, mcv, mch, mchc, result = row

        if pd.isna(gender) or pd.isna(hemoglobin):
            return None

        code = _gender_code(gender)
        if code is None:
            return None

        values = pd.to_numeric(pd.Series([hemoglobin, mcv, mch, mchc, result]), errors="coerce")
        if values.isna().any():
            return None

        hb, mcv_v, mch_v, mchc_v, label = values.tolist()
        if label not in (0.0, 1.0):
            return None

        return TrainingSample(
            gender_code=code,
            hemoglobin=float(hb),
            mcv=float(mcv_v),
            mch=float(mch_v),
            mchc=float(mchc_v),
            label=int(label),
        )


def load_dataset(path: Optional[str] = None) -> List[TrainingSample]:
    """Коротка форма: DatasetLoader(path).load()"""
    return DatasetLoader(path).load()


def samples_to_arrays(samples: Sequence[TrainingSample]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Перетворити приклади на матрицю ознак та вектор міток.

    Returns:
        X shape (N, 5) float32, y shape (N,) float32
    """
    X = np.array([s.features for s in samples], dtype=np.float32).reshape(-1, len(FEATURE_NAMES))
    y = np.array([s.label for s in samples], dtype=np.float32)
    return X, y
