"""
Тести для модуля dataset

Запуск: pytest tests/test_dataset.py -v
"""

import pytest


CSV_HEADER = "Gender,Hemoglobin,MCH,MCHC,MCV,Result\n"


def test_bundled_dataset_loads():
    """Тест завантаження вбудованого датасету"""
    from hemoscan.dataset import DatasetLoader, samples_to_arrays

    loader = DatasetLoader()
    samples = loader.load()

    assert len(samples) > 100
    labels = {s.label for s in samples}
    assert labels == {0, 1}

    X, y = samples_to_arrays(samples)
    assert X.shape == (len(samples), 5)
    assert y.shape == (len(samples),)

    print(f"✓ Loaded {len(samples)} samples, skipped {loader.skipped_rows}")


def test_malformed_rows_skipped(tmp_path):
    """Рядки без Gender/Hemoglobin або з нечисловими значеннями пропускаються"""
    from hemoscan.dataset import DatasetLoader

    path = tmp_path / "anemia.csv"
    path.write_text(
        CSV_HEADER
        + "1,14.2,29.0,33.1,88.0,0\n"
        + ",11.0,25.0,31.0,75.0,1\n"      # немає Gender
        + "0,,25.0,31.0,75.0,1\n"         # немає Hemoglobin
        + "F,10.1,22.0,30.0,70.0,1\n"     # літерний Gender
        + "0,abc,25.0,31.0,75.0,1\n"      # нечисловий Hb
        + "1,13.0,28.0,32.0,85.0,7\n",    # мітка поза {0, 1}
        encoding="utf-8",
    )

    loader = DatasetLoader(str(path))
    samples = loader.load()

    assert len(samples) == 2
    assert loader.skipped_rows == 4
    assert samples[1].gender_code == 0
    assert samples[1].hemoglobin == 10.1

    print("✓ Malformed rows skipped")


def test_missing_file_is_fatal(tmp_path):
    """Відсутній файл → DatasetLoadError"""
    from hemoscan.dataset import DatasetLoader
    from hemoscan.errors import DatasetLoadError

    with pytest.raises(DatasetLoadError):
        DatasetLoader(str(tmp_path / "missing.csv")).load()

    print("✓ Missing file raises DatasetLoadError")


def test_missing_columns_is_fatal(tmp_path):
    """Немає колонки Result → DatasetLoadError"""
    from hemoscan.dataset import DatasetLoader
    from hemoscan.errors import DatasetLoadError

    path = tmp_path / "bad.csv"
    path.write_text("Gender,Hemoglobin,MCH,MCHC,MCV\n1,14,29,33,88\n", encoding="utf-8")

    with pytest.raises(DatasetLoadError):
        DatasetLoader(str(path)).load()

    print("✓ Missing columns raise DatasetLoadError")
