#!/usr/bin/env python3
"""
HemoScan - Навчання лінійної моделі ризику

Навчає ridge-класифікатор на CSV датасеті, друкує метрики
та зберігає checkpoint.

Запуск:
    python scripts/train_model.py
    python scripts/train_model.py --dataset data/my_dataset.csv --epochs 200
    python scripts/train_model.py --config hemoscan.yaml --output models/risk_model.pt
"""

import sys
import argparse
import logging
from pathlib import Path

# Додаємо корінь проекту до path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import numpy as np

from hemoscan.config import get_default_config, load_config
from hemoscan.dataset import DatasetLoader
from hemoscan.risk_model import LinearRiskModel


def main():
    parser = argparse.ArgumentParser(description='HemoScan - train linear risk model')
    parser.add_argument('--config', help='YAML конфігурація')
    parser.add_argument('--dataset', help='CSV датасет (Gender, Hemoglobin, MCH, MCHC, MCV, Result)')
    parser.add_argument('--epochs', type=int, help='Кількість епох')
    parser.add_argument('--output', default=str(project_root / "models" / "risk_model.pt"),
                        help='Куди зберегти checkpoint')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = load_config(args.config) if args.config else get_default_config()
    if args.dataset:
        config.risk_model.dataset_path = args.dataset
    if args.epochs:
        config.risk_model.epochs = args.epochs

    print("=" * 60)
    print("HemoScan - НАВЧАННЯ МОДЕЛІ РИЗИКУ")
    print("=" * 60)

    loader = DatasetLoader(config.risk_model.dataset_path)
    samples = loader.load()
    labels = np.array([s.label for s in samples])
    print(f"   Samples: {len(samples)} (anemic: {int(labels.sum())}, normal: {int((labels == 0).sum())})")
    print(f"   Skipped rows: {loader.skipped_rows}")

    model = LinearRiskModel(config.risk_model)
    model.train(samples, verbose=True)

    history = model.history
    if history and history.train_loss:
        print(f"\n   Final train loss: {history.train_loss[-1]:.4f}")
        print(f"   Final train acc:  {history.train_acc[-1]:.2%}")
    if history and history.val_loss:
        print(f"   Final val loss:   {history.val_loss[-1]:.4f}")
        print(f"   Final val acc:    {history.val_acc[-1]:.2%}")

    # Точність на всьому датасеті
    correct = 0
    bands = {}
    for sample in samples:
        prediction = model.predict(sample.gender_code, sample.hemoglobin, sample.mcv, sample.mch, sample.mchc)
        correct += int(prediction.is_anemic == bool(sample.label))
        bands[prediction.risk_band.value] = bands.get(prediction.risk_band.value, 0) + 1

    print(f"\n   Full-dataset accuracy: {correct / len(samples):.2%}")
    print("   Risk bands:")
    for band, count in sorted(bands.items()):
        print(f"      {band:<9} {count}")

    state = model.state
    print("\n   Weights (gender, Hb, MCV, MCH, MCHC):")
    print(f"      {np.round(state.weights, 4).tolist()}  bias={state.bias:.4f}")

    model.save(args.output)
    print(f"\n   Saved: {args.output}")


if __name__ == "__main__":
    main()
