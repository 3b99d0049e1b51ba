"""
HemoScan - Навчання лінійної моделі ризику

RidgeTrainer навчає RidgeClassifierNet на стандартизованих ознаках:
- Adam optimizer
- Binary cross-entropy + L2 штраф на ваги
- Mini-batch (batch_size=32), фіксована кількість епох (100)
- Валідаційна частка (20%) тільки для моніторингу
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import torch
import torch.nn as nn
import torch.optim as optim
from torch.utils.data import DataLoader, TensorDataset
from tqdm import tqdm

from hemoscan.config import RiskModelConfig
from .network import RidgeClassifierNet


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Standardizer:
    """
    Параметри стандартизації, пораховані на навчальному наборі.

    std вже містить epsilon, тому transform ніколи не ділить на нуль.
    Параметри незмінні і використовуються для кожного predict.
    """
    mean: Tuple[float, ...]
    std: Tuple[float, ...]

    @classmethod
    def fit(cls, X: np.ndarray, epsilon: float = 1e-7) -> "Standardizer":
        """Порахувати mean та std (population) по кожній ознаці"""
        X = np.asarray(X, dtype=np.float64)
        mean = X.mean(axis=0)
        std = np.sqrt(X.var(axis=0)) + epsilon
        return cls(mean=tuple(float(v) for v in mean), std=tuple(float(v) for v in std))

    def transform(self, X: np.ndarray) -> np.ndarray:
        X = np.asarray(X, dtype=np.float64)
        return (X - np.asarray(self.mean)) / np.asarray(self.std)

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.mean)) and np.all(np.isfinite(self.std)))


@dataclass
class TrainingHistory:
    """Історія навчання по епохах"""
    train_loss: List[float] = field(default_factory=list)
    train_acc: List[float] = field(default_factory=list)
    val_loss: List[float] = field(default_factory=list)
    val_acc: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[float]]:
        return {
            "train_loss": self.train_loss,
            "train_acc": self.train_acc,
            "val_loss": self.val_loss,
            "val_acc": self.val_acc,
        }


class RidgeTrainer:
    """
    Trainer для RidgeClassifierNet.

    Приклад використання:
        X_std = standardizer.transform(X)

        trainer = RidgeTrainer(RiskModelConfig(epochs=100))
        history = trainer.train(X_std, y)

        weights, bias = trainer.export_weights()
    """

    def __init__(self, config: Optional[RiskModelConfig] = None):
        self.config = config or RiskModelConfig()
        self.device = torch.device("cpu")

        torch.manual_seed(self.config.seed)
        self.model = RidgeClassifierNet(n_features=self.config.n_features).to(self.device)

        self.optimizer = None
        self.criterion = None

    def _setup_training(self):
        """Налаштувати optimizer та criterion"""
        self.optimizer = optim.Adam(self.model.parameters(), lr=self.config.learning_rate)
        self.criterion = nn.BCEWithLogitsLoss()

    def _create_dataloaders(
        self,
        X: np.ndarray,
        y: np.ndarray
    ) -> Tuple[DataLoader, Optional[DataLoader]]:
        """Створити train/val dataloaders (перемішування з фіксованим seed)"""
        n_samples = len(X)
        rng = np.random.default_rng(self.config.seed)
        indices = rng.permutation(n_samples)

        n_val = int(n_samples * self.config.validation_split)
        # На дуже малих наборах валідацію пропускаємо
        if n_samples - n_val < 1:
            n_val = 0

        val_idx = torch.as_tensor(indices[:n_val], dtype=torch.long)
        train_idx = torch.as_tensor(indices[n_val:], dtype=torch.long)

        X_t = torch.as_tensor(X, dtype=torch.float32)
        y_t = torch.as_tensor(y, dtype=torch.float32).reshape(-1, 1)

        generator = torch.Generator().manual_seed(self.config.seed)
        train_loader = DataLoader(
            TensorDataset(X_t[train_idx], y_t[train_idx]),
            batch_size=self.config.batch_size,
            shuffle=True,
            generator=generator,
            num_workers=0
        )

        val_loader = None
        if n_val > 0:
            val_loader = DataLoader(
                TensorDataset(X_t[val_idx], y_t[val_idx]),
                batch_size=self.config.batch_size,
                shuffle=False,
                num_workers=0
            )

        return train_loader, val_loader

    def train(
        self,
        X_std: np.ndarray,
        y: np.ndarray,
        verbose: bool = False
    ) -> TrainingHistory:
        """
        Навчити модель.

        Args:
            X_std: Стандартизовані ознаки (N, 5)
            y: Мітки (N,) зі значеннями 0/1
            verbose: Показувати progress bar

        Returns:
            TrainingHistory
        """
        self._setup_training()
        train_loader, val_loader = self._create_dataloaders(X_std, y)

        history = TrainingHistory()

        epochs = tqdm(range(self.config.epochs), desc="Training", disable=not verbose)
        for epoch in epochs:
            train_loss, train_acc = self._train_epoch(train_loader)
            history.train_loss.append(train_loss)
            history.train_acc.append(train_acc)

            if val_loader is not None:
                val_loss, val_acc = self._validate(val_loader)
                history.val_loss.append(val_loss)
                history.val_acc.append(val_acc)

            if epoch % self.config.log_every == 0:
                logger.info(
                    "Epoch %d: loss=%.4f, acc=%.4f", epoch, train_loss, train_acc
                )

        return history

    def _loss(self, logits: torch.Tensor, targets: torch.Tensor) -> torch.Tensor:
        return self.criterion(logits, targets) + self.config.l2 * self.model.l2_penalty()

    def _train_epoch(self, loader: DataLoader) -> Tuple[float, float]:
        """Одна епоха навчання"""
        self.model.train()
        total_loss = 0.0
        correct = 0
        total = 0

        for features, targets in loader:
            features = features.to(self.device)
            targets = targets.to(self.device)

            self.optimizer.zero_grad()

            logits = self.model(features)
            loss = self._loss(logits, targets)

            loss.backward()
            self.optimizer.step()

            total_loss += loss.item() * features.size(0)
            predicted = (logits > 0).float()
            correct += predicted.eq(targets).sum().item()
            total += features.size(0)

        return total_loss / total, correct / total

    def _validate(self, loader: DataLoader) -> Tuple[float, float]:
        """Валідація"""
        self.model.eval()
        total_loss = 0.0
        correct = 0
        total = 0

        with torch.no_grad():
            for features, targets in loader:
                logits = self.model(features.to(self.device))
                targets = targets.to(self.device)
                loss = self._loss(logits, targets)

                total_loss += loss.item() * features.size(0)
                correct += ((logits > 0).float()).eq(targets).sum().item()
                total += features.size(0)

        return total_loss / total, correct / total

    def export_weights(self) -> Tuple[np.ndarray, float]:
        """
        Забрати навчені параметри як numpy.

        Returns:
            (weights shape (n_features,), bias)
        """
        with torch.no_grad():
            weights = self.model.linear.weight.detach().cpu().numpy().reshape(-1).astype(np.float64)
            bias = float(self.model.linear.bias.detach().cpu().item())
        return weights, bias

    def __repr__(self) -> str:
        return f"RidgeTrainer(model={self.model}, epochs={self.config.epochs})"
