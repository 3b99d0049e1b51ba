"""
HemoScan - Лінійна модель ризику анемії

LinearRiskModel володіє навченими вагами та параметрами стандартизації.

Життєвий цикл:
1. Створюється порожньою при старті процесу
2. Навчається рівно один раз (train ідемпотентний, потокобезпечний)
3. Після цього незмінна; predict лише читає стан

Якщо predict викликано до завершення навчання, він синхронно
запускає (або чекає) те саме єдине навчання.
"""

import logging
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import numpy as np
import torch

from hemoscan.config import RiskModelConfig
from hemoscan.dataset import DatasetLoader, TrainingSample, samples_to_arrays
from hemoscan.errors import DatasetLoadError, ModelInvariantError, ModelNotTrainedError
from hemoscan.schemas import LocalPrediction, LocalRiskBand, PatientRecord
from .trainer import RidgeTrainer, Standardizer, TrainingHistory


logger = logging.getLogger(__name__)


def band_risk(score: float, config: Optional[RiskModelConfig] = None) -> LocalRiskBand:
    """
    Рівень ризику локальної моделі.

    score < 0.3 → LOW; 0.3 ≤ score < 0.6 → MODERATE; score ≥ 0.6 → HIGH
    """
    config = config or RiskModelConfig()
    if score < config.low_threshold:
        return LocalRiskBand.LOW
    if score < config.high_threshold:
        return LocalRiskBand.MODERATE
    return LocalRiskBand.HIGH


def confidence_from_score(score: float) -> float:
    """Відстань від межі рішення, масштабована до [0, 1]"""
    return min(1.0, abs(score - 0.5) * 2)


@dataclass(frozen=True)
class TrainedState:
    """Незмінний результат єдиного навчання"""
    weights: tuple
    bias: float
    standardizer: Standardizer
    n_samples: int
    final_loss: Optional[float] = None
    final_accuracy: Optional[float] = None


class LinearRiskModel:
    """
    Бінарний класифікатор анемії над 5 стандартизованими ознаками.

    Приклад використання:
        model = LinearRiskModel()
        model.train()  # або model.start_background_training()

        prediction = model.predict(
            gender_code=0, hemoglobin=9.8, mcv=72, mch=23, mchc=30
        )
        print(prediction.score, prediction.confidence, prediction.risk_band)
    """

    def __init__(
        self,
        config: Optional[RiskModelConfig] = None,
        sample_source: Optional[Callable[[], Sequence[TrainingSample]]] = None
    ):
        """
        Args:
            config: Параметри моделі
            sample_source: Джерело прикладів. За замовчуванням - CSV з config.dataset_path
        """
        self.config = config or RiskModelConfig()
        self._sample_source = sample_source or DatasetLoader(self.config.dataset_path).load

        self._lock = threading.Lock()
        self._state: Optional[TrainedState] = None
        self._history: Optional[TrainingHistory] = None
        self._training_runs = 0

    # -------------------------------------------------------------------------
    # Стан
    # -------------------------------------------------------------------------

    @property
    def is_trained(self) -> bool:
        return self._state is not None

    @property
    def training_runs(self) -> int:
        """Скільки разів реально виконувалось навчання (очікується ≤ 1)"""
        return self._training_runs

    @property
    def state(self) -> TrainedState:
        if self._state is None:
            raise ModelNotTrainedError("Linear risk model has not been trained yet")
        return self._state

    @property
    def standardizer(self) -> Standardizer:
        return self.state.standardizer

    @property
    def history(self) -> Optional[TrainingHistory]:
        return self._history

    # -------------------------------------------------------------------------
    # Навчання
    # -------------------------------------------------------------------------

    def train(
        self,
        samples: Optional[Sequence[TrainingSample]] = None,
        verbose: bool = False
    ) -> TrainedState:
        """
        Навчити модель (ідемпотентно).

        Якщо модель вже навчена - повертає існуючий стан без перенавчання.
        Конкурентні виклики чекають на єдине навчання.

        Args:
            samples: Навчальні приклади. Якщо None - завантажуються з sample_source
            verbose: Progress bar по епохах

        Raises:
            DatasetLoadError: датасет недоступний або порожній
        """
        if self._state is not None:
            logger.debug("Model already trained")
            return self._state

        with self._lock:
            if self._state is not None:
                logger.debug("Model already trained")
                return self._state

            if samples is None:
                samples = self._sample_source()

            self._state = self._fit(list(samples), verbose=verbose)
            return self._state

    def _fit(self, samples: List[TrainingSample], verbose: bool) -> TrainedState:
        if not samples:
            raise DatasetLoadError("No training samples available")

        logger.info("Training ridge classifier on %d samples...", len(samples))
        self._training_runs += 1

        X, y = samples_to_arrays(samples)
        standardizer = Standardizer.fit(X, epsilon=self.config.epsilon)
        X_std = standardizer.transform(X)

        trainer = RidgeTrainer(self.config)
        history = trainer.train(X_std, y, verbose=verbose)
        weights, bias = trainer.export_weights()

        if not (np.all(np.isfinite(weights)) and np.isfinite(bias) and standardizer.is_finite()):
            logger.error("Training produced non-finite parameters: weights=%s bias=%s", weights, bias)
            raise ModelInvariantError("Training produced non-finite model parameters")

        self._history = history
        state = TrainedState(
            weights=tuple(float(w) for w in weights),
            bias=float(bias),
            standardizer=standardizer,
            n_samples=len(samples),
            final_loss=history.train_loss[-1] if history.train_loss else None,
            final_accuracy=history.train_acc[-1] if history.train_acc else None,
        )

        logger.info(
            "Ridge classifier trained: loss=%s acc=%s",
            f"{state.final_loss:.4f}" if state.final_loss is not None else "n/a",
            f"{state.final_accuracy:.4f}" if state.final_accuracy is not None else "n/a",
        )
        return state

    def start_background_training(self) -> threading.Thread:
        """
        Запустити навчання у фоновому потоці (старт процесу).

        Помилка навчання логується; наступний predict спробує навчити модель
        знову і отримає виняток напряму.
        """
        thread = threading.Thread(target=self._train_logged, name="risk-model-training", daemon=True)
        thread.start()
        return thread

    def _train_logged(self):
        try:
            self.train()
        except Exception:
            logger.exception("Background training of the risk model failed")

    # -------------------------------------------------------------------------
    # Інференс
    # -------------------------------------------------------------------------

    def score(self, gender_code: int, hemoglobin: float, mcv: float, mch: float, mchc: float) -> float:
        """Сира ймовірність анемії [0, 1]"""
        state = self.train()

        x = np.array([[gender_code, hemoglobin, mcv, mch, mchc]], dtype=np.float64)
        x_std = state.standardizer.transform(x)[0]

        z = float(np.dot(x_std, np.asarray(state.weights)) + state.bias)
        value = float(1.0 / (1.0 + np.exp(-z))) if z >= 0 else float(np.exp(z) / (1.0 + np.exp(z)))

        if not np.isfinite(value):
            logger.error("Non-finite risk score for input %s (z=%s)", x.tolist(), z)
            raise ModelInvariantError("Risk model produced a non-finite score")

        return value

    def predict(
        self,
        gender_code: int,
        hemoglobin: float,
        mcv: float,
        mch: float,
        mchc: float
    ) -> LocalPrediction:
        """
        Передбачення для одного пацієнта.

        Стандартизація використовує параметри з навчання (ніколи не перераховуються).
        """
        value = self.score(gender_code, hemoglobin, mcv, mch, mchc)
        prediction = self.interpret(value)

        logger.debug(
            "ML prediction: %s score=%.4f confidence=%.1f%% risk=%s",
            prediction.label.upper(), value, prediction.confidence * 100, prediction.risk_band.value
        )
        return prediction

    def predict_record(self, record: PatientRecord) -> LocalPrediction:
        return self.predict(record.gender_code, record.hemoglobin, record.mcv, record.mch, record.mchc)

    def interpret(self, score: float) -> LocalPrediction:
        """score → LocalPrediction (мітка, впевненість, рівень ризику)"""
        return LocalPrediction(
            score=score,
            is_anemic=score > self.config.decision_threshold,
            confidence=confidence_from_score(score),
            risk_band=band_risk(score, self.config),
        )

    # -------------------------------------------------------------------------
    # Збереження
    # -------------------------------------------------------------------------

    def save(self, path: str):
        """
        Зберегти навчений стан (.pt).

        Args:
            path: Шлях до файлу
        """
        state = self.state
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        checkpoint = {
            "weights": list(state.weights),
            "bias": state.bias,
            "mean": list(state.standardizer.mean),
            "std": list(state.standardizer.std),
            "n_samples": state.n_samples,
            "config": asdict(self.config),
        }
        torch.save(checkpoint, path)
        logger.info("Risk model saved to %s", path)

    @classmethod
    def load(cls, path: str) -> "LinearRiskModel":
        """Завантажити навчену модель. Повторний train() для неї - no-op."""
        checkpoint = torch.load(path, map_location="cpu")

        model = cls(config=RiskModelConfig(**checkpoint["config"]))
        model._state = TrainedState(
            weights=tuple(checkpoint["weights"]),
            bias=float(checkpoint["bias"]),
            standardizer=Standardizer(mean=tuple(checkpoint["mean"]), std=tuple(checkpoint["std"])),
            n_samples=int(checkpoint["n_samples"]),
        )
        logger.info("Risk model loaded from %s", path)
        return model

    def __repr__(self) -> str:
        status = f"trained on {self._state.n_samples} samples" if self._state else "untrained"
        return f"LinearRiskModel({status})"
