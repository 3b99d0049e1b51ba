"""
HemoScan - Модуль локальної моделі ризику

Ridge-класифікатор анемії (L2-регуляризована логістична регресія, PyTorch).

Компоненти:
- RidgeClassifierNet: Архітектура (nn.Linear + sigmoid)
- RidgeTrainer: Навчання (Adam, BCE + L2, mini-batch)
- Standardizer: Параметри стандартизації навчального набору
- LinearRiskModel: Потокобезпечна модель "навчити один раз → predict"

Приклад використання:
    from hemoscan.risk_model import LinearRiskModel

    # === НАВЧАННЯ (один раз на процес) ===
    model = LinearRiskModel()
    model.start_background_training()

    # === ІНФЕРЕНС ===
    prediction = model.predict(gender_code=1, hemoglobin=10.4, mcv=74, mch=24, mchc=31)

    print(f"Anemic: {prediction.is_anemic}")
    print(f"Confidence: {prediction.confidence:.2%}")
    print(f"Risk: {prediction.risk_band.value}")
"""

from .network import RidgeClassifierNet
from .trainer import RidgeTrainer, Standardizer, TrainingHistory
from .model import LinearRiskModel, TrainedState, band_risk, confidence_from_score


__all__ = [
    # Network
    "RidgeClassifierNet",

    # Trainer
    "RidgeTrainer",
    "Standardizer",
    "TrainingHistory",

    # Model
    "LinearRiskModel",
    "TrainedState",
    "band_risk",
    "confidence_from_score",
]
