"""
HemoScan - Архітектура лінійної моделі ризику

Ridge-класифікатор, реалізований як L2-регуляризована логістична регресія:
- Input: 5 стандартизованих ознак (gender, Hb, MCV, MCH, MCHC)
- Output: логіт анемії (sigmoid → ймовірність)

L2 штраф накладається тільки на ваги (kernel), не на bias.
"""

import torch
import torch.nn as nn


class RidgeClassifierNet(nn.Module):
    """
    Лінійний бінарний класифікатор.

    Приклад:
        model = RidgeClassifierNet(n_features=5)

        x = torch.randn(8, 5)
        logits = model(x)            # shape (8, 1)
        proba = model.predict_proba(x)
    """

    def __init__(self, n_features: int = 5):
        """
        Args:
            n_features: Кількість ознак (розмір входу)
        """
        super().__init__()

        self.n_features = n_features
        self.linear = nn.Linear(n_features, 1)

        self._init_weights()

    def _init_weights(self):
        """Xavier ініціалізація"""
        nn.init.xavier_uniform_(self.linear.weight)
        nn.init.zeros_(self.linear.bias)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Args:
            x: Стандартизовані ознаки shape (batch, n_features)

        Returns:
            Логіти shape (batch, 1)
        """
        return self.linear(x)

    def predict_proba(self, x: torch.Tensor) -> torch.Tensor:
        """Ймовірність анемії shape (batch, 1)"""
        return torch.sigmoid(self.forward(x))

    def l2_penalty(self) -> torch.Tensor:
        """Ridge штраф: сума квадратів ваг"""
        return torch.sum(self.linear.weight ** 2)

    def count_parameters(self) -> int:
        """Кількість параметрів моделі"""
        return sum(p.numel() for p in self.parameters() if p.requires_grad)

    def __repr__(self) -> str:
        return f"RidgeClassifierNet(features={self.n_features}, params={self.count_parameters()})"
