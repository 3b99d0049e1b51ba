"""
HemoScan - Гібридний скринінг анемії

Локальний ridge-класифікатор (PyTorch) + віддалений AI (Gemini)
з детермінованим ML-only режимом, коли AI недоступний,
та аналізом тренду гемоглобіну між звітами.

Модулі:
- config: Налаштування (dataclass + YAML + env)
- schemas: Pydantic моделі даних
- dataset: Завантаження навчального CSV
- risk_model: Лінійна модель ризику
- remote: Адаптер Gemini (класифікація + розпізнавання звітів)
- pipeline: Гібридний комбайнер та сервіс скринінгу
- recovery: Тренд та план відновлення
- archive: Архів звітів
- api: FastAPI
"""

__version__ = "1.0.0"
__author__ = "HemoScan Team"
