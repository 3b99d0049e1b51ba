"""
HemoScan - API Configuration

Налаштування FastAPI сервера.
"""

import os
from dataclasses import dataclass, field


@dataclass
class APIConfig:
    """Конфігурація API сервера"""

    # Сервер
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False

    # CORS
    cors_origins: list = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list = field(default_factory=lambda: ["*"])
    cors_allow_headers: list = field(default_factory=lambda: ["*"])

    # Навчати модель у фоні при старті
    train_on_startup: bool = True

    # API
    api_prefix: str = "/api"
    api_title: str = "HemoScan API"
    api_description: str = "Hybrid anemia risk screening (ridge classifier + Gemini)"

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Створити конфігурацію з environment variables"""
        origins = os.getenv("API_CORS_ORIGINS")
        return cls(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("API_PORT", "8000")),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            reload=os.getenv("API_RELOAD", "false").lower() == "true",
            cors_origins=[o.strip() for o in origins.split(",")] if origins else ["*"],
            train_on_startup=os.getenv("HEMOSCAN_TRAIN_ON_STARTUP", "true").lower() == "true",
        )


# Глобальна конфігурація
config = APIConfig.from_env()
