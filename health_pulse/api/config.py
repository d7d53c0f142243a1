"""
HealthPulse — API Configuration

Налаштування FastAPI сервера та шлях до даних когорти.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
import os


@dataclass
class APIConfig:
    """Конфігурація API сервера"""

    # Сервер
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = True
    reload: bool = False

    # CORS
    cors_origins: list = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list = field(default_factory=lambda: ["*"])
    cors_allow_headers: list = field(default_factory=lambda: ["*"])

    # Дані когорти та конфігурація моделі
    data_dir: Optional[str] = None
    config_path: Optional[str] = None

    # Сесії
    max_sessions: int = 1000
    session_timeout_minutes: int = 60

    # API
    api_prefix: str = "/api"
    api_title: str = "HealthPulse API"
    api_description: str = "Байєсівська оцінка ймовірності захворювань"

    def __post_init__(self):
        """Автоматичне визначення директорії даних"""
        if self.data_dir is None:
            current = Path(__file__).parent.parent.parent

            for root in [current, Path.cwd()]:
                if (root / "data").is_dir():
                    self.data_dir = str(root / "data")
                    break

    @classmethod
    def from_env(cls) -> 'APIConfig':
        """Створити конфігурацію з environment variables"""
        return cls(
            host=os.getenv("API_HOST", "0.0.0.0"),
            port=int(os.getenv("API_PORT", "8000")),
            debug=os.getenv("API_DEBUG", "true").lower() == "true",
            data_dir=os.getenv("DATA_DIR"),
            config_path=os.getenv("HEALTH_PULSE_CONFIG"),
        )


# Глобальна конфігурація
config = APIConfig.from_env()
