"""
HealthPulse — Байєсівська оцінка ймовірності захворювань

Архітектура: статистична модель когорти + наївний Байєсівський скоринг

Модулі:
- config: Конфігурація системи
- schemas: Записи когорти, профіль пацієнта, результати
- ingestion: Завантаження CSV джерел та довідника хвороб
- statistics: Статистика хвороб, вікові групи, набір питань
- inference: Байєсівський движок та сесія опитування
- api: Backend API
"""

__version__ = "0.1.0"

from .config import HealthPulseConfig, get_default_config
from .errors import (
    HealthPulseError,
    MalformedRecordError,
    IncompleteProfileError,
    UnknownDiseaseError,
    UnknownSymptomError,
    UnknownAgeBracketError,
)
