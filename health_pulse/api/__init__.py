"""
HealthPulse — REST API модуль

FastAPI REST API для анкетування та оцінки ймовірностей.

Компоненти:
- app.py: FastAPI application
- routes/: API endpoints
- models/: Pydantic models
- dependencies.py: Модель та сесії

Запуск:
    DATA_DIR=./data uvicorn health_pulse.api.app:app --port 8000

Або:
    python scripts/run_api.py --data-dir ./data

Документація:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)

Endpoints:
    GET    /                                 - Root info
    GET    /health                           - Health check

    GET    /api/model/age-brackets           - Вікові групи
    GET    /api/model/questions              - Питання анкети
    GET    /api/model/diseases               - Список хвороб
    GET    /api/model/diseases/{name}        - Статистика хвороби

    POST   /api/sessions                     - Почати сесію
    GET    /api/sessions/{id}                - Стан сесії
    POST   /api/sessions/{id}/answer         - Відповісти на питання
    POST   /api/sessions/{id}/back           - Попереднє питання
    POST   /api/sessions/{id}/reset          - Почати заново
    GET    /api/sessions/{id}/predictions    - Розподіл ймовірностей
    DELETE /api/sessions/{id}                - Закрити сесію
"""

from .app import app
from .dependencies import models_manager, session_manager, get_models, get_sessions


__all__ = [
    "app",
    "models_manager",
    "session_manager",
    "get_models",
    "get_sessions",
]
