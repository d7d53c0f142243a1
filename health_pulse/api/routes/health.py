"""
HealthPulse — Health Routes

Health check та інформація про систему.
"""

from fastapi import APIRouter, Depends

from health_pulse import __version__

from ..dependencies import get_models, get_sessions, ModelsManager, SessionManager
from ..models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    models: ModelsManager = Depends(get_models),
    sessions: SessionManager = Depends(get_sessions)
) -> HealthResponse:
    """
    Перевірка стану сервера.

    Повертає:
    - Статус сервера (degraded, якщо модель не побудована)
    - Розмір когорти та кількість хвороб і питань
    - Кількість активних сесій
    """
    model = models.model

    return HealthResponse(
        status="ok" if models.is_loaded else "degraded",
        version=__version__,
        model_loaded=models.is_loaded,
        total_records=model.total_records if model else 0,
        diseases=len(model.disease_stats) if model else 0,
        questions=len(model.questions) if model else 0,
        active_sessions=sessions.get_active_count(),
        error=models.error,
    )


@router.get("/")
async def root():
    """Головна сторінка API"""
    return {
        "name": "HealthPulse API",
        "version": __version__,
        "description": "Байєсівська оцінка ймовірності захворювань",
        "docs": "/docs",
        "health": "/health",
    }
