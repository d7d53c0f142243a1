"""
HealthPulse — API Routes

Експорт всіх роутерів.
"""

from .health import router as health_router
from .model import router as model_router
from .sessions import router as sessions_router

__all__ = [
    'health_router',
    'model_router',
    'sessions_router',
]
