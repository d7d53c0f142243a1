"""
HealthPulse — API Dependencies

Dependency Injection для FastAPI.
Побудова моделі когорти, зберігання сесій анкетування.
"""

import logging
from typing import Dict, Optional
from datetime import datetime, timedelta
import threading

from health_pulse.config import HealthPulseConfig, load_config
from health_pulse.errors import HealthPulseError
from health_pulse.inference import InferenceEngine, QuestionnaireSession
from health_pulse.statistics import FittedModel

from .config import config


logger = logging.getLogger("health_pulse.api")


class ModelsManager:
    """
    Менеджер моделі: будує FittedModel один раз на процес.
    Singleton pattern.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        self.is_loaded = False
        self.model: Optional[FittedModel] = None
        self.engine: Optional[InferenceEngine] = None
        self.error: Optional[str] = None

    def load(self) -> bool:
        """Побудувати модель з CSV файлів у config.data_dir"""
        if self.is_loaded:
            return True

        if not config.data_dir:
            self.error = "Data directory not configured (set DATA_DIR)"
            return False

        try:
            print("📦 Побудова моделі...")

            model_config = (
                load_config(config.config_path) if config.config_path
                else HealthPulseConfig()
            )
            model = FittedModel.from_directory(config.data_dir, model_config)

        except (OSError, ValueError, HealthPulseError) as e:
            self.error = str(e)
            logger.error("Model loading failed: %s", e)
            return False

        self.set_model(model)
        print(f"   ✅ {model}")
        return True

    def set_model(self, model: FittedModel) -> None:
        """Встановити готову модель (замість завантаження з диску)"""
        self.model = model
        self.engine = InferenceEngine(model)
        self.is_loaded = True
        self.error = None

    def engine_for(self, model: FittedModel) -> InferenceEngine:
        """Engine для моделі, з якою була створена сесія"""
        if self.engine is not None and self.engine.model is model:
            return self.engine
        return InferenceEngine(model)

    def unload(self) -> None:
        self.model = None
        self.engine = None
        self.is_loaded = False
        self.error = None


class SessionManager:
    """
    Менеджер сесій анкетування.
    Зберігає активні сесії в пам'яті.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        self.sessions: Dict[str, QuestionnaireSession] = {}
        self.lock = threading.Lock()

    def create_session(self, model: FittedModel) -> QuestionnaireSession:
        """Створити нову сесію"""
        session = QuestionnaireSession(model)

        with self.lock:
            # Очистка старих сесій
            self._cleanup_old_sessions()

            if len(self.sessions) >= config.max_sessions:
                oldest = min(self.sessions.values(), key=lambda s: s.updated_at)
                del self.sessions[oldest.session_id]

            self.sessions[session.session_id] = session

        return session

    def get_session(self, session_id: str) -> Optional[QuestionnaireSession]:
        """Отримати сесію"""
        with self.lock:
            return self.sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Видалити сесію"""
        with self.lock:
            if session_id in self.sessions:
                del self.sessions[session_id]
                return True
        return False

    def get_active_count(self) -> int:
        """Кількість активних сесій"""
        return len(self.sessions)

    def clear(self) -> None:
        with self.lock:
            self.sessions.clear()

    def _cleanup_old_sessions(self):
        """Видалити застарілі сесії"""
        timeout = timedelta(minutes=config.session_timeout_minutes)
        now = datetime.now()

        expired = [
            sid for sid, session in self.sessions.items()
            if now - session.updated_at > timeout
        ]

        for sid in expired:
            del self.sessions[sid]

        if expired:
            logger.info("Removed %d expired sessions", len(expired))


# Глобальні менеджери
models_manager = ModelsManager()
session_manager = SessionManager()


# Dependency functions для FastAPI
def get_models() -> ModelsManager:
    """Dependency: отримати менеджер моделі"""
    if not models_manager.is_loaded:
        models_manager.load()
    return models_manager


def get_sessions() -> SessionManager:
    """Dependency: отримати менеджер сесій"""
    return session_manager
