"""
HealthPulse — Налаштування системи

Всі параметри системи зібрані в dataclass-и для:
- Типізації та валідації
- Легкого доступу через config.inference.alpha
- Серіалізації в YAML/JSON
"""

from dataclasses import dataclass, field
from typing import Dict, List


# =============================================================================
# MODEL BUILDER CONFIGURATION
# =============================================================================

def _default_symptom_categories() -> Dict[str, List[str]]:
    # Порядок категорій важливий: перша знайдена фраза виграє
    return {
        "respiratory": [
            "shortness of breath", "wheezing", "chest pain",
            "chest tightness", "rapid breathing",
        ],
        "gastrointestinal": [
            "nausea", "vomiting", "abdominal pain", "diarrhea",
            "stomach pain", "loss of appetite",
        ],
        "neurological": [
            "headache", "dizziness", "confusion", "seizures", "memory loss",
        ],
        "general": [
            "body aches", "chills", "weakness", "sweating",
            "weight loss", "muscle pain",
        ],
        "dermatological": [
            "rash", "itching", "skin redness", "swelling", "hives",
        ],
        "sensory": [
            "blurred vision", "sensitivity to light", "eye pain", "hearing loss",
        ],
    }


@dataclass
class ModelBuilderConfig:
    """Параметри побудови статистичної моделі"""

    # Значення колонки симптому, що означає "присутній"
    presence_value: str = "Yes"

    # Квартилі для вікових груп (nearest-rank)
    quartiles: List[float] = field(default_factory=lambda: [0.25, 0.5, 0.75])

    # Розмір набору питань
    min_questions: int = 10
    max_questions: int = 15
    max_secondary_symptoms: int = 11

    # Фрази довжиною <= min_phrase_length відкидаються
    min_phrase_length: int = 3

    symptom_categories: Dict[str, List[str]] = field(
        default_factory=_default_symptom_categories
    )


# =============================================================================
# INFERENCE CONFIGURATION
# =============================================================================

@dataclass
class InferenceConfig:
    """Параметри Байєсівського скорингу"""

    # Laplace smoothing
    alpha: float = 1.0

    # Стать
    gender_weight: float = 1.5

    # Первинні симптоми: пороги умовної ймовірності
    relevance_threshold: float = 0.3
    strong_absence_threshold: float = 0.5

    # Первинні симптоми: ваги
    yes_strong_weight: float = 3.0
    yes_weak_weight: float = 1.5
    maybe_weight: float = 1.0
    no_strong_weight: float = 3.0
    no_moderate_weight: float = 1.5

    # Внески в лічильник співпадінь
    yes_match_increment: float = 1.0
    maybe_match_increment: float = 0.5

    # Вторинні симптоми (текстове перекриття)
    secondary_strong_overlap: float = 0.7
    secondary_partial_overlap: float = 0.3
    secondary_maybe_overlap: float = 0.5
    secondary_strong_probability: float = 0.9
    secondary_strong_weight: float = 2.0
    secondary_partial_probability: float = 0.7
    secondary_partial_weight: float = 1.0
    secondary_miss_probability: float = 0.2
    secondary_miss_weight: float = 0.5
    secondary_maybe_probability: float = 0.7
    secondary_maybe_weight: float = 0.8
    secondary_maybe_increment: float = 0.3
    secondary_absent_probability: float = 0.3
    secondary_absent_weight: float = 1.5
    secondary_partial_increment: float = 0.5
    secondary_min_word_length: int = 3

    # Бонус за кількість співпадінь
    specificity_rate: float = 0.15
    specificity_weight: float = 2.0

    # Нормалізація
    discrimination_factor: float = 5.0


# =============================================================================
# DATA CONFIGURATION
# =============================================================================

@dataclass
class DataConfig:
    """Шляхи до джерел даних (відносно data_dir)"""
    data_dir: str = "data"
    clinical_dataset: str = "Disease_symptom_and_patient_profile_dataset.csv"
    secondary_symptoms: str = "Diseases_Symptoms.csv"
    precautions: str = "Disease precaution.csv"
    disease_metadata: str = "diseases.csv"


# =============================================================================
# MAIN CONFIGURATION
# =============================================================================

@dataclass
class HealthPulseConfig:
    """
    Головна конфігурація HealthPulse

    Приклад використання:
        config = HealthPulseConfig()
        print(config.model_builder.max_questions)  # 15
        print(config.inference.alpha)  # 1.0
    """

    # Метадані
    version: str = "1.0.0"
    project_name: str = "HealthPulse"

    # Компоненти
    model_builder: ModelBuilderConfig = field(default_factory=ModelBuilderConfig)
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    data: DataConfig = field(default_factory=DataConfig)

    @classmethod
    def from_dict(cls, data: Dict) -> "HealthPulseConfig":
        """Створити конфігурацію зі словника (невідомі ключі ігноруються)"""
        data = data or {}
        config = cls()

        for key in ("version", "project_name"):
            if key in data:
                setattr(config, key, data[key])

        sections = {
            "model_builder": config.model_builder,
            "inference": config.inference,
            "data": config.data,
        }
        for name, section in sections.items():
            for key, value in (data.get(name) or {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)

        return config


# =============================================================================
# DEFAULT CONFIG INSTANCE
# =============================================================================

def get_default_config() -> HealthPulseConfig:
    """Отримати конфігурацію за замовчуванням"""
    return HealthPulseConfig()
