"""
HealthPulse — Схеми результатів

PredictionResult створюється заново при кожному виклику скорингу
і ніде не зберігається.
"""

from pydantic import BaseModel, Field


class PredictionResult(BaseModel):
    """
    Ймовірність однієї хвороби для профілю пацієнта.

    Приклад:
        result = PredictionResult(
            disease_name="Influenza",
            probability_percent=42.7,
            case_count=40,
            matched_symptom_count=2.5
        )
    """
    disease_name: str = Field(..., description="Назва хвороби")
    probability_percent: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Ймовірність у відсотках [0, 100]"
    )
    case_count: int = Field(..., ge=0, description="Випадків хвороби в когорті")
    matched_symptom_count: float = Field(
        default=0.0,
        ge=0.0,
        description="Зважена кількість симптомів, що співпали"
    )
    age_bracket_count: int = Field(
        default=0,
        ge=0,
        description="Випадків хвороби в обраній віковій групі"
    )
    log_score: float = Field(default=0.0, description="Сирий log-score")

    @property
    def probability(self) -> float:
        """Ймовірність у частках [0, 1]"""
        return self.probability_percent / 100.0

    class Config:
        json_schema_extra = {
            "example": {
                "disease_name": "Influenza",
                "probability_percent": 42.7,
                "case_count": 40,
                "matched_symptom_count": 2.5,
                "age_bracket_count": 12
            }
        }
