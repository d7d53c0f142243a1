"""
HealthPulse — Схеми даних когорти

- ClinicalRecord: один історичний запис (хвороба, вік, стать, відповіді)
- AgeBracket: квартильна вікова група з апріорними лічильниками хвороб
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClinicalRecord(BaseModel):
    """
    Запис когорти. Незмінний після створення.

    Приклад:
        record = ClinicalRecord(
            disease="Influenza",
            age=34,
            gender="Female",
            symptom_answers={"fever": "Yes", "cough": "No"}
        )
    """
    model_config = ConfigDict(frozen=True)

    disease: str = Field(..., description="Назва хвороби")
    age: int = Field(..., ge=0, description="Вік пацієнта")
    gender: Optional[str] = Field(default=None, description="Стать (як у джерелі)")
    symptom_answers: Dict[str, str] = Field(
        default_factory=dict,
        description="Відповіді по симптомах: Yes / No / ''"
    )

    @field_validator("disease")
    @classmethod
    def require_disease(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("disease name is empty")
        return v

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("symptom_answers")
    @classmethod
    def normalize_symptoms(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Назви симптомів у lowercase, відповіді без пробілів"""
        return {
            name.strip().lower(): (answer or "").strip()
            for name, answer in v.items()
        }

    @property
    def gender_key(self) -> Optional[str]:
        """Ключ статі для лічильників (lowercase)"""
        return self.gender.lower() if self.gender else None


@dataclass(frozen=True)
class AgeBracket:
    """
    Вікова група [lower_bound, upper_bound] з апріорним розподілом хвороб.

    Обчислюється один раз після завантаження когорти, далі тільки читається.
    """
    lower_bound: int
    upper_bound: int
    total_records: int = 0
    disease_prior_count: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "disease_prior_count", MappingProxyType(dict(self.disease_prior_count))
        )

    def __hash__(self) -> int:
        return hash((self.lower_bound, self.upper_bound, self.total_records))

    @property
    def label(self) -> str:
        return f"{self.lower_bound}-{self.upper_bound} yrs"

    def contains(self, age: int) -> bool:
        return self.lower_bound <= age <= self.upper_bound

    def prior_count(self, disease: str) -> int:
        """Кількість випадків хвороби в групі (0 якщо не зустрічалась)"""
        return self.disease_prior_count.get(disease, 0)

    def __repr__(self) -> str:
        return f"AgeBracket({self.label}, records={self.total_records})"
