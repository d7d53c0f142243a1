"""
HealthPulse — Схеми даних пацієнта

- Response: відповідь на питання про симптом
- PatientProfile: вікова група, стать та відповіді однієї сесії
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from health_pulse.errors import IncompleteProfileError

from .cohort import AgeBracket


class Response(str, Enum):
    """Відповідь пацієнта"""
    YES = "Yes"
    NO = "No"
    MAYBE = "Maybe"
    NOT_SURE = "Not Sure"

    @classmethod
    def parse(cls, value) -> "Response":
        """
        Розпізнати відповідь з рядка (регістр та пробіли не важливі).

        "yes", "Yes", "not sure", "not_sure", "NotSure" → Response
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "").replace(" ", "")
        for member in cls:
            if member.value.lower().replace(" ", "") == key:
                return member
        raise ValueError(f"Unknown response: {value!r}")


@dataclass
class PatientProfile:
    """
    Профіль пацієнта для однієї сесії.

    Змінюється тільки по одній відповіді за раз (answer / forget)
    або очищується повністю (clear).

    Приклад:
        profile = PatientProfile(age_bracket=model.age_brackets[1], gender="Female")
        profile.answer("fever", Response.YES)
        profile.answer("cough", "No")
    """
    age_bracket: Optional[AgeBracket] = None
    gender: Optional[str] = None
    responses: Dict[str, Response] = field(default_factory=dict)

    def answer(self, symptom: str, response) -> None:
        """Записати або перезаписати відповідь на питання"""
        self.responses[symptom.strip().lower()] = Response.parse(response)

    def forget(self, symptom: str) -> None:
        """Видалити відповідь (якщо була)"""
        self.responses.pop(symptom.strip().lower(), None)

    def get_response(self, symptom: str) -> Optional[Response]:
        return self.responses.get(symptom)

    def clear(self) -> None:
        """Скинути профіль повністю"""
        self.age_bracket = None
        self.gender = None
        self.responses = {}

    @property
    def gender_key(self) -> Optional[str]:
        return self.gender.strip().lower() if self.gender and self.gender.strip() else None

    @property
    def is_complete(self) -> bool:
        """Чи обрані вікова група та стать"""
        return self.age_bracket is not None and self.gender_key is not None

    def require_complete(self) -> None:
        """Перевірка передумови скорингу"""
        missing: List[str] = []
        if self.age_bracket is None:
            missing.append("age_bracket")
        if self.gender_key is None:
            missing.append("gender")
        if missing:
            raise IncompleteProfileError(
                f"Profile is incomplete, missing: {', '.join(missing)}"
            )

    @property
    def answered_count(self) -> int:
        return len(self.responses)

    def __repr__(self) -> str:
        bracket = self.age_bracket.label if self.age_bracket else None
        return (
            f"PatientProfile(age_bracket={bracket}, gender={self.gender}, "
            f"answers={self.answered_count})"
        )
