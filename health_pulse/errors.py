"""
HealthPulse — Помилки

Ієрархія винятків пакету. Кожен виняток також успадковує вбудований тип,
тому код, що ловить ValueError / KeyError / RuntimeError, працює як раніше.
"""

from typing import Optional


class HealthPulseError(Exception):
    """Базовий виняток HealthPulse"""


class MalformedRecordError(HealthPulseError, ValueError):
    """Запис когорти без назви хвороби або з некоректним віком"""

    def __init__(self, message: str, row_number: Optional[int] = None):
        self.row_number = row_number
        if row_number is not None:
            message = f"row {row_number}: {message}"
        super().__init__(message)


class IncompleteProfileError(HealthPulseError, RuntimeError):
    """Скоринг запитано до вибору вікової групи та статі"""


class UnknownDiseaseError(HealthPulseError, KeyError):
    """Хвороби немає в статистиці когорти"""

    def __str__(self) -> str:
        return f"Unknown disease: {self.args[0]!r}"


class UnknownSymptomError(HealthPulseError, KeyError):
    """Симптому немає в наборі питань"""

    def __str__(self) -> str:
        return f"Unknown symptom: {self.args[0]!r}"


class UnknownAgeBracketError(HealthPulseError, LookupError):
    """Вікової групи з таким індексом або міткою немає"""
