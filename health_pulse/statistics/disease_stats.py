"""
HealthPulse — Статистика хвороб

Один прохід по когорті дає для кожної хвороби:
- кількість випадків
- скільки разів кожен симптом був "Yes"
- розподіл за статтю

Інваріанти:
    symptom_presence_count[s] <= case_count
    sum(gender_count.values()) <= case_count
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List

from health_pulse.errors import UnknownDiseaseError
from health_pulse.schemas import ClinicalRecord


@dataclass(frozen=True)
class DiseaseStats:
    """Лічильники однієї хвороби (тільки для читання)"""
    case_count: int = 0
    symptom_presence_count: Mapping = field(default_factory=dict)
    gender_count: Mapping = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "symptom_presence_count", MappingProxyType(dict(self.symptom_presence_count))
        )
        object.__setattr__(self, "gender_count", MappingProxyType(dict(self.gender_count)))

    def __hash__(self) -> int:
        return hash((
            self.case_count,
            frozenset(self.symptom_presence_count.items()),
            frozenset(self.gender_count.items()),
        ))

    def presence(self, symptom: str) -> int:
        """Скільки випадків мали симптом (0 якщо жодного)"""
        return self.symptom_presence_count.get(symptom, 0)

    def gender(self, gender_key: str) -> int:
        """Скільки випадків мали цю стать (0 якщо жодного)"""
        return self.gender_count.get(gender_key, 0)

    def symptom_conditional(self, symptom: str, alpha: float = 1.0) -> float:
        """Згладжена P(symptom | disease) = (n_s + α) / (n + 2α)"""
        return (self.presence(symptom) + alpha) / (self.case_count + 2 * alpha)

    def gender_conditional(self, gender_key: str, alpha: float = 1.0) -> float:
        """Згладжена P(gender | disease) = (n_g + α) / (n + 2α)"""
        return (self.gender(gender_key) + alpha) / (self.case_count + 2 * alpha)


class DiseaseStatsTable(Mapping):
    """
    Незмінна таблиця disease_name → DiseaseStats.

    Порядок ітерації: порядок першої появи хвороби в когорті.
    Пошук невідомої хвороби кидає UnknownDiseaseError замість нуля.
    Точна назва має пріоритет, інакше шукаємо без урахування регістру.
    """

    def __init__(self, stats: Dict[str, DiseaseStats]):
        self._stats = dict(stats)
        self._lower_index = {}
        for name in self._stats:
            self._lower_index.setdefault(name.lower(), name)

    def resolve(self, disease: str) -> str:
        """Отримати канонічну назву хвороби"""
        if disease in self._stats:
            return disease
        try:
            return self._lower_index[disease.strip().lower()]
        except KeyError:
            raise UnknownDiseaseError(disease) from None

    def __getitem__(self, disease: str) -> DiseaseStats:
        return self._stats[self.resolve(disease)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._stats)

    def __len__(self) -> int:
        return len(self._stats)

    def __contains__(self, disease) -> bool:
        if not isinstance(disease, str):
            return False
        return disease in self._stats or disease.strip().lower() in self._lower_index

    @property
    def disease_names(self) -> List[str]:
        return list(self._stats)

    @property
    def total_cases(self) -> int:
        return sum(s.case_count for s in self._stats.values())

    def __repr__(self) -> str:
        return f"DiseaseStatsTable(diseases={len(self)}, cases={self.total_cases})"


def aggregate_disease_statistics(
    records: Iterable[ClinicalRecord],
    presence_value: str = "Yes"
) -> DiseaseStatsTable:
    """
    Порахувати статистику хвороб за один прохід.

    Args:
        records: Записи когорти
        presence_value: Відповідь, що означає наявність симптому

    Returns:
        DiseaseStatsTable (порожня для порожньої когорти)
    """
    cases: Dict[str, int] = {}
    presence: Dict[str, Dict[str, int]] = {}
    genders: Dict[str, Dict[str, int]] = {}

    for record in records:
        name = record.disease
        cases[name] = cases.get(name, 0) + 1
        symptoms = presence.setdefault(name, {})
        by_gender = genders.setdefault(name, {})

        for symptom, answer in record.symptom_answers.items():
            if answer == presence_value:
                symptoms[symptom] = symptoms.get(symptom, 0) + 1

        gender_key = record.gender_key
        if gender_key:
            by_gender[gender_key] = by_gender.get(gender_key, 0) + 1

    return DiseaseStatsTable({
        name: DiseaseStats(
            case_count=count,
            symptom_presence_count=presence[name],
            gender_count=genders[name],
        )
        for name, count in cases.items()
    })
