"""
HealthPulse — Сховище записів когорти

Тримає завантажену когорту як незмінну послідовність ClinicalRecord.
Некоректні записи (без назви хвороби, з нечисловим віком) відкидаються
з попередженням у лог, а не потрапляють у статистику.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from health_pulse.errors import MalformedRecordError
from health_pulse.schemas import ClinicalRecord


logger = logging.getLogger(__name__)


def parse_record(raw: Mapping, row_number: Optional[int] = None) -> ClinicalRecord:
    """
    Перетворити сирий запис у ClinicalRecord.

    Args:
        raw: Словник з ключами disease, age, gender, symptom_answers
        row_number: Номер рядка у джерелі (для повідомлення про помилку)

    Returns:
        ClinicalRecord

    Raises:
        MalformedRecordError: якщо немає назви хвороби або вік некоректний
    """
    disease = raw.get("disease")
    if disease is None or not str(disease).strip():
        raise MalformedRecordError("missing disease name", row_number)

    age = raw.get("age")
    if isinstance(age, str):
        age = age.strip()
    if age is None or age == "":
        raise MalformedRecordError(f"missing age for {disease!r}", row_number)

    try:
        return ClinicalRecord(
            disease=str(disease),
            age=age,
            gender=raw.get("gender"),
            symptom_answers=dict(raw.get("symptom_answers") or {}),
        )
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise MalformedRecordError(errors, row_number) from e


class RecordStore:
    """
    Когорта історичних записів.

    Приклад використання:
        store = RecordStore.from_raw(rows, primary_symptoms=["fever", "cough"])

        print(f"Записів: {store.record_count}")
        print(f"Хвороб: {store.disease_count}")
        print(f"Відкинуто: {store.rejected_count}")
    """

    def __init__(
        self,
        records: Iterable[ClinicalRecord],
        primary_symptoms: Optional[Sequence[str]] = None,
        rejected_count: int = 0
    ):
        """
        Args:
            records: Валідні записи когорти
            primary_symptoms: Колонки симптомів табличного джерела.
                Якщо None, збираються з записів у порядку появи.
            rejected_count: Скільки сирих записів було відкинуто
        """
        self._records = tuple(records)
        self.rejected_count = rejected_count

        if primary_symptoms is None:
            seen: Dict[str, None] = {}
            for record in self._records:
                for symptom in record.symptom_answers:
                    seen.setdefault(symptom, None)
            primary_symptoms = list(seen)

        # Без дублікатів, порядок зберігається
        self._primary_symptoms = tuple(
            dict.fromkeys(s.strip().lower() for s in primary_symptoms if s.strip())
        )

    @classmethod
    def from_raw(
        cls,
        raw_records: Iterable[Mapping],
        primary_symptoms: Optional[Sequence[str]] = None,
        first_row_number: int = 1
    ) -> "RecordStore":
        """
        Створити сховище з сирих записів, відкидаючи некоректні.

        Args:
            raw_records: Словники з ключами disease, age, gender, symptom_answers
            primary_symptoms: Колонки симптомів
            first_row_number: Номер першого рядка (для логів)

        Returns:
            RecordStore
        """
        records: List[ClinicalRecord] = []
        rejected = 0

        for row_number, raw in enumerate(raw_records, start=first_row_number):
            try:
                records.append(parse_record(raw, row_number))
            except MalformedRecordError as e:
                rejected += 1
                logger.warning("Skipping malformed record: %s", e)

        if rejected:
            logger.warning("Rejected %d of %d records", rejected, rejected + len(records))

        return cls(records, primary_symptoms=primary_symptoms, rejected_count=rejected)

    @property
    def records(self) -> Sequence[ClinicalRecord]:
        return self._records

    @property
    def record_count(self) -> int:
        return len(self._records)

    @property
    def primary_symptoms(self) -> List[str]:
        """Первинні симптоми (колонки табличного джерела)"""
        return list(self._primary_symptoms)

    @property
    def disease_names(self) -> List[str]:
        """Назви хвороб у порядку першої появи"""
        return list(dict.fromkeys(r.disease for r in self._records))

    @property
    def disease_count(self) -> int:
        return len(self.disease_names)

    @property
    def ages(self) -> List[int]:
        return [r.age for r in self._records]

    @property
    def is_empty(self) -> bool:
        return not self._records

    def get_statistics(self) -> Dict:
        """Отримати статистику когорти"""
        ages = self.ages
        return {
            "record_count": self.record_count,
            "disease_count": self.disease_count,
            "primary_symptom_count": len(self._primary_symptoms),
            "rejected_count": self.rejected_count,
            "min_age": min(ages) if ages else None,
            "max_age": max(ages) if ages else None,
        }

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ClinicalRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return (
            f"RecordStore(records={self.record_count}, diseases={self.disease_count}, "
            f"rejected={self.rejected_count})"
        )
