"""
HealthPulse — Словник симптомів та набір питань

Об'єднує два словники симптомів:
- первинні симптоми: колонки табличного датасету (точні лічильники Yes/No)
- вторинні симптоми: фрази з текстових описів хвороб (тільки текстове перекриття)

Результат: впорядкований набір з 10-15 питань без дублікатів, де всі
первинні симптоми йдуть перед вторинними.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence

from health_pulse.config import ModelBuilderConfig
from health_pulse.errors import UnknownSymptomError


logger = logging.getLogger(__name__)


_PARENTHETICAL = re.compile(r"\(.*?\)")
_TRAILING_CLAUSES = (
    re.compile(r"especially.*$", re.IGNORECASE),
    re.compile(r"particularly.*$", re.IGNORECASE),
)


def normalize_phrase(phrase: str, min_length: int = 3) -> Optional[str]:
    """
    Нормалізувати фразу симптому.

    Прибирає уточнення в дужках та хвости "especially..." / "particularly...".
    Фрази довжиною <= min_length (до або після нормалізації) відкидаються.

    Args:
        phrase: Сира фраза
        min_length: Мінімальна довжина (не включно)

    Returns:
        Нормалізована фраза або None
    """
    phrase = phrase.strip().lower()
    if len(phrase) <= min_length:
        return None

    normalized = _PARENTHETICAL.sub("", phrase)
    for pattern in _TRAILING_CLAUSES:
        normalized = pattern.sub("", normalized)
    normalized = normalized.strip()

    if len(normalized) <= min_length:
        return None
    return normalized


class SecondarySymptomCorpus(Mapping):
    """
    Текстові описи симптомів: disease_name (lowercase) → текст (lowercase).

    Приклад:
        corpus = SecondarySymptomCorpus({"Influenza": "Fever, chills, body aches"})
        corpus.text_for("influenza")  # "fever, chills, body aches"
        corpus.overlap_score("body aches", "Influenza")  # 1.0
    """

    def __init__(self, texts: Optional[Dict[str, str]] = None):
        self._texts: Dict[str, str] = {}
        for disease, text in (texts or {}).items():
            if disease and disease.strip() and text and text.strip():
                self._texts[disease.strip().lower()] = text.strip().lower()

    def __getitem__(self, disease: str) -> str:
        return self._texts[disease.strip().lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._texts)

    def __len__(self) -> int:
        return len(self._texts)

    def text_for(self, disease: str) -> str:
        """Текст симптомів хвороби ('' якщо хвороби немає в корпусі)"""
        return self._texts.get(disease.strip().lower(), "")

    def phrases(self, disease: str) -> List[str]:
        """Сирі фрази симптомів хвороби (розділені комами)"""
        return [p.strip() for p in self.text_for(disease).split(",")]

    def overlap_score(self, phrase: str, disease: str, min_word_length: int = 3) -> float:
        """
        Частка слів фрази, що зустрічаються в тексті хвороби.

        Рахуються тільки слова довші за min_word_length, знаменник:
        загальна кількість слів фрази.

        Returns:
            Оцінка в [0, 1]
        """
        text = self.text_for(disease)
        words = phrase.lower().split(" ")
        matched = sum(
            1 for word in words
            if len(word) > min_word_length and word in text
        )
        return matched / max(len(words), 1)

    def __repr__(self) -> str:
        return f"SecondarySymptomCorpus(diseases={len(self)})"


class SymptomKind(str, Enum):
    """Джерело симптому"""
    PRIMARY = "primary"
    SECONDARY = "secondary"


@dataclass(frozen=True)
class SymptomQuestion:
    """Одне питання анкети"""
    name: str
    kind: SymptomKind

    @property
    def is_primary(self) -> bool:
        return self.kind == SymptomKind.PRIMARY

    @property
    def text(self) -> str:
        """Текст питання для показу"""
        return f"Do you have {self.name[:1].upper()}{self.name[1:]}?"


class QuestionSet:
    """
    Впорядкований набір питань: symptom ↔ index.

    Первинні симптоми завжди перед вторинними, назви не повторюються.

    Приклад використання:
        questions = QuestionSet.from_lists(["fever", "cough"], ["headache"])

        questions.symptom_to_index("cough")  # 1
        questions[2].kind                    # SymptomKind.SECONDARY
        len(questions)                       # 3
    """

    def __init__(self, questions: Sequence[SymptomQuestion] = ()):
        self._questions: List[SymptomQuestion] = []
        self._symptom_to_idx: Dict[str, int] = {}

        seen_secondary = False
        for question in questions:
            if question.name in self._symptom_to_idx:
                raise ValueError(f"Duplicate symptom in question set: {question.name!r}")
            if question.is_primary and seen_secondary:
                raise ValueError(
                    f"Primary symptom {question.name!r} placed after a secondary symptom"
                )
            seen_secondary = seen_secondary or not question.is_primary

            self._symptom_to_idx[question.name] = len(self._questions)
            self._questions.append(question)

    @classmethod
    def from_lists(cls, primary: Sequence[str], secondary: Sequence[str] = ()) -> "QuestionSet":
        """Створити набір з готових списків первинних та вторинних симптомів"""
        return cls(
            [SymptomQuestion(name, SymptomKind.PRIMARY) for name in primary]
            + [SymptomQuestion(name, SymptomKind.SECONDARY) for name in secondary]
        )

    def symptom_to_index(self, symptom: str) -> Optional[int]:
        return self._symptom_to_idx.get(symptom.strip().lower())

    def get(self, symptom: str) -> SymptomQuestion:
        """
        Отримати питання за назвою симптому.

        Raises:
            UnknownSymptomError: якщо симптому немає в наборі
        """
        idx = self.symptom_to_index(symptom)
        if idx is None:
            raise UnknownSymptomError(symptom)
        return self._questions[idx]

    @property
    def symptoms(self) -> List[str]:
        """Назви симптомів у порядку питань"""
        return [q.name for q in self._questions]

    @property
    def primary(self) -> List[SymptomQuestion]:
        return [q for q in self._questions if q.is_primary]

    @property
    def secondary(self) -> List[SymptomQuestion]:
        return [q for q in self._questions if not q.is_primary]

    @property
    def size(self) -> int:
        return len(self._questions)

    def __getitem__(self, index: int) -> SymptomQuestion:
        return self._questions[index]

    def __iter__(self) -> Iterator[SymptomQuestion]:
        return iter(self._questions)

    def __len__(self) -> int:
        return self.size

    def __contains__(self, symptom) -> bool:
        return isinstance(symptom, str) and self.symptom_to_index(symptom) is not None

    def __repr__(self) -> str:
        return (
            f"QuestionSet(size={self.size}, primary={len(self.primary)}, "
            f"secondary={len(self.secondary)})"
        )


def merge_question_list(
    primary: Sequence[str],
    secondary: Sequence[str],
    min_questions: int = 10,
    max_questions: int = 15
) -> List[str]:
    """
    Фінальне злиття: всі первинні + потрібна кількість вторинних.

    n_secondary = max(min_q - P, min(len(secondary), max_q - P))

    Тобто добираємо до мінімуму 10 питань, але не більше 15 загалом
    і не більше, ніж є вторинних симптомів.
    """
    n_primary = len(primary)
    n_secondary = max(
        min_questions - n_primary,
        min(len(secondary), max_questions - n_primary)
    )
    n_secondary = max(0, n_secondary)
    return list(primary) + list(secondary[:n_secondary])


class SymptomVocabularyMerger:
    """
    Відбір вторинних симптомів та побудова набору питань.

    Алгоритм:
    1. Фрази з текстового корпусу нормалізуються та рахуються глобально
    2. Фрази, що вже є серед первинних симптомів, відкидаються
    3. Для кожної категорії (в фіксованому порядку) береться найчастіша
       фраза, що містить ключове слово категорії (або міститься в ньому)
    4. Решта місць заповнюється найчастішими фразами
    5. Злиття з первинними (merge_question_list)

    Приклад використання:
        merger = SymptomVocabularyMerger()
        questions = merger.merge(["fever", "cough", "fatigue"], corpus)
    """

    def __init__(self, config: Optional[ModelBuilderConfig] = None):
        self.config = config or ModelBuilderConfig()

    def count_phrases(self, corpus: SecondarySymptomCorpus) -> Dict[str, int]:
        """Глобальна частота нормалізованих фраз (порядок першої появи)"""
        counts: Dict[str, int] = {}
        for disease in corpus:
            for raw in corpus.phrases(disease):
                phrase = normalize_phrase(raw, self.config.min_phrase_length)
                if phrase:
                    counts[phrase] = counts.get(phrase, 0) + 1
        return counts

    def rank_candidates(
        self,
        corpus: SecondarySymptomCorpus,
        primary: Sequence[str]
    ) -> List[str]:
        """Кандидати у порядку спадання частоти, без первинних симптомів"""
        primary_set = set(primary)
        counts = self.count_phrases(corpus)
        candidates = [(p, c) for p, c in counts.items() if p not in primary_set]
        # sorted стабільний: при рівній частоті зберігається порядок появи
        return [p for p, _ in sorted(candidates, key=lambda item: -item[1])]

    def select_secondary(self, candidates: Sequence[str]) -> List[str]:
        """Вибрати вторинні симптоми: спочатку по категоріях, потім за частотою"""
        limit = self.config.max_secondary_symptoms
        selected: List[str] = []

        for category, keywords in self.config.symptom_categories.items():
            found = next(
                (
                    phrase for phrase in candidates
                    if any(kw in phrase or phrase in kw for kw in keywords)
                ),
                None
            )
            if found and found not in selected:
                selected.append(found)
                logger.debug("Category %s → %r", category, found)

        for phrase in candidates:
            if len(selected) >= limit:
                break
            if phrase not in selected:
                selected.append(phrase)

        return selected[:limit]

    def merge(
        self,
        primary: Sequence[str],
        corpus: Optional[SecondarySymptomCorpus] = None
    ) -> QuestionSet:
        """
        Побудувати набір питань.

        Args:
            primary: Первинні симптоми (колонки датасету)
            corpus: Текстовий корпус; None або порожній → тільки первинні

        Returns:
            QuestionSet
        """
        primary = list(dict.fromkeys(s.strip().lower() for s in primary if s.strip()))

        secondary: List[str] = []
        if corpus:
            secondary = self.select_secondary(self.rank_candidates(corpus, primary))
        else:
            logger.info("No secondary symptom corpus, using %d primary symptoms only", len(primary))

        names = merge_question_list(
            primary,
            secondary,
            self.config.min_questions,
            self.config.max_questions,
        )
        questions = QuestionSet.from_lists(names[:len(primary)], names[len(primary):])

        logger.debug("Question set: %s", questions.symptoms)
        return questions
