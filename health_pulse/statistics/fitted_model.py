"""
HealthPulse — Навчена модель

FittedModel збирає результати всіх будівельників:
- DiseaseStatsTable (агрегатор)
- вікові групи (біннер)
- набір питань (злиття словників)

Будується один раз і далі тільки читається. Передається явно
в InferenceEngine, глобального стану немає.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from health_pulse.config import HealthPulseConfig
from health_pulse.errors import UnknownAgeBracketError
from health_pulse.ingestion.disease_info import DiseaseInfoCatalog
from health_pulse.schemas import AgeBracket

from .age_brackets import build_age_brackets
from .disease_stats import DiseaseStatsTable, aggregate_disease_statistics
from .record_store import RecordStore
from .symptom_vocabulary import QuestionSet, SecondarySymptomCorpus, SymptomVocabularyMerger


logger = logging.getLogger(__name__)


class FittedModel:
    """
    Незмінна статистична модель когорти.

    Приклад використання:
        model = FittedModel.build(store, secondary_corpus=corpus)

        print(model.questions.symptoms)
        print([b.label for b in model.age_brackets])

        bracket = model.bracket(0)
        bracket = model.bracket("16-25 yrs")
    """

    def __init__(
        self,
        disease_stats: DiseaseStatsTable,
        age_brackets: Sequence[AgeBracket],
        questions: QuestionSet,
        secondary_corpus: Optional[SecondarySymptomCorpus] = None,
        catalog: Optional[DiseaseInfoCatalog] = None,
        total_records: int = 0,
        config: Optional[HealthPulseConfig] = None
    ):
        self._disease_stats = disease_stats
        self._age_brackets = tuple(age_brackets)
        self._questions = questions
        self._secondary_corpus = secondary_corpus or SecondarySymptomCorpus()
        self._catalog = catalog or DiseaseInfoCatalog()
        self._total_records = total_records
        self._config = config or HealthPulseConfig()

    @classmethod
    def build(
        cls,
        store: RecordStore,
        secondary_corpus: Optional[SecondarySymptomCorpus] = None,
        catalog: Optional[DiseaseInfoCatalog] = None,
        config: Optional[HealthPulseConfig] = None
    ) -> "FittedModel":
        """
        Побудувати модель з когорти.

        Args:
            store: Сховище записів
            secondary_corpus: Текстовий корпус симптомів (опціонально)
            catalog: Довідник описів/лікування/запобіжних заходів (опціонально)
            config: Конфігурація

        Returns:
            FittedModel
        """
        config = config or HealthPulseConfig()
        builder_config = config.model_builder

        disease_stats = aggregate_disease_statistics(store, builder_config.presence_value)
        age_brackets = build_age_brackets(store.records, builder_config.quartiles)

        if store.is_empty:
            questions = QuestionSet()
        else:
            merger = SymptomVocabularyMerger(builder_config)
            questions = merger.merge(store.primary_symptoms, secondary_corpus)

        model = cls(
            disease_stats=disease_stats,
            age_brackets=age_brackets,
            questions=questions,
            secondary_corpus=secondary_corpus,
            catalog=catalog,
            total_records=store.record_count,
            config=config,
        )

        logger.info(
            "Model built: %d records, %d diseases, %d age brackets, %d questions",
            model.total_records, len(disease_stats), len(age_brackets), len(questions)
        )
        return model

    @classmethod
    def from_directory(
        cls,
        data_dir: Optional[Union[str, Path]] = None,
        config: Optional[HealthPulseConfig] = None
    ) -> "FittedModel":
        """
        Завантажити всі CSV джерела з директорії та побудувати модель.

        Обов'язковий тільки клінічний датасет, решта джерел опціональні.
        """
        from health_pulse.ingestion import (
            load_clinical_dataset,
            load_secondary_corpus,
            load_precautions,
            load_disease_metadata,
        )

        config = config or HealthPulseConfig()
        data_dir = Path(data_dir or config.data.data_dir)

        store = load_clinical_dataset(data_dir / config.data.clinical_dataset)
        corpus = load_secondary_corpus(data_dir / config.data.secondary_symptoms)
        catalog = DiseaseInfoCatalog(
            metadata=load_disease_metadata(data_dir / config.data.disease_metadata),
            precautions=load_precautions(data_dir / config.data.precautions),
        )

        return cls.build(store, secondary_corpus=corpus, catalog=catalog, config=config)

    # =========================================================================
    # Доступ
    # =========================================================================

    @property
    def disease_stats(self) -> DiseaseStatsTable:
        return self._disease_stats

    @property
    def age_brackets(self) -> List[AgeBracket]:
        return list(self._age_brackets)

    @property
    def questions(self) -> QuestionSet:
        return self._questions

    @property
    def primary_symptoms(self) -> List[str]:
        return [q.name for q in self._questions.primary]

    @property
    def secondary_symptoms(self) -> List[str]:
        return [q.name for q in self._questions.secondary]

    @property
    def secondary_corpus(self) -> SecondarySymptomCorpus:
        return self._secondary_corpus

    @property
    def catalog(self) -> DiseaseInfoCatalog:
        return self._catalog

    @property
    def config(self) -> HealthPulseConfig:
        return self._config

    @property
    def total_records(self) -> int:
        return self._total_records

    @property
    def disease_names(self) -> List[str]:
        return self._disease_stats.disease_names

    @property
    def is_empty(self) -> bool:
        return len(self._disease_stats) == 0

    def bracket(self, key: Union[int, str]) -> AgeBracket:
        """
        Отримати вікову групу за індексом або міткою.

        Raises:
            UnknownAgeBracketError: якщо групи немає
        """
        if isinstance(key, int):
            if 0 <= key < len(self._age_brackets):
                return self._age_brackets[key]
        else:
            for bracket in self._age_brackets:
                if bracket.label == key:
                    return bracket
        raise UnknownAgeBracketError(f"Unknown age bracket: {key!r}")

    def bracket_for_age(self, age: int) -> AgeBracket:
        """Вікова група, що містить вік (крайні групи для віку поза межами когорти)"""
        if not self._age_brackets:
            raise UnknownAgeBracketError("Model has no age brackets")
        for bracket in self._age_brackets:
            if bracket.contains(age):
                return bracket
        if age < self._age_brackets[0].lower_bound:
            return self._age_brackets[0]
        return self._age_brackets[-1]

    def get_statistics(self) -> Dict:
        """Короткий підсумок моделі"""
        return {
            "total_records": self._total_records,
            "disease_count": len(self._disease_stats),
            "age_brackets": [b.label for b in self._age_brackets],
            "question_count": len(self._questions),
            "primary_symptoms": len(self._questions.primary),
            "secondary_symptoms": len(self._questions.secondary),
        }

    def __repr__(self) -> str:
        return (
            f"FittedModel(records={self._total_records}, diseases={len(self._disease_stats)}, "
            f"brackets={len(self._age_brackets)}, questions={len(self._questions)})"
        )
