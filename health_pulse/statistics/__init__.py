"""
HealthPulse — Статистична модель когорти (statistics)

Компоненти:
- RecordStore: Когорта історичних записів
- aggregate_disease_statistics: Лічильники випадків, симптомів, статі
- build_age_brackets: Квартильні вікові групи з апріорними лічильниками
- SymptomVocabularyMerger: Злиття первинних та вторинних симптомів у набір питань
- FittedModel: Незмінна модель, що об'єднує все вище

Приклад використання:
    from health_pulse.statistics import RecordStore, FittedModel

    store = RecordStore.from_raw(rows, primary_symptoms=["fever", "cough"])
    model = FittedModel.build(store, secondary_corpus=corpus)

    print(model.disease_stats["Influenza"].case_count)
    print([b.label for b in model.age_brackets])
    print(model.questions.symptoms)
"""

from .record_store import RecordStore, parse_record
from .disease_stats import DiseaseStats, DiseaseStatsTable, aggregate_disease_statistics
from .age_brackets import nearest_rank_quartiles, build_age_brackets
from .symptom_vocabulary import (
    normalize_phrase,
    merge_question_list,
    SecondarySymptomCorpus,
    SymptomKind,
    SymptomQuestion,
    QuestionSet,
    SymptomVocabularyMerger,
)
from .fitted_model import FittedModel


__all__ = [
    "RecordStore",
    "parse_record",
    "DiseaseStats",
    "DiseaseStatsTable",
    "aggregate_disease_statistics",
    "nearest_rank_quartiles",
    "build_age_brackets",
    "normalize_phrase",
    "merge_question_list",
    "SecondarySymptomCorpus",
    "SymptomKind",
    "SymptomQuestion",
    "QuestionSet",
    "SymptomVocabularyMerger",
    "FittedModel",
]
