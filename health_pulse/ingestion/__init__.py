"""
HealthPulse — Завантаження даних (ingestion)

Компоненти:
- csv_sources: Читання чотирьох CSV джерел
- disease_info: Довідник описів, лікування та запобіжних заходів

Обов'язковий тільки клінічний датасет. Відсутність інших файлів
лише зменшує кількість питань та деталей у результатах.
"""

from .disease_info import DiseaseInfo, DiseaseInfoCatalog, DEFAULT_TREATMENT, DEFAULT_DESCRIPTION
from .csv_sources import (
    parse_clinical_rows,
    load_clinical_dataset,
    load_secondary_corpus,
    load_precautions,
    load_disease_metadata,
)


__all__ = [
    "DiseaseInfo",
    "DiseaseInfoCatalog",
    "DEFAULT_TREATMENT",
    "DEFAULT_DESCRIPTION",
    "parse_clinical_rows",
    "load_clinical_dataset",
    "load_secondary_corpus",
    "load_precautions",
    "load_disease_metadata",
]
