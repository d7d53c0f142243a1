"""
HealthPulse — CSV джерела

Формати:
1. Клінічний датасет (обов'язковий):
   Disease, <симптоми...>, Age, Gender, Blood Pressure, Cholesterol Level, Outcome Variable
   Колонки симптомів: всі між Disease та Age, значення Yes/No.

2. Вторинні симптоми (опціонально):
   Name, Symptoms, Treatments, Disease_Code, Contagious, Chronic
   Symptoms: фрази через кому (в лапках).

3. Запобіжні заходи (опціонально):
   Disease, Precaution_1, Precaution_2, ...

4. Метадані хвороб (опціонально):
   disease_id, name, type, description, symptoms, causes, treatments, ...
"""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

from health_pulse.statistics.record_store import RecordStore
from health_pulse.statistics.symptom_vocabulary import SecondarySymptomCorpus

from .disease_info import DEFAULT_TREATMENT


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _read_rows(path: Path) -> Iterator[List[str]]:
    """Рядки CSV без порожніх, значення без пробілів по краях"""
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        for row in csv.reader(f):
            row = [value.strip() for value in row]
            if any(row):
                yield row


def _cell(row: Sequence[str], idx: Optional[int]) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx]


def parse_clinical_rows(header: Sequence[str], rows: Iterable[Sequence[str]]) -> RecordStore:
    """
    Перетворити рядки клінічного датасету на RecordStore.

    Args:
        header: Заголовок (перший рядок)
        rows: Рядки даних

    Returns:
        RecordStore (некоректні рядки відкинуті)

    Raises:
        ValueError: якщо в заголовку немає колонки Age
    """
    header = [h.strip() for h in header]
    lowered = [h.lower() for h in header]

    if "age" not in lowered:
        raise ValueError(f"Clinical dataset header has no 'Age' column: {header}")

    age_idx = lowered.index("age")
    gender_idx = lowered.index("gender") if "gender" in lowered else None
    symptom_headers = [h.lower() for h in header[1:age_idx]]

    def raw_records():
        for row in rows:
            yield {
                "disease": _cell(row, 0),
                "age": _cell(row, age_idx),
                "gender": _cell(row, gender_idx),
                "symptom_answers": {
                    symptom: _cell(row, i + 1)
                    for i, symptom in enumerate(symptom_headers)
                },
            }

    # Рядок 1 це заголовок
    return RecordStore.from_raw(raw_records(), primary_symptoms=symptom_headers, first_row_number=2)


def load_clinical_dataset(path: PathLike) -> RecordStore:
    """
    Завантажити клінічний датасет.

    Raises:
        FileNotFoundError: якщо файлу немає
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Clinical dataset not found: {path}")

    rows = _read_rows(path)
    header = next(rows, None)
    if header is None:
        logger.warning("Clinical dataset is empty: %s", path)
        return RecordStore([])

    store = parse_clinical_rows(header, rows)
    logger.info("Loaded %s from %s", store, path.name)
    return store


def load_secondary_corpus(path: PathLike) -> SecondarySymptomCorpus:
    """Завантажити текстові описи симптомів (порожній корпус, якщо файлу немає)"""
    path = Path(path)
    if not path.exists():
        logger.info("Secondary symptoms file not found, skipping: %s", path)
        return SecondarySymptomCorpus()

    texts: Dict[str, str] = {}
    rows = _read_rows(path)
    next(rows, None)

    for row in rows:
        if len(row) < 2:
            continue
        name, symptoms_text = row[0], row[1]
        if name and symptoms_text:
            texts[name] = symptoms_text

    corpus = SecondarySymptomCorpus(texts)
    logger.info("Loaded %s from %s", corpus, path.name)
    return corpus


def load_precautions(path: PathLike) -> Dict[str, List[str]]:
    """Завантажити запобіжні заходи: disease (lowercase) → список порад"""
    path = Path(path)
    if not path.exists():
        logger.info("Precautions file not found, skipping: %s", path)
        return {}

    precautions: Dict[str, List[str]] = {}
    rows = _read_rows(path)
    next(rows, None)

    for row in rows:
        disease = row[0]
        if not disease:
            continue
        precautions[disease.lower()] = [tip for tip in row[1:] if tip]

    return precautions


def load_disease_metadata(path: PathLike) -> Dict[str, Dict[str, Optional[str]]]:
    """
    Завантажити описи та лікування: disease (lowercase) → {description, treatments}.

    Для повторів хвороби зберігається перший запис.
    """
    path = Path(path)
    if not path.exists():
        logger.info("Disease metadata file not found, skipping: %s", path)
        return {}

    metadata: Dict[str, Dict[str, Optional[str]]] = {}
    rows = _read_rows(path)
    next(rows, None)

    for row in rows:
        if len(row) < 7:
            continue
        name, description, treatments = row[1], row[3], row[6]
        if not name:
            continue
        metadata.setdefault(name.lower(), {
            "description": description or None,
            "treatments": treatments or DEFAULT_TREATMENT,
        })

    return metadata
