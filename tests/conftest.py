"""
Спільні фікстури для тестів HealthPulse

Невелика когорта в пам'яті (4 хвороби, 30 записів) та її CSV-версія в tmp_path.
"""

import csv
from pathlib import Path

import pytest


PRIMARY_SYMPTOMS = ["fever", "cough", "fatigue", "difficulty breathing"]

SECONDARY_TEXTS = {
    "Influenza": "Fever, chills, body aches, headache, sore throat (mild), runny nose",
    "Common Cold": "Runny nose, sneezing, sore throat, cough, mild headache",
    "Asthma": "Shortness of breath, wheezing, chest tightness, cough",
    "Migraine": "Headache, nausea, sensitivity to light, dizziness, blurred vision",
}

DISEASE_METADATA = {
    "influenza": {"description": "Viral infection of the respiratory tract.", "treatments": "Rest, fluids"},
    "asthma": {"description": "Chronic inflammation of the airways.", "treatments": "Inhalers"},
}

PRECAUTIONS = {
    "influenza": ["drink fluids", "rest", "avoid contact"],
    "migraine": ["avoid bright light"],
}


def _yes(flag: bool) -> str:
    return "Yes" if flag else "No"


def make_cohort_rows():
    """Сирі записи когорти у форматі RecordStore.from_raw"""
    rows = []

    for i in range(12):
        rows.append({
            "disease": "Influenza",
            "age": 20 + i,
            "gender": "Male" if i % 3 == 0 else "Female",
            "symptom_answers": {
                "fever": _yes(i < 11),
                "cough": _yes(i % 2 == 0),
                "fatigue": "Yes",
                "difficulty breathing": "No",
            },
        })

    for i in range(8):
        rows.append({
            "disease": "Common Cold",
            "age": 10 + i * 2,
            "gender": "Male" if i % 2 == 0 else "Female",
            "symptom_answers": {
                "fever": _yes(i < 2),
                "cough": "Yes",
                "fatigue": _yes(i % 4 == 0),
                "difficulty breathing": "No",
            },
        })

    for i in range(6):
        rows.append({
            "disease": "Asthma",
            "age": 30 + i * 5,
            "gender": "Female" if i % 2 == 0 else "Male",
            "symptom_answers": {
                "fever": "No",
                "cough": _yes(i < 4),
                "fatigue": "No",
                "difficulty breathing": "Yes",
            },
        })

    for i in range(4):
        rows.append({
            "disease": "Migraine",
            "age": 40 + i * 3,
            "gender": "Female",
            "symptom_answers": {
                "fever": "No",
                "cough": "No",
                "fatigue": _yes(i < 2),
                "difficulty breathing": "No",
            },
        })

    return rows


@pytest.fixture
def cohort_rows():
    return make_cohort_rows()


@pytest.fixture
def store(cohort_rows):
    from health_pulse.statistics import RecordStore
    return RecordStore.from_raw(cohort_rows, primary_symptoms=PRIMARY_SYMPTOMS)


@pytest.fixture
def corpus():
    from health_pulse.statistics import SecondarySymptomCorpus
    return SecondarySymptomCorpus(SECONDARY_TEXTS)


@pytest.fixture
def catalog():
    from health_pulse.ingestion import DiseaseInfoCatalog
    return DiseaseInfoCatalog(metadata=DISEASE_METADATA, precautions=PRECAUTIONS)


@pytest.fixture
def model(store, corpus, catalog):
    from health_pulse.statistics import FittedModel
    return FittedModel.build(store, secondary_corpus=corpus, catalog=catalog)


@pytest.fixture
def engine(model):
    from health_pulse.inference import InferenceEngine
    return InferenceEngine(model)


@pytest.fixture
def profile(model):
    """Профіль з обраною віковою групою та статтю, без відповідей"""
    from health_pulse.schemas import PatientProfile
    return PatientProfile(age_bracket=model.bracket(1), gender="Female")


@pytest.fixture
def data_dir(tmp_path: Path, cohort_rows) -> Path:
    """
    Директорія з чотирма CSV джерелами у форматі оригінальних датасетів.
    """
    from health_pulse.config import DataConfig
    names = DataConfig()

    with open(tmp_path / names.clinical_dataset, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(
            ["Disease", "Fever", "Cough", "Fatigue", "Difficulty Breathing",
             "Age", "Gender", "Blood Pressure", "Cholesterol Level", "Outcome Variable"]
        )
        for row in cohort_rows:
            answers = row["symptom_answers"]
            writer.writerow(
                [row["disease"]]
                + [answers[s] for s in PRIMARY_SYMPTOMS]
                + [row["age"], row["gender"], "Normal", "Normal", "Positive"]
            )

    with open(tmp_path / names.secondary_symptoms, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Name", "Symptoms", "Treatments", "Disease_Code", "Contagious", "Chronic"])
        for disease, text in SECONDARY_TEXTS.items():
            writer.writerow([disease, text, "", "", "", ""])

    with open(tmp_path / names.precautions, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["Disease", "Precaution_1", "Precaution_2", "Precaution_3", "Precaution_4"])
        writer.writerow(["Influenza", "drink fluids", "rest", "avoid contact", ""])
        writer.writerow(["Migraine", "avoid bright light", "", "", ""])

    with open(tmp_path / names.disease_metadata, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["disease_id", "name", "type", "description", "symptoms", "causes", "treatments"])
        writer.writerow(["1", "Influenza", "viral", "Viral infection of the respiratory tract.",
                         "fever", "virus", "Rest, fluids"])
        writer.writerow(["2", "Influenza", "viral", "Duplicate entry", "", "", "Ignored"])
        writer.writerow(["3", "Asthma", "chronic", "Chronic inflammation of the airways.",
                         "wheezing", "allergens", "Inhalers"])

    return tmp_path
