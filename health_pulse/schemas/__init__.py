"""
HealthPulse — Модуль схем даних (schemas)

Компоненти:
- cohort.py: ClinicalRecord, AgeBracket
- patient.py: Response, PatientProfile
- prediction.py: PredictionResult

Приклад використання:
    from health_pulse.schemas import ClinicalRecord, PatientProfile, Response

    record = ClinicalRecord(disease="Asthma", age=25, gender="Male",
                            symptom_answers={"cough": "Yes"})

    profile = PatientProfile(gender="Male")
    profile.answer("cough", Response.YES)
"""

from .cohort import ClinicalRecord, AgeBracket
from .patient import Response, PatientProfile
from .prediction import PredictionResult


__all__ = [
    # Cohort
    "ClinicalRecord",
    "AgeBracket",

    # Patient
    "Response",
    "PatientProfile",

    # Results
    "PredictionResult",
]
