"""
HealthPulse — Inference

- InferenceEngine: Байєсівський скоринг та нормалізація
- QuestionnaireSession: покрокове анкетування пацієнта
"""

from .engine import (
    DISCLAIMER,
    DiseaseScore,
    InferenceEngine,
    rescaled_softmax,
    summarize_results,
)
from .session import QuestionnaireSession, SessionStatus


__all__ = [
    "InferenceEngine",
    "DiseaseScore",
    "rescaled_softmax",
    "summarize_results",
    "DISCLAIMER",
    "QuestionnaireSession",
    "SessionStatus",
]
