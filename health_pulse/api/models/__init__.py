"""
HealthPulse — API Models

Pydantic моделі для запитів та відповідей API.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Dict, Optional
from enum import Enum
from datetime import datetime

from health_pulse.schemas import PredictionResult, Response


# ============================================================
# Enums
# ============================================================

class SessionStatus(str, Enum):
    """Статус сесії"""
    PROFILE = "profile"
    ACTIVE = "active"
    COMPLETED = "completed"


class SymptomKindName(str, Enum):
    """Джерело симптому"""
    PRIMARY = "primary"
    SECONDARY = "secondary"


# ============================================================
# Model Info
# ============================================================

class AgeBracketInfo(BaseModel):
    """Вікова група"""
    index: int
    label: str
    lower_bound: int
    upper_bound: int
    total_records: int


class AgeBracketsResponse(BaseModel):
    brackets: List[AgeBracketInfo]


class QuestionInfo(BaseModel):
    """Питання анкети"""
    index: int
    symptom: str
    kind: SymptomKindName
    text: str


class QuestionsResponse(BaseModel):
    questions: List[QuestionInfo]
    total: int
    primary_count: int
    secondary_count: int


class DiseaseSummary(BaseModel):
    name: str
    case_count: int


class DiseaseListResponse(BaseModel):
    """Список хвороб когорти"""
    diseases: List[DiseaseSummary]
    total: int
    limit: int
    offset: int


class DiseaseDetail(BaseModel):
    """Статистика та довідкова інформація про хворобу"""
    name: str
    case_count: int
    gender_counts: Dict[str, int]
    symptom_presence: Dict[str, int]
    description: Optional[str] = None
    treatments: str
    precautions: List[str] = []


# ============================================================
# Session Models
# ============================================================

class CreateSessionRequest(BaseModel):
    """Запит на створення сесії"""
    age_bracket: int = Field(..., ge=0, description="Індекс вікової групи")
    gender: str = Field(..., min_length=1, max_length=50)

    @field_validator("gender")
    @classmethod
    def strip_gender(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("gender must not be blank")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "age_bracket": 1,
                "gender": "Female"
            }
        }


class SessionQuestion(BaseModel):
    """Поточне питання для пацієнта"""
    index: int
    symptom: str
    kind: SymptomKindName
    text: str
    previous_answer: Optional[Response] = None


class SessionState(BaseModel):
    """Поточний стан сесії"""
    session_id: str
    status: SessionStatus

    # Профіль
    age_bracket: Optional[str] = None
    gender: Optional[str] = None

    # Анкета
    question_index: int
    total_questions: int
    progress: float = Field(..., ge=0, le=1)
    current_question: Optional[SessionQuestion] = None
    answers: Dict[str, Response] = {}

    # Метадані
    created_at: datetime
    updated_at: datetime


class AnswerRequest(BaseModel):
    """Відповідь на поточне питання"""
    answer: Response

    @field_validator("answer", mode="before")
    @classmethod
    def parse_answer(cls, v):
        return Response.parse(v)

    class Config:
        json_schema_extra = {
            "example": {"answer": "Yes"}
        }


class AnswerResponse(BaseModel):
    """Результат обробки відповіді"""
    accepted: bool
    is_last: bool
    session_state: SessionState


# ============================================================
# Prediction Models
# ============================================================

class PrimaryDiagnosis(BaseModel):
    """Найімовірніший діагноз з довідковою інформацією"""
    disease: str
    probability: float
    case_count: int
    age_bracket_count: int
    matched_symptoms: float
    description: Optional[str] = None
    treatments: str
    precautions: List[str] = []


class AlternativeDiagnosis(BaseModel):
    disease: str
    probability: float


class PredictionsResponse(BaseModel):
    """Розподіл ймовірностей для сесії"""
    session_id: str
    answered: int
    predictions: List[PredictionResult]
    primary: Optional[PrimaryDiagnosis] = None
    alternatives: List[AlternativeDiagnosis] = []
    disclaimer: str


# ============================================================
# Health & Info Models
# ============================================================

class HealthResponse(BaseModel):
    """Відповідь health check"""
    status: str = "ok"
    version: str
    model_loaded: bool
    total_records: int
    diseases: int
    questions: int
    active_sessions: int
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    """Відповідь з помилкою"""
    error: str
    detail: Optional[str] = None
