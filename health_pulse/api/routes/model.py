"""
HealthPulse — Model Routes

Довідкові endpoints навченої моделі:
- вікові групи
- питання анкети
- хвороби когорти
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from health_pulse.errors import UnknownDiseaseError
from health_pulse.statistics import FittedModel

from ..dependencies import get_models, ModelsManager
from ..models import (
    AgeBracketInfo,
    AgeBracketsResponse,
    QuestionInfo,
    QuestionsResponse,
    DiseaseSummary,
    DiseaseListResponse,
    DiseaseDetail,
    SymptomKindName,
    ErrorResponse,
)

router = APIRouter(prefix="/model", tags=["Model"])


def require_model(models: ModelsManager) -> FittedModel:
    """Модель або 503, якщо вона не побудована"""
    if models.model is None:
        raise HTTPException(
            status_code=503,
            detail=f"Model not loaded: {models.error or 'unknown error'}"
        )
    return models.model


@router.get("/age-brackets", response_model=AgeBracketsResponse)
async def list_age_brackets(
    models: ModelsManager = Depends(get_models)
) -> AgeBracketsResponse:
    """Вікові групи для вибору на першому кроці анкети"""
    model = require_model(models)

    return AgeBracketsResponse(
        brackets=[
            AgeBracketInfo(
                index=i,
                label=b.label,
                lower_bound=b.lower_bound,
                upper_bound=b.upper_bound,
                total_records=b.total_records,
            )
            for i, b in enumerate(model.age_brackets)
        ]
    )


@router.get("/questions", response_model=QuestionsResponse)
async def list_questions(
    models: ModelsManager = Depends(get_models)
) -> QuestionsResponse:
    """Питання анкети в порядку показу"""
    model = require_model(models)
    questions = model.questions

    return QuestionsResponse(
        questions=[
            QuestionInfo(
                index=i,
                symptom=q.name,
                kind=SymptomKindName(q.kind.value),
                text=q.text,
            )
            for i, q in enumerate(questions)
        ],
        total=len(questions),
        primary_count=len(questions.primary),
        secondary_count=len(questions.secondary),
    )


@router.get("/diseases", response_model=DiseaseListResponse)
async def list_diseases(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    models: ModelsManager = Depends(get_models)
) -> DiseaseListResponse:
    """Хвороби когорти в порядку першої появи"""
    model = require_model(models)
    names = model.disease_names

    return DiseaseListResponse(
        diseases=[
            DiseaseSummary(name=name, case_count=model.disease_stats[name].case_count)
            for name in names[offset:offset + limit]
        ],
        total=len(names),
        limit=limit,
        offset=offset,
    )


@router.get(
    "/diseases/{disease_name}",
    response_model=DiseaseDetail,
    responses={404: {"model": ErrorResponse}}
)
async def get_disease(
    disease_name: str,
    models: ModelsManager = Depends(get_models)
) -> DiseaseDetail:
    """Статистика хвороби (пошук без урахування регістру)"""
    model = require_model(models)

    try:
        name = model.disease_stats.resolve(disease_name)
    except UnknownDiseaseError:
        raise HTTPException(
            status_code=404,
            detail=f"Disease '{disease_name}' not found"
        )

    stats = model.disease_stats[name]
    info = model.catalog.get(name)

    return DiseaseDetail(
        name=name,
        case_count=stats.case_count,
        gender_counts=dict(stats.gender_count),
        symptom_presence=dict(stats.symptom_presence_count),
        description=info.description,
        treatments=info.treatments,
        precautions=info.precautions,
    )
