"""
HealthPulse — Sessions Routes

Endpoints для сесій анкетування:
- Створення сесії (вікова група + стать)
- Отримання стану
- Відповідь на питання, крок назад, скидання
- Розподіл ймовірностей
- Закриття сесії
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from health_pulse.errors import IncompleteProfileError, UnknownAgeBracketError
from health_pulse.inference import DISCLAIMER, QuestionnaireSession, summarize_results

from ..dependencies import (
    get_models, get_sessions,
    ModelsManager, SessionManager
)
from ..models import (
    CreateSessionRequest,
    SessionState,
    SessionStatus,
    SessionQuestion,
    SymptomKindName,
    AnswerRequest,
    AnswerResponse,
    PredictionsResponse,
    PrimaryDiagnosis,
    AlternativeDiagnosis,
    ErrorResponse,
)
from .model import require_model

router = APIRouter(prefix="/sessions", tags=["Sessions"])


def session_to_response(session: QuestionnaireSession) -> SessionState:
    """Конвертувати сесію в Pydantic модель"""
    profile = session.profile

    question = None
    if session.current_question is not None:
        q = session.current_question
        question = SessionQuestion(
            index=session.cursor,
            symptom=q.name,
            kind=SymptomKindName(q.kind.value),
            text=q.text,
            previous_answer=session.current_response,
        )

    return SessionState(
        session_id=session.session_id,
        status=SessionStatus(session.status.value),
        age_bracket=profile.age_bracket.label if profile.age_bracket else None,
        gender=profile.gender,
        question_index=session.cursor,
        total_questions=session.total_questions,
        progress=session.progress,
        current_question=question,
        answers=session.get_answers(),
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


def get_session_or_404(sessions: SessionManager, session_id: str) -> QuestionnaireSession:
    session = sessions.get_session(session_id)

    if not session:
        raise HTTPException(
            status_code=404,
            detail=f"Session {session_id} not found"
        )

    return session


def apply_profile(session: QuestionnaireSession, request: CreateSessionRequest) -> None:
    """Встановити вікову групу та стать (400 для невідомої групи)"""
    try:
        session.select_age_bracket(request.age_bracket)
    except UnknownAgeBracketError as e:
        raise HTTPException(status_code=400, detail=str(e))
    session.select_gender(request.gender)


@router.post("", response_model=SessionState)
async def create_session(
    request: CreateSessionRequest,
    models: ModelsManager = Depends(get_models),
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """
    Створити нову сесію анкетування.

    - **age_bracket**: індекс групи з `/api/model/age-brackets`
    - **gender**: стать пацієнта

    Приклад:
    ```json
    {
        "age_bracket": 1,
        "gender": "Female"
    }
    ```
    """
    model = require_model(models)

    try:
        model.bracket(request.age_bracket)
    except UnknownAgeBracketError as e:
        raise HTTPException(status_code=400, detail=str(e))

    session = sessions.create_session(model)
    apply_profile(session, request)

    return session_to_response(session)


@router.get(
    "/{session_id}",
    response_model=SessionState,
    responses={404: {"model": ErrorResponse}}
)
async def get_session(
    session_id: str,
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """Отримати поточний стан сесії"""
    session = get_session_or_404(sessions, session_id)
    return session_to_response(session)


@router.post("/{session_id}/answer", response_model=AnswerResponse)
async def answer_question(
    session_id: str,
    request: AnswerRequest,
    sessions: SessionManager = Depends(get_sessions)
) -> AnswerResponse:
    """
    Відповісти на поточне питання.

    - **answer**: "Yes", "No", "Maybe" або "Not Sure"

    Приклад:
    ```json
    {
        "answer": "Yes"
    }
    ```
    """
    session = get_session_or_404(sessions, session_id)

    if not session.is_profile_complete:
        raise HTTPException(
            status_code=409,
            detail="Select age bracket and gender before answering"
        )

    if session.is_complete:
        raise HTTPException(
            status_code=409,
            detail="Questionnaire is already complete"
        )

    is_last = session.answer(request.answer)

    return AnswerResponse(
        accepted=True,
        is_last=is_last,
        session_state=session_to_response(session)
    )


@router.post("/{session_id}/back", response_model=SessionState)
async def previous_question(
    session_id: str,
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """Повернутись до попереднього питання (збережена відповідь залишається)"""
    session = get_session_or_404(sessions, session_id)
    session.back()
    return session_to_response(session)


@router.post("/{session_id}/reset", response_model=SessionState)
async def reset_session(
    session_id: str,
    request: Optional[CreateSessionRequest] = None,
    sessions: SessionManager = Depends(get_sessions)
) -> SessionState:
    """
    Почати анкету заново.

    Без тіла запиту профіль очищується і сесія повертається до кроку
    вибору вікової групи. З тілом `{age_bracket, gender}` новий профіль
    встановлюється одразу.
    """
    session = get_session_or_404(sessions, session_id)
    session.reset()

    if request is not None:
        apply_profile(session, request)

    return session_to_response(session)


@router.get(
    "/{session_id}/predictions",
    response_model=PredictionsResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}
)
async def get_predictions(
    session_id: str,
    top_n: int = Query(default=10, ge=1, le=1000),
    models: ModelsManager = Depends(get_models),
    sessions: SessionManager = Depends(get_sessions)
) -> PredictionsResponse:
    """
    Розподіл ймовірностей для поточних відповідей.

    Доступний після будь-якої кількості відповідей, не тільки в кінці анкети.
    """
    session = get_session_or_404(sessions, session_id)

    try:
        results = session.predict(models.engine_for(session.model))
    except IncompleteProfileError as e:
        raise HTTPException(status_code=409, detail=str(e))

    summary = summarize_results(results, session.model.catalog)

    return PredictionsResponse(
        session_id=session.session_id,
        answered=session.profile.answered_count,
        predictions=results[:top_n],
        primary=PrimaryDiagnosis(**summary["primary"]) if summary["primary"] else None,
        alternatives=[AlternativeDiagnosis(**alt) for alt in summary["alternatives"]],
        disclaimer=DISCLAIMER,
    )


@router.delete("/{session_id}")
async def delete_session(
    session_id: str,
    sessions: SessionManager = Depends(get_sessions)
) -> dict:
    """Закрити та видалити сесію"""
    success = sessions.delete_session(session_id)

    if not success:
        raise HTTPException(
            status_code=404,
            detail=f"Session {session_id} not found"
        )

    return {"deleted": True, "session_id": session_id}


@router.get("")
async def list_sessions(
    sessions: SessionManager = Depends(get_sessions)
) -> dict:
    """Список активних сесій (для адміністрування)"""
    return {
        "active_sessions": sessions.get_active_count(),
        "session_ids": list(sessions.sessions.keys())
    }
