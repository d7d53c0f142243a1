"""
HealthPulse — Сесія анкетування

QuestionnaireSession веде пацієнта по анкеті:
1. вибір вікової групи та статі
2. питання по черзі (Yes / No / Maybe / Not Sure), з можливістю повернутись назад
3. розподіл ймовірностей після будь-якої кількості відповідей
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union
import uuid

from health_pulse.schemas import AgeBracket, PatientProfile, PredictionResult, Response
from health_pulse.statistics import FittedModel, SymptomQuestion


class SessionStatus(Enum):
    """Статус сесії"""
    PROFILE = "profile"          # вікова група або стать ще не обрані
    ACTIVE = "active"            # йдуть питання
    COMPLETED = "completed"      # всі питання пройдені


class QuestionnaireSession:
    """
    Сесія анкетування одного пацієнта.

    Відповіді не видаляються при back(): повторна відповідь перезаписує стару.

    Приклад:
        session = QuestionnaireSession(model)
        session.select_age_bracket(1)
        session.select_gender("Female")

        while not session.is_complete:
            print(session.current_question.text)
            session.answer("Yes")

        results = session.predict(InferenceEngine(model))
    """

    def __init__(self, model: FittedModel, session_id: Optional[str] = None):
        self.model = model
        self.session_id = session_id or str(uuid.uuid4())[:8]
        self.profile = PatientProfile()
        self.cursor = 0

        self.created_at = datetime.now()
        self.updated_at = datetime.now()

    def _touch(self) -> None:
        self.updated_at = datetime.now()

    # =========================================================================
    # Профіль
    # =========================================================================

    def select_age_bracket(self, key: Union[int, str, AgeBracket]) -> AgeBracket:
        """
        Обрати вікову групу за індексом, міткою або об'єктом.

        Raises:
            UnknownAgeBracketError: якщо групи немає в моделі
        """
        bracket = key if isinstance(key, AgeBracket) else self.model.bracket(key)
        self.profile.age_bracket = bracket
        self._touch()
        return bracket

    def select_gender(self, gender: str) -> None:
        if not gender or not gender.strip():
            raise ValueError("Gender must be a non-empty string")
        self.profile.gender = gender.strip()
        self._touch()

    @property
    def is_profile_complete(self) -> bool:
        return self.profile.is_complete

    # =========================================================================
    # Питання
    # =========================================================================

    @property
    def questions(self) -> List[SymptomQuestion]:
        return list(self.model.questions)

    @property
    def total_questions(self) -> int:
        return len(self.model.questions)

    @property
    def current_question(self) -> Optional[SymptomQuestion]:
        """Поточне питання (None, якщо анкета пройдена)"""
        if self.cursor >= self.total_questions:
            return None
        return self.model.questions[self.cursor]

    @property
    def current_response(self) -> Optional[Response]:
        """Збережена відповідь на поточне питання (якщо була)"""
        question = self.current_question
        if question is None:
            return None
        return self.profile.get_response(question.name)

    @property
    def is_complete(self) -> bool:
        return self.cursor >= self.total_questions

    @property
    def progress(self) -> float:
        """Частка пройдених питань [0, 1]"""
        if self.total_questions == 0:
            return 1.0
        return min(self.cursor, self.total_questions) / self.total_questions

    @property
    def status(self) -> SessionStatus:
        if not self.is_profile_complete:
            return SessionStatus.PROFILE
        if self.is_complete:
            return SessionStatus.COMPLETED
        return SessionStatus.ACTIVE

    def answer(self, response) -> bool:
        """
        Відповісти на поточне питання та перейти до наступного.

        Args:
            response: Response або рядок ("Yes", "no", "not sure", ...)

        Returns:
            True, якщо це було останнє питання

        Raises:
            RuntimeError: якщо питань більше немає
            ValueError: якщо відповідь не розпізнана
        """
        question = self.current_question
        if question is None:
            raise RuntimeError("Questionnaire is already complete")

        self.profile.answer(question.name, response)
        self.cursor += 1
        self._touch()
        return self.is_complete

    def back(self) -> bool:
        """
        Повернутись до попереднього питання.

        Returns:
            False, якщо вже на першому питанні
        """
        if self.cursor == 0:
            return False
        self.cursor -= 1
        self._touch()
        return True

    def reset(self) -> None:
        """Почати заново: профіль та відповіді очищуються"""
        self.profile.clear()
        self.cursor = 0
        self._touch()

    # =========================================================================
    # Результати
    # =========================================================================

    def predict(self, engine) -> List[PredictionResult]:
        """
        Розподіл ймовірностей для поточного стану профілю.

        Args:
            engine: InferenceEngine для тієї ж моделі

        Raises:
            IncompleteProfileError: якщо не обрані вікова група або стать
        """
        return engine.predict(self.profile)

    def get_answers(self) -> Dict[str, str]:
        """Відповіді у порядку питань"""
        return {
            q.name: self.profile.get_response(q.name).value
            for q in self.model.questions
            if self.profile.get_response(q.name) is not None
        }

    def __repr__(self) -> str:
        return (
            f"QuestionnaireSession(id={self.session_id}, status={self.status.value}, "
            f"question={self.cursor}/{self.total_questions})"
        )
