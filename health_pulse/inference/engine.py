"""
HealthPulse — Байєсівський движок

Для кожної хвороби накопичується log-score:

    log P(D | age)                          апріорі вікової групи (Laplace, α = 1)
  + 1.5 · log P(gender | D)                 стать
  + Σ внески первинних симптомів            точні умовні ймовірності з когорти
  + Σ внески вторинних симптомів            текстове перекриття з описом хвороби
  + 2.0 · log(1 + 0.15 · matched)           бонус за кількість співпадінь

Потім log-scores нормалізуються разом для всіх хвороб:
min-max → [0, 1], exp(5 · x), softmax у відсотки.

Симптоми без відповіді та відповіді "Not Sure" нічого не додають.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from health_pulse.config import InferenceConfig
from health_pulse.ingestion.disease_info import DEFAULT_DESCRIPTION, DiseaseInfoCatalog
from health_pulse.schemas import AgeBracket, PatientProfile, PredictionResult, Response
from health_pulse.statistics import DiseaseStats, FittedModel


@dataclass
class DiseaseScore:
    """Сирий (ненормалізований) результат скорингу хвороби"""
    disease_name: str
    log_score: float
    matched_symptom_count: float
    case_count: int
    age_bracket_count: int


def rescaled_softmax(log_scores: Sequence[float], discrimination_factor: float = 5.0) -> np.ndarray:
    """
    Перетворити log-scores на відсотки.

    1. min-max масштабування в [0, 1] (дільник 1, якщо всі рівні)
    2. exp(discrimination_factor · x)
    3. нормалізація до суми 100

    Args:
        log_scores: Сирі log-scores всіх хвороб
        discrimination_factor: Гострота розподілу

    Returns:
        Масив відсотків того ж порядку
    """
    scores = np.asarray(log_scores, dtype=np.float64)
    if scores.size == 0:
        return scores

    min_log = scores.min()
    log_range = scores.max() - min_log
    if log_range == 0:
        log_range = 1.0

    exps = np.exp((scores - min_log) / log_range * discrimination_factor)
    return exps / exps.sum() * 100.0


class InferenceEngine:
    """
    Движок Байєсівського скорингу.

    Стану між викликами не тримає: однаковий профіль дає однаковий результат.

    Приклад використання:
        engine = InferenceEngine(model)

        profile = PatientProfile(age_bracket=model.bracket(1), gender="Female")
        profile.answer("fever", Response.YES)
        profile.answer("cough", Response.NO)

        for result in engine.predict(profile)[:5]:
            print(f"{result.disease_name}: {result.probability_percent:.1f}%")
    """

    def __init__(self, model: FittedModel, config: Optional[InferenceConfig] = None):
        """
        Args:
            model: Навчена модель когорти
            config: Параметри скорингу (за замовчуванням з конфігурації моделі)
        """
        self.model = model
        self.config = config or model.config.inference

    # =========================================================================
    # Ймовірності
    # =========================================================================

    def age_prior(self, bracket: AgeBracket, disease: str) -> float:
        """P(D | age) = (n_D,age + α) / (n_age + α · N_diseases)"""
        alpha = self.config.alpha
        n_diseases = len(self.model.disease_stats)
        return (bracket.prior_count(disease) + alpha) / (bracket.total_records + alpha * n_diseases)

    def symptom_conditional(self, stats: DiseaseStats, symptom: str) -> float:
        """P(symptom | D), згладжена"""
        return stats.symptom_conditional(symptom, self.config.alpha)

    def gender_conditional(self, stats: DiseaseStats, gender_key: str) -> float:
        """P(gender | D), згладжена"""
        return stats.gender_conditional(gender_key, self.config.alpha)

    # =========================================================================
    # Внески доказів
    # =========================================================================

    def primary_evidence(self, p: float, response: Response) -> Tuple[float, float]:
        """
        Внесок первинного симптому.

        Args:
            p: Згладжена P(symptom | D)
            response: Відповідь пацієнта

        Returns:
            (доданок до log-score, приріст лічильника співпадінь)
        """
        cfg = self.config

        if response == Response.YES:
            if p > cfg.relevance_threshold:
                return cfg.yes_strong_weight * math.log(p), cfg.yes_match_increment
            return cfg.yes_weak_weight * math.log(p), 0.0

        if response == Response.MAYBE:
            if p > cfg.relevance_threshold:
                return cfg.maybe_weight * math.log(p), cfg.maybe_match_increment
            return 0.0, 0.0

        if response == Response.NO:
            # Хвороба зазвичай має симптом, а пацієнт його заперечує
            if p > cfg.strong_absence_threshold:
                return cfg.no_strong_weight * math.log(1 - p), 0.0
            if p > cfg.relevance_threshold:
                return cfg.no_moderate_weight * math.log(1 - p), 0.0
            return 0.0, 0.0

        return 0.0, 0.0

    def secondary_evidence(self, overlap: float, response: Response) -> Tuple[float, float]:
        """
        Внесок вторинного симптому за текстовим перекриттям.

        Args:
            overlap: Частка слів фрази в описі хвороби [0, 1]
            response: Відповідь пацієнта

        Returns:
            (доданок до log-score, приріст лічильника співпадінь)
        """
        cfg = self.config

        if response == Response.YES:
            if overlap > cfg.secondary_strong_overlap:
                return (
                    cfg.secondary_strong_weight * math.log(cfg.secondary_strong_probability),
                    cfg.yes_match_increment,
                )
            if overlap > cfg.secondary_partial_overlap:
                return (
                    cfg.secondary_partial_weight * math.log(cfg.secondary_partial_probability),
                    cfg.secondary_partial_increment,
                )
            # TODO: замінити фіксований штраф на умовну ймовірність з корпусу
            return cfg.secondary_miss_weight * math.log(cfg.secondary_miss_probability), 0.0

        if response == Response.MAYBE:
            if overlap > cfg.secondary_maybe_overlap:
                return (
                    cfg.secondary_maybe_weight * math.log(cfg.secondary_maybe_probability),
                    cfg.secondary_maybe_increment,
                )
            return 0.0, 0.0

        if response == Response.NO:
            if overlap > cfg.secondary_strong_overlap:
                return cfg.secondary_absent_weight * math.log(cfg.secondary_absent_probability), 0.0
            return 0.0, 0.0

        return 0.0, 0.0

    def specificity_bonus(self, matched: float) -> float:
        """Бонус за кількість незалежних співпадінь"""
        if matched <= 0:
            return 0.0
        return self.config.specificity_weight * math.log(1 + self.config.specificity_rate * matched)

    # =========================================================================
    # Скоринг
    # =========================================================================

    def score_disease(self, disease: str, profile: PatientProfile) -> DiseaseScore:
        """
        Порахувати сирий log-score однієї хвороби.

        Args:
            disease: Назва хвороби (з моделі)
            profile: Профіль з обраною віковою групою

        Returns:
            DiseaseScore
        """
        disease = self.model.disease_stats.resolve(disease)
        stats = self.model.disease_stats[disease]
        bracket = profile.age_bracket

        log_score = math.log(self.age_prior(bracket, disease))
        matched = 0.0

        gender_key = profile.gender_key
        if gender_key:
            p = self.gender_conditional(stats, gender_key)
            log_score += self.config.gender_weight * math.log(p)

        corpus = self.model.secondary_corpus

        for question in self.model.questions:
            response = profile.get_response(question.name)
            if response is None or response == Response.NOT_SURE:
                continue

            if question.is_primary:
                p = self.symptom_conditional(stats, question.name)
                delta, increment = self.primary_evidence(p, response)
            else:
                overlap = corpus.overlap_score(
                    question.name, disease, self.config.secondary_min_word_length
                )
                delta, increment = self.secondary_evidence(overlap, response)

            log_score += delta
            matched += increment

        log_score += self.specificity_bonus(matched)

        return DiseaseScore(
            disease_name=disease,
            log_score=log_score,
            matched_symptom_count=matched,
            case_count=stats.case_count,
            age_bracket_count=bracket.prior_count(disease),
        )

    def score_all(self, profile: PatientProfile) -> List[DiseaseScore]:
        """Сирі scores всіх хвороб у порядку першої появи в когорті"""
        profile.require_complete()
        return [
            self.score_disease(disease, profile)
            for disease in self.model.disease_stats
        ]

    def predict(self, profile: PatientProfile) -> List[PredictionResult]:
        """
        Розподіл ймовірностей по всіх хворобах.

        Args:
            profile: Профіль пацієнта (відповіді можуть бути частковими)

        Returns:
            Список PredictionResult за спаданням ймовірності
            (порожній, якщо когорта порожня)

        Raises:
            IncompleteProfileError: якщо не обрані вікова група або стать
        """
        if self.model.is_empty:
            return []

        scores = self.score_all(profile)
        percents = rescaled_softmax(
            [s.log_score for s in scores],
            self.config.discrimination_factor
        )

        results = [
            PredictionResult(
                disease_name=score.disease_name,
                probability_percent=min(100.0, float(percent)),
                case_count=score.case_count,
                matched_symptom_count=score.matched_symptom_count,
                age_bracket_count=score.age_bracket_count,
                log_score=score.log_score,
            )
            for score, percent in zip(scores, percents)
        ]

        # sorted стабільний: рівні ймовірності зберігають порядок хвороб
        return sorted(results, key=lambda r: -r.probability_percent)

    # =========================================================================
    # Пояснення
    # =========================================================================

    def explain(
        self,
        profile: PatientProfile,
        results: Optional[List[PredictionResult]] = None,
        n_alternatives: int = 3
    ) -> str:
        """
        Текстовий звіт про результат.

        Args:
            profile: Профіль пацієнта
            results: Готові результати (якщо None, рахуються)
            n_alternatives: Скільки альтернативних діагнозів показати

        Returns:
            Текст звіту
        """
        if results is None:
            results = self.predict(profile)

        if not results:
            return "No diagnosis available."

        summary = summarize_results(results, self.model.catalog, n_alternatives)
        primary = summary["primary"]

        lines = []
        lines.append(f"Diagnostic Probability: {primary['disease']} ({primary['probability']:.1f}%)")
        lines.append("=" * 50)
        lines.append(f"Profile: {profile.age_bracket.label} | {profile.gender}")
        lines.append(f"Matched {primary['age_bracket_count']} cases in your age group")

        answered = [
            (q.name, profile.get_response(q.name))
            for q in self.model.questions
            if profile.get_response(q.name) is not None
        ]
        if answered:
            lines.append(f"\nAnswers ({len(answered)}):")
            for name, response in answered:
                lines.append(f"  {name}: {response.value}")

        lines.append("\nDescription:")
        lines.append(f"  {primary['description'] or DEFAULT_DESCRIPTION}")
        lines.append("\nTreatment Options:")
        lines.append(f"  {primary['treatments']}")

        if primary["precautions"]:
            lines.append("\nRecommended Precautions:")
            for tip in primary["precautions"]:
                lines.append(f"  - {tip}")

        if summary["alternatives"]:
            lines.append("\nOther Potential Conditions:")
            for alt in summary["alternatives"]:
                lines.append(f"  - {alt['disease']}: {alt['probability']:.1f}%")

        lines.append(f"\nCalculated using Naive Bayesian Inference based on "
                     f"{self.model.total_records} clinical records.")
        lines.append(DISCLAIMER)

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"InferenceEngine(diseases={len(self.model.disease_stats)}, "
            f"questions={len(self.model.questions)}, alpha={self.config.alpha})"
        )


DISCLAIMER = (
    "DISCLAIMER: This report is for informational purposes only. "
    "It is not a substitute for professional medical advice, diagnosis, or treatment."
)


def summarize_results(
    results: List[PredictionResult],
    catalog: DiseaseInfoCatalog,
    n_alternatives: int = 3
) -> Dict:
    """
    Підсумок для UI: основний діагноз з довідковою інформацією та альтернативи.

    Returns:
        {"primary": {...} | None, "alternatives": [...]}
    """
    if not results:
        return {"primary": None, "alternatives": []}

    top = results[0]
    info = catalog.get(top.disease_name)

    return {
        "primary": {
            "disease": top.disease_name,
            "probability": top.probability_percent,
            "case_count": top.case_count,
            "age_bracket_count": top.age_bracket_count,
            "matched_symptoms": top.matched_symptom_count,
            "description": info.description,
            "treatments": info.treatments,
            "precautions": info.precautions,
        },
        "alternatives": [
            {"disease": r.disease_name, "probability": r.probability_percent}
            for r in results[1:1 + n_alternatives]
        ],
    }
