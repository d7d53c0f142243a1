"""
Тести для модуля inference.engine

Запуск: pytest tests/test_inference_engine.py -v
"""

import math

import pytest


def _flu_model():
    """100 записів: Flu 40 (fever у 35), Cold 60 (без fever)"""
    from health_pulse.statistics import FittedModel, RecordStore

    rows = []
    for i in range(40):
        rows.append({
            "disease": "Flu", "age": 30, "gender": "Female",
            "symptom_answers": {"fever": "Yes" if i < 35 else "No"},
        })
    for _ in range(60):
        rows.append({
            "disease": "Cold", "age": 30, "gender": "Female",
            "symptom_answers": {"fever": "No"},
        })

    return FittedModel.build(RecordStore.from_raw(rows, primary_symptoms=["fever"]))


def test_flu_scenario():
    """fever=Yes: p=36/42 > 0.3 → внесок 3·ln(p), лічильник = 1"""
    from health_pulse.inference import InferenceEngine
    from health_pulse.schemas import PatientProfile, Response

    model = _flu_model()
    engine = InferenceEngine(model)

    flu = model.disease_stats["Flu"]
    assert flu.case_count == 40
    assert flu.presence("fever") == 35

    p = engine.symptom_conditional(flu, "fever")
    assert p == pytest.approx(36 / 42)

    delta, increment = engine.primary_evidence(p, Response.YES)
    assert delta == pytest.approx(3.0 * math.log(36 / 42))
    assert delta == pytest.approx(-0.4625, abs=1e-3)
    assert increment == 1.0

    profile = PatientProfile(age_bracket=model.bracket(0), gender="Female")
    baseline = engine.score_disease("Flu", profile)

    profile.answer("fever", Response.YES)
    answered = engine.score_disease("Flu", profile)

    assert answered.matched_symptom_count == 1.0
    assert answered.log_score - baseline.log_score == pytest.approx(
        3.0 * math.log(36 / 42) + 2.0 * math.log(1.15)
    )

    print(f"✓ Flu: Δlog = {answered.log_score - baseline.log_score:.4f}")


def test_base_score_terms():
    """Апріорі вікової групи та стать"""
    from health_pulse.inference import InferenceEngine
    from health_pulse.schemas import PatientProfile

    model = _flu_model()
    engine = InferenceEngine(model)
    bracket = model.bracket(0)

    assert bracket.total_records == 100
    assert engine.age_prior(bracket, "Flu") == pytest.approx(41 / 102)

    profile = PatientProfile(age_bracket=bracket, gender="female")
    score = engine.score_disease("flu", profile)

    expected = math.log(41 / 102) + 1.5 * math.log(41 / 42)
    assert score.log_score == pytest.approx(expected)
    assert score.disease_name == "Flu"
    assert score.age_bracket_count == 40
    assert score.matched_symptom_count == 0

    print(f"✓ Base score: {score.log_score:.4f}")


@pytest.mark.parametrize("p, response, expected_delta, expected_increment", [
    (0.8, "Yes", 3.0 * math.log(0.8), 1.0),
    (0.2, "Yes", 1.5 * math.log(0.2), 0.0),
    (0.8, "Maybe", 1.0 * math.log(0.8), 0.5),
    (0.2, "Maybe", 0.0, 0.0),
    (0.8, "No", 3.0 * math.log(0.2), 0.0),
    (0.4, "No", 1.5 * math.log(0.6), 0.0),
    (0.2, "No", 0.0, 0.0),
    (0.8, "Not Sure", 0.0, 0.0),
])
def test_primary_evidence(engine, p, response, expected_delta, expected_increment):
    from health_pulse.schemas import Response

    delta, increment = engine.primary_evidence(p, Response.parse(response))

    assert delta == pytest.approx(expected_delta)
    assert increment == expected_increment


@pytest.mark.parametrize("overlap, response, expected_delta, expected_increment", [
    (1.0, "Yes", 2.0 * math.log(0.9), 1.0),
    (0.5, "Yes", 1.0 * math.log(0.7), 0.5),
    (0.0, "Yes", 0.5 * math.log(0.2), 0.0),
    (0.6, "Maybe", 0.8 * math.log(0.7), 0.3),
    (0.5, "Maybe", 0.0, 0.0),
    (0.8, "No", 1.5 * math.log(0.3), 0.0),
    (0.7, "No", 0.0, 0.0),
    (1.0, "Not Sure", 0.0, 0.0),
])
def test_secondary_evidence(engine, overlap, response, expected_delta, expected_increment):
    from health_pulse.schemas import Response

    delta, increment = engine.secondary_evidence(overlap, Response.parse(response))

    assert delta == pytest.approx(expected_delta)
    assert increment == pytest.approx(expected_increment)


def test_specificity_bonus(engine):
    assert engine.specificity_bonus(0) == 0.0
    assert engine.specificity_bonus(2) == pytest.approx(2.0 * math.log(1.3))

    print("✓ specificity_bonus")


def test_percentages_sum_to_100(engine, profile):
    """Сума ймовірностей = 100"""
    for symptom, response in [("fever", "Yes"), ("cough", "No"), ("wheezing", "Maybe"),
                              ("headache", "Yes"), ("fatigue", "Not Sure")]:
        profile.answer(symptom, response)
        results = engine.predict(profile)

        assert sum(r.probability_percent for r in results) == pytest.approx(100.0, abs=1e-6)
        assert all(0 <= r.probability_percent <= 100 for r in results)

    print(f"✓ Sum = 100 after {profile.answered_count} answers")


def test_results_sorted(engine, profile):
    profile.answer("fever", "Yes")
    results = engine.predict(profile)

    assert len(results) == 4
    probabilities = [r.probability_percent for r in results]
    assert probabilities == sorted(probabilities, reverse=True)

    print(f"✓ Sorted: {[r.disease_name for r in results]}")


def test_idempotence(engine, profile):
    """Повторний виклик з тим самим профілем дає той самий результат"""
    profile.answer("fever", "Yes")
    profile.answer("wheezing", "No")

    first = engine.predict(profile)
    second = engine.predict(profile)

    assert first == second

    print("✓ predict() is idempotent")


def test_monotonicity_no_to_yes(engine, profile, model):
    """No → Yes для симптому з p > 0.3 строго збільшує log-score"""
    p = engine.symptom_conditional(model.disease_stats["Influenza"], "fever")
    assert p > 0.3

    profile.answer("fever", "No")
    score_no = engine.score_disease("Influenza", profile).log_score

    profile.answer("fever", "Yes")
    score_yes = engine.score_disease("Influenza", profile).log_score

    assert score_yes > score_no

    print(f"✓ No: {score_no:.3f} → Yes: {score_yes:.3f}")


def test_not_sure_equals_unanswered(engine, profile):
    baseline = engine.predict(profile)

    profile.answer("fever", "Not Sure")
    profile.answer("wheezing", "Not Sure")

    assert engine.predict(profile) == baseline

    print("✓ Not Sure contributes nothing")


def test_low_probability_yes_does_not_count_match(engine, profile):
    """Yes з p <= 0.3: малий штраф без співпадіння і без бонусу"""
    base = engine.score_disease("Asthma", profile)

    profile.answer("fever", "Yes")
    asthma = engine.score_disease("Asthma", profile)

    assert asthma.matched_symptom_count == 0
    assert asthma.log_score - base.log_score == pytest.approx(1.5 * math.log(1 / 8))

    print(f"✓ Asthma matched = {asthma.matched_symptom_count}")


def test_secondary_symptoms_use_text_overlap(engine, profile, model):
    """Вторинні симптоми скоряться за перекриттям з текстом хвороби"""
    assert "wheezing" in model.questions
    assert not model.questions.get("wheezing").is_primary

    profile.answer("wheezing", "Yes")

    asthma = engine.score_disease("Asthma", profile)
    migraine = engine.score_disease("Migraine", profile)

    profile.forget("wheezing")
    asthma_base = engine.score_disease("Asthma", profile)
    migraine_base = engine.score_disease("Migraine", profile)

    assert asthma.log_score - asthma_base.log_score == pytest.approx(
        2.0 * math.log(0.9) + 2.0 * math.log(1.15)
    )
    assert migraine.log_score - migraine_base.log_score == pytest.approx(0.5 * math.log(0.2))
    assert asthma.matched_symptom_count == 1.0
    assert migraine.matched_symptom_count == 0.0

    print("✓ Secondary scoring via overlap")


def test_answers_outside_question_set_ignored(engine, profile):
    baseline = engine.predict(profile)

    profile.answer("third eye", "Yes")

    assert engine.predict(profile) == baseline

    print("✓ Unknown symptom answers are ignored")


def test_flu_like_profile(engine, profile):
    profile.answer("fever", "Yes")
    profile.answer("fatigue", "Yes")
    profile.answer("cough", "No")
    profile.answer("difficulty breathing", "No")

    results = engine.predict(profile)

    assert results[0].disease_name == "Influenza"
    assert results[0].matched_symptom_count == 2.0

    print(f"✓ Top: {results[0].disease_name} {results[0].probability_percent:.1f}%")


def test_asthma_like_profile(engine, profile):
    profile.answer("difficulty breathing", "Yes")
    profile.answer("wheezing", "Yes")

    results = engine.predict(profile)

    assert results[0].disease_name == "Asthma"

    print(f"✓ Top: {results[0].disease_name} {results[0].probability_percent:.1f}%")


def test_incomplete_profile(engine, model):
    from health_pulse.errors import IncompleteProfileError
    from health_pulse.schemas import PatientProfile

    with pytest.raises(IncompleteProfileError):
        engine.predict(PatientProfile())

    with pytest.raises(IncompleteProfileError):
        engine.predict(PatientProfile(age_bracket=model.bracket(0)))

    with pytest.raises(IncompleteProfileError):
        engine.predict(PatientProfile(gender="Male"))

    print("✓ Incomplete profile rejected")


def test_empty_cohort_predict():
    """Порожня когорта → [] навіть для неповного профілю"""
    from health_pulse.inference import InferenceEngine
    from health_pulse.schemas import PatientProfile
    from health_pulse.statistics import FittedModel, RecordStore

    engine = InferenceEngine(FittedModel.build(RecordStore([])))

    assert engine.predict(PatientProfile()) == []

    print("✓ Empty cohort → []")


def test_unknown_disease(engine, profile):
    from health_pulse.errors import UnknownDiseaseError

    with pytest.raises(UnknownDiseaseError):
        engine.score_disease("Plague", profile)


def test_rescaled_softmax():
    from health_pulse.inference import rescaled_softmax

    assert len(rescaled_softmax([])) == 0

    equal = rescaled_softmax([-3.0, -3.0, -3.0, -3.0])
    assert list(equal) == pytest.approx([25.0] * 4)

    two = rescaled_softmax([-10.0, -2.0])
    e5 = math.exp(5)
    assert list(two) == pytest.approx([100 / (1 + e5), 100 * e5 / (1 + e5)])

    single = rescaled_softmax([-7.5])
    assert list(single) == pytest.approx([100.0])

    print(f"✓ rescaled_softmax: {list(two)}")


def test_equal_scores_keep_disease_order():
    """Рівні ймовірності: порядок першої появи хвороби"""
    from health_pulse.inference import InferenceEngine
    from health_pulse.schemas import PatientProfile
    from health_pulse.statistics import FittedModel, RecordStore

    rows = [
        {"disease": name, "age": 30, "gender": "Male", "symptom_answers": {"fever": "Yes"}}
        for name in ("Zeta", "Alpha", "Mu")
    ]
    model = FittedModel.build(RecordStore.from_raw(rows))
    engine = InferenceEngine(model)

    results = engine.predict(PatientProfile(age_bracket=model.bracket(0), gender="Male"))

    assert [r.disease_name for r in results] == ["Zeta", "Alpha", "Mu"]
    assert [r.probability_percent for r in results] == pytest.approx([100 / 3] * 3)

    print("✓ Stable order on ties")


def test_discrimination_factor(model, profile):
    """Менший фактор → пологіший розподіл"""
    from health_pulse.config import InferenceConfig
    from health_pulse.inference import InferenceEngine

    profile.answer("fever", "Yes")

    sharp = InferenceEngine(model).predict(profile)
    flat = InferenceEngine(model, InferenceConfig(discrimination_factor=1.0)).predict(profile)

    assert flat[0].probability_percent < sharp[0].probability_percent

    print(f"✓ Top: {sharp[0].probability_percent:.1f}% vs {flat[0].probability_percent:.1f}%")


def test_explain(engine, profile):
    from health_pulse.inference import DISCLAIMER

    profile.answer("fever", "Yes")
    profile.answer("fatigue", "Yes")

    results = engine.predict(profile)
    text = engine.explain(profile, results)

    assert text.startswith(f"Diagnostic Probability: {results[0].disease_name}")
    assert "fever: Yes" in text
    assert "Other Potential Conditions:" in text
    assert DISCLAIMER in text
    assert "30 clinical records" in text

    print(text)


def test_summarize_results(engine, profile, catalog):
    from health_pulse.inference import summarize_results

    profile.answer("fever", "Yes")
    profile.answer("fatigue", "Yes")
    results = engine.predict(profile)

    summary = summarize_results(results, catalog)

    assert summary["primary"]["disease"] == "Influenza"
    assert summary["primary"]["treatments"] == "Rest, fluids"
    assert summary["primary"]["precautions"] == ["drink fluids", "rest", "avoid contact"]
    assert len(summary["alternatives"]) == 3

    assert len(summarize_results(results, catalog, n_alternatives=1)["alternatives"]) == 1
    assert summarize_results([], catalog) == {"primary": None, "alternatives": []}

    print(f"✓ Summary: {summary['primary']['disease']}")
