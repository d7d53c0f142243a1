"""
Тести для модуля statistics.symptom_vocabulary

Запуск: pytest tests/test_symptom_vocabulary.py -v
"""

import pytest


@pytest.mark.parametrize("raw, expected", [
    ("Fever", "fever"),
    ("sore throat (mild)", "sore throat"),
    ("cough especially at night", "cough"),
    ("joint pain particularly in the knees", "joint pain"),
    ("  Body Aches  ", "body aches"),
    ("abc", None),
    ("(mild)", None),
    ("ache (x)", "ache"),
    ("flu (seasonal)", None),
])
def test_normalize_phrase(raw, expected):
    from health_pulse.statistics import normalize_phrase

    assert normalize_phrase(raw) == expected


def test_corpus_lookup(corpus):
    """Ключі та текст у lowercase"""
    assert len(corpus) == 4
    assert "common cold" in corpus
    assert corpus.text_for("Common Cold").startswith("runny nose")
    assert corpus.text_for("Plague") == ""
    assert corpus.phrases("Asthma") == [
        "shortness of breath", "wheezing", "chest tightness", "cough"
    ]

    print(f"✓ {corpus}")


def test_overlap_score(corpus):
    """Частка слів фрази в тексті хвороби"""
    assert corpus.overlap_score("wheezing", "Asthma") == 1.0
    # "of" коротке і не рахується, але входить у знаменник
    assert corpus.overlap_score("shortness of breath", "Asthma") == pytest.approx(2 / 3)
    assert corpus.overlap_score("sore throat", "Influenza") == 1.0
    assert corpus.overlap_score("wheezing", "Migraine") == 0.0
    assert corpus.overlap_score("wheezing", "Plague") == 0.0
    # Підрядок: "ache" міститься в "body aches"
    assert corpus.overlap_score("ache", "Influenza") == 1.0

    print("✓ overlap_score")


def test_question_set():
    from health_pulse.errors import UnknownSymptomError
    from health_pulse.statistics import QuestionSet, SymptomKind

    questions = QuestionSet.from_lists(["fever", "cough"], ["headache"])

    assert questions.symptoms == ["fever", "cough", "headache"]
    assert questions.symptom_to_index("Cough") == 1
    assert questions.symptom_to_index("rash") is None
    assert questions[2].kind == SymptomKind.SECONDARY
    assert questions[0].is_primary
    assert questions[0].text == "Do you have Fever?"
    assert "headache" in questions
    assert "rash" not in questions
    assert len(questions) == 3

    with pytest.raises(UnknownSymptomError):
        questions.get("rash")

    print(f"✓ {questions}")


def test_question_set_invariants():
    """Без дублікатів, первинні перед вторинними"""
    from health_pulse.statistics import QuestionSet, SymptomKind, SymptomQuestion

    with pytest.raises(ValueError, match="Duplicate"):
        QuestionSet.from_lists(["fever"], ["fever"])

    with pytest.raises(ValueError, match="after a secondary"):
        QuestionSet([
            SymptomQuestion("headache", SymptomKind.SECONDARY),
            SymptomQuestion("fever", SymptomKind.PRIMARY),
        ])

    print("✓ QuestionSet invariants")


@pytest.mark.parametrize("n_primary, n_secondary, expected_total", [
    (4, 20, 15),
    (4, 3, 7),
    (3, 5, 8),
    (12, 20, 15),
    (16, 20, 16),
    (0, 0, 0),
])
def test_merge_question_list(n_primary, n_secondary, expected_total):
    from health_pulse.statistics import merge_question_list

    primary = [f"p{i}" for i in range(n_primary)]
    secondary = [f"s{i}" for i in range(n_secondary)]

    merged = merge_question_list(primary, secondary, 10, 15)

    assert len(merged) == expected_total
    assert merged[:n_primary] == primary


def test_merger_with_twenty_candidates():
    """4 первинних + 20 кандидатів → 11 вторинних, 15 питань"""
    from health_pulse.statistics import SecondarySymptomCorpus, SymptomVocabularyMerger

    texts = {
        f"Disease {i}": f"marker {i:02d} sign, marker {i + 10:02d} sign"
        for i in range(10)
    }
    corpus = SecondarySymptomCorpus(texts)
    merger = SymptomVocabularyMerger()

    assert len(merger.rank_candidates(corpus, [])) == 20

    questions = merger.merge(["fever", "cough", "fatigue", "difficulty breathing"], corpus)

    assert len(questions.primary) == 4
    assert len(questions.secondary) == 11
    assert len(questions) == 15

    print(f"✓ Merged: {len(questions.primary)} + {len(questions.secondary)}")


def test_rank_candidates(corpus):
    """Частота за спаданням, рівні за порядком появи, без первинних"""
    from health_pulse.statistics import SymptomVocabularyMerger

    merger = SymptomVocabularyMerger()
    counts = merger.count_phrases(corpus)

    assert counts["headache"] == 2
    assert counts["sore throat"] == 2
    assert counts["cough"] == 2

    ranked = merger.rank_candidates(corpus, ["fever", "cough"])

    assert ranked[:3] == ["headache", "sore throat", "runny nose"]
    assert "fever" not in ranked
    assert "cough" not in ranked
    assert len(ranked) == 14

    print(f"✓ Ranked: {ranked[:5]}")


def test_select_secondary_categories_first(corpus):
    """Спочатку по одній фразі з кожної категорії, потім за частотою"""
    from health_pulse.statistics import SymptomVocabularyMerger

    merger = SymptomVocabularyMerger()
    ranked = merger.rank_candidates(corpus, ["fever", "cough"])
    selected = merger.select_secondary(ranked)

    assert selected[:5] == [
        "shortness of breath",      # respiratory
        "nausea",                   # gastrointestinal
        "headache",                 # neurological
        "chills",                   # general
        "sensitivity to light",     # sensory
    ]
    assert selected[5:] == [
        "sore throat", "runny nose", "body aches",
        "sneezing", "mild headache", "wheezing",
    ]
    assert len(selected) == 11

    print(f"✓ Selected: {selected}")


def test_bidirectional_category_match():
    """Фраза може бути частиною ключового слова"""
    from health_pulse.statistics import SymptomVocabularyMerger

    merger = SymptomVocabularyMerger()
    selected = merger.select_secondary(["headaches", "pain"])

    # "pain" входить у "chest pain" (respiratory), "headache" входить у "headaches"
    assert selected == ["pain", "headaches"]

    print(f"✓ Category match: {selected}")


def test_merge_without_corpus():
    from health_pulse.statistics import SecondarySymptomCorpus, SymptomVocabularyMerger

    merger = SymptomVocabularyMerger()

    for corpus in (None, SecondarySymptomCorpus()):
        questions = merger.merge(["Fever", "cough", "fever", " "], corpus)
        assert questions.symptoms == ["fever", "cough"]
        assert questions.secondary == []

    print("✓ No corpus → primary symptoms only")
