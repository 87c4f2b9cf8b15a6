try:
    import sklearn  # noqa: F401
    SKLEARN_OK = True
except Exception:  # pragma: no cover - environment without scikit-learn
    SKLEARN_OK = False

import pytest

pytestmark = pytest.mark.skipif(not SKLEARN_OK, reason="scikit-learn not installed")


def _import():
    # Import inside test to allow the repository to be imported without sklearn.
    from stringsim.scorers.tfidf_char_cosine import score_tfidf_char_cosine
    return score_tfidf_char_cosine


def test_identical_strings_near_one():
    score = _import()("Canción número 1", "canción número 1")
    assert score >= 0.99


def test_minor_typo_robustness():
    a = "programación avanzada"
    b = "programacion avansada"
    score = _import()(a, b)
    assert score > 0.4


def test_different_topics_low_similarity():
    a = "economía y finanzas"
    b = "fútbol y baloncesto"
    score = _import()(a, b)
    assert score < 0.2


def test_registered_under_display_name():
    from stringsim.scorers import resolve

    metric = resolve("tfidf_char_cosine")
    assert metric.display_name == "TfidfCharCosine"
    assert metric.score("", "") == 1.0
