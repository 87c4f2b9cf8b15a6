"""
TF‑IDF character n‑gram cosine similarity.

Summary:
- Builds TF‑IDF vectors over character n‑grams (3–5) with L2 normalization and
  returns the cosine similarity between the two input strings.

Pros:
- Robust to small typos, insertions/deletions and casing changes.
- Works well on short texts; language‑agnostic.

Cons:
- Surface‑form only; does not capture semantics.
- Fits a vectorizer per pair, so it is far slower than the edit metrics on
  large cross products.

Score range:
- Returns a float in [0.0, 1.0]. Both empty -> 1.0; exactly one empty -> 0.0.
"""

from __future__ import annotations

from typing import cast

from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from .registry import register


@register("TfidfCharCosine", "tfidf_char_cosine")
def score_tfidf_char_cosine(
    s1: str,
    s2: str,
    ngram_low: int = 3,
    ngram_high: int = 5,
) -> float:
    """Compute cosine similarity over TF‑IDF character 3–5 n‑grams.

    Expected I/O:
    - Input: two strings; internally lowercased.
    - Output: float in [0.0, 1.0]. If both strings normalize to empty, returns
      1.0; if exactly one is empty, returns 0.0.
    """
    a = (s1 or "").strip().lower()
    b = (s2 or "").strip().lower()

    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    vec = TfidfVectorizer(
        analyzer="char", ngram_range=(ngram_low, ngram_high), lowercase=True, norm="l2"
    )
    X = vec.fit_transform([a, b])
    # With L2 norm, cosine equals dot product between normalized vectors.
    sim = cosine_similarity(X[0], X[1])[0, 0]
    return float(max(0.0, min(1.0, cast(float, sim))))
