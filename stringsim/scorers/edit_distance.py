"""
Character-level edit metrics (RapidFuzz).

Summary:
- Thin wrappers around `rapidfuzz.distance` that all return a Python float so
  every metric shares the `(s1, s2) -> float` signature of the registry.

Score ranges differ per metric:
- Jaro, LevenshteinRatio: similarity in [0.0, 1.0], higher is closer.
- Levenshtein, DamerauLevenshtein, Hamming: edit counts, lower is closer.
- LongestCommonSubsequence: length of the LCS, higher is closer.

Strings are compared as given; case folding and transliteration happen in the
engine before a scorer is called.
"""

from __future__ import annotations

from rapidfuzz.distance import (
    DamerauLevenshtein,
    Hamming,
    Jaro,
    LCSseq,
    Levenshtein,
    Prefix,
)

from ..errors import LengthMismatch
from .registry import register

WINKLER_PREFIX_WEIGHT = 0.1
WINKLER_MAX_PREFIX = 4


@register("Jaro")
def score_jaro(s1: str, s2: str) -> float:
    """Jaro similarity boosted by the shared prefix (Winkler).

    The boost is applied unconditionally: `jaro + p * 0.1 * (1 - jaro)` with
    `p` the common prefix length capped at 4, so "adam" vs "aden" scores
    0.7333 even though its plain Jaro similarity is below 0.7.
    """
    sim = Jaro.similarity(s1, s2)
    prefix = min(int(Prefix.similarity(s1, s2)), WINKLER_MAX_PREFIX)
    return float(sim + prefix * WINKLER_PREFIX_WEIGHT * (1.0 - sim))


@register("Levenshtein")
def score_levenshtein(s1: str, s2: str) -> float:
    return float(Levenshtein.distance(s1, s2))


@register("LevenshteinRatio")
def score_levenshtein_ratio(s1: str, s2: str) -> float:
    """1 minus the edit distance over the length of the longer string.

    Two empty strings are identical and score 1.0.
    """
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(s1, s2) / float(longest)


@register("DamerauLevenshtein")
def score_damerau_levenshtein(s1: str, s2: str) -> float:
    return float(DamerauLevenshtein.distance(s1, s2))


@register("Hamming")
def score_hamming(s1: str, s2: str) -> float:
    # Undefined for unequal lengths; never pad.
    if len(s1) != len(s2):
        raise LengthMismatch(s1, s2)
    return float(Hamming.distance(s1, s2))


@register("LongestCommonSubsequence", "lcs")
def score_lcs(s1: str, s2: str) -> float:
    return float(LCSseq.similarity(s1, s2))
