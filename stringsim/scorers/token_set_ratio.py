"""
Token Set Ratio scorer (RapidFuzz).

Summary:
- Order-insensitive token matching with duplicate handling. Uses
  `rapidfuzz.fuzz.token_set_ratio` and normalizes the percentage to [0, 1].

When to use:
- Useful when token order differs (e.g., "stainless steel" vs. "steel stainless")
  and where repeated tokens should not inflate scores.

Limitations:
- Purely lexical; no semantic understanding beyond token overlap.

Score range:
- Returns a float in [0.0, 1.0]. Both empty -> 1.0; exactly one empty -> 0.0.
"""

from rapidfuzz import fuzz

from .registry import register


@register("TokenSetRatio", "token_set_ratio")
def score_token_set_ratio(s1: str, s2: str) -> float:
    a = (s1 or "").strip()
    b = (s2 or "").strip()
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return fuzz.token_set_ratio(a, b) / 100.0
