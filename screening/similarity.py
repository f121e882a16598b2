"""
String similarity between competency labels and extracted skill labels.

Deterministic, no side effects.
"""

from rapidfuzz.distance import Levenshtein

from .config import EXACT_MATCH_SCORE, CONTAINMENT_SCORE


def normalize_label(label: str) -> str:
    return (label or "").strip().lower()


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity in [0, 1].

    Rules, in priority order:
    1. exact match after trimming and lower-casing -> 1.0
    2. one string contains the other -> 0.85 (an empty label is contained in any label)
    3. 1 - Levenshtein distance / len(longer), clamped to [0, 1]
    """
    s1 = normalize_label(a)
    s2 = normalize_label(b)

    if s1 == s2:
        return EXACT_MATCH_SCORE
    if s1 in s2 or s2 in s1:
        return CONTAINMENT_SCORE

    longer = max(len(s1), len(s2))
    score = 1 - Levenshtein.distance(s1, s2) / longer
    return max(0.0, min(1.0, score))
