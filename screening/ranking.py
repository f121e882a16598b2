"""Cross-candidate ordering and categorical narratives for scores."""

import logging
from typing import Iterable, List, Tuple

from .config import (
    CULTURAL_FIT_NARRATIVE, CULTURAL_FIT_NARRATIVE_DEFAULT,
    SUCCESS_WEIGHTS, SUCCESS_EXPERIENCE_YEARS, SUCCESS_EXPERIENCE_POINTS,
    SUCCESS_THRESHOLDS, SUCCESS_DEFAULT,
)
from .schemas import ScoringResult, RankedCandidate

logger = logging.getLogger(__name__)


def rank_candidates(batch: Iterable[Tuple[str, ScoringResult]]) -> List[RankedCandidate]:
    """
    Order candidates by ranking score, highest first.

    The sort is stable, so equal scores keep their input order. Ranks are
    1-based positions in the sorted list.

    Example:
        >>> ranked = rank_candidates([("alice", result_a), ("bob", result_b)])
        >>> print(ranked[0].id, ranked[0].rank)
    """
    ordered = sorted(batch, key=lambda pair: pair[1].ranking_score, reverse=True)
    ranked = [
        RankedCandidate(id=candidate_id, rank=position, result=result)
        for position, (candidate_id, result) in enumerate(ordered, 1)
    ]
    if ranked:
        logger.info(f"Ranked {len(ranked)} candidates, top: {ranked[0].id} "
                    f"({ranked[0].result.ranking_score})")
    return ranked


def cultural_fit_narrative(index: int) -> str:
    """'High' (>= 75), 'Medium' (>= 50) or 'Low'."""
    for threshold, label in CULTURAL_FIT_NARRATIVE:
        if index >= threshold:
            return label
    return CULTURAL_FIT_NARRATIVE_DEFAULT


def success_prediction(overall_fit: float, cultural_fit: float, years_experience: float) -> str:
    """
    Predict hiring success from fit scores and experience.

    Formula:
    - Combined: 0.6 * overall_fit + 0.4 * cultural_fit
    - Experience factor: min(years / 5, 1) * 20
    - Final: combined + experience factor
    """
    combined = (
        SUCCESS_WEIGHTS["overall_fit"] * overall_fit +
        SUCCESS_WEIGHTS["cultural_fit"] * cultural_fit
    )
    experience_factor = min(years_experience / SUCCESS_EXPERIENCE_YEARS, 1) * SUCCESS_EXPERIENCE_POINTS
    final_score = combined + experience_factor

    for threshold, label in SUCCESS_THRESHOLDS:
        if final_score >= threshold:
            return label
    return SUCCESS_DEFAULT
