"""
Deterministic Competency Scoring Engine

All scoring functions are deterministic - same inputs produce same outputs.
No AI/LLM is used in this module.
"""

import logging
from typing import List, Sequence

from .config import (
    SIMILARITY_THRESHOLD, PROFICIENCY_LEVELS, DEFAULT_PROFICIENCY,
    FIT_WEIGHTS, NEUTRAL_FIT_SCORE, CULTURAL_FIT_BASE, CULTURAL_FIT_SIGNALS,
    SOFT_SKILL_POINTS, SOFT_SKILL_POINTS_CAP, RANKING_WEIGHTS, GAP_PENALTY,
    RECOMMENDATION_THRESHOLDS, RECOMMENDATIONS,
)
from .keyword_matcher import contains_any
from .schemas import ExtractedSkill, CompetencyMatch, ScoringResult
from .similarity import similarity
from .utils import round_half_up, clamp

logger = logging.getLogger(__name__)


def infer_proficiency_level(skill: str) -> str:
    """
    Infer proficiency from cue words in the skill text.

    Cue sets are checked expert -> advanced -> intermediate -> beginner;
    the first set with a case-insensitive substring hit wins.
    """
    lowered = (skill or "").lower()
    for level, cues in PROFICIENCY_LEVELS:
        if any(cue in lowered for cue in cues):
            return level
    return DEFAULT_PROFICIENCY


def match_competency(competency: str, skills: Sequence[ExtractedSkill]) -> CompetencyMatch:
    """
    Best extracted skill for one required competency.

    A skill is accepted only when its similarity exceeds the threshold; the
    first skill wins ties. With no accepted skill a gap entry is returned.
    """
    best_skill = None
    best_similarity = 0.0
    for skill in skills:
        score = similarity(competency, skill.label)
        if score > best_similarity and score > SIMILARITY_THRESHOLD:
            best_skill = skill
            best_similarity = score

    if best_skill is None:
        logger.debug(f"Competency '{competency}': gap")
        return CompetencyMatch(
            competency=competency,
            matched_skill="",
            confidence_score=0.0,
            proficiency_level=DEFAULT_PROFICIENCY,
            is_gap=True,
        )

    confidence = best_similarity * best_skill.confidence
    logger.debug(f"Competency '{competency}': matched '{best_skill.label}' "
                 f"(similarity={best_similarity:.2f}, confidence={confidence:.2f})")
    return CompetencyMatch(
        competency=competency,
        matched_skill=best_skill.label,
        confidence_score=confidence,
        proficiency_level=infer_proficiency_level(best_skill.label),
        is_gap=False,
    )


def match_competencies(
    skills: Sequence[ExtractedSkill],
    required_competencies: Sequence[str],
) -> List[CompetencyMatch]:
    """One match per required competency, highest confidence first (stable)."""
    matches = [match_competency(c, skills) for c in required_competencies]
    return sorted(matches, key=lambda m: m.confidence_score, reverse=True)


def calculate_overall_fit_score(matches: Sequence[CompetencyMatch], total_required: int) -> int:
    """
    Overall fit (0-100).

    Formula:
    - Match percentage: matched / total_required * 100
    - Average confidence: sum(confidence) / total_required (gaps count as 0)
    - Final: 0.6 * match_percentage + 0.4 * average_confidence * 100

    Returns the neutral score 50 when nothing is required.
    """
    if total_required == 0:
        logger.debug("No required competencies, neutral fit score")
        return NEUTRAL_FIT_SCORE

    matched_count = sum(1 for m in matches if not m.is_gap)
    confidence_avg = sum(m.confidence_score for m in matches) / total_required
    match_percentage = (matched_count / total_required) * 100

    score = (
        FIT_WEIGHTS["match_percentage"] * match_percentage +
        FIT_WEIGHTS["confidence"] * confidence_avg * 100
    )
    logger.debug(f"Match percentage: {match_percentage:.2f}%, average confidence: {confidence_avg:.2f}")
    return clamp(round_half_up(score), 0, 100)


def assess_cultural_fit(text: str, skills: Sequence[ExtractedSkill]) -> int:
    """Heuristic cultural fit (0-100) from workplace signals and soft-skill count."""
    score = CULTURAL_FIT_BASE
    for needles, points in CULTURAL_FIT_SIGNALS:
        if contains_any(text, needles):
            score += points

    soft_count = sum(1 for s in skills if s.category == "soft")
    score += min(soft_count * SOFT_SKILL_POINTS, SOFT_SKILL_POINTS_CAP)
    return clamp(score, 0, 100)


def calculate_ranking_score(overall_fit: int, cultural_fit: int, gap_count: int) -> int:
    """
    Ranking score (0-100).

    Formula: 0.5 * overall_fit + 0.3 * cultural_fit + 0.2 * max(0, 1 - 0.15 * gaps) * 100
    """
    gap_component = max(0.0, 1 - gap_count * GAP_PENALTY) * 100
    score = (
        RANKING_WEIGHTS["fit"] * overall_fit +
        RANKING_WEIGHTS["cultural"] * cultural_fit +
        RANKING_WEIGHTS["gaps"] * gap_component
    )
    return clamp(round_half_up(score), 0, 100)


def generate_recommendation(overall_fit: int, gap_count: int, cultural_fit: int) -> str:
    t = RECOMMENDATION_THRESHOLDS
    if overall_fit > t["highly_recommended_fit"] and cultural_fit > t["highly_recommended_cultural"]:
        return RECOMMENDATIONS["highly_recommended"]
    if overall_fit > t["recommended_fit"] and gap_count <= t["recommended_max_gaps"]:
        return RECOMMENDATIONS["recommended"]
    if overall_fit > t["potential_fit"]:
        return RECOMMENDATIONS["potential_fit"]
    if gap_count > t["training_min_gaps"]:
        return RECOMMENDATIONS["requires_training"]
    return RECOMMENDATIONS["not_recommended"]


def score_competencies(
    skills: Sequence[ExtractedSkill],
    required_competencies: Sequence[str],
    raw_text: str,
) -> ScoringResult:
    """
    Score extracted skills against required competencies.

    Args:
        skills: Skills extracted from the resume
        required_competencies: Competency labels required by the role
        raw_text: Raw resume text (used for cultural fit signals)

    Returns:
        ScoringResult with per-competency matches and aggregate scores
    """
    required = list(required_competencies)
    matches = match_competencies(skills, required)
    gap_count = sum(1 for m in matches if m.is_gap)

    overall_fit = calculate_overall_fit_score(matches, len(required))
    cultural_fit = assess_cultural_fit(raw_text, skills)
    ranking = calculate_ranking_score(overall_fit, cultural_fit, gap_count)
    recommendation = generate_recommendation(overall_fit, gap_count, cultural_fit)

    logger.info(f"Competency score: fit={overall_fit}, cultural={cultural_fit}, "
                f"ranking={ranking}, gaps={gap_count}/{len(required)}")
    return ScoringResult(
        overall_fit_score=overall_fit,
        ranking_score=ranking,
        matches=matches,
        recommendation_text=recommendation,
        cultural_fit_index=cultural_fit,
    )
