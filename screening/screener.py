"""
Main Screener Module

Orchestrates the complete screening process:
1. Parse the resume into structured records
2. Score extracted skills against required competencies
3. Optionally validate with an LLM and blend its score
4. Return the report with narratives
"""

import logging
from typing import List, Optional, Sequence, Tuple

from phi.agent import Agent

from .config import LLM_CONFIG
from .competency_scorer import score_competencies
from .llm_validator import validate_with_llm
from .ranking import rank_candidates, cultural_fit_narrative, success_prediction
from .resume_parser import parse_resume
from .schemas import (
    JobRequirements, LLMValidation, ParseStatistics, RankedCandidate, ScreeningReport,
)
from .utils import round_half_up, clamp

logger = logging.getLogger(__name__)


def blend_competency_match(overall_fit: int, validation: Optional[LLMValidation]) -> int:
    """round(0.6 * core fit + 0.4 * LLM match), or the core fit when there is no review."""
    if validation is None:
        return overall_fit
    weight = LLM_CONFIG["blend_weight"]
    blended = overall_fit * (1 - weight) + validation.competency_match * weight
    return clamp(round_half_up(blended), 0, 100)


def screen_candidate(
    resume_text: str,
    required_competencies: Sequence[str],
    requirements: Optional[JobRequirements] = None,
    validate: bool = False,
    model_name: str = None,
    agent: Optional[Agent] = None,
    current_year: Optional[int] = None,
) -> ScreeningReport:
    """
    Screen one resume against a competency list.

    This is the main entry point for the screening pipeline. It:
    1. Parses the resume with keyword-driven extraction
    2. Scores competencies deterministically
    3. Optionally asks an LLM to review the result (failures fall back to core scores)
    4. Returns the report with cultural fit and success narratives

    Args:
        resume_text: Full resume text
        required_competencies: Competency labels required by the role
        requirements: Optional job requirements passed to the LLM review
        validate: Whether to run the LLM review
        model_name: Optional model name (defaults to config)
        agent: Optional prebuilt validation agent
        current_year: Year that 'present' resolves to (defaults to today)

    Returns:
        ScreeningReport

    Example:
        >>> report = screen_candidate(resume_text, ["Python", "Docker"])
        >>> print(f"Match: {report.competency_match}%")
    """
    logger.info("=" * 80)
    logger.info("STARTING CANDIDATE SCREENING")
    logger.info("=" * 80)

    resume_text = resume_text or ""
    required = list(required_competencies)

    # Step 1: Parse
    parsed = parse_resume(resume_text, current_year=current_year)

    # Step 2: Score
    scoring = score_competencies(parsed.skills, required, resume_text)

    # Step 3: Optional LLM review
    validation = None
    if validate:
        requirements = requirements or JobRequirements(core_skills=required)
        try:
            validation = validate_with_llm(
                resume_text, parsed, scoring, requirements,
                model_name=model_name, agent=agent,
            )
            logger.info(f"✓ LLM validation: {validation.competency_match}")
        except Exception as e:
            logger.warning(f"LLM validation unavailable, using core scores only: {e}")

    competency_match = blend_competency_match(scoring.overall_fit_score, validation)

    report = ScreeningReport(
        parse_statistics=ParseStatistics(
            skills_found=len(parsed.skills),
            years_experience=parsed.total_years_experience,
            education_level=parsed.education[0].level if parsed.education else "Unknown",
            extraction_score=parsed.extraction_score,
        ),
        scoring=scoring,
        validation=validation,
        competency_match=competency_match,
        cultural_fit=cultural_fit_narrative(scoring.cultural_fit_index),
        predicted_success=success_prediction(
            competency_match, scoring.cultural_fit_index, parsed.total_years_experience
        ),
        summary=(validation.summary if validation and validation.summary else parsed.summary),
        recommendation=(
            validation.recommendation if validation and validation.recommendation
            else scoring.recommendation_text
        ),
        skill_gaps=scoring.gaps,
        strengths=scoring.strengths,
        ranking_score=scoring.ranking_score,
    )

    logger.info("=" * 80)
    logger.info(f"SCREENING COMPLETE - Match: {competency_match}%, Ranking: {scoring.ranking_score}")
    logger.info("=" * 80)
    return report


def screen_candidates(
    candidates: Sequence[Tuple[str, str]],
    required_competencies: Sequence[str],
    current_year: Optional[int] = None,
) -> List[RankedCandidate]:
    """
    Screen several resumes against one competency list and rank them.

    Args:
        candidates: (candidate_id, resume_text) pairs
        required_competencies: Competency labels required by the role
        current_year: Year that 'present' resolves to (defaults to today)

    Returns:
        Candidates ordered by ranking score (highest first) with 1-based ranks

    Example:
        >>> ranked = screen_candidates([("a", resume_a), ("b", resume_b)], ["Python"])
        >>> for c in ranked:
        >>>     print(f"#{c.rank} {c.id}: {c.result.ranking_score}")
    """
    logger.info(f"Screening {len(candidates)} candidates")

    scored = []
    for candidate_id, resume_text in candidates:
        parsed = parse_resume(resume_text, current_year=current_year)
        scored.append((candidate_id, score_competencies(parsed.skills, required_competencies, resume_text or "")))

    return rank_candidates(scored)
