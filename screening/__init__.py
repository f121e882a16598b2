"""
Deterministic Resume Screening System

This package provides a keyword-driven screening pipeline:
1. Resume parsing into skills, education and experience records
2. Fuzzy competency matching and deterministic fit scoring
3. Candidate ranking and recommendation narratives
4. Optional LLM review blended into the final score (PhiData)

Usage:
    from screening import parse_resume, score_competencies

    parsed = parse_resume(resume_text)
    result = score_competencies(parsed.skills, ["Python", "Docker"], resume_text)
    print(f"Fit: {result.overall_fit_score}")
"""

from .resume_parser import parse_resume
from .competency_scorer import score_competencies
from .similarity import similarity
from .ranking import rank_candidates, cultural_fit_narrative, success_prediction
from .screener import screen_candidate, screen_candidates

__all__ = [
    "parse_resume",
    "score_competencies",
    "similarity",
    "rank_candidates",
    "cultural_fit_narrative",
    "success_prediction",
    "screen_candidate",
    "screen_candidates",
]
__version__ = "1.0.0"
