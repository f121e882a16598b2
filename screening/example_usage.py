"""
Example usage of the resume screening pipeline.

Run this file to see the system in action:
    python -m screening.example_usage
"""

import os
import logging
from screening import screen_candidate, screen_candidates, cultural_fit_narrative

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

REQUIRED_COMPETENCIES = ["Python", "Machine Learning", "Docker", "SQL", "Leadership", "Kubernetes"]

RESUME = """
Priya Raman
Email: priya.raman@example.com

SUMMARY
Data scientist who enjoys agile teams and likes to collaborate across functions.

EDUCATION
Master of Science in Data Science from Carnegie Mellon University, 2017
Bachelor of Technology in Computer Science, Anna University, 2015

SKILLS
Python, SQL, Machine Learning, TensorFlow, PyTorch, Docker, Git, Linux
Communication, Leadership, Problem Solving

EXPERIENCE
Senior Data Scientist at Nimbus Analytics, 2019-present
- Built churn models in Python and TensorFlow
- Deployed scoring services with Docker
- Mentor to three junior analysts

ML Engineer at Brightline Labs, 2017-2019
- Maintained feature pipelines in SQL
- Ran weekly sprint reviews with stakeholders
"""

SECOND_RESUME = """
Jordan Lee
Developer at Corner Shop Apps, 2021-2023
- Built React front ends
- Wrote JavaScript tests
"""


def example_single_candidate():
    """Example: Screen one resume."""
    print("\n" + "=" * 80)
    print("EXAMPLE 1: Single Candidate Screening")
    print("=" * 80 + "\n")

    # LLM review only when an API key is configured
    report = screen_candidate(
        RESUME,
        REQUIRED_COMPETENCIES,
        validate=bool(os.getenv("OPENAI_API_KEY")),
    )

    print(f"\n{'=' * 60}")
    print(f"COMPETENCY MATCH: {report.competency_match}%")
    print(f"{'=' * 60}")
    print(f"Cultural fit:      {report.cultural_fit} ({report.scoring.cultural_fit_index})")
    print(f"Predicted success: {report.predicted_success}")
    print(f"Recommendation:    {report.recommendation}")
    print(f"Summary:           {report.summary}")
    print(f"Strengths:         {', '.join(report.strengths) or '-'}")
    print(f"Skill gaps:        {', '.join(report.skill_gaps) or '-'}")

    print("\nPer-competency matches:")
    for match in report.scoring.matches:
        status = "GAP" if match.is_gap else f"{match.matched_skill} ({match.confidence_score:.2f})"
        print(f"  {match.competency:<20} {status}")


def example_ranking():
    """Example: Rank several candidates."""
    print("\n" + "=" * 80)
    print("EXAMPLE 2: Candidate Ranking")
    print("=" * 80 + "\n")

    ranked = screen_candidates(
        [("priya", RESUME), ("jordan", SECOND_RESUME)],
        REQUIRED_COMPETENCIES,
    )
    for candidate in ranked:
        result = candidate.result
        print(f"#{candidate.rank} {candidate.id}: ranking {result.ranking_score}, "
              f"fit {result.overall_fit_score}, "
              f"cultural {cultural_fit_narrative(result.cultural_fit_index)}")


if __name__ == "__main__":
    example_single_candidate()
    example_ranking()
