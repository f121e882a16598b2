"""Structured records produced by resume parsing and competency scoring."""

from __future__ import annotations

from typing import List, Optional, Dict, Any, Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field, computed_field

from .config import STRENGTH_CONFIDENCE, MAX_STRENGTHS


SkillCategory = Literal["technical", "soft", "domain"]
EducationLevel = Literal["HighSchool", "Bachelor", "Master", "PhD", "Certification"]
ProficiencyLevel = Literal["Beginner", "Intermediate", "Advanced", "Expert"]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class ExtractedSkill(_Record):
    label: str
    confidence: float = Field(ge=0.0, le=1.0)
    category: SkillCategory


class ExtractedEducation(_Record):
    degree: str
    field: str
    institution: str = "Unknown"
    year: Optional[int] = None
    level: EducationLevel


class ExtractedExperience(_Record):
    title: str
    company: str = "Unknown"
    duration_text: str = "Unknown"
    years_in_role: int = Field(default=1, ge=1)
    responsibilities: Tuple[str, ...] = ()
    skills: Tuple[str, ...] = ()


class ParsedResume(_Record):
    skills: Tuple[ExtractedSkill, ...] = ()
    education: Tuple[ExtractedEducation, ...] = ()
    experience: Tuple[ExtractedExperience, ...] = ()
    total_years_experience: float = 0.0
    summary: str = ""
    embedding: Tuple[float, ...] = ()
    extraction_score: float = Field(default=0.5, ge=0.0, le=1.0)


class CompetencyMatch(_Record):
    competency: str
    matched_skill: str = ""
    confidence_score: float = Field(default=0.0, ge=0.0)
    proficiency_level: ProficiencyLevel = "Beginner"
    is_gap: bool = False


class ScoringResult(_Record):
    overall_fit_score: int = Field(ge=0, le=100)
    ranking_score: int = Field(ge=0, le=100)
    matches: Tuple[CompetencyMatch, ...] = ()
    recommendation_text: str
    cultural_fit_index: int = Field(ge=0, le=100)

    @computed_field
    @property
    def gaps(self) -> List[str]:
        """Competencies without an accepted skill match, in match order."""
        return [m.competency for m in self.matches if m.is_gap]

    @computed_field
    @property
    def strengths(self) -> List[str]:
        """Top confident matches formatted as '<skill> (<proficiency>)'."""
        strong = [
            m for m in self.matches
            if not m.is_gap and m.confidence_score > STRENGTH_CONFIDENCE
        ]
        return [f"{m.matched_skill} ({m.proficiency_level})" for m in strong[:MAX_STRENGTHS]]

    @property
    def matched_count(self) -> int:
        return sum(1 for m in self.matches if not m.is_gap)


class RankedCandidate(_Record):
    id: str
    rank: int = Field(ge=1)
    result: ScoringResult


class ResumeFit(_Record):
    """Skills/education/experience fit against a plain requirement list."""
    match_score: int
    details: Dict[str, Any] = Field(default_factory=dict)


class FrameworkMapping(_Record):
    skill: str
    framework_match: str
    confidence: float


class JobRequirements(BaseModel):
    """Requirements extracted from a job description."""
    core_skills: List[str] = Field(default_factory=list)
    behavioral_traits: List[str] = Field(default_factory=list)
    competency_level: Dict[str, str] = Field(default_factory=dict)


class LLMValidation(BaseModel):
    """Refined assessment returned by the validation model."""
    competency_match: float = Field(ge=0.0, le=100.0)
    cultural_fit: Optional[str] = None
    predicted_success: Optional[str] = None
    summary: Optional[str] = None
    skill_gaps: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    recommendation: Optional[str] = None
    reasoning: Optional[str] = None


class ParseStatistics(BaseModel):
    skills_found: int
    years_experience: float
    education_level: str
    extraction_score: float


class ScreeningReport(BaseModel):
    """Full screening of one resume: core scores, optional LLM review and narratives."""
    parse_statistics: ParseStatistics
    scoring: ScoringResult
    validation: Optional[LLMValidation] = None
    competency_match: int = Field(ge=0, le=100)
    cultural_fit: str
    predicted_success: str
    summary: str
    recommendation: str
    skill_gaps: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    ranking_score: int = Field(ge=0, le=100)
