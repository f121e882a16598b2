from __future__ import annotations

from typing import List, Optional, Dict
from pydantic import BaseModel, Field, ConfigDict, field_validator

from screening.schemas import RankedCandidate, ScreeningReport, ScoringResult


class ScreenCandidateRequest(BaseModel):
    resume: Optional[str] = Field(default=None, description="Plain-text resume content")
    core_skills: Optional[List[str]] = Field(
        default=None,
        description="Required competencies to score against",
    )
    behavioral_traits: List[str] = Field(default_factory=list)
    competency_level: Dict[str, str] = Field(default_factory=dict)
    candidate_email: Optional[str] = None
    validate_with_llm: Optional[bool] = Field(
        default=None,
        description="Override the service default for the LLM review",
    )


class CandidateScore(BaseModel):
    id: str
    scoring_result: ScoringResult


class RankCandidatesRequest(BaseModel):
    candidates: List[CandidateScore] = Field(default_factory=list)

    @field_validator("candidates")
    @classmethod
    def validate_candidates(cls, v: List[CandidateScore]) -> List[CandidateScore]:
        if len(v) == 0:
            raise ValueError("At least one candidate is required")
        if len(v) > 200:
            raise ValueError("A maximum of 200 candidates is allowed")
        return v


class RankCandidatesResponse(BaseModel):
    ranked: List[RankedCandidate]


class AnalyzeJDRequest(BaseModel):
    jd: str = Field(..., description="Job description text")


class ScreenCandidateResponse(BaseModel):
    success: bool = True
    request_id: str
    report: ScreeningReport
    processing_time: str


class Settings(BaseModel):
    model_config = ConfigDict(protected_namespaces=())
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    model_name: str = "gpt-4o-mini"
    validate_with_llm: bool = False
    request_timeout_seconds: int = 60
