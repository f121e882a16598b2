"""
LLM Validation Module

Uses PhiData + an OpenAI-compatible chat model to:
1. Extract core skills and behavioral traits from a job description
2. Review the deterministic screening result and return a refined score

Nothing in the scoring core depends on this module; callers blend its output
when it is available and fall back to the core scores when it is not.
"""

import json
import re
import logging
from typing import Dict, Any, Optional

from phi.agent import Agent
from phi.model.openai import OpenAIChat

from .config import LLM_CONFIG
from .schemas import ParsedResume, ScoringResult, JobRequirements, LLMValidation

logger = logging.getLogger(__name__)


def get_model_config(
    model_name: str,
    temperature: float = 0,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Get model configuration with temperature support check.
    Some models don't support custom temperature.
    """
    config: Dict[str, Any] = {"id": model_name}

    # Models that don't support temperature customization
    models_without_temperature = ["o1", "o1-mini", "o1-preview", "gpt-5-mini", "gpt-5"]

    model_lower = model_name.lower()
    supports_temperature = not any(no_temp in model_lower for no_temp in models_without_temperature)

    if supports_temperature:
        config["temperature"] = temperature

    # JSON mode support
    if "gpt-4" in model_lower:
        config["response_format"] = {"type": "json_object"}

    if api_key:
        config["api_key"] = api_key
    if base_url:
        config["base_url"] = base_url

    return config


def extract_json_from_response(text: str) -> Optional[Dict[str, Any]]:
    """Extract JSON from LLM response, handling markdown and other formatting."""
    if not text:
        return None

    # Remove markdown code fences
    fenced = re.search(r'```(?:json)?\s*\n?(.*?)\n?```', text, re.DOTALL)
    if fenced:
        text = fenced.group(1).strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Outermost {...} block
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        try:
            return json.loads(text[start:end + 1])
        except json.JSONDecodeError:
            return None
    return None


def _response_text(response: Any) -> str:
    if hasattr(response, 'content'):
        return str(response.content)
    if hasattr(response, 'messages') and response.messages:
        last_msg = response.messages[-1]
        return str(last_msg.content if hasattr(last_msg, 'content') else last_msg)
    return str(response)


def build_validation_agent(
    model_name: str = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> Agent:
    """Build PhiData agent that reviews a candidate screening."""
    model_name = model_name or LLM_CONFIG["model"]
    model_config = get_model_config(model_name, LLM_CONFIG["temperature"], api_key, base_url)

    return Agent(
        name="Screening Validator",
        role="Validate deterministic candidate screening results",
        model=OpenAIChat(**model_config),
        instructions=[
            "You are an expert recruiter reviewing an automated candidate screening.",
            "Return ONLY a valid JSON object, no markdown and no explanations.",
            "competency_match must be a number between 0 and 100.",
            "cultural_fit must be one of: High, Medium, Low.",
            "predicted_success must be one of: Highly Likely, Likely, Possible, Unlikely.",
        ],
        show_tool_calls=False,
        markdown=False,
    )


def build_jd_analysis_agent(
    model_name: str = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> Agent:
    """Build PhiData agent that extracts requirements from a job description."""
    model_name = model_name or LLM_CONFIG["model"]
    model_config = get_model_config(model_name, LLM_CONFIG["temperature"], api_key, base_url)

    return Agent(
        name="Job Description Analyzer",
        role="Extract required skills and traits from job descriptions",
        model=OpenAIChat(**model_config),
        instructions=[
            "Extract core skills, behavioral traits and competency levels from job descriptions.",
            "Return ONLY a valid JSON object, no markdown and no explanations.",
            "Competency levels must be one of: Beginner, Intermediate, Advanced, Expert.",
        ],
        show_tool_calls=False,
        markdown=False,
    )


def build_validation_prompt(
    resume_text: str,
    parsed: ParsedResume,
    scoring: ScoringResult,
    requirements: JobRequirements,
) -> str:
    skills = ", ".join(s.label for s in parsed.skills) or "None found"
    education = ", ".join(f"{e.degree} in {e.field}" for e in parsed.education) or "Not specified"
    excerpt = resume_text[:LLM_CONFIG["resume_excerpt_chars"]]

    return f"""Analyze this candidate profile comprehensively.

PARSED CANDIDATE PROFILE:
- Skills Found: {skills}
- Years of Experience: {parsed.total_years_experience}
- Education: {education}
- Extraction Confidence: {parsed.extraction_score * 100:.0f}%

JOB REQUIREMENTS:
- Required Skills: {", ".join(requirements.core_skills) or "Not specified"}
- Required Behavioral Traits: {", ".join(requirements.behavioral_traits) or "Not specified"}
- Competency Levels: {json.dumps(requirements.competency_level)}

COMPETENCY SCORING RESULTS:
- Overall Fit Score: {scoring.overall_fit_score}%
- Cultural Fit Index: {scoring.cultural_fit_index}%
- Matched Competencies: {scoring.matched_count}/{len(scoring.matches)}

ORIGINAL RESUME:
{excerpt}...

Provide a final validation assessment as JSON:
{{
  "competency_match": <number 0-100 refined score>,
  "cultural_fit": "High" | "Medium" | "Low",
  "predicted_success": "Highly Likely" | "Likely" | "Possible" | "Unlikely",
  "summary": "<200 word analysis of candidate fit>",
  "skill_gaps": ["gap1", "gap2"],
  "strengths": ["strength1", "strength2"],
  "recommendation": "Schedule Interview" | "Technical Round" | "Request Additional Info" | "Reject",
  "reasoning": "<explain scoring decisions>"
}}
"""


def validate_with_llm(
    resume_text: str,
    parsed: ParsedResume,
    scoring: ScoringResult,
    requirements: JobRequirements,
    model_name: str = None,
    max_retries: int = None,
    agent: Optional[Agent] = None,
) -> LLMValidation:
    """
    Ask the validation model to review a screening result.

    Raises:
        ValueError: If no attempt returns a valid assessment
    """
    max_retries = max_retries or LLM_CONFIG["max_retries"]
    agent = agent or build_validation_agent(model_name)
    prompt = build_validation_prompt(resume_text, parsed, scoring, requirements)

    for attempt in range(max_retries):
        try:
            logger.info(f"Validation attempt {attempt + 1}/{max_retries}")
            response_text = _response_text(agent.run(prompt))
            logger.debug(f"Raw LLM response: {response_text[:500]}...")

            data = extract_json_from_response(response_text)
            if not data:
                raise ValueError("Could not extract valid JSON from LLM response")
            return LLMValidation(**data)

        except Exception as e:
            logger.warning(f"Validation attempt {attempt + 1} failed: {e}")
            if attempt == max_retries - 1:
                raise ValueError(f"LLM validation failed after {max_retries} attempts: {e}")

    raise ValueError("LLM validation failed")


def analyze_job_description(
    job_description: str,
    model_name: str = None,
    max_retries: int = None,
    agent: Optional[Agent] = None,
) -> JobRequirements:
    """
    Extract core skills, behavioral traits and competency levels from a job description.

    Raises:
        ValueError: If the description is empty or no attempt returns valid JSON
    """
    if not job_description or not job_description.strip():
        raise ValueError("Job description is empty")

    max_retries = max_retries or LLM_CONFIG["max_retries"]
    agent = agent or build_jd_analysis_agent(model_name)

    prompt = f"""Analyze this job description and extract:
1. Core technical skills (list 5-8 specific skills)
2. Behavioral traits (list 3-5 soft skills)
3. Competency level required for each skill (Beginner/Intermediate/Advanced/Expert)

Job Description:
{job_description}

Respond in valid JSON format:
{{
  "core_skills": ["skill1", "skill2"],
  "behavioral_traits": ["trait1", "trait2"],
  "competency_level": {{
    "skill1": "Advanced",
    "trait1": "Intermediate"
  }}
}}
"""

    for attempt in range(max_retries):
        try:
            logger.info(f"JD analysis attempt {attempt + 1}/{max_retries}")
            response_text = _response_text(agent.run(prompt))

            data = extract_json_from_response(response_text)
            if not data:
                raise ValueError("Could not extract valid JSON from LLM response")
            requirements = JobRequirements(**data)
            logger.info(f"Extracted {len(requirements.core_skills)} core skills, "
                        f"{len(requirements.behavioral_traits)} behavioral traits")
            return requirements

        except Exception as e:
            logger.warning(f"JD analysis attempt {attempt + 1} failed: {e}")
            if attempt == max_retries - 1:
                raise ValueError(f"Job description analysis failed after {max_retries} attempts: {e}")

    raise ValueError("Job description analysis failed")
