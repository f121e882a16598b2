"""
Resume Parser

Keyword-driven entity extraction from free-text resumes:
1. Skills from the technical and soft-skill vocabularies
2. Education records from degree lines
3. Experience records from job-title lines and their bullet points
4. Derived totals, summary, placeholder embedding and completeness score

Nothing here raises on malformed input; missing patterns produce empty
collections or defaults.
"""

import re
import math
import logging
from datetime import datetime
from enum import Enum
from typing import List, Dict, Any, Optional, Iterable, Sequence

from .config import (
    TECHNICAL_KEYWORDS, SOFT_KEYWORDS, SKILL_CONFIDENCE, MAX_EXTRACTED_SKILLS,
    EDUCATION_LEVELS, JOB_TITLE_CUES, EXTRACTION_SCORE, MIN_SKILLS_FOR_BONUS,
    EMBEDDING_DIMENSION, RESUME_FIT_WEIGHTS, RESUME_FIT_EDUCATION_SCORES,
    FRAMEWORK_MATCH_CONFIDENCE, FRAMEWORK_UNMATCHED_FACTOR,
)
from .keyword_matcher import (
    find_keywords, split_lines, is_bullet, strip_bullet, tokenize,
)
from .schemas import (
    ExtractedSkill, ExtractedEducation, ExtractedExperience, ParsedResume,
    ResumeFit, FrameworkMapping,
)
from .utils import round_half_up

logger = logging.getLogger(__name__)


# Education
LEVEL_PATTERNS = [
    (level, re.compile("|".join(rf"(?<![a-z]){re.escape(t)}" for t in triggers), re.IGNORECASE))
    for level, triggers in EDUCATION_LEVELS
]
DEGREE_FIELD_RX = re.compile(
    r"([a-z][a-z\s&.']{1,49}?)\s+in\s+([a-z][a-z\s&]{1,49}?)"
    r"(?=\s+(?:from|at)\b|\s*[,;|(\d-]|\s*$)",
    re.IGNORECASE,
)
YEAR_RX = re.compile(r"(?<!\d)(?:19|20)\d{2}(?!\d)")
INSTITUTION_RX = re.compile(r"(?:\b(?:from|at)|,)\s+([a-z][a-z\s&.]{1,49})", re.IGNORECASE)

# Experience
TITLE_RX = re.compile(
    r"(?:^|\s)(" + "|".join(re.escape(cue) for cue in JOB_TITLE_CUES) + r")(?!\w)",
    re.IGNORECASE,
)
COMPANY_RX = re.compile(r"(?:\bat|@|,)\s+([a-z][a-z0-9&\s.]{1,49})", re.IGNORECASE)
DURATION_RX = re.compile(r"(\d{4})\s*[-–]\s*(\d{4}|present|current)", re.IGNORECASE)

UNKNOWN = "Unknown"


def extract_skills(text: str) -> List[ExtractedSkill]:
    """
    Scan the text against the technical and soft-skill vocabularies.

    Duplicate labels (case-insensitive) keep the first entry seen. The result
    is sorted by confidence, highest first, and capped.
    """
    found: Dict[str, ExtractedSkill] = {}
    for category, vocabulary in (("technical", TECHNICAL_KEYWORDS), ("soft", SOFT_KEYWORDS)):
        for label in find_keywords(text, vocabulary):
            key = label.lower()
            if key in found:
                continue
            found[key] = ExtractedSkill(
                label=label,
                confidence=SKILL_CONFIDENCE[category],
                category=category,
            )

    skills = sorted(found.values(), key=lambda s: s.confidence, reverse=True)
    if len(skills) > MAX_EXTRACTED_SKILLS:
        logger.debug(f"Truncating {len(skills)} skills to {MAX_EXTRACTED_SKILLS}")
    return skills[:MAX_EXTRACTED_SKILLS]


def detect_education_level(line: str) -> Optional[str]:
    """First education level whose triggers occur in the line."""
    for level, pattern in LEVEL_PATTERNS:
        if pattern.search(line):
            return level
    return None


def extract_institution(line: str) -> str:
    match = INSTITUTION_RX.search(line)
    return match.group(1).strip() if match else UNKNOWN


def extract_education(text: str) -> List[ExtractedEducation]:
    """One record per line that names a level and a '<degree> in <field>' phrase."""
    education = []
    for line in split_lines(text):
        level = detect_education_level(line)
        if level is None:
            continue
        degree_match = DEGREE_FIELD_RX.search(line)
        if not degree_match:
            logger.debug(f"{level} trigger without degree phrase: {line.strip()[:60]}")
            continue
        year_match = YEAR_RX.search(line)
        education.append(ExtractedEducation(
            degree=degree_match.group(1).strip(),
            field=degree_match.group(2).strip(),
            institution=extract_institution(line),
            year=int(year_match.group(0)) if year_match else None,
            level=level,
        ))
    return education


def years_in_role(duration_match: Optional[re.Match], current_year: int) -> int:
    if not duration_match:
        return 1
    start_year = int(duration_match.group(1))
    end = duration_match.group(2).lower()
    end_year = current_year if end in ("present", "current") else int(end)
    return max(1, end_year - start_year)


class ScanState(Enum):
    IDLE = "idle"
    ROLE_OPEN = "role_open"


class ExperienceScanner:
    """
    Line-by-line experience extraction.

    Any line with a title cue, bulleted or not, closes the open role and
    opens a new one. While a role is open, each bullet line (including a
    bulleted title line) adds a responsibility; other lines are skipped.
    End of input closes the open role.
    """

    def __init__(self, current_year: Optional[int] = None):
        self.current_year = current_year or datetime.now().year
        self.state = ScanState.IDLE
        self.records: List[ExtractedExperience] = []
        self._role: Dict[str, Any] = {}

    def feed(self, line: str) -> None:
        title_match = TITLE_RX.search(line)
        if title_match:
            self._close()
            self._open(line, title_match.group(1).strip())

        if self.state is ScanState.ROLE_OPEN and is_bullet(line):
            responsibility = strip_bullet(line)
            if responsibility:
                self._role["responsibilities"].append(responsibility)

    def finish(self) -> List[ExtractedExperience]:
        self._close()
        return self.records

    def _open(self, line: str, title: str) -> None:
        company_match = COMPANY_RX.search(line)
        duration_match = DURATION_RX.search(line)
        self._role = {
            "title": title,
            "company": company_match.group(1).strip() if company_match else UNKNOWN,
            "duration_text": duration_match.group(0) if duration_match else UNKNOWN,
            "years_in_role": years_in_role(duration_match, self.current_year),
            "line": line,
            "responsibilities": [],
        }
        self.state = ScanState.ROLE_OPEN
        logger.debug(f"Opened role '{title}' at {self._role['company']}")

    def _close(self) -> None:
        if self.state is not ScanState.ROLE_OPEN:
            return
        role = self._role
        role_text = "\n".join([role["line"], *role["responsibilities"]])
        self.records.append(ExtractedExperience(
            title=role["title"],
            company=role["company"],
            duration_text=role["duration_text"],
            years_in_role=role["years_in_role"],
            responsibilities=role["responsibilities"],
            skills=find_keywords(role_text, TECHNICAL_KEYWORDS),
        ))
        self._role = {}
        self.state = ScanState.IDLE


def extract_experience(text: str, current_year: Optional[int] = None) -> List[ExtractedExperience]:
    scanner = ExperienceScanner(current_year)
    for line in split_lines(text):
        scanner.feed(line)
    return scanner.finish()


def calculate_years_experience(experience: Sequence[ExtractedExperience]) -> float:
    return round(float(sum(e.years_in_role for e in experience)), 1)


def calculate_extraction_score(
    skills: Sequence[ExtractedSkill],
    education: Sequence[ExtractedEducation],
    experience: Sequence[ExtractedExperience],
) -> float:
    """Completeness of the parse, from 0.5 (nothing found) up to 1.0."""
    score = EXTRACTION_SCORE["base"]
    if len(skills) > MIN_SKILLS_FOR_BONUS:
        score += EXTRACTION_SCORE["skills"]
    if education:
        score += EXTRACTION_SCORE["education"]
    if experience:
        score += EXTRACTION_SCORE["experience"]
    return min(1.0, round(score, 2))


def _word_bucket(word: str) -> int:
    # 32-bit signed rolling hash (h * 31 + c)
    h = 0
    for ch in word:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h) % EMBEDDING_DIMENSION


def generate_embedding(text: str) -> List[float]:
    """
    Deterministic bag-of-words placeholder vector.

    Each word adds 1/word_count to its hashed bucket; the vector is then
    L2-normalized. Empty text gives the zero vector.
    """
    vector = [0.0] * EMBEDDING_DIMENSION
    words = tokenize(text)
    if not words:
        return vector
    weight = 1 / len(words)
    for word in words:
        vector[_word_bucket(word)] += weight
    norm = math.sqrt(sum(v * v for v in vector))
    return [v / norm for v in vector] if norm > 0 else vector


def generate_summary(
    skills: Sequence[ExtractedSkill],
    experience: Sequence[ExtractedExperience],
    years_experience: float,
) -> str:
    latest_role = experience[0].title if experience else "Professional"
    summary = f"{years_experience:g} years of experience as {latest_role}"
    top_skills = ", ".join(s.label for s in skills[:5])
    if top_skills:
        summary += f" with expertise in {top_skills}"
    return summary + "."


def parse_resume(text: str, current_year: Optional[int] = None) -> ParsedResume:
    """
    Parse free-text resume into a ParsedResume.

    Args:
        text: Raw resume text (may be empty)
        current_year: Year that 'present'/'current' resolves to (defaults to today)

    Returns:
        ParsedResume with skills, education, experience and derived fields
    """
    text = text or ""
    skills = extract_skills(text)
    education = extract_education(text)
    experience = extract_experience(text, current_year)
    total_years = calculate_years_experience(experience)

    parsed = ParsedResume(
        skills=skills,
        education=education,
        experience=experience,
        total_years_experience=total_years,
        summary=generate_summary(skills, experience, total_years),
        embedding=generate_embedding(text),
        extraction_score=calculate_extraction_score(skills, education, experience),
    )
    logger.info(f"Parsed resume: {len(skills)} skills, {len(education)} education, "
                f"{len(experience)} roles, {total_years} years")
    return parsed


def score_resume_fit(
    parsed: ParsedResume,
    required_skills: Iterable[str],
    required_education: Optional[str] = None,
    years_required: Optional[float] = None,
) -> ResumeFit:
    """
    Quick fit of a parsed resume against plain requirements.

    Formula:
    - Skills: % of required skills contained in (or containing) an extracted label; 50 if none
    - Education: 100 if not required, else 80 with any education record, 40 without
    - Experience: 100 if not required, else min(100, years / required * 100)
    - Final: 0.5 * skills + 0.3 * education + 0.2 * experience
    """
    required = list(required_skills)
    resume_skills = [s.label.lower() for s in parsed.skills]

    matched = 0
    for skill in required:
        wanted = skill.lower()
        if any(have in wanted or wanted in have for have in resume_skills):
            matched += 1
    skill_score = (matched / len(required)) * 100 if required else 50

    if not required_education:
        education_score = RESUME_FIT_EDUCATION_SCORES["not_required"]
    elif parsed.education:
        education_score = RESUME_FIT_EDUCATION_SCORES["present"]
    else:
        education_score = RESUME_FIT_EDUCATION_SCORES["missing"]

    if years_required:
        experience_score = min(100, (parsed.total_years_experience / years_required) * 100)
    else:
        experience_score = 100

    match_score = (
        RESUME_FIT_WEIGHTS["skills"] * skill_score +
        RESUME_FIT_WEIGHTS["education"] * education_score +
        RESUME_FIT_WEIGHTS["experience"] * experience_score
    )
    return ResumeFit(
        match_score=round_half_up(match_score),
        details={
            "skill_score": round_half_up(skill_score),
            "education_score": round_half_up(education_score),
            "experience_score": round_half_up(experience_score),
            "matched_skills": matched,
            "total_required": len(required),
            "years_experience": parsed.total_years_experience,
        },
    )


def map_skills_to_competency_framework(
    skills: Iterable[ExtractedSkill],
    framework: Sequence[Dict[str, Any]],
) -> List[FrameworkMapping]:
    """Map each skill to the first framework entry whose skill or competency name contains it."""
    mappings = []
    for skill in skills:
        label = skill.label.lower()
        match = next(
            (
                entry for entry in framework
                if label in (entry.get("skill_name") or "").lower()
                or label in (entry.get("competency_name") or "").lower()
            ),
            None,
        )
        if match:
            mappings.append(FrameworkMapping(
                skill=skill.label,
                framework_match=match.get("skill_name") or match.get("competency_name"),
                confidence=FRAMEWORK_MATCH_CONFIDENCE,
            ))
        else:
            mappings.append(FrameworkMapping(
                skill=skill.label,
                framework_match="Unmatched",
                confidence=skill.confidence * FRAMEWORK_UNMATCHED_FACTOR,
            ))
    return mappings
