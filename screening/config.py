"""
Configuration for the resume parsing and competency scoring pipeline.
Adjust vocabularies, weights and thresholds here.
"""

# Technical skill vocabulary (order is the extraction order)
TECHNICAL_KEYWORDS = (
    "React", "Node.js", "Python", "JavaScript", "TypeScript", "Java", "C++", "SQL", "MongoDB",
    "AWS", "Azure", "Docker", "Kubernetes", "Git", "REST API", "GraphQL", "Machine Learning",
    "Data Science", "TensorFlow", "PyTorch", "BERT", "NLP", "Deep Learning", "Vue.js", "Angular",
    "Express", "Django", "Flask", "Spring Boot", "PostgreSQL", "Firebase", "Supabase",
    "CI/CD", "DevOps", "Linux", "Agile", "Scrum", "JIRA", "Figma", "UI/UX",
)

# Soft skill vocabulary
SOFT_KEYWORDS = (
    "Leadership", "Communication", "Problem Solving", "Teamwork", "Adaptability",
    "Critical Thinking", "Time Management", "Creativity", "Analytical", "Strategic",
    "Negotiation", "Mentoring", "Project Management", "Decision Making", "Collaboration",
    "Attention to Detail", "Reliability", "Work Ethic", "Flexibility", "Innovation",
)

# Confidence assigned per keyword hit
SKILL_CONFIDENCE = {
    "technical": 0.9,
    "soft": 0.75,
}

MAX_EXTRACTED_SKILLS = 30

# Education level triggers, tested in this order (first match wins per line)
EDUCATION_LEVELS = (
    ("Bachelor", ("bachelor", "b.s", "b.a", "undergraduate")),
    ("Master", ("master", "m.s", "m.a", "graduate")),
    ("PhD", ("phd", "doctorate")),
    ("Certification", ("certification", "certified", "cert")),
    ("HighSchool", ("high school", "secondary")),
)

# Job-title cues that open a new experience record
JOB_TITLE_CUES = (
    "software engineer", "developer", "manager", "analyst", "architect", "lead",
    "director", "designer", "product", "business", "data scientist", "ml engineer",
    "qa engineer",
)

BULLET_MARKERS = ("-", "•", "*")

# Extraction completeness score
EXTRACTION_SCORE = {
    "base": 0.5,
    "skills": 0.2,       # more than MIN_SKILLS_FOR_BONUS skills found
    "education": 0.15,   # any education record
    "experience": 0.15,  # any experience record
}
MIN_SKILLS_FOR_BONUS = 5

EMBEDDING_DIMENSION = 768

# Similarity matching
EXACT_MATCH_SCORE = 1.0
CONTAINMENT_SCORE = 0.85
SIMILARITY_THRESHOLD = 0.5

# Proficiency cues, checked expert -> advanced -> intermediate -> beginner
PROFICIENCY_LEVELS = (
    ("Expert", ("expert", "senior", "lead", "architect", "10+", "years")),
    ("Advanced", ("advanced", "proficient", "5-10", "years")),
    ("Intermediate", ("intermediate", "competent", "2-5", "years")),
    ("Beginner", ("beginner", "basic", "junior", "0-2", "years")),
)
DEFAULT_PROFICIENCY = "Beginner"

# Overall fit: match percentage vs average confidence
FIT_WEIGHTS = {
    "match_percentage": 0.6,
    "confidence": 0.4,
}
NEUTRAL_FIT_SCORE = 50  # No required competencies

# Cultural fit signals: (any of these substrings, points)
CULTURAL_FIT_BASE = 50
CULTURAL_FIT_SIGNALS = (
    (("agile", "scrum", "sprint"), 10),
    (("collaborate", "teamwork", "cross-functional"), 10),
    (("innovation", "creative"), 5),
    (("leadership", "mentor"), 8),
)
SOFT_SKILL_POINTS = 2
SOFT_SKILL_POINTS_CAP = 15

# Ranking score blend
RANKING_WEIGHTS = {
    "fit": 0.5,
    "cultural": 0.3,
    "gaps": 0.2,
}
GAP_PENALTY = 0.15  # Per missing competency

# Strengths
STRENGTH_CONFIDENCE = 0.7
MAX_STRENGTHS = 5

# Recommendation decision table (evaluated top to bottom, first match wins)
RECOMMENDATION_THRESHOLDS = {
    "highly_recommended_fit": 80,       # fit > 80 and cultural > 75
    "highly_recommended_cultural": 75,
    "recommended_fit": 65,              # fit > 65 and gaps <= 2
    "recommended_max_gaps": 2,
    "potential_fit": 50,                # fit > 50
    "training_min_gaps": 5,             # gaps > 5
}
RECOMMENDATIONS = {
    "highly_recommended": "Highly Recommended — Schedule Interview",
    "recommended": "Recommended — Consider for Technical Round",
    "potential_fit": "Potential Fit — Request Additional Info",
    "requires_training": "Requires Training — Consider for Entry Level",
    "not_recommended": "Not Recommended — Skill Gap Too Large",
}

# Cultural fit narrative thresholds (inclusive)
CULTURAL_FIT_NARRATIVE = (
    (75, "High"),
    (50, "Medium"),
)
CULTURAL_FIT_NARRATIVE_DEFAULT = "Low"

# Success prediction
SUCCESS_WEIGHTS = {
    "overall_fit": 0.6,
    "cultural_fit": 0.4,
}
SUCCESS_EXPERIENCE_YEARS = 5     # Years for full experience credit
SUCCESS_EXPERIENCE_POINTS = 20
SUCCESS_THRESHOLDS = (
    (85, "Highly Likely"),
    (70, "Likely"),
    (50, "Possible"),
)
SUCCESS_DEFAULT = "Unlikely"

# Simple resume fit (skills / education / experience)
RESUME_FIT_WEIGHTS = {
    "skills": 0.5,
    "education": 0.3,
    "experience": 0.2,
}
RESUME_FIT_EDUCATION_SCORES = {
    "not_required": 100,
    "present": 80,
    "missing": 40,
}

# Competency framework mapping
FRAMEWORK_MATCH_CONFIDENCE = 0.85
FRAMEWORK_UNMATCHED_FACTOR = 0.6

# LLM validation configuration
LLM_CONFIG = {
    "temperature": 0.3,
    "model": "gpt-4o-mini",  # Default model
    "max_retries": 2,
    "blend_weight": 0.4,     # Share of the LLM score in the blended competency match
    "resume_excerpt_chars": 1000,
}
