"""
Unit tests for keyword-driven resume parsing.
"""

import math
import unittest

from screening.config import TECHNICAL_KEYWORDS, SOFT_KEYWORDS, EMBEDDING_DIMENSION
from screening.resume_parser import (
    parse_resume,
    extract_skills,
    extract_education,
    extract_experience,
    calculate_extraction_score,
    generate_embedding,
    score_resume_fit,
    map_skills_to_competency_framework,
)
from screening.schemas import ExtractedSkill, ParsedResume


SAMPLE_RESUME = """
Alex Morgan
alex.morgan@example.com

EDUCATION
Bachelor of Science in Computer Science from State University, 2014

SKILLS
Python, Docker, Kubernetes, SQL, Git, Linux, Leadership, Communication

EXPERIENCE
Senior Software Engineer at Acme Corp, 2018-2023
- Built Python microservices on Kubernetes
- Mentor for new hires in an agile team

Developer at Beta Inc, 2014-2018
- Maintained SQL reporting
"""


class TestSkillExtraction(unittest.TestCase):
    """Test vocabulary scanning, deduplication and ordering."""

    def test_technical_then_soft(self):
        skills = extract_skills("Python, python, JavaScript, Leadership and teamwork")
        self.assertEqual([s.label for s in skills], ["Python", "JavaScript", "Leadership", "Teamwork"])
        self.assertEqual([s.category for s in skills], ["technical", "technical", "soft", "soft"])
        self.assertEqual(skills[0].confidence, 0.9)
        self.assertEqual(skills[-1].confidence, 0.75)

    def test_duplicates_collapse(self):
        skills = extract_skills("python PYTHON Python")
        self.assertEqual(len(skills), 1)

    def test_capped_at_thirty(self):
        text = ", ".join(TECHNICAL_KEYWORDS + SOFT_KEYWORDS)
        skills = extract_skills(text)
        self.assertEqual(len(skills), 30)
        self.assertTrue(all(s.category == "technical" for s in skills))

    def test_empty_text(self):
        self.assertEqual(extract_skills(""), [])


class TestEducationExtraction(unittest.TestCase):
    """Test degree line parsing."""

    def test_degree_field_institution_year(self):
        records = extract_education("Bachelor of Science in Computer Science from MIT, 2018")
        self.assertEqual(len(records), 1)
        edu = records[0]
        self.assertEqual(edu.degree, "Bachelor of Science")
        self.assertEqual(edu.field, "Computer Science")
        self.assertEqual(edu.institution, "MIT")
        self.assertEqual(edu.year, 2018)
        self.assertEqual(edu.level, "Bachelor")

    def test_comma_separated_institution(self):
        edu = extract_education("Master of Science in Data Science, Stanford University, 2020")[0]
        self.assertEqual(edu.level, "Master")
        self.assertEqual(edu.field, "Data Science")
        self.assertEqual(edu.institution, "Stanford University")
        self.assertEqual(edu.year, 2020)

    def test_bare_level_keyword_produces_no_record(self):
        self.assertEqual(extract_education("PhD candidate"), [])

    def test_level_priority(self):
        """Bachelor is tested before Master."""
        edu = extract_education("Bachelor and Master in Physics")[0]
        self.assertEqual(edu.level, "Bachelor")
        self.assertEqual(edu.field, "Physics")

    def test_certification_without_institution(self):
        edu = extract_education("AWS Certified in Cloud Architecture 2021")[0]
        self.assertEqual(edu.level, "Certification")
        self.assertEqual(edu.field, "Cloud Architecture")
        self.assertEqual(edu.institution, "Unknown")
        self.assertEqual(edu.year, 2021)

    def test_high_school(self):
        edu = extract_education("High School Diploma in Science, Springfield High, 2010")[0]
        self.assertEqual(edu.level, "HighSchool")
        self.assertEqual(edu.institution, "Springfield High")

    def test_multiple_degrees_kept(self):
        text = ("Master of Science in Data Science, Stanford University, 2020\n"
                "Bachelor of Science in Mathematics, Ohio State, 2018")
        self.assertEqual([e.level for e in extract_education(text)], ["Master", "Bachelor"])

    def test_no_year(self):
        self.assertIsNone(extract_education("Bachelor of Arts in History")[0].year)


class TestExperienceExtraction(unittest.TestCase):
    """Test the role scanner."""

    def test_single_line_role_with_inline_bullet(self):
        text = "Senior Software Engineer at Acme Corp, 2015-2020. - Led a team of 5 engineers."
        records = extract_experience(text)
        self.assertEqual(len(records), 1)
        role = records[0]
        self.assertIn("engineer", role.title.lower())
        self.assertEqual(role.company, "Acme Corp")
        self.assertEqual(role.duration_text, "2015-2020")
        self.assertEqual(role.years_in_role, 5)
        self.assertEqual(role.responsibilities, ("Led a team of 5 engineers.",))

    def test_title_line_closes_previous_role(self):
        text = (
            "Senior Software Engineer at Acme Corp, 2015-2020\n"
            "- Built Python services\n"
            "- Led migration to Docker\n"
            "Data Scientist at Beta Labs, 2020-present\n"
            "* Trained models\n"
        )
        records = extract_experience(text, current_year=2024)
        self.assertEqual(len(records), 2)
        self.assertEqual(records[0].responsibilities, ("Built Python services", "Led migration to Docker"))
        self.assertEqual(records[0].skills, ("Python", "Docker"))
        self.assertEqual(records[1].title, "Data Scientist")
        self.assertEqual(records[1].company, "Beta Labs")
        self.assertEqual(records[1].years_in_role, 4)
        self.assertEqual(records[1].responsibilities, ("Trained models",))

    def test_bulleted_title_line_opens_new_role(self):
        """A title cue on a bullet line closes the open role and starts another."""
        text = (
            "Developer at Startup, 2015-2018\n"
            "- Built APIs\n"
            "- Senior Software Engineer at Acme, 2018-2022\n"
        )
        records = extract_experience(text)
        self.assertEqual(len(records), 2)
        self.assertEqual(records[0].responsibilities, ("Built APIs",))
        self.assertEqual(records[0].years_in_role, 3)

        role = records[1]
        self.assertEqual(role.title, "Software Engineer")
        self.assertEqual(role.company, "Acme")
        self.assertEqual(role.years_in_role, 4)
        # The bullet text is also the new role's first responsibility
        self.assertEqual(role.responsibilities, ("Senior Software Engineer at Acme, 2018-2022",))

        # Expected total: 3 + 4 = 7 years
        self.assertEqual(parse_resume(text).total_years_experience, 7.0)

    def test_bulleted_title_line_opens_first_role(self):
        records = extract_experience("- Analyst at Gamma, 2019-2021\n- Built dashboards")
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].responsibilities, ("Analyst at Gamma, 2019-2021", "Built dashboards"))

    def test_defaults_without_duration(self):
        role = extract_experience("Developer at Startup")[0]
        self.assertEqual(role.company, "Startup")
        self.assertEqual(role.duration_text, "Unknown")
        self.assertEqual(role.years_in_role, 1)

    def test_present_and_minimum_year(self):
        role = extract_experience("Analyst at Gamma, 2021 - present", current_year=2024)[0]
        self.assertEqual(role.years_in_role, 3)
        self.assertEqual(role.duration_text, "2021 - present")
        self.assertEqual(extract_experience("Designer at Foo, 2020-2020")[0].years_in_role, 1)

    def test_lines_without_open_role_ignored(self):
        self.assertEqual(extract_experience("- Volunteer work\nHobbies: chess"), [])

    def test_leadership_is_not_a_title(self):
        self.assertEqual(extract_experience("Strong leadership skills"), [])


class TestParseResume(unittest.TestCase):
    """Test the assembled ParsedResume."""

    def test_sample_resume(self):
        parsed = parse_resume(SAMPLE_RESUME)
        labels = [s.label for s in parsed.skills]
        self.assertEqual(
            labels,
            ["Python", "SQL", "Docker", "Kubernetes", "Git", "Linux", "Agile", "Leadership", "Communication"],
        )
        self.assertEqual(len(parsed.education), 1)
        self.assertEqual(parsed.education[0].institution, "State University")
        self.assertEqual(len(parsed.experience), 2)
        self.assertEqual(parsed.total_years_experience, 9.0)
        self.assertEqual(parsed.extraction_score, 1.0)
        self.assertEqual(
            parsed.summary,
            "9 years of experience as Software Engineer with expertise in Python, SQL, Docker, Kubernetes, Git.",
        )

    def test_empty_text_degrades_gracefully(self):
        parsed = parse_resume("")
        self.assertEqual(parsed.skills, ())
        self.assertEqual(parsed.education, ())
        self.assertEqual(parsed.experience, ())
        self.assertEqual(parsed.total_years_experience, 0.0)
        self.assertEqual(parsed.extraction_score, 0.5)
        self.assertEqual(parsed.summary, "0 years of experience as Professional.")
        self.assertEqual(len(parsed.embedding), EMBEDDING_DIMENSION)

    def test_determinism(self):
        self.assertEqual(parse_resume(SAMPLE_RESUME, current_year=2024),
                         parse_resume(SAMPLE_RESUME, current_year=2024))

    def test_extraction_score_components(self):
        skills = [ExtractedSkill(label=f"s{i}", confidence=0.9, category="technical") for i in range(6)]
        self.assertEqual(calculate_extraction_score([], [], []), 0.5)
        self.assertAlmostEqual(calculate_extraction_score(skills, [], []), 0.7)
        self.assertAlmostEqual(calculate_extraction_score(skills[:5], [], []), 0.5)


class TestEmbedding(unittest.TestCase):

    def test_zero_vector_for_empty_text(self):
        vector = generate_embedding("")
        self.assertEqual(len(vector), EMBEDDING_DIMENSION)
        self.assertTrue(all(v == 0.0 for v in vector))

    def test_unit_norm_and_deterministic(self):
        vector = generate_embedding("python docker python kubernetes")
        self.assertAlmostEqual(math.sqrt(sum(v * v for v in vector)), 1.0)
        self.assertEqual(vector, generate_embedding("python docker python kubernetes"))

    def test_case_insensitive_words(self):
        self.assertEqual(generate_embedding("Python SQL"), generate_embedding("python sql"))


class TestResumeFit(unittest.TestCase):
    """Test the quick skills/education/experience fit."""

    def setUp(self):
        self.parsed = ParsedResume(
            skills=[
                ExtractedSkill(label="Python", confidence=0.9, category="technical"),
                ExtractedSkill(label="Docker", confidence=0.9, category="technical"),
            ],
            total_years_experience=5.0,
        )

    def test_partial_fit(self):
        fit = score_resume_fit(self.parsed, ["python", "docker", "rust", "go"], "Bachelor", 10)
        # Expected: 0.5 * 50 + 0.3 * 40 + 0.2 * 50 = 47
        self.assertEqual(fit.match_score, 47)
        self.assertEqual(fit.details["matched_skills"], 2)
        self.assertEqual(fit.details["education_score"], 40)

    def test_no_requirements(self):
        # Expected: 0.5 * 50 + 0.3 * 100 + 0.2 * 100 = 75
        self.assertEqual(score_resume_fit(self.parsed, []).match_score, 75)


class TestFrameworkMapping(unittest.TestCase):

    def test_matched_and_unmatched(self):
        skills = [
            ExtractedSkill(label="Python", confidence=0.9, category="technical"),
            ExtractedSkill(label="Leadership", confidence=0.75, category="soft"),
            ExtractedSkill(label="Docker", confidence=0.9, category="technical"),
        ]
        framework = [
            {"skill_name": "Python Programming"},
            {"competency_name": "Team Leadership"},
        ]
        mappings = map_skills_to_competency_framework(skills, framework)
        self.assertEqual(mappings[0].framework_match, "Python Programming")
        self.assertEqual(mappings[0].confidence, 0.85)
        self.assertEqual(mappings[1].framework_match, "Team Leadership")
        self.assertEqual(mappings[2].framework_match, "Unmatched")
        self.assertAlmostEqual(mappings[2].confidence, 0.54)


if __name__ == "__main__":
    unittest.main()
