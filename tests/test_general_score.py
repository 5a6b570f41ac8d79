import random
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.schemas import ResumeDocument  # noqa: E402
from ats_engine.scoring import score_general  # noqa: E402

CATEGORIES = [
    "Keyword Match",
    "Keyword Placement",
    "Formatting Compliance",
    "Experience Relevance",
    "Education & Certifications",
]


def _resume(**overrides):
    payload = {
        "personalInfo": {"fullName": "Dana Reyes", "email": "dana@example.com", "phone": "+1 555 010 2000"},
        "summary": "Backend engineer building Python services with strong communication and leadership.",
        "workExperience": [
            {
                "id": "exp-1",
                "company": "Acme",
                "position": "Senior Software Engineer",
                "startDate": "2020-01-01",
                "current": True,
                "achievements": [
                    "Built Python APIs used by 2M users",
                    "Led migration to PostgreSQL",
                    "Mentored four engineers",
                ],
            }
        ],
        "education": [
            {
                "id": "edu-1",
                "institution": "State University",
                "degree": "BSc",
                "fieldOfStudy": "Computer Science",
                "startDate": "2014",
                "endDate": "2018",
            }
        ],
        "technicalSkills": ["Python", "PostgreSQL", "Docker"],
        "softSkills": ["Communication", "Leadership", "Mentoring"],
    }
    payload.update(overrides)
    return ResumeDocument.model_validate(payload)


def _by_category(result):
    return {item.category: item for item in result.feedback}


class MinimalContentTests(unittest.TestCase):
    def test_empty_resume_gets_fixed_low_score(self):
        result = score_general(ResumeDocument())
        self.assertEqual(result.total_score, 5)
        self.assertEqual(len(result.feedback), 3)
        self.assertTrue(all(item.priority == "high" for item in result.feedback))
        self.assertEqual(
            [item.category for item in result.feedback],
            ["Content Completeness", "ATS Compatibility", "Resume Structure"],
        )

    def test_short_summary_alone_is_still_minimal(self):
        result = score_general(ResumeDocument(summary="Hard worker."))
        self.assertEqual(result.total_score, 5)


class GeneralScoreTests(unittest.TestCase):
    def test_full_resume_reports_five_parts(self):
        result = score_general(_resume())
        self.assertEqual([item.category for item in result.feedback], CATEGORIES)
        self.assertGreater(result.total_score, 50)
        self.assertLessEqual(result.total_score, 100)

    def test_formatting_penalties(self):
        resume = _resume(
            workExperience=[
                {"position": "Engineer", "startDate": "2020-01-01", "achievements": ["Shipped Python services"]},
                {"position": "Developer", "startDate": "Jan 2018", "description": "Maintained internal tools."},
            ]
        )
        formatting = _by_category(score_general(resume))["Formatting Compliance"]
        self.assertEqual(formatting.score, 60.0)
        self.assertEqual(formatting.priority, "high")
        self.assertEqual(
            formatting.feedback,
            "Format issues: Inconsistent date formats in work experience. "
            "Inconsistent use of bullet points across experience entries",
        )

    def test_sentinel_contact_values_count_as_missing(self):
        resume = _resume(
            personalInfo={"fullName": "Not found in document", "email": "dana@example.com", "phone": "555 0100"}
        )
        formatting = _by_category(score_general(resume))["Formatting Compliance"]
        self.assertIn("Missing contact details: fullName", formatting.feedback)
        self.assertEqual(formatting.score, 90.0)

    def test_experience_relevance_against_target_title(self):
        resume = _resume(
            workExperience=[
                {"position": "Senior Software Engineer", "startDate": "2020-01-01", "achievements": ["a", "b"]},
                {"position": "Line Cook", "startDate": "2016-01-01", "achievements": ["c"]},
            ]
        )
        relevance = _by_category(score_general(resume, target_job_title="Software Engineer"))["Experience Relevance"]
        self.assertEqual(relevance.score, 50.0)
        self.assertEqual(relevance.priority, "high")

    def test_education_and_certifications(self):
        resume = _resume(certifications=[{"name": "AWS Solutions Architect"}, {"name": "CKA"}])
        education = _by_category(score_general(resume))["Education & Certifications"]
        self.assertEqual(education.score, 90.0)
        self.assertEqual(education.priority, "low")

    def test_low_keyword_match_suggests_generic_keywords(self):
        resume = _resume(summary="", technicalSkills=[], softSkills=[], workExperience=[])
        keyword_match = _by_category(score_general(resume))["Keyword Match"]
        self.assertEqual(keyword_match.score, 0.0)
        self.assertEqual(
            keyword_match.feedback,
            "Add more relevant skills and industry keywords. Consider including: "
            "communication, teamwork, leadership, project management, problem solving.",
        )

    def test_deterministic(self):
        self.assertEqual(score_general(_resume()), score_general(_resume()))

    def test_total_always_in_range(self):
        rng = random.Random(1234)
        words = ["python", "sql", "leadership", "communication", "docker", "excel", "sales", "teamwork"]
        for _ in range(200):
            experiences = [
                {
                    "position": rng.choice(["Engineer", "Analyst", "Chef", ""]),
                    "startDate": rng.choice([None, "2020-01-01", "Jan 2020", "2020"]),
                    "description": " ".join(rng.choices(words, k=rng.randint(0, 40))),
                    "achievements": [" ".join(rng.choices(words, k=5)) for _ in range(rng.randint(0, 5))],
                }
                for _ in range(rng.randint(0, 4))
            ]
            resume = ResumeDocument.model_validate(
                {
                    "summary": " ".join(rng.choices(words, k=rng.randint(0, 20))),
                    "workExperience": experiences,
                    "education": [{"institution": "U"} for _ in range(rng.randint(0, 2))],
                    "skills": rng.sample(words, rng.randint(0, len(words))),
                    "technicalSkills": rng.sample(words, rng.randint(0, 3)),
                    "softSkills": rng.sample(words, rng.randint(0, 3)),
                    "certifications": [{"name": "Cert"} for _ in range(rng.randint(0, 5))],
                }
            )
            result = score_general(resume, target_job_title=rng.choice([None, "Software Engineer"]))
            self.assertGreaterEqual(result.total_score, 0)
            self.assertLessEqual(result.total_score, 100)
            for item in result.feedback:
                self.assertTrue(0 <= item.score <= 100)


if __name__ == "__main__":
    unittest.main()
