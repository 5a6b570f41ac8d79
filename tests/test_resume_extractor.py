import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.core.config import Settings  # noqa: E402
from ats_engine.errors import ParseError, ServerError  # noqa: E402
from ats_engine.extraction import (  # noqa: E402
    SINGLE_PASS_NOTE,
    TRUNCATION_NOTE,
    ResumeExtractor,
    build_error_placeholder,
    parse_resume_payload,
    repair_resume_payload,
)


class FakeClient:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def invoke(self, prompt, *, max_output_tokens, temperature, structured_output=False, system_prompt=None):
        self.calls.append({"prompt": prompt, "structured_output": structured_output})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


RESUME_TEXT = (
    "Dana Reyes\n"
    "dana@example.com | +1 555 010 2000\n"
    "EXPERIENCE\n"
    "Acme Corp - Software Engineer - 2020 to present\n"
    "- Built Python APIs\n"
    "EDUCATION\n"
    "State University, BSc Computer Science, 2018\n"
)

STRUCTURED = {
    "personalInfo": {
        "fullName": "Dana Reyes",
        "email": "dana@example.com",
        "phone": "+1 555 010 2000",
        "location": "Not found in document",
        "country": "Not found in document",
        "city": "Not found in document",
        "linkedinUrl": "",
        "portfolioUrl": "",
    },
    "summary": "Not found in document",
    "workExperience": [
        {
            "company": "Acme Corp",
            "position": "Software Engineer",
            "startDate": "2020-01-01",
            "endDate": None,
            "current": True,
            "description": "",
            "achievements": ["Built Python APIs"],
        }
    ],
    "education": [
        {"institution": "State University", "degree": "BSc", "fieldOfStudy": "Computer Science", "endDate": 2018}
    ],
    "skills": ["Python"],
    "technicalSkills": None,
    "softSkills": [],
    "certifications": [],
    "projects": [],
}


class ResumeExtractorTests(unittest.TestCase):
    def _extractor(self, client, **settings):
        return ResumeExtractor(client, settings=Settings(**settings))

    def test_two_pass_success(self):
        client = FakeClient("PERSON: Dana Reyes ...", json.dumps(STRUCTURED))
        document = self._extractor(client).extract(RESUME_TEXT)
        self.assertEqual(document.personal_info.full_name, "Dana Reyes")
        self.assertEqual(document.work_experience[0].id, "exp-1")
        self.assertEqual(document.education[0].end_date, "2018")
        self.assertEqual(document.summary, "")
        self.assertEqual(document.technical_skills, [])
        self.assertIsNone(document.note)

        self.assertEqual(len(client.calls), 2)
        self.assertFalse(client.calls[0]["structured_output"])
        self.assertTrue(client.calls[1]["structured_output"])
        self.assertIn("Dana Reyes", client.calls[0]["prompt"])
        self.assertIn("PERSON: Dana Reyes", client.calls[1]["prompt"])

    def test_unparseable_second_pass_falls_back_to_single_pass(self):
        client = FakeClient("analysis", "this is not json", json.dumps(STRUCTURED))
        document = self._extractor(client).extract(RESUME_TEXT)
        self.assertEqual(document.note, SINGLE_PASS_NOTE)
        self.assertEqual(document.personal_info.email, "dana@example.com")
        self.assertEqual(len(client.calls), 3)

    def test_model_error_in_first_pass_falls_back(self):
        client = FakeClient(ServerError("boom"), json.dumps(STRUCTURED))
        document = self._extractor(client).extract(RESUME_TEXT)
        self.assertEqual(document.note, SINGLE_PASS_NOTE)

    def test_non_engine_error_in_first_pass_falls_back_to_single_pass(self):
        client = FakeClient(TimeoutError("timed out"), json.dumps(STRUCTURED))
        document = self._extractor(client).extract(RESUME_TEXT)
        self.assertEqual(document.note, SINGLE_PASS_NOTE)
        self.assertEqual(document.personal_info.full_name, "Dana Reyes")
        self.assertEqual(len(client.calls), 2)

    def test_non_engine_errors_everywhere_give_placeholder_with_reason(self):
        client = FakeClient(TimeoutError("timed out"), ConnectionError("reset"))
        document = self._extractor(client).extract(RESUME_TEXT)
        self.assertEqual(document, build_error_placeholder("reset"))

    def test_total_failure_returns_placeholder(self):
        client = FakeClient("analysis", "[1, 2]", "still not json")
        document = self._extractor(client).extract(RESUME_TEXT)
        self.assertEqual(document.personal_info.full_name, "Error processing resume")
        self.assertEqual(document.work_experience[0].start_date, "2020-01-01")
        self.assertTrue(document.work_experience[0].current)
        self.assertEqual(document.skills, ["Not available due to processing error"])
        self.assertTrue(document.note.startswith("Failed to parse resume: "))

    def test_placeholder_is_deterministic(self):
        first = self._extractor(FakeClient(ServerError("a"), ServerError("b"))).extract(RESUME_TEXT)
        second = self._extractor(FakeClient(ServerError("a"), ServerError("b"))).extract(RESUME_TEXT)
        self.assertEqual(first, second)
        self.assertEqual(first, build_error_placeholder("b"))

    def test_empty_text_skips_the_model(self):
        client = FakeClient()
        document = self._extractor(client).extract("   ")
        self.assertEqual(document.personal_info.full_name, "Error processing resume")
        self.assertEqual(client.calls, [])

    def test_truncation_note(self):
        client = FakeClient("analysis", json.dumps(STRUCTURED))
        text = RESUME_TEXT + ("x" * 200) + "TAIL_MARKER"
        document = self._extractor(client, resume_context_max_chars=150).extract(text)
        self.assertEqual(document.note, TRUNCATION_NOTE)
        self.assertNotIn("TAIL_MARKER", client.calls[0]["prompt"])

    def test_single_pass_note_wins_over_truncation(self):
        client = FakeClient("analysis", "bad", json.dumps(STRUCTURED))
        document = self._extractor(client, resume_context_max_chars=50).extract(RESUME_TEXT)
        self.assertEqual(document.note, SINGLE_PASS_NOTE)


class RepairTests(unittest.TestCase):
    def test_fills_missing_sections(self):
        repaired = repair_resume_payload({"workExperience": [{"company": "Acme"}, "junk"], "skills": None})
        self.assertEqual(repaired["personalInfo"]["fullName"], "Not clearly provided in resume")
        self.assertEqual(repaired["workExperience"], [{"company": "Acme", "id": "exp-1"}])
        self.assertEqual(repaired["skills"], [])
        self.assertEqual(repaired["projects"], [])
        self.assertEqual(repaired["summary"], "")

    def test_keeps_existing_ids_and_numbers_the_rest(self):
        repaired = repair_resume_payload({"projects": [{"id": "proj-9"}, {"name": "CLI"}]})
        self.assertEqual([item["id"] for item in repaired["projects"]], ["proj-9", "proj-2"])

    def test_blanks_hash_like_summary(self):
        repaired = repair_resume_payload({"summary": "d41d8cd98f00b204e9800998ecf8427e"})
        self.assertEqual(repaired["summary"], "")
        repaired = repair_resume_payload({"summary": "Engineer with ten years of experience."})
        self.assertEqual(repaired["summary"], "Engineer with ten years of experience.")

    def test_parse_rejects_wrong_shapes(self):
        with self.assertRaises(ParseError):
            parse_resume_payload("[]")
        with self.assertRaises(ParseError):
            parse_resume_payload('{"workExperience": [{"current": "sometimes"}]}')


if __name__ == "__main__":
    unittest.main()
