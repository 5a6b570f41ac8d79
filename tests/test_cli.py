import io
import json
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.cli import main  # noqa: E402


class FakeClient:
    def __init__(self, response):
        self.response = response

    def invoke(self, prompt, **kwargs):
        return self.response


class CLITests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_score_general_only(self):
        resume = self.tmp / "resume.json"
        payload = {"summary": "Engineer with Python and SQL across analytics teams.", "skills": ["Python"]}
        resume.write_text(json.dumps(payload))
        code, out, _ = self._run(["score", "--resume", str(resume)])
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertIn("generalScore", payload)
        self.assertIsNone(payload["jobSpecificScore"])

    def test_score_rejects_bad_json(self):
        resume = self.tmp / "resume.json"
        resume.write_text("{not json")
        code, _, err = self._run(["score", "--resume", str(resume)])
        self.assertEqual(code, 1)
        self.assertEqual(json.loads(err.strip().splitlines()[-1])["error"], "invalid_resume")

    def test_keywords_command(self):
        description = self.tmp / "jd.txt"
        description.write_text("Python and AWS developer needed")
        with patch("ats_engine.cli.get_completion_client", return_value=FakeClient("{}")):
            code, out, _ = self._run(
                ["keywords", "--job-title", "Developer", "--job-description-file", str(description)]
            )
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["technicalSkills"], ["Python", "AWS"])

    def test_extract_command_never_fails(self):
        text = self.tmp / "resume.txt"
        text.write_text("Dana Reyes\nSoftware Engineer")
        with patch("ats_engine.cli.get_completion_client", return_value=FakeClient("not json")):
            code, out, _ = self._run(["extract", "--text-file", str(text)])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["personalInfo"]["fullName"], "Error processing resume")


if __name__ == "__main__":
    unittest.main()
