import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.core.config import load_settings  # noqa: E402
from ats_engine.core.config.scoring import (  # noqa: E402
    get_scoring_config,
    get_scoring_value,
    reset_scoring_config_cache,
)


class ScoringConfigTests(unittest.TestCase):
    def tearDown(self):
        reset_scoring_config_cache()

    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("general.keyword_match.max"), 40)
        self.assertEqual(get_scoring_value("job_specific.weights.technicalSkills"), 1.5)
        self.assertEqual(get_scoring_value("general.nope.missing", 7), 7)
        self.assertIsNone(get_scoring_value(""))

    def test_override_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("general:\n  keyword_match:\n    max: 10\n", encoding="utf-8")
            with patch.dict(os.environ, {"ATS_SCORING_CONFIG": str(path)}):
                self.assertEqual(get_scoring_value("general.keyword_match.max"), 10)

    def test_invalid_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "scoring.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with patch.dict(os.environ, {"ATS_SCORING_CONFIG": str(path)}):
                with self.assertRaises(RuntimeError):
                    get_scoring_config()
            with patch.dict(os.environ, {"ATS_SCORING_CONFIG": str(Path(tmp) / "missing.yaml")}):
                with self.assertRaises(RuntimeError):
                    get_scoring_config()


class SettingsTests(unittest.TestCase):
    def test_environment_overrides(self):
        env = {
            "AI_MODEL": "gpt-4o",
            "ATS_KEYWORD_MIN_TOTAL": "3",
            "ATS_LLM_TIMEOUT_S": "not-a-number",
            "ATS_RESUME_CONTEXT_MAX_CHARS": "9000",
        }
        with patch.dict(os.environ, env):
            settings = load_settings()
        self.assertEqual(settings.ai_model, "gpt-4o")
        self.assertEqual(settings.keyword_min_total, 3)
        self.assertEqual(settings.llm_timeout_s, 30.0)
        self.assertEqual(settings.resume_context_max_chars, 9000)


if __name__ == "__main__":
    unittest.main()
