import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_engine.scoring import classify_career_alignment, shares_significant_word, title_tokens  # noqa: E402


class CareerAlignmentTests(unittest.TestCase):
    def test_unrelated_titles_are_a_career_change(self):
        alignment = classify_career_alignment("Chef", "Software Developer")
        self.assertEqual(alignment.classification, "CareerChange")
        self.assertEqual(alignment.overlap_percentage, 0)
        self.assertTrue(alignment.is_career_change)
        self.assertEqual(alignment.alignment_level, "career change")

    def test_seniority_does_not_reduce_alignment(self):
        alignment = classify_career_alignment("Senior Software Engineer", "Software Engineer")
        self.assertEqual(alignment.classification, "HighlyAligned")
        self.assertEqual(alignment.overlap_percentage, 100.0)

    def test_half_overlap_is_somewhat_related(self):
        alignment = classify_career_alignment("Software Engineer", "Software Developer")
        self.assertEqual(alignment.overlap_percentage, 50.0)
        self.assertEqual(alignment.classification, "SomewhatRelated")

    def test_two_thirds_overlap_is_related(self):
        alignment = classify_career_alignment("Data Engineer", "Data Platform Engineer")
        self.assertEqual(alignment.classification, "Related")
        self.assertEqual(alignment.alignment_level, "related")

    def test_missing_titles(self):
        self.assertEqual(classify_career_alignment("", "Engineer").classification, "CareerChange")
        self.assertEqual(classify_career_alignment(None, None).overlap_percentage, 0)

    def test_deterministic(self):
        first = classify_career_alignment("Marketing Manager", "Product Marketing Manager")
        second = classify_career_alignment("Marketing Manager", "Product Marketing Manager")
        self.assertEqual(first, second)


class TitleTokenTests(unittest.TestCase):
    def test_short_words_and_qualifiers_are_dropped(self):
        self.assertEqual(title_tokens("Senior Dev Ops / Cloud Engineer"), ["cloud", "engineer"])

    def test_shared_word(self):
        self.assertTrue(shares_significant_word("Senior Backend Developer", "Backend Engineer"))
        self.assertFalse(shares_significant_word("Chef", "Software Developer"))
        self.assertFalse(shares_significant_word("", "Software Developer"))

    def test_containment_counts_as_shared(self):
        self.assertTrue(shares_significant_word("QA", "QA Lead"))


if __name__ == "__main__":
    unittest.main()
