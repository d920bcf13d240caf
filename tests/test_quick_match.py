import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.scoring import (  # noqa: E402
    LOW_MATCH_THRESHOLD,
    NEUTRAL_SCORE,
    quick_match,
    quick_match_label,
    quick_match_score,
)
from resumefit.scoring.quick_match import tokenize  # noqa: E402


class QuickMatchTests(unittest.TestCase):
    def test_full_overlap_scores_strong(self):
        score = quick_match_score("python sql docker", "Required: python, sql, docker")
        self.assertGreater(score, 70)
        self.assertEqual(quick_match_label(score), "Strong")

    def test_java_is_not_matched_inside_javascript(self):
        self.assertEqual(quick_match_score("Senior javascript engineer", "java developer"), 0)

    def test_react_is_not_matched_inside_reactive(self):
        self.assertEqual(quick_match_score("Built reactive systems", "react"), 0)

    def test_empty_input_scores_zero(self):
        self.assertEqual(quick_match_score("", "python developer"), 0)
        self.assertEqual(quick_match_score("python developer", "   "), 0)

    def test_job_without_significant_tokens_is_neutral(self):
        self.assertEqual(NEUTRAL_SCORE, 50)
        self.assertEqual(quick_match_score("python", "the and for of to"), NEUTRAL_SCORE)

    def test_phrase_adjacency_adds_to_word_overlap(self):
        adjacent = quick_match_score("machine learning engineer", "machine learning")
        scattered = quick_match_score("learning about every machine", "machine learning")
        self.assertEqual(adjacent, 100)
        self.assertEqual(scattered, 80)

    def test_label_breakpoints(self):
        self.assertEqual(quick_match_label(70), "Strong")
        self.assertEqual(quick_match_label(69), "Good")
        self.assertEqual(quick_match_label(45), "Good")
        self.assertEqual(quick_match_label(44), "Fair")
        self.assertEqual(quick_match_label(25), "Fair")
        self.assertEqual(quick_match_label(24), "Low")

    def test_low_scores_ask_for_more_input(self):
        self.assertEqual(LOW_MATCH_THRESHOLD, 25)
        result = quick_match("gardening", "Senior Kubernetes platform engineer")
        self.assertEqual(result.label, "Low")
        self.assertTrue(result.needs_more_input)

    def test_tokenize_keeps_symbols_out_of_words(self):
        self.assertEqual(tokenize("Python/SQL, (Docker)"), ["python", "sql", "docker"])


if __name__ == "__main__":
    unittest.main()
