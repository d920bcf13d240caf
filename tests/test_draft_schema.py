import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.schemas import TailoredDraft, coerce_draft  # noqa: E402


class DraftCoercionTests(unittest.TestCase):
    def test_missing_payload_gives_empty_draft(self):
        self.assertEqual(coerce_draft(None), TailoredDraft())
        self.assertEqual(coerce_draft("not a draft"), TailoredDraft())

    def test_wrong_shapes_fall_back_to_empty_lists(self):
        draft = coerce_draft(
            {
                "keyword_checklist": "TypeScript",
                "recruiter_feedback": None,
                "experience_gaps": [{"gap": "Limited cloud work", "severity": "critical"}, "stray"],
            }
        )
        self.assertEqual(draft.keyword_checklist, [])
        self.assertEqual(draft.recruiter_feedback, [])
        self.assertEqual(len(draft.experience_gaps), 1)
        self.assertEqual(draft.experience_gaps[0].severity, "medium")

    def test_skill_items_drop_blank_and_null_values(self):
        draft = coerce_draft({"tailored_resume": {"skills": [{"category": "Core", "items": ["Python", None, ""]}]}})
        self.assertEqual(draft.tailored_resume.skills[0].items, ["Python"])

    def test_checklist_found_accepts_loose_booleans(self):
        draft = coerce_draft(
            {"keyword_checklist": [{"keyword": "SQL", "found": "yes"}, {"keyword": "Go", "found": 0}]}
        )
        self.assertEqual([item.found for item in draft.keyword_checklist], [True, False])

    def test_existing_draft_is_copied(self):
        original = TailoredDraft(summary="Good alignment.")
        copied = coerce_draft(original)
        self.assertEqual(copied, original)
        self.assertIsNot(copied, original)


if __name__ == "__main__":
    unittest.main()
