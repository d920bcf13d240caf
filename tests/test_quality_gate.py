import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.quality import run_quality_gate  # noqa: E402
from resumefit.quality.gate import (  # noqa: E402
    fix_dangling_ending,
    is_sentence_like_skill,
    strip_banned_phrases,
)
from resumefit.schemas import (  # noqa: E402
    CoverLetter,
    SkillGroup,
    TailoredDraft,
    TailoredExperience,
    TailoredResume,
)


def _draft(bullets=None, skills=None, paragraphs=None, summary="") -> TailoredDraft:
    return TailoredDraft(
        summary=summary,
        tailored_resume=TailoredResume(
            summary="Payments engineer with eight years in fintech.",
            skills=[SkillGroup(category="Languages", items=skills or ["Python"])],
            experience=[TailoredExperience(company="Ledgerly", title="Engineer", bullets=bullets or [])],
        ),
        cover_letter=CoverLetter(paragraphs=paragraphs or []),
    )


class BannedPhraseTests(unittest.TestCase):
    def test_strips_phrase_and_tidies_punctuation(self):
        cleaned, removed = strip_banned_phrases("Optimised the release process in a fast-paced environment.")
        self.assertEqual(cleaned, "Optimised the release process.")
        self.assertEqual(removed, ["in a fast-paced environment"])

    def test_match_is_case_insensitive_and_keeps_capitalisation(self):
        cleaned, removed = strip_banned_phrases("Results-driven engineer who ships.")
        self.assertEqual(cleaned, "Engineer who ships.")
        self.assertEqual(removed, ["results-driven"])

    def test_clean_text_is_returned_unchanged(self):
        text = "Automated invoice matching for 300 suppliers."
        self.assertEqual(strip_banned_phrases(text), (text, []))


class DanglingEndingTests(unittest.TestCase):
    def test_trailing_connective_is_closed(self):
        self.assertEqual(
            fix_dangling_ending("Automated invoice matching for 300 suppliers, resulting in"),
            "Automated invoice matching for 300 suppliers.",
        )

    def test_which_clause_is_closed(self):
        self.assertEqual(
            fix_dangling_ending("Rebuilt the onboarding flow, which led to."),
            "Rebuilt the onboarding flow.",
        )

    def test_complete_bullet_is_untouched(self):
        bullet = "Cut month-end close from 10 days to 4, delivering reports earlier"
        self.assertEqual(fix_dangling_ending(bullet), bullet)


class SkillItemTests(unittest.TestCase):
    def test_sentence_like_items(self):
        self.assertFalse(is_sentence_like_skill("Python"))
        self.assertFalse(is_sentence_like_skill("Stakeholder Management"))
        self.assertTrue(is_sentence_like_skill("Experience designing and running large scale payment systems"))
        self.assertTrue(is_sentence_like_skill("x" * 51))


class QualityGateTests(unittest.TestCase):
    def test_clean_draft_passes(self):
        result = run_quality_gate(_draft(bullets=["Automated invoice matching for 300 suppliers."]))
        self.assertTrue(result.passed)
        self.assertEqual(result.issues, [])

    def test_fixes_bullets_and_reports_each_change(self):
        result = run_quality_gate(
            _draft(
                bullets=[
                    "Optimised the release process in a fast-paced environment.",
                    "Automated invoice matching for 300 suppliers, resulting in",
                    "various projects",
                ]
            )
        )
        bullets = result.output.tailored_resume.experience[0].bullets
        types = [issue.type for issue in result.issues]

        self.assertEqual(bullets, ["Optimised the release process.", "Automated invoice matching for 300 suppliers."])
        self.assertIn("banned_phrase", types)
        self.assertIn("dangling_ending", types)
        self.assertIn("empty_bullet", types)
        self.assertFalse(result.passed)

    def test_removes_sentence_length_skill_items(self):
        sentence = "Deep experience building reliable and scalable backend payment services"
        result = run_quality_gate(_draft(skills=["Python", sentence, "SQL"]))

        self.assertEqual(result.output.tailored_resume.skills[0].items, ["Python", "SQL"])
        self.assertEqual([issue.type for issue in result.issues], ["skill_sentence"])
        self.assertEqual(result.issues[0].location, "skills.Languages")

    def test_kept_skill_items_are_not_rewritten(self):
        result = run_quality_gate(_draft(skills=[" Python ", "SQL"]))
        self.assertEqual(result.output.tailored_resume.skills[0].items, [" Python ", "SQL"])
        self.assertEqual(result.issues, [])
        self.assertTrue(result.passed)

    def test_blank_skill_items_are_dropped_and_reported(self):
        draft = _draft()
        group = draft.tailored_resume.skills[0].model_copy(update={"items": ["Python", "  "]})
        draft.tailored_resume.skills = [group]
        result = run_quality_gate(draft)

        self.assertEqual(result.output.tailored_resume.skills[0].items, ["Python"])
        self.assertEqual([issue.type for issue in result.issues], ["empty_skill"])
        self.assertEqual(result.issues[0].location, "skills.Languages")
        self.assertFalse(result.passed)

    def test_cleans_cover_letter_and_summary(self):
        result = run_quality_gate(
            _draft(
                paragraphs=["I am writing to express my strong interest", "I build payment systems."],
                summary="Backend engineer, results-driven and pragmatic.",
            )
        )
        self.assertEqual(result.output.cover_letter.paragraphs, ["I build payment systems."])
        self.assertEqual(result.output.summary, "Backend engineer and pragmatic.")

    def test_input_draft_is_not_modified(self):
        draft = _draft(bullets=["Optimised the release process in a fast-paced environment."])
        run_quality_gate(draft)
        self.assertEqual(
            draft.tailored_resume.experience[0].bullets,
            ["Optimised the release process in a fast-paced environment."],
        )


if __name__ == "__main__":
    unittest.main()
