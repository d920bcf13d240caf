import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.quality import dedupe_bullets, dedupe_draft, dedupe_with_issues  # noqa: E402
from resumefit.quality.dedupe import (  # noqa: E402
    bullet_category,
    cap_category_bullets,
    dedupe_paragraphs,
    is_near_duplicate,
    similarity,
)
from resumefit.schemas import CoverLetter, TailoredDraft, TailoredExperience, TailoredResume  # noqa: E402

MIGRATION = "Led migration of billing services to Kubernetes across three regions"
MIGRATION_WORDIER = "Led the migration of billing services to Kubernetes across three regions"
LATENCY = "Reduced API latency for the checkout service"
LATENCY_WITH_METRIC = "Reduced API latency for the checkout service by 40%"

BACKEND_BULLETS = [
    "Designed REST APIs for the billing platform",
    "Tuned PostgreSQL queries for reporting jobs",
    "Built GraphQL gateway serving 40% of mobile traffic",
    "Migrated session storage to Redis clusters",
    "Wrote Django admin tools for support staff",
    "Mentored four junior engineers through onboarding",
]

COVER_LETTER = [
    "Dear Hiring Manager,",
    "Body one.",
    "Dear Team,",
    "Body two.",
    "",
    "Body three.",
    "Body four.",
    "Body five.",
    "Kind regards,",
    "Sincerely, Priya",
]


def _draft(bullets, paragraphs=None) -> TailoredDraft:
    return TailoredDraft(
        tailored_resume=TailoredResume(
            experience=[TailoredExperience(company="Ledgerly", title="Engineer", bullets=bullets)]
        ),
        cover_letter=CoverLetter(paragraphs=paragraphs or []),
    )


class BulletDedupeTests(unittest.TestCase):
    def test_similarity_ignores_short_tokens(self):
        self.assertAlmostEqual(similarity(MIGRATION, MIGRATION_WORDIER), 8 / 9)
        self.assertTrue(is_near_duplicate(MIGRATION, MIGRATION_WORDIER))

    def test_unrelated_bullets_are_not_duplicates(self):
        self.assertFalse(is_near_duplicate(MIGRATION, LATENCY))

    def test_keeps_the_longer_of_two_near_duplicates(self):
        self.assertEqual(dedupe_bullets([MIGRATION, MIGRATION_WORDIER]), [MIGRATION_WORDIER])

    def test_prefers_the_bullet_with_a_metric(self):
        self.assertEqual(dedupe_bullets([LATENCY_WITH_METRIC, LATENCY]), [LATENCY_WITH_METRIC])
        self.assertEqual(dedupe_bullets([LATENCY, LATENCY_WITH_METRIC]), [LATENCY_WITH_METRIC])

    def test_exact_duplicates_after_normalization_collapse(self):
        self.assertEqual(dedupe_bullets(["Shipped v2!", "shipped V2"]), ["Shipped v2!"])

    def test_blank_bullets_are_dropped(self):
        self.assertEqual(dedupe_bullets(["", "   ", LATENCY]), [LATENCY])

    def test_dedupe_is_idempotent(self):
        once = dedupe_bullets([MIGRATION, LATENCY, MIGRATION_WORDIER, LATENCY_WITH_METRIC])
        self.assertEqual(once, [MIGRATION_WORDIER, LATENCY_WITH_METRIC])
        self.assertEqual(dedupe_bullets(once), once)


class CategoryCapTests(unittest.TestCase):
    def test_bullet_category_detection(self):
        self.assertEqual(bullet_category("Tuned PostgreSQL queries"), "backend")
        self.assertEqual(bullet_category("Rebuilt the React component library"), "frontend")
        self.assertEqual(bullet_category("Moved CI/CD pipelines to GitHub"), "infrastructure")
        self.assertIsNone(bullet_category("Mentored four junior engineers"))

    def test_keeps_the_strongest_three_backend_bullets_in_order(self):
        capped = cap_category_bullets(BACKEND_BULLETS)
        self.assertEqual(
            capped,
            [
                "Designed REST APIs for the billing platform",
                "Tuned PostgreSQL queries for reporting jobs",
                "Built GraphQL gateway serving 40% of mobile traffic",
                "Mentored four junior engineers through onboarding",
            ],
        )


class CoverLetterTests(unittest.TestCase):
    def test_single_greeting_single_signoff_and_paragraph_cap(self):
        self.assertEqual(
            dedupe_paragraphs(COVER_LETTER),
            ["Dear Hiring Manager,", "Body one.", "Body two.", "Body three.", "Sincerely, Priya"],
        )

    def test_short_letter_is_untouched(self):
        paragraphs = ["Dear Team,", "I build payment systems.", "Regards, Priya"]
        self.assertEqual(dedupe_paragraphs(paragraphs), paragraphs)


class DraftDedupeTests(unittest.TestCase):
    def test_reports_issues_per_entry(self):
        result = dedupe_with_issues(_draft([MIGRATION, MIGRATION_WORDIER] + BACKEND_BULLETS, COVER_LETTER))
        types = [issue.type for issue in result.issues]

        self.assertIn("duplicate_bullet", types)
        self.assertIn("category_cap", types)
        self.assertIn("cover_letter", types)
        self.assertFalse(result.passed)
        duplicate = next(issue for issue in result.issues if issue.type == "duplicate_bullet")
        self.assertEqual(duplicate.location, "experience[0] (Ledgerly)")

    def test_does_not_mutate_the_input(self):
        draft = _draft([MIGRATION, MIGRATION_WORDIER])
        dedupe_draft(draft)
        self.assertEqual(draft.tailored_resume.experience[0].bullets, [MIGRATION, MIGRATION_WORDIER])

    def test_clean_draft_passes(self):
        result = dedupe_with_issues(_draft([MIGRATION, LATENCY]))
        self.assertTrue(result.passed)
        self.assertEqual(result.issues, [])

    def test_draft_dedupe_is_idempotent(self):
        once = dedupe_draft(_draft([MIGRATION, MIGRATION_WORDIER] + BACKEND_BULLETS, COVER_LETTER))
        self.assertEqual(dedupe_draft(once), once)


if __name__ == "__main__":
    unittest.main()
