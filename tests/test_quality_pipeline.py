import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.quality import dedupe_with_issues, run_cleanup, run_quality_pipeline  # noqa: E402
from resumefit.schemas import (  # noqa: E402
    CandidateProfile,
    EducationEntry,
    ExperienceEntry,
    JobProfile,
    TailoredDraft,
)

RAW_DRAFT = {
    "summary": "Good alignment with the platform role.",
    "tailored_resume": {
        "name": "Alex Morgan",
        "summary": "Platform engineer.",
        "skills": [{"category": "Core Skills", "items": ["TypeScript", "Python"]}],
        "experience": [
            {
                "company": "Northwind",
                "title": "Engineer",
                "period": "2021 – Present",
                "bullets": [
                    "Led migration of billing services to Kubernetes across three regions",
                    "Led the migration of billing services to Kubernetes across three regions",
                    "Optimised the release process in a fast-paced environment.",
                ],
            }
        ],
    },
    "keyword_checklist": [{"keyword": "TypeScript", "found": False, "suggestion": "Add TypeScript"}],
    "recruiter_feedback": ["Summary is clear and well targeted."],
}


def _candidate() -> CandidateProfile:
    return CandidateProfile(
        name="Alex Morgan",
        summary="Backend developer",
        skills=["Python"],
        experience=[ExperienceEntry(title="Engineer", bullets=["Built internal APIs for the finance team"])],
        education=[EducationEntry(school="Uni", degree="BSc")],
    )


def _job() -> JobProfile:
    return JobProfile(
        title="Platform Engineer",
        required_skills=["Python", "Kubernetes", "Docker"],
        preferred_skills=["Terraform"],
    )


class QualityPipelineTests(unittest.TestCase):
    def test_runs_every_stage_and_collects_issues(self):
        result = run_quality_pipeline(RAW_DRAFT, _candidate(), _job())
        types = {issue.type for issue in result.issues}

        self.assertIn("duplicate_bullet", types)
        self.assertIn("banned_phrase", types)
        self.assertIn("checklist_flip", types)
        self.assertGreaterEqual(result.radar_after.score, result.radar_before.score)

    def test_cleaned_bullets_reach_the_output(self):
        result = run_quality_pipeline(RAW_DRAFT, _candidate(), _job())
        bullets = result.output.tailored_resume.experience[0].bullets

        self.assertIn("Led the migration of billing services to Kubernetes across three regions", bullets)
        self.assertIn("Optimised the release process.", bullets)
        self.assertEqual(len(bullets), 2)

    def test_missing_draft_still_returns_a_scored_result(self):
        result = run_quality_pipeline(None, _candidate(), _job())
        self.assertGreaterEqual(result.radar_after.score, result.radar_before.score)
        self.assertTrue(result.boosted)

    def test_malformed_draft_fields_fall_back_to_defaults(self):
        result = run_quality_pipeline(
            {"tailored_resume": "not a resume", "recruiter_feedback": None, "next_actions": [1, None, "Apply"]},
            _candidate(),
            _job(),
        )
        self.assertEqual(result.output.recruiter_feedback, [])
        self.assertEqual(result.output.next_actions, ["1", "Apply"])

    def test_pipeline_is_deterministic(self):
        first = run_quality_pipeline(RAW_DRAFT, _candidate(), _job())
        second = run_quality_pipeline(RAW_DRAFT, _candidate(), _job())
        self.assertEqual(first.model_dump(), second.model_dump())

    def test_run_cleanup_accepts_custom_passes(self):
        draft = TailoredDraft.model_validate(RAW_DRAFT)
        result = run_cleanup(draft, passes=(dedupe_with_issues,))

        self.assertEqual([issue.type for issue in result.issues], ["duplicate_bullet"])
        self.assertEqual(len(result.output.tailored_resume.experience[0].bullets), 2)
        self.assertFalse(result.passed)


if __name__ == "__main__":
    unittest.main()
