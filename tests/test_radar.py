import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.schemas import (  # noqa: E402
    CandidateProfile,
    EducationEntry,
    ExperienceEntry,
    JobProfile,
    ProjectEntry,
)
from resumefit.scoring import (  # noqa: E402
    candidate_to_tailored_resume,
    check_relevance,
    score_radar,
    score_to_label,
    tailored_to_candidate_profile,
)


def _backend_candidate() -> CandidateProfile:
    return CandidateProfile(
        name="Priya Sharma",
        headline="Backend Engineer",
        summary="Backend engineer focused on payment systems.",
        skills=["Python", "PostgreSQL", "Docker"],
        experience=[
            ExperienceEntry(
                title="Senior Engineer",
                company="Ledgerly",
                start="Jan 2020",
                end="Present",
                bullets=[
                    "Led a team of 5 engineers to cut costs by 20%",
                    "Built reconciliation APIs in Python and PostgreSQL",
                    "Responsible for deployments",
                ],
            )
        ],
        education=[EducationEntry(school="University of Leeds", degree="BSc Computer Science", end="2016")],
        projects=[ProjectEntry(name="ledger-cli", bullets=["Wrote a CLI that reconciles 10K invoices per minute"])],
    )


def _backend_job() -> JobProfile:
    return JobProfile(
        title="Senior Backend Engineer",
        required_skills=["Python", "PostgreSQL", "Kubernetes"],
        preferred_skills=["Terraform"],
        keywords=["Python", "Docker"],
    )


class RadarScoreTests(unittest.TestCase):
    def test_empty_profile_against_empty_job_uses_neutral_defaults(self):
        result = score_radar(CandidateProfile(), JobProfile())

        self.assertEqual(result.breakdown.hard_skills, 50)
        self.assertEqual(result.breakdown.soft_skills, 30)
        self.assertEqual(result.breakdown.measurable_results, 20)
        self.assertEqual(result.breakdown.keyword_optimization, 50)
        self.assertEqual(result.breakdown.formatting_best_practices, 75)
        self.assertEqual(result.score, 43)
        self.assertEqual(result.label, "Moderate Match")

    def test_blockers_target_the_weakest_categories(self):
        result = score_radar(CandidateProfile(), JobProfile())
        self.assertEqual(
            [blocker.category for blocker in result.blockers],
            ["measurable_results", "soft_skills", "hard_skills"],
        )

    def test_java_requirement_is_not_met_by_javascript(self):
        result = score_radar(CandidateProfile(skills=["JavaScript"]), JobProfile(required_skills=["Java"]))
        self.assertEqual(result.breakdown.hard_skills, 0)
        self.assertIn("Java", result.missing_keywords)

    def test_matched_and_missing_keywords_partition_job_terms(self):
        result = score_radar(_backend_candidate(), _backend_job())

        self.assertEqual(result.matched_keywords, ["Python", "PostgreSQL", "Docker"])
        self.assertEqual(result.missing_keywords, ["Kubernetes", "Terraform"])
        clusters = {cluster.cluster: cluster.keywords for cluster in result.diagnostics.missing_keyword_clusters}
        self.assertEqual(clusters["Required Skills"], ["Kubernetes"])
        self.assertEqual(clusters["Preferred Skills"], ["Terraform"])

    def test_diagnostics_report_vague_openings(self):
        result = score_radar(_backend_candidate(), _backend_job())
        self.assertIn("Responsible for", result.diagnostics.weak_verbs)

    def test_score_stays_in_range_and_label_matches_score(self):
        result = score_radar(_backend_candidate(), _backend_job())
        self.assertGreaterEqual(result.score, 0)
        self.assertLessEqual(result.score, 100)
        self.assertEqual(result.label, score_to_label(result.score))

    def test_scoring_is_deterministic(self):
        first = score_radar(_backend_candidate(), _backend_job())
        second = score_radar(_backend_candidate(), _backend_job())
        self.assertEqual(first.model_dump(), second.model_dump())

    def test_label_bands(self):
        self.assertEqual(score_to_label(100), "Strong Match")
        self.assertEqual(score_to_label(75), "Strong Match")
        self.assertEqual(score_to_label(74), "Good Match")
        self.assertEqual(score_to_label(60), "Good Match")
        self.assertEqual(score_to_label(59), "Moderate Match")
        self.assertEqual(score_to_label(0), "Moderate Match")

    def test_missing_sections_produce_warnings(self):
        warnings = score_radar(CandidateProfile(), JobProfile()).warnings
        self.assertTrue(any("summary" in warning for warning in warnings))
        self.assertTrue(any("experience" in warning for warning in warnings))


class ConvertTests(unittest.TestCase):
    def test_candidate_round_trip_scores_identically(self):
        candidate = _backend_candidate()
        job = _backend_job()
        view = tailored_to_candidate_profile(candidate_to_tailored_resume(candidate))

        self.assertEqual(score_radar(view, job).score, score_radar(candidate, job).score)
        self.assertEqual(score_radar(view, job).breakdown, score_radar(candidate, job).breakdown)

    def test_period_is_split_back_into_dates(self):
        resume = candidate_to_tailored_resume(_backend_candidate())
        self.assertEqual(resume.experience[0].period, "Jan 2020 – Present")
        self.assertEqual(resume.skills[0].category, "Core Skills")

        view = tailored_to_candidate_profile(resume)
        self.assertEqual(view.experience[0].start, "Jan 2020")
        self.assertEqual(view.experience[0].end, "Present")
        self.assertEqual(view.education[0].end, "2016")


class RelevanceTests(unittest.TestCase):
    def test_unrelated_profile_is_not_relevant(self):
        result = check_relevance(
            CandidateProfile(skills=["Excel", "Bookkeeping"]),
            JobProfile(required_skills=["Kubernetes", "Terraform"]),
        )
        self.assertFalse(result.relevant)
        self.assertEqual(result.score, 0)
        self.assertTrue(result.reason)

    def test_overlapping_profile_is_relevant(self):
        result = check_relevance(_backend_candidate(), _backend_job())
        self.assertTrue(result.relevant)
        self.assertIsNone(result.reason)


if __name__ == "__main__":
    unittest.main()
