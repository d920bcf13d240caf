import os
import sys
import unittest
from pathlib import Path

# Keep API tests deterministic: no per-client throttling, no key checks.
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("AUTH_MODE", "public")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from resumefit.main import app  # noqa: E402

RESUME_TEXT = """PRIYA SHARMA
Clinical Pharmacist | London, United Kingdom
priya.sharma@example.com | 07845 123456

SKILLS
Clinical Pharmacy, Medicines Optimisation, Patient Counselling

EXPERIENCE
Senior Clinical Pharmacist — Guy's and St Thomas' NHS Foundation Trust (2020 – Present)
• Led antimicrobial stewardship ward rounds across 6 surgical wards, cutting broad-spectrum use by 18%
• Mentored 4 pre-registration pharmacists through their GPhC assessments

EDUCATION
Master of Pharmacy (MPharm) — University College London, 2017
"""

JD_TEXT = """Lead Clinical Pharmacist
Requirements:
- Medicines Optimisation across acute wards
- Antimicrobial stewardship experience
Nice to have:
- Independent prescribing qualification
"""


class MatchApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy", "service": "resumefit"})

    def test_resume_parse_contract_shape(self):
        response = self.client.post("/v1/resume/parse", json={"text": RESUME_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()

        self.assertEqual(body["email"], "priya.sharma@example.com")
        self.assertIsInstance(body["skills"], list)
        self.assertGreaterEqual(len(body["experience"]), 1)
        self.assertIn("education", body)

    def test_job_parse_contract_shape(self):
        response = self.client.post("/v1/job/parse", json={"text": JD_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()

        for key in ("title", "required_skills", "preferred_skills", "keywords", "seniority_level"):
            self.assertIn(key, body)

    def test_quick_match(self):
        response = self.client.post(
            "/v1/match/quick",
            json={"resume_text": "Python SQL Docker developer", "jd_text": "Required: Python, SQL, Docker"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertGreater(body["score"], 70)
        self.assertEqual(body["label"], "Strong")
        self.assertFalse(body["needs_more_input"])

    def test_score_contract_shape(self):
        response = self.client.post("/v1/match/score", json={"resume_text": RESUME_TEXT, "jd_text": JD_TEXT})
        self.assertEqual(response.status_code, 200)
        radar = response.json()["radar"]

        self.assertIn(radar["label"], {"Strong Match", "Good Match", "Moderate Match"})
        self.assertGreaterEqual(radar["score"], 0)
        self.assertLessEqual(radar["score"], 100)
        self.assertEqual(
            set(radar["breakdown"]),
            {"hard_skills", "soft_skills", "measurable_results", "keyword_optimization", "formatting_best_practices"},
        )

    def test_score_rejects_placeholder_job_text(self):
        jd_text = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Requirements: Python and SQL."
        for path in ("/v1/match/score", "/v1/pipeline/run"):
            response = self.client.post(path, json={"resume_text": RESUME_TEXT, "jd_text": jd_text})
            self.assertEqual(response.status_code, 422)
            self.assertIn("placeholder text", response.json()["detail"])

    def test_score_warns_when_the_upload_is_not_a_resume(self):
        recipe = (
            "Preheat the oven to 200C. Mix the flour, sugar and butter in a large bowl, "
            "then bake the cake for forty minutes until golden."
        )
        response = self.client.post("/v1/match/score", json={"resume_text": recipe, "jd_text": JD_TEXT})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["input_warnings"],
            ["This doesn't look like a resume. Please upload your resume (PDF, DOCX, or TXT)."],
        )

        response = self.client.post("/v1/match/score", json={"resume_text": RESUME_TEXT, "jd_text": JD_TEXT})
        self.assertEqual(response.json()["input_warnings"], [])

    def test_pipeline_requires_resume_text(self):
        response = self.client.post("/v1/pipeline/run", json={"resume_text": "  ", "jd_text": JD_TEXT})
        self.assertEqual(response.status_code, 422)
        self.assertIn("Resume text is required", response.json()["detail"])

    def test_pipeline_requires_job_text(self):
        response = self.client.post("/v1/pipeline/run", json={"resume_text": RESUME_TEXT})
        self.assertEqual(response.status_code, 422)
        self.assertIn("Job description text is required", response.json()["detail"])

    def test_pipeline_run(self):
        draft = {
            "summary": "Good alignment with the ward pharmacy role.",
            "tailored_resume": {
                "name": "Priya Sharma",
                "skills": [{"category": "Clinical", "items": ["Medicines Optimisation"]}],
                "experience": [
                    {
                        "company": "Guy's and St Thomas' NHS Foundation Trust",
                        "title": "Senior Clinical Pharmacist",
                        "bullets": ["Led antimicrobial stewardship ward rounds in a fast-paced environment."],
                    }
                ],
            },
        }
        response = self.client.post(
            "/v1/pipeline/run",
            json={"resume_text": RESUME_TEXT, "jd_text": JD_TEXT, "draft": draft},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()

        self.assertGreaterEqual(body["radar_after"]["score"], body["radar_before"]["score"])
        self.assertIn("banned_phrase", [issue["type"] for issue in body["issues"]])
        self.assertIsInstance(body["boost_actions"], list)

    def test_oversized_input_is_rejected(self):
        response = self.client.post("/v1/job/parse", json={"text": "x" * 200001})
        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
