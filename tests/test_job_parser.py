import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.normalize import parse_job_description  # noqa: E402
from resumefit.normalize.normalize_jd import detect_seniority  # noqa: E402

BACKEND_JD = """Senior Backend Engineer — Acme Health
About Acme Health
We build software for clinics.
Requirements:
- 5+ years of Python experience
- PostgreSQL
- Docker and Kubernetes
Nice to have:
- GraphQL
- Terraform
Responsibilities:
- Design and ship APIs used by 200 clinics
"""


class JobParserTests(unittest.TestCase):
    def test_sections_split_required_preferred_and_responsibilities(self):
        job = parse_job_description(BACKEND_JD)
        self.assertEqual(job.title, "Senior Backend Engineer")
        self.assertEqual(job.company, "Acme Health")
        self.assertEqual(job.required_skills, ["5+ years of Python experience", "PostgreSQL", "Docker and Kubernetes"])
        self.assertEqual(job.preferred_skills, ["GraphQL", "Terraform"])
        self.assertEqual(job.responsibilities, ["Design and ship APIs used by 200 clinics"])
        self.assertEqual(job.seniority_level, "senior")

    def test_keywords_come_from_dictionary_in_order_of_appearance(self):
        job = parse_job_description(BACKEND_JD)
        for term in ("Python", "Docker", "Kubernetes", "GraphQL", "Terraform"):
            self.assertIn(term, job.keywords)
        self.assertLess(job.keywords.index("Python"), job.keywords.index("Terraform"))

    def test_unlabelled_bullets_fall_back_to_required(self):
        job = parse_job_description("Python developer\n- Python\n- Django")
        self.assertEqual(job.required_skills, ["Python", "Django"])
        self.assertEqual(job.preferred_skills, [])
        self.assertEqual(job.seniority_level, "unspecified")

    def test_inline_requirement_lists(self):
        job = parse_job_description("Data Analyst\nRequired: SQL, Excel, Tableau\nPreferred: Python")
        self.assertEqual(job.required_skills, ["SQL", "Excel", "Tableau"])
        self.assertEqual(job.preferred_skills, ["Python"])

    def test_empty_input_yields_empty_profile(self):
        job = parse_job_description("")
        self.assertEqual(job.title, "")
        self.assertEqual(job.required_skills, [])
        self.assertEqual(job.keywords, [])
        self.assertEqual(job.seniority_level, "unspecified")

    def test_seniority_cues_and_year_fallbacks(self):
        self.assertEqual(detect_seniority("Head of Data", ""), "executive")
        self.assertEqual(detect_seniority("Principal Engineer", ""), "lead")
        self.assertEqual(detect_seniority("Junior Analyst", ""), "junior")
        self.assertEqual(detect_seniority("Engineer", "We need 3+ years of experience"), "mid")
        self.assertEqual(detect_seniority("Engineer", "At least 7 years in payments"), "senior")
        self.assertEqual(detect_seniority("Engineer", "Great team"), "unspecified")


if __name__ == "__main__":
    unittest.main()
