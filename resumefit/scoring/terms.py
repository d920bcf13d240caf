from __future__ import annotations

import re
from functools import lru_cache

from resumefit.schemas import CandidateProfile
from resumefit.taxonomy import canonical_skill

TECH_TERMS = (
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Go", "Golang", "Rust", "Ruby",
    "PHP", "Swift", "Kotlin", "Scala", "R", "MATLAB",
    "React", "Angular", "Vue", "Svelte", "Next.js", "Nextjs", "Nuxt", "Gatsby", "Remix",
    "Node.js", "Nodejs", "Express", "Django", "Flask", "FastAPI", "Spring", "Rails", "Laravel",
    ".NET", "ASP.NET",
    "AWS", "GCP", "Azure", "Google Cloud", "Amazon Web Services",
    "Docker", "Kubernetes", "K8s", "Terraform", "Pulumi", "Ansible", "CloudFormation",
    "PostgreSQL", "MySQL", "MongoDB", "Redis", "Elasticsearch", "DynamoDB", "Cassandra", "SQLite",
    "GraphQL", "REST", "gRPC", "WebSocket", "API", "Microservices",
    "CI/CD", "GitHub Actions", "Jenkins", "CircleCI", "GitLab CI",
    "Git", "Agile", "Scrum", "Kanban", "Jira", "Confluence",
    "HTML", "CSS", "SASS", "SCSS", "Tailwind", "Bootstrap",
    "Kafka", "RabbitMQ", "SQS", "Pub/Sub",
    "TensorFlow", "PyTorch", "Scikit-learn", "NLP", "Machine Learning", "Deep Learning",
    "AI", "ML", "LLM",
    "Linux", "Unix", "Bash", "PowerShell",
    "SQL", "NoSQL", "ETL", "Data Pipeline", "Data Engineering",
    "OAuth", "JWT", "SAML", "SSO", "Authentication", "Authorization", "Security",
    "Figma", "Sketch", "Photoshop", "InDesign",
    "Excel", "Power BI", "Tableau", "Looker", "Google Analytics", "SEO", "SEM",
    "Salesforce", "HubSpot", "SAP", "Oracle", "Workday",
    "PRINCE2", "PMP", "ITIL", "Six Sigma", "Lean",
)

DOMAIN_TERMS = (
    "Leadership", "Mentoring", "Mentorship", "Coaching", "Team Lead", "System Design",
    "Architecture", "Scalability", "Distributed Systems",
    "Communication", "Collaboration", "Cross-functional", "Stakeholder Management",
    "Project Management", "Product Management", "Roadmap",
    "Testing", "TDD", "BDD", "Unit Test", "Integration Test", "E2E", "QA",
    "Performance", "Optimization", "Monitoring", "Observability",
    "Compliance", "GDPR", "SOC 2", "HIPAA", "PCI",
    "Budget", "Forecasting", "Financial Modelling", "Risk Management", "Audit",
    "Patient Care", "Clinical", "Clinical Governance", "Triage", "Wound Care",
    "Medication Administration", "Medicines Optimisation", "Safeguarding",
)

DICTIONARY_TERMS = TECH_TERMS + DOMAIN_TERMS

# Everyday words that only count as a skill in their exact capitalisation.
CASE_SENSITIVE_TERMS = frozenset(
    {"Go", "R", "REST", "Express", "Spring", "Rails", "Swift", "Remix", "Gatsby", "Lean", "Sketch", "Oracle"}
)

MAX_WHOLE_TERM_WORDS = 4


@lru_cache(maxsize=2048)
def term_pattern(term: str) -> re.Pattern[str]:
    """Word-boundary-safe pattern: "java" never matches inside "javascript"."""
    body = r"\s+".join(re.escape(part) for part in term.strip().split())
    body = body.replace(r"SOC\s+2", r"SOC\s*2")
    flags = 0 if term in CASE_SENSITIVE_TERMS else re.IGNORECASE
    return re.compile(rf"(?<![A-Za-z0-9]){body}(?![A-Za-z0-9+#])", flags)


def contains_term(text: str, term: str) -> bool:
    if not text or not term or not term.strip():
        return False
    return bool(term_pattern(term.strip()).search(text))


def dedupe_terms(terms: list[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for term in terms:
        cleaned = term.strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        output.append(cleaned)
    return output


def find_dictionary_terms(text: str) -> list[str]:
    """Dictionary terms found in text, canonicalised, in order of first appearance."""
    if not text:
        return []
    hits: list[tuple[int, int, str]] = []
    for order, term in enumerate(DICTIONARY_TERMS):
        match = term_pattern(term).search(text)
        if match:
            hits.append((match.start(), order, canonical_skill(term)))
    hits.sort()
    return dedupe_terms([name for _, _, name in hits])


def requirement_terms(requirements: list[str]) -> list[str]:
    """Short requirement strings count as whole terms; longer sentences contribute dictionary terms."""
    terms: list[str] = []
    for requirement in requirements:
        cleaned = requirement.strip().strip(".;:,").strip()
        if not cleaned:
            continue
        if len(cleaned.split()) <= MAX_WHOLE_TERM_WORDS:
            terms.append(cleaned)
        else:
            terms.extend(find_dictionary_terms(cleaned))
    return dedupe_terms(terms)


def candidate_text(candidate: CandidateProfile) -> str:
    parts: list[str] = []
    for value in (candidate.name, candidate.headline, candidate.summary):
        if value:
            parts.append(value)
    parts.extend(candidate.skills)
    for entry in candidate.experience:
        parts.extend(value for value in (entry.title, entry.company) if value)
        parts.extend(entry.bullets)
    for education in candidate.education:
        parts.extend(value for value in (education.school, education.degree) if value)
    for project in candidate.projects:
        if project.name:
            parts.append(project.name)
        parts.extend(project.bullets)
    return " ".join(parts)


def candidate_has_term(candidate: CandidateProfile, term: str, text: str | None = None) -> bool:
    lowered = term.strip().lower()
    if not lowered:
        return False
    if any(skill.lower() == lowered for skill in candidate.skills):
        return True
    return contains_term(candidate_text(candidate) if text is None else text, term)
