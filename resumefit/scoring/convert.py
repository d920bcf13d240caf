from __future__ import annotations

import re

from resumefit.schemas import (
    CandidateProfile,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    SkillGroup,
    TailoredEducation,
    TailoredExperience,
    TailoredProject,
    TailoredResume,
)

DEFAULT_SKILL_GROUP = "Core Skills"

_PERIOD_SPLIT = re.compile(r"\s*[–—-]\s*|\s+to\s+", re.IGNORECASE)


def _split_period(period: str) -> tuple[str | None, str | None]:
    parts = [part.strip() for part in _PERIOD_SPLIT.split(period or "", maxsplit=1)]
    start = parts[0] if parts and parts[0] else None
    end = parts[1] if len(parts) > 1 and parts[1] else None
    return start, end


def tailored_to_candidate_profile(resume: TailoredResume) -> CandidateProfile:
    """View a tailored resume as a CandidateProfile so it can be scored on the same path."""
    experience = []
    for item in resume.experience:
        start, end = _split_period(item.period)
        experience.append(
            ExperienceEntry(
                title=item.title or None,
                company=item.company or None,
                start=start,
                end=end,
                bullets=item.bullets,
            )
        )
    return CandidateProfile(
        name=resume.name or None,
        headline=resume.headline or None,
        summary=resume.summary or None,
        email=resume.email,
        phone=resume.phone,
        location=resume.location,
        links=resume.links,
        skills=[skill for group in resume.skills for skill in group.items],
        experience=experience,
        education=[
            EducationEntry(school=item.school or None, degree=item.degree or None, end=item.year)
            for item in resume.education
        ],
        projects=[ProjectEntry(name=item.name or None, bullets=item.bullets) for item in resume.projects],
    )


def _period(entry: ExperienceEntry) -> str:
    if entry.start and entry.end:
        return f"{entry.start} – {entry.end}"
    return entry.start or entry.end or ""


def candidate_to_tailored_resume(candidate: CandidateProfile) -> TailoredResume:
    """Render a parsed profile in tailored-resume shape; scoring it again gives the same result."""
    return TailoredResume(
        name=candidate.name or "",
        headline=candidate.headline or "",
        summary=candidate.summary or "",
        skills=[SkillGroup(category=DEFAULT_SKILL_GROUP, items=candidate.skills)] if candidate.skills else [],
        experience=[
            TailoredExperience(
                company=entry.company or "",
                title=entry.title or "",
                period=_period(entry),
                bullets=entry.bullets,
            )
            for entry in candidate.experience
        ],
        education=[
            TailoredEducation(school=item.school or "", degree=item.degree or "", year=item.end or item.start)
            for item in candidate.education
        ],
        projects=[TailoredProject(name=item.name or "", bullets=item.bullets) for item in candidate.projects],
        email=candidate.email,
        phone=candidate.phone,
        location=candidate.location,
        links=candidate.links,
    )
