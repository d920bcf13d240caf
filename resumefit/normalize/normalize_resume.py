from __future__ import annotations

import logging

from resumefit.schemas import CandidateProfile

from .contact import (
    extract_email,
    extract_headline,
    extract_links,
    extract_location,
    extract_name,
    extract_phone,
    header_region,
)
from .education import extract_education, extract_projects
from .experience import extract_experience
from .sections import HEADER_BUCKET, detect_sections, section_lines
from .skills import extract_skills
from .utils import normalize_line, normalize_text

logger = logging.getLogger(__name__)

SUMMARY_SECTION_TERMS = ("summary", "objective", "profile", "about")


def parse_resume(text: str, hidden_links: list[str] | None = None) -> CandidateProfile:
    """Turn free-form resume text into a CandidateProfile.

    Every extractor falls back to an empty value, so arbitrary input yields a valid profile.
    `hidden_links` carries hyperlink targets recovered by the upstream text extractor.
    """
    cleaned = normalize_text(text or "")
    lines = [normalize_line(line) for line in cleaned.split("\n")]
    lines = [line for line in lines if line]
    if not lines:
        return CandidateProfile(links=extract_links("", hidden_links))

    sections = detect_sections(lines)
    region = header_region(sections)

    name = extract_name(lines)
    summary = " ".join(section_lines(sections, SUMMARY_SECTION_TERMS)).strip()
    profile = CandidateProfile(
        name=name,
        headline=extract_headline(sections.get(HEADER_BUCKET, []), name),
        summary=summary or None,
        email=extract_email(cleaned),
        phone=extract_phone(region),
        location=extract_location(region),
        links=extract_links(region, hidden_links),
        skills=extract_skills(sections, cleaned),
        experience=extract_experience(sections),
        education=extract_education(sections),
        projects=extract_projects(sections),
    )
    logger.debug(
        "resume_parsed sections=%s skills=%s experience=%s education=%s",
        len(sections),
        len(profile.skills),
        len(profile.experience),
        len(profile.education),
    )
    return profile
