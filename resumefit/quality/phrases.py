from __future__ import annotations

import re

BANNED_PHRASES = (
    # Filler
    "resulting in measurable performance improvements",
    "resulting in measurable improvements",
    "measurable performance improvements",
    "resulting in significant improvements",
    "driving measurable improvements",
    "in a dynamic environment",
    "in a fast-paced environment",
    "leveraging best practices",
    "utilizing industry best practices",
    "spearheaded synergies",
    "drove alignment across",
    "in cross-functional collaboration with stakeholders",
    "results-driven",
    "proven track record of",
    "think outside the box",
    # Template cover letter openers and closers
    "I am writing to express my strong interest",
    "What excites me most",
    "I would welcome the opportunity to discuss",
    "I am eager to contribute",
    "I am confident in my ability",
    # Generic
    "various projects",
    "multiple tasks",
    "day-to-day operations",
)

DANGLING_ENDINGS = (
    re.compile(r",\s*(?:leading to|resulting in|delivering|achieving|enabling|driving|ensuring)\s*\.?\s*$", re.IGNORECASE),
    re.compile(r",\s*(?:which led to|which resulted in|which enabled|which drove)\s*\.?\s*$", re.IGNORECASE),
    re.compile(r"\b(?:leading to|resulting in|delivering|achieving)\s*\.?\s*$", re.IGNORECASE),
)

GREETING_RE = re.compile(r"^(?:dear[\s,]|hi[\s,]|hello[\s,]|to\s+whom)", re.IGNORECASE)
SIGNOFF_RE = re.compile(
    r"^(?:sincerely|regards|best\s+regards|kind\s+regards|warm\s+regards|thank\s+you|yours|cheers)", re.IGNORECASE
)

# Discouraging wording with a safe in-place rewrite.
FORBIDDEN_REPLACEMENTS = (
    (re.compile(r"\bweak match\b", re.IGNORECASE), "opportunity for improvement"),
    (re.compile(r"\blacks?\s+experience\b", re.IGNORECASE), "could further emphasize experience"),
    (re.compile(r"\bmissing leadership\b", re.IGNORECASE), "opportunity to highlight leadership"),
    (re.compile(r"\bunderqualified\b", re.IGNORECASE), "could strengthen alignment"),
    (re.compile(r"\bpoor(?:ly)?\s+match(?:ed|es)?\b", re.IGNORECASE), "moderate alignment"),
    (re.compile(r"\bno\s+relevant\s+experience\b", re.IGNORECASE), "limited direct experience shown"),
    (re.compile(r"\bnot\s+qualified\b", re.IGNORECASE), "could strengthen qualifications"),
    (re.compile(r"\binsufficient\b", re.IGNORECASE), "limited"),
    (re.compile(r"\binadequate\b", re.IGNORECASE), "developing"),
    (re.compile(r"\bfails?\s+to\b", re.IGNORECASE), "could"),
    (re.compile(r"\bdoes\s+not\s+meet\b", re.IGNORECASE), "partially meets"),
    (re.compile(r"\bweak\b", re.IGNORECASE), "developing"),
)

# Discouraging wording with no safe partial edit: the whole sentence goes.
FORBIDDEN_SENTENCES = (
    re.compile(r"\bnot\s+a\s+(?:good\s+|strong\s+)?fit\b", re.IGNORECASE),
    re.compile(r"\bunlikely\s+to\s+(?:be\s+(?:shortlisted|considered|hired)|succeed|pass)\b", re.IGNORECASE),
    re.compile(r"\b(?:would|will)\s+not\s+recommend\b", re.IGNORECASE),
    re.compile(r"\bshould\s+not\s+apply\b", re.IGNORECASE),
)

_TERM = r"(?P<term>[A-Za-z0-9.][\w./+#-]*(?:\s+[A-Za-z0-9.][\w./+#-]*){0,3}?)"
_END = r"(?=\s*(?:[,.;:!?)]|$)|\s+(?:in|on|from|within|across|for|and|or|to)\b)"

# Claims that something is absent from the resume; `term` names the thing.
CONTRADICTION_PATTERNS = (
    re.compile(rf"\bno\s+(?:evidence|mention)\s+of\s+{_TERM}{_END}", re.IGNORECASE),
    re.compile(
        rf"\bno\s+{_TERM}\s+(?:is\s+|are\s+)?(?:shown|demonstrated|found|present|listed|included|mentioned)\b",
        re.IGNORECASE,
    ),
    re.compile(rf"\bmissing\s+{_TERM}{_END}", re.IGNORECASE),
    re.compile(rf"\blacks?\s+(?:(?:experience|exposure|background)\s+(?:in|with)\s+)?{_TERM}{_END}", re.IGNORECASE),
    re.compile(rf"\bwithout\s+{_TERM}{_END}", re.IGNORECASE),
    re.compile(rf"\bdoes\s+not\s+(?:include|mention|show|demonstrate|list)\s+{_TERM}{_END}", re.IGNORECASE),
    re.compile(rf"\babsence\s+of\s+{_TERM}{_END}", re.IGNORECASE),
)

# Too generic to check against the resume text.
GENERIC_ABSENCE_TERMS = frozenset(
    {"experience", "evidence", "detail", "details", "examples", "context", "metrics", "numbers", "data", "any", "a", "an"}
)

ADD_SKILLS_RE = re.compile(r"\badd\s+(?:the\s+)?(?:missing\s+)?(?:technical\s+)?(?:skills?|keywords?)\s*:?\s*(?P<items>.+)$", re.IGNORECASE)
