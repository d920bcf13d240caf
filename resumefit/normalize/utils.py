from __future__ import annotations

import re

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_GLYPH_PREFIX = re.compile(r"^\s*[•◦▪▫●○■□◆◇▶►*·]\s*")
_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_PHONE_RE = re.compile(r"\+?\d[\d\s().-]{7,}\d")
_URL_RE = re.compile(r"(?:https?://|www\.|linkedin\.com|github\.com)", re.IGNORECASE)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_BLANK_RUNS = re.compile(r"\n[ \t]*(?:\n[ \t]*){2,}")

# Separators between title and company. A bare hyphen only counts when spaced,
# so "Pre-registration" or "40-bed" never split.
SEPARATOR = r"(?:\s*[—–|]\s*|\s+-\s+)"

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_DATE_POINT = rf"(?<![\d/])(?:{_MONTH}\s+\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}})"
_DATE_RANGE_RE = re.compile(
    rf"(?P<start>{_DATE_POINT})\s*(?:[–—-]|\bto\b|\buntil\b)\s*(?P<end>{_DATE_POINT}|present|current|now|date)\b",
    re.IGNORECASE,
)
_YEAR_RE = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")
_PRESENT_RE = re.compile(r"\b(present|current)\b", re.IGNORECASE)

_ROLE_RE = re.compile(
    r"\b(engineer|developer|manager|designer|analyst|scientist|architect|lead|director|consultant"
    r"|intern|associate|senior|junior|staff|principal|vp|cto|ceo|cfo|coo|coordinator|specialist"
    r"|administrator|pharmacist|nurse|teacher|lecturer|accountant|officer|assistant|technician"
    r"|therapist|advisor|adviser|supervisor|executive|representative|head|clerk|physician|surgeon"
    r"|researcher|programmer|tester|owner|strategist|editor|writer|recruiter|controller|auditor)\b",
    re.IGNORECASE,
)

DANGLING_WORDS = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "nor", "with", "to", "of", "for", "in", "on",
        "by", "at", "from", "into", "via", "including", "across", "through", "as",
    }
)


def enumerate_lines(text: str) -> list[tuple[int, str]]:
    return [(index + 1, line) for index, line in enumerate(text.splitlines())]


def normalize_text(text: str) -> str:
    """Strip control characters, unify newlines and collapse long blank runs."""
    if not text:
        return ""
    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = _CONTROL_CHARS.sub("", cleaned).replace("\t", " ")
    return _BLANK_RUNS.sub("\n\n", cleaned).strip()


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def is_bullet_like(line: str) -> bool:
    return bool(_BULLET_PATTERN.match(line) or _GLYPH_PREFIX.match(line))


def strip_bullet_prefix(line: str) -> str:
    stripped = _BULLET_PATTERN.sub("", line)
    return _GLYPH_PREFIX.sub("", stripped).strip()


def contains_any(text: str, markers: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def is_contact_or_url(line: str) -> bool:
    stripped = normalize_line(line)
    if not stripped:
        return False
    return bool(_EMAIL_RE.search(stripped) or _PHONE_RE.search(stripped) or _URL_RE.search(stripped))


def is_likely_title(text: str) -> bool:
    return bool(_ROLE_RE.search(text or ""))


def has_year_or_present(line: str) -> bool:
    return bool(_YEAR_RE.search(line) or _PRESENT_RE.search(line))


def ends_dangling(text: str) -> bool:
    stripped = text.rstrip()
    if not stripped:
        return False
    if stripped.endswith(","):
        return True
    last_word = stripped.split()[-1].lower().strip("\"'()")
    return last_word in DANGLING_WORDS


def extract_dates(text: str) -> tuple[str | None, str | None]:
    """Return (start, end) for a date range, or (year, None) for a lone year."""
    match = _DATE_RANGE_RE.search(text or "")
    if match:
        end = match.group("end").strip()
        if end.lower() in {"present", "current", "now", "date"}:
            end = end.capitalize()
        return match.group("start").strip(), end
    year = _YEAR_RE.search(text or "")
    if year:
        return year.group(1), None
    return None, None


def strip_dates(text: str) -> str:
    without_range = _DATE_RANGE_RE.sub(" ", text or "")
    without_years = _YEAR_RE.sub(" ", without_range)
    without_parens = re.sub(r"\([^A-Za-z()]*\)", " ", without_years)
    return normalize_line(without_parens).strip(" ,|–—-")


def is_date_line(line: str) -> bool:
    """A line that is essentially a date range or a year, possibly with a short place name."""
    start, _ = extract_dates(line)
    if start is None:
        return False
    remainder = strip_dates(line)
    remainder = re.sub(r"[()\[\]|,]", " ", remainder)
    return len(remainder.split()) <= 3
