from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

from .sections import HEADER_BUCKET, SECTION_VOCABULARY, SectionMap, normalize_header
from .utils import _EMAIL_RE, SEPARATOR, is_contact_or_url, is_likely_title, normalize_line

HEADER_REGION_CHARS = 500

_NAME_TOKEN_RE = re.compile(r"^[A-Za-z][A-Za-z.'\-]*$")
_CREDENTIALS = frozenset(
    {
        "mba", "phd", "md", "msc", "bsc", "ma", "ba", "beng", "meng", "mpharm", "mrpharms", "rn",
        "cpa", "cfa", "pmp", "acca", "cima", "ceng", "jd", "dds", "pe", "frcs", "mrcp", "mcips",
    }
)

# Ordered: first match wins.
_PHONE_PATTERNS = (
    # UK mobile and landline
    re.compile(r"(?<!\d)(?:\+44\s?\(?0?\)?\s?7\d{3}|\(?07\d{3}\)?)[\s-]?\d{3}[\s-]?\d{3}(?!\d)"),
    re.compile(r"(?<!\d)(?:\+44\s?\(?0?\)?\s?|0)[1-3]\d{2,4}[\s-]?\d{3,4}[\s-]?\d{3,4}(?!\d)"),
    # AU
    re.compile(r"(?<!\d)(?:\+61\s?4|04)\d{2}[\s-]?\d{3}[\s-]?\d{3}(?!\d)"),
    # NZ
    re.compile(r"(?<!\d)(?:\+64\s?2|02)\d[\s-]?\d{3}[\s-]?\d{3,4}(?!\d)"),
    # generic international
    re.compile(r"\+\d{1,3}[\s.-]?\(?\d{1,4}\)?(?:[\s.-]?\d{2,4}){2,4}(?!\d)"),
    # US / CA
    re.compile(r"(?<!\d)(?:\+?1[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}(?!\d)"),
)

_REGIONS = (
    "United Kingdom", "United States", "New Zealand", "Northern Ireland", "England", "Scotland",
    "Wales", "Ireland", "Australia", "Canada", "Germany", "France", "Netherlands", "Spain",
    "India", "Singapore", "UAE", "USA", "UK", "NZ",
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "DC", "FL", "GA", "HI", "ID", "IL", "IN",
    "IA", "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH",
    "NJ", "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN", "TX", "UT",
    "VT", "VA", "WA", "WV", "WI", "WY",
    "ON", "BC", "AB", "QC", "MB", "SK", "NS", "NSW", "VIC", "QLD",
)
_LOCATION_RE = re.compile(
    r"\b([A-Z][A-Za-z.'\-]+(?: [A-Z][A-Za-z.'\-]+){0,2}), ?(" + "|".join(_REGIONS) + r")\b"
)

_LINK_RE = re.compile(
    r"(?:https?://)?(?:www\.)?(?:linkedin\.com|github\.com)/[^\s|,;()<>]+"
    r"|https?://[^\s|,;()<>]+"
    r"|www\.[^\s|,;()<>]+",
    re.IGNORECASE,
)


def header_region(sections: SectionMap) -> str:
    return "\n".join(sections.get(HEADER_BUCKET, []))[:HEADER_REGION_CHARS]


def _name_case(token: str) -> str:
    if not token.isupper():
        return token
    return "-".join(part.capitalize() for part in token.split("-"))


def extract_name(lines: list[str]) -> str | None:
    for raw_line in lines:
        line = normalize_line(raw_line)
        if not line:
            continue
        if "@" in line or "http" in line.lower() or re.fullmatch(r"\+?\d[\d\s\-()]{7,}", line):
            continue
        if line.isupper() and len(line) > 30:
            continue
        if normalize_header(line) in SECTION_VOCABULARY:
            continue

        head = re.split(r"[,|]", line, maxsplit=1)[0]
        tokens = head.split()
        if not tokens or len(tokens) > 6:
            return None
        if tokens[0].isupper() and len(tokens[0]) > 1:
            leading: list[str] = []
            for token in tokens:
                if not token.isupper():
                    break
                leading.append(token)
            tokens = leading
        kept = [
            _name_case(token)
            for token in tokens
            if _NAME_TOKEN_RE.match(token) and token.lower().replace(".", "") not in _CREDENTIALS
        ]
        name = " ".join(kept[:4])
        return name if len(name) >= 2 else None
    return None


def extract_email(text: str) -> str | None:
    match = _EMAIL_RE.search(text or "")
    return match.group(0) if match else None


def extract_phone(region: str) -> str | None:
    for pattern in _PHONE_PATTERNS:
        match = pattern.search(region or "")
        if match:
            return match.group(0).strip()
    return None


def extract_location(region: str) -> str | None:
    for line in (region or "").splitlines():
        if "@" in line:
            line = _EMAIL_RE.sub(" ", line)
        match = _LOCATION_RE.search(line)
        if match:
            return f"{match.group(1)}, {match.group(2)}"
    return None


def extract_headline(header_lines: list[str], name: str | None) -> str | None:
    """First line after the name carrying a title cue."""
    for line in header_lines[1:4]:
        if is_contact_or_url(line) or "@" in line:
            continue
        if name and line.strip().lower() == name.lower():
            continue
        if re.search(SEPARATOR, line) or is_likely_title(line):
            return line
    return None


def normalize_link(raw: str) -> str | None:
    cleaned = (raw or "").strip().rstrip(".,;:")
    if not cleaned:
        return None
    if not re.match(r"^https?://", cleaned, re.IGNORECASE):
        cleaned = f"https://{cleaned}"
    try:
        parts = urlsplit(cleaned)
        if not parts.netloc or "." not in parts.netloc:
            return None
        return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path.rstrip("/"), parts.query, ""))
    except ValueError:
        # Unbalanced or invalid bracketed hosts such as "http://[broken".
        return None


def extract_links(region: str, hidden_links: list[str] | None = None) -> list[str]:
    candidates = list(hidden_links or [])
    candidates.extend(match.group(0) for match in _LINK_RE.finditer(region or ""))

    links: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        link = normalize_link(str(candidate))
        if link is None or link.lower() in seen:
            continue
        seen.add(link.lower())
        links.append(link)
    return links
