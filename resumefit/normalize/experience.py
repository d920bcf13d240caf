from __future__ import annotations

import re
from functools import reduce
from typing import NamedTuple

from resumefit.schemas import ExperienceEntry

from .sections import HEADER_BUCKET, SUBHEADING_DENYLIST, SectionMap, normalize_header
from .utils import (
    SEPARATOR,
    ends_dangling,
    extract_dates,
    is_bullet_like,
    is_date_line,
    is_likely_title,
    strip_bullet_prefix,
    strip_dates,
)

EXPERIENCE_SECTION_TERMS = ("experience", "employment", "work history", "career history")
RECOVERY_EXCLUDED_TERMS = (
    "education", "academic", "certif", "licen", "project",
    "summary", "objective", "profile", "about",
)
MIN_BULLET_CHARS = 20
MAX_HEADER_CHARS = 150

_TERMINAL_PUNCTUATION = (".", "!", "?", ";", ":")
_LABEL_RE = re.compile(
    r"^(?P<label>company|employer|organi[sz]ation|client|project)\s*:\s*(?P<value>.+)$",
    re.IGNORECASE,
)
_ACTION_START_RE = re.compile(
    r"^(?:[A-Za-z]+ed|led|built|ran|drove|grew|oversaw|taught|wrote|made|won|set|cut|began)\b",
    re.IGNORECASE,
)
_DATED_PAREN_RE = re.compile(rf"^(?P<a>.+?){SEPARATOR}(?P<b>.+?)\s*\((?P<dates>[^()]*)\)\s*$")
_DATED_TAIL_RE = re.compile(
    rf"^(?P<a>.+?){SEPARATOR}(?P<b>.+?)(?:,\s*|{SEPARATOR})"
    r"(?P<dates>(?:[A-Za-z]{3,9}\.?\s+)?(?:\d{1,2}/)?\d{4}\b.*)$"
)
_AT_RE = re.compile(r"^(?P<a>.+?)\s+at\s+(?P<b>.+)$", re.IGNORECASE)
_SPLIT_RE = re.compile(rf"^(?P<a>.+?){SEPARATOR}(?P<b>.+)$")


def _clean_part(text: str) -> str:
    return strip_dates(text).strip(" ,|–—-")


def _build_entry(first: str, second: str, start: str | None, end: str | None) -> ExperienceEntry:
    title, company = _clean_part(first), _clean_part(second)
    if is_likely_title(company) and not is_likely_title(title):
        title, company = company, title
    return ExperienceEntry(title=title or None, company=company or None, start=start, end=end)


def parse_position_line(line: str) -> ExperienceEntry | None:
    """Recognise a job header line such as "Title — Company (2019 – 2021)" or "Title at Company"."""
    if not line or is_bullet_like(line) or len(line) > MAX_HEADER_CHARS or _LABEL_RE.match(line):
        return None

    for pattern in (_DATED_PAREN_RE, _DATED_TAIL_RE):
        match = pattern.match(line)
        if match:
            start, end = extract_dates(match.group("dates"))
            if start:
                return _build_entry(match.group("a"), match.group("b"), start, end)

    if line.rstrip().endswith((".", "!", "?")) or _ACTION_START_RE.match(line):
        return None

    start, end = extract_dates(line)
    undated = strip_dates(line)
    if not undated:
        return None

    match = _AT_RE.match(undated)
    if match and is_likely_title(match.group("a")) and len(undated.split()) <= 10:
        return _build_entry(match.group("a"), match.group("b"), start, end)

    match = _SPLIT_RE.match(undated)
    if match:
        first, second = match.group("a"), match.group("b")
        if (is_likely_title(first) or is_likely_title(second)) and all(
            len(part.split()) <= 8 for part in (first, second)
        ):
            return _build_entry(first, second, start, end)

    if is_likely_title(undated) and len(undated.split()) <= 8 and undated[0].isupper():
        return ExperienceEntry(title=undated, start=start, end=end)
    return None


def experience_pool(sections: SectionMap) -> list[str]:
    """Experience-family lines plus any other section's tail from its first dated job header."""
    pool: list[str] = []
    for label, lines in sections.items():
        if label == HEADER_BUCKET:
            continue
        if any(term in label for term in EXPERIENCE_SECTION_TERMS):
            pool.extend(lines)
            continue
        if any(term in label for term in RECOVERY_EXCLUDED_TERMS):
            continue
        for index, line in enumerate(lines):
            position = parse_position_line(line)
            if position is not None and position.start:
                pool.extend(lines[index:])
                break
    return pool


def join_wrapped_lines(lines: list[str]) -> list[str]:
    joined: list[str] = []
    for line in lines:
        if (
            joined
            and ends_dangling(joined[-1])
            and not is_date_line(line)
            and not _LABEL_RE.match(line)
            and not is_bullet_like(line)
            and parse_position_line(line) is None
        ):
            joined[-1] = f"{joined[-1]} {line}"
            continue
        joined.append(line)
    return joined


class _ScanState(NamedTuple):
    done: tuple[ExperienceEntry, ...] = ()
    current: ExperienceEntry | None = None
    pending_label: str | None = None


def _keep_bullet(bullet: str) -> bool:
    return len(bullet) >= MIN_BULLET_CHARS and not ends_dangling(bullet)


def _close(state: _ScanState) -> tuple[ExperienceEntry, ...]:
    entry = state.current
    if entry is None:
        return state.done
    bullets = [bullet for bullet in entry.bullets if _keep_bullet(bullet)]
    if not (entry.title or entry.company or entry.start or bullets):
        return state.done
    return state.done + (entry.model_copy(update={"bullets": bullets}),)


def _is_heading_fragment(line: str) -> bool:
    if line.rstrip().endswith(_TERMINAL_PUNCTUATION) or _ACTION_START_RE.match(line):
        return False
    return line[0].isupper() and len(line.split()) <= 6 and not re.search(r"\d", line)


def _continues(previous: str, text: str) -> bool:
    if previous.endswith(","):
        return True
    return text[0].islower() and not previous.endswith(_TERMINAL_PUNCTUATION)


def _step(state: _ScanState, line: str) -> _ScanState:
    if normalize_header(line) in SUBHEADING_DENYLIST:
        return state

    position = parse_position_line(line)
    if position is not None:
        return _ScanState(done=_close(state), current=position, pending_label=None)

    label = _LABEL_RE.match(strip_bullet_prefix(line))
    if label:
        value = label.group("value").strip()
        is_project = label.group("label").lower() == "project"
        current = state.current
        if current is not None and (not is_project or not current.company):
            current = current.model_copy(update={"company": value})
        return state._replace(current=current, pending_label=value if is_project else state.pending_label)

    if is_date_line(line):
        start, end = extract_dates(line)
        if state.current is not None and not state.current.start:
            return state._replace(current=state.current.model_copy(update={"start": start, "end": end}))
        opened = ExperienceEntry(company=state.pending_label, start=start, end=end)
        return _ScanState(done=_close(state), current=opened, pending_label=None)

    glyph = is_bullet_like(line)
    current = state.current
    if current is not None and not glyph and not current.bullets and _is_heading_fragment(line):
        if not current.company:
            return state._replace(current=current.model_copy(update={"company": line}))
        if not current.title:
            return state._replace(current=current.model_copy(update={"title": line}))

    text = strip_bullet_prefix(line) if glyph else line
    if not text:
        return state
    current = current or ExperienceEntry()
    bullets = list(current.bullets)
    if bullets and not glyph and _continues(bullets[-1], text):
        bullets[-1] = f"{bullets[-1]} {text}"
    else:
        bullets.append(text)
    return state._replace(current=current.model_copy(update={"bullets": bullets}))


def scan_entries(lines: list[str]) -> list[ExperienceEntry]:
    final = reduce(_step, lines, _ScanState())
    return list(_close(final))


def merge_orphan_headers(entries: list[ExperienceEntry]) -> list[ExperienceEntry]:
    """Fold a bullet-less, date-less entry into the bulleted entry before it when that one lacks a title or company."""
    merged: list[ExperienceEntry] = []
    for entry in entries:
        previous = merged[-1] if merged else None
        orphan = not entry.bullets and not entry.start and not entry.end
        if previous is not None and previous.bullets and orphan and not (previous.title and previous.company):
            label = entry.title or entry.company
            update: dict[str, str | None] = {}
            if not previous.title:
                update["title"] = label
                if entry.title and entry.company and not previous.company:
                    update["company"] = entry.company
            else:
                update["company"] = entry.company or entry.title
            merged[-1] = previous.model_copy(update=update)
            continue
        merged.append(entry)
    return merged


def absorb_anonymous_entries(entries: list[ExperienceEntry]) -> list[ExperienceEntry]:
    """Append the bullets of an entry with neither title nor company to the entry before it."""
    absorbed: list[ExperienceEntry] = []
    for entry in entries:
        if absorbed and not entry.title and not entry.company and entry.bullets:
            previous = absorbed[-1]
            absorbed[-1] = previous.model_copy(
                update={
                    "bullets": [*previous.bullets, *entry.bullets],
                    "start": previous.start or entry.start,
                    "end": previous.end or entry.end,
                }
            )
            continue
        absorbed.append(entry)
    return absorbed


def extract_experience(sections: SectionMap) -> list[ExperienceEntry]:
    pool = experience_pool(sections)
    if not pool:
        return []
    entries = scan_entries(join_wrapped_lines(pool))
    entries = merge_orphan_headers(entries)
    entries = absorb_anonymous_entries(entries)
    return [entry for entry in entries if entry.title or entry.company or entry.bullets]
