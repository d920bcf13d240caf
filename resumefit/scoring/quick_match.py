from __future__ import annotations

import math
import re

from resumefit.core.config import get_scoring_value
from resumefit.schemas import QuickMatchResult

# Score returned when the job text has no significant tokens to compare against.
NEUTRAL_SCORE = 50
# Scores below this should prompt the caller for a fuller resume or job description.
LOW_MATCH_THRESHOLD = 25

STOP_WORDS = frozenset(
    {
        # everyday English
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had", "her", "was", "one",
        "our", "out", "has", "have", "been", "will", "with", "this", "that", "from", "they", "were",
        "your", "what", "when", "make", "like", "long", "look", "many", "some", "them", "than",
        "each", "which", "about", "would", "there", "their", "other", "could", "after", "should",
        "also", "just", "into", "over", "such", "where", "most", "more", "very", "well", "back",
        "only", "come", "its", "even", "new", "want", "because", "any", "these", "give", "day",
        "good", "how", "him", "own", "then",
        # job-posting filler
        "work", "experience", "ability", "including", "strong", "required", "preferred", "minimum",
        "years", "team", "role", "position", "company", "must", "skills", "knowledge", "working",
        "responsibilities", "qualifications", "requirements", "join", "looking", "opportunity",
        "equal", "employer", "apply", "please", "candidate", "ideal", "offer", "competitive",
        "benefits", "salary", "description", "job", "full", "time", "part", "based", "may", "per",
        "etc", "able", "across", "ensure", "support", "using", "need", "provide", "help", "within",
    }
)

_TOKEN_SPLIT = re.compile(r"[\s,;:.!?()\[\]{}|/\\\"'`~@#$%^&*+=<>“”‘’]+")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def tokenize(text: str) -> list[str]:
    return [token for token in _TOKEN_SPLIT.split((text or "").lower()) if len(token) >= 2]


def _significant(token: str) -> bool:
    return len(token) >= 3 and token not in STOP_WORDS


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def quick_match_score(resume_text: str, job_text: str) -> int:
    """Cheap 0-100 overlap estimate: unigram coverage blended with adjacent-pair coverage.

    Tokens are compared as whole words, so "java" in a job never matches "javascript".
    """
    if not (resume_text or "").strip() or not (job_text or "").strip():
        return 0

    resume_tokens = tokenize(resume_text)
    resume_words = set(resume_tokens)
    resume_bigrams = {f"{left} {right}" for left, right in zip(resume_tokens, resume_tokens[1:])}

    job_tokens = tokenize(job_text)
    job_words = _unique([token for token in job_tokens if _significant(token)])
    if not job_words:
        return int(get_scoring_value("quick_match.neutral_score", NEUTRAL_SCORE))

    word_score = sum(1 for word in job_words if word in resume_words) / len(job_words)

    job_bigrams = _unique(
        [
            f"{left} {right}"
            for left, right in zip(job_tokens, job_tokens[1:])
            if _significant(left) and _significant(right)
        ]
    )
    phrase_score = word_score
    if job_bigrams:
        phrase_score = sum(1 for bigram in job_bigrams if bigram in resume_bigrams) / len(job_bigrams)

    word_weight = float(get_scoring_value("quick_match.word_weight", 0.8))
    phrase_weight = float(get_scoring_value("quick_match.phrase_weight", 0.2))
    blended = word_score * word_weight + phrase_score * phrase_weight
    return max(0, min(100, _round_half_up(blended * 100)))


def quick_match_label(score: int) -> str:
    if score >= int(get_scoring_value("quick_match.labels.strong", 70)):
        return "Strong"
    if score >= int(get_scoring_value("quick_match.labels.good", 45)):
        return "Good"
    if score >= int(get_scoring_value("quick_match.labels.fair", 25)):
        return "Fair"
    return "Low"


def quick_match(resume_text: str, job_text: str) -> QuickMatchResult:
    score = quick_match_score(resume_text, job_text)
    threshold = int(get_scoring_value("quick_match.low_match_threshold", LOW_MATCH_THRESHOLD))
    return QuickMatchResult(
        score=score,
        label=quick_match_label(score),
        needs_more_input=score < threshold,
    )
