from .convert import candidate_to_tailored_resume, tailored_to_candidate_profile
from .quick_match import LOW_MATCH_THRESHOLD, NEUTRAL_SCORE, quick_match, quick_match_label, quick_match_score
from .radar import check_relevance, score_radar, score_to_label

__all__ = [
    "LOW_MATCH_THRESHOLD",
    "NEUTRAL_SCORE",
    "quick_match",
    "quick_match_label",
    "quick_match_score",
    "score_radar",
    "score_to_label",
    "check_relevance",
    "tailored_to_candidate_profile",
    "candidate_to_tailored_resume",
]
