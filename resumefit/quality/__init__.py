from .booster import ensure_score_improvement
from .consistency import consistency_with_issues, resume_text_for_scoring, validate_consistency
from .dedupe import dedupe_bullets, dedupe_draft, dedupe_with_issues
from .gate import run_quality_gate
from .pipeline import run_cleanup, run_quality_pipeline

__all__ = [
    "dedupe_bullets",
    "dedupe_draft",
    "dedupe_with_issues",
    "run_quality_gate",
    "validate_consistency",
    "consistency_with_issues",
    "resume_text_for_scoring",
    "ensure_score_improvement",
    "run_cleanup",
    "run_quality_pipeline",
]
