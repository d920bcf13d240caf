from .checks import JobDescriptionCheck, ResumeDetection
from .draft import (
    BulletRewrite,
    CoverLetter,
    ExperienceGap,
    KeywordChecklistItem,
    SkillGroup,
    TailoredDraft,
    TailoredEducation,
    TailoredExperience,
    TailoredProject,
    TailoredResume,
    coerce_draft,
)
from .profile import CandidateProfile, EducationEntry, ExperienceEntry, JobProfile, ProjectEntry
from .quality import BoostResult, PipelineResult, QualityIssue, QualityResult
from .scoring import (
    BeforeAfter,
    Blocker,
    Diagnostics,
    KeywordCluster,
    QuickMatchResult,
    RadarBreakdown,
    RelevanceResult,
    ScoreResult,
)

__all__ = [
    "ResumeDetection",
    "JobDescriptionCheck",
    "CandidateProfile",
    "ExperienceEntry",
    "EducationEntry",
    "ProjectEntry",
    "JobProfile",
    "RadarBreakdown",
    "BeforeAfter",
    "Blocker",
    "KeywordCluster",
    "Diagnostics",
    "ScoreResult",
    "RelevanceResult",
    "QuickMatchResult",
    "SkillGroup",
    "TailoredExperience",
    "TailoredEducation",
    "TailoredProject",
    "TailoredResume",
    "CoverLetter",
    "KeywordChecklistItem",
    "BulletRewrite",
    "ExperienceGap",
    "TailoredDraft",
    "coerce_draft",
    "QualityIssue",
    "QualityResult",
    "BoostResult",
    "PipelineResult",
]
