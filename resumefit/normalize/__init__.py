from .input_checks import detect_resume, validate_job_description
from .normalize_jd import parse_job_description
from .normalize_resume import parse_resume
from .sections import detect_sections
from .utils import normalize_text

__all__ = [
    "parse_resume",
    "parse_job_description",
    "detect_resume",
    "validate_job_description",
    "detect_sections",
    "normalize_text",
]
