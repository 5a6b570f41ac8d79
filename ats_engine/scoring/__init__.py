from .alignment import classify_career_alignment, overlap_percentage, shares_significant_word, title_tokens
from .general import has_minimal_content, score_general
from .job_specific import score_job_specific
from .suggestions import synthesize_suggestions

__all__ = [
    "classify_career_alignment",
    "has_minimal_content",
    "overlap_percentage",
    "score_general",
    "score_job_specific",
    "shares_significant_word",
    "synthesize_suggestions",
    "title_tokens",
]
