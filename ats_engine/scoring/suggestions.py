from __future__ import annotations

from collections.abc import Sequence

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas import FeedbackItem

TITLE_MISMATCH_SUGGESTION = (
    "Your work experience job titles don't directly match your target position. "
    "Consider adding a 'Key Skills' section that explicitly mentions skills relevant to the target job."
)
MISSING_KEYWORDS_SUGGESTION = (
    "Your resume is missing several keywords from the job description. "
    "Review the keywords list and incorporate more of them in your resume where appropriate."
)
LOOKS_GOOD_SUGGESTION = (
    "Overall, your resume looks good! "
    "Consider revisiting your professional summary to ensure it aligns perfectly with your target position."
)
_MIN_SUGGESTIONS = 2


def synthesize_suggestions(
    feedback: Sequence[FeedbackItem],
    job_specific_score: int | None,
    title_mismatch: bool,
) -> list[str]:
    suggestions = [item.feedback for item in feedback if item.priority == "high"]

    if title_mismatch:
        suggestions.append(TITLE_MISMATCH_SUGGESTION)

    threshold = int(get_scoring_value("job_specific.low_score_threshold", 50))
    if job_specific_score is not None and job_specific_score < threshold:
        suggestions.append(MISSING_KEYWORDS_SUGGESTION)

    if len(suggestions) < _MIN_SUGGESTIONS:
        medium = [item.feedback for item in feedback if item.priority == "medium"]
        suggestions.extend(medium[: _MIN_SUGGESTIONS - len(suggestions)])

    if not suggestions:
        suggestions.append(LOOKS_GOOD_SUGGESTION)
    return suggestions
