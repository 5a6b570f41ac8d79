from .keywords import CATEGORY_KEYS, JobKeywordSet
from .resume import (
    Certification,
    Education,
    PersonalInfo,
    Project,
    ResumeDocument,
    WorkExperience,
    looks_missing,
)
from .score import (
    ATSScoreReport,
    CareerAlignment,
    CategoryKeywords,
    FeedbackItem,
    GeneralScore,
    JobSpecificScore,
    KeywordsFeedback,
)

__all__ = [
    "CATEGORY_KEYS",
    "JobKeywordSet",
    "PersonalInfo",
    "WorkExperience",
    "Education",
    "Certification",
    "Project",
    "ResumeDocument",
    "looks_missing",
    "FeedbackItem",
    "CategoryKeywords",
    "KeywordsFeedback",
    "GeneralScore",
    "JobSpecificScore",
    "CareerAlignment",
    "ATSScoreReport",
]
