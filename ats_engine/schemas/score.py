from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Priority = Literal["high", "medium", "low"]
AlignmentClass = Literal["CareerChange", "SomewhatRelated", "Related", "HighlyAligned"]

_ALIGNMENT_LEVELS: dict[str, str] = {
    "CareerChange": "career change",
    "SomewhatRelated": "somewhat related",
    "Related": "related",
    "HighlyAligned": "highly similar",
}


class _ScoreModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeedbackItem(_ScoreModel):
    category: str
    score: float = Field(ge=0.0, le=100.0)
    feedback: str
    priority: Priority


class CategoryKeywords(_ScoreModel):
    found: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    all: list[str] = Field(default_factory=list)


class KeywordsFeedback(_ScoreModel):
    found: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    all: list[str] = Field(default_factory=list)
    categories: dict[str, CategoryKeywords] = Field(default_factory=dict)


class GeneralScore(_ScoreModel):
    total_score: int = Field(ge=0, le=100)
    feedback: list[FeedbackItem] = Field(default_factory=list)


class JobSpecificScore(_ScoreModel):
    score: int = Field(ge=0, le=100)
    keywords_feedback: KeywordsFeedback = Field(default_factory=KeywordsFeedback)


class CareerAlignment(_ScoreModel):
    overlap_percentage: float = Field(ge=0.0, le=100.0)
    classification: AlignmentClass

    @property
    def is_career_change(self) -> bool:
        return self.classification == "CareerChange"

    @property
    def alignment_level(self) -> str:
        return _ALIGNMENT_LEVELS[self.classification]


class ATSScoreReport(_ScoreModel):
    general_score: int = Field(ge=0, le=100)
    job_specific_score: int | None = Field(default=None, ge=0, le=100)
    feedback: list[FeedbackItem] = Field(default_factory=list)
    keywords_feedback: KeywordsFeedback | None = None
    overall_suggestions: list[str] = Field(default_factory=list)
    job_title_mismatch: bool = False
    career_alignment: CareerAlignment | None = None
