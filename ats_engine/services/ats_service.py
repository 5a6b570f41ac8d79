from __future__ import annotations

import logging

from ats_engine.ai.factory import get_completion_client
from ats_engine.core.config import Settings, settings as default_settings
from ats_engine.errors import InputValidationError
from ats_engine.keywords import KeywordCategorizer
from ats_engine.schemas import ATSScoreReport, CareerAlignment, ResumeDocument, WorkExperience
from ats_engine.scoring import (
    classify_career_alignment,
    score_general,
    score_job_specific,
    shares_significant_word,
    synthesize_suggestions,
)

logger = logging.getLogger(__name__)


def _validate_inputs(job_title: str | None, job_description: str | None, cfg: Settings) -> None:
    if job_description and len(job_description) > cfg.job_description_max_chars:
        raise InputValidationError(
            f"Job description is too long ({len(job_description)} characters); "
            f"the limit is {cfg.job_description_max_chars}."
        )
    if job_title is not None and not isinstance(job_title, str):
        raise InputValidationError("Job title must be text.")


def most_recent_position(resume: ResumeDocument) -> WorkExperience | None:
    for entry in resume.work_experience:
        if entry.current:
            return entry
    return resume.work_experience[0] if resume.work_experience else None


def has_title_mismatch(resume: ResumeDocument, job_title: str | None) -> bool:
    """True when a target title is given and no position in the resume shares a significant word with it."""
    if not job_title or not job_title.strip() or not resume.work_experience:
        return False
    return not any(shares_significant_word(entry.position, job_title) for entry in resume.work_experience)


def career_alignment_for(resume: ResumeDocument, job_title: str | None) -> CareerAlignment | None:
    latest = most_recent_position(resume)
    if latest is None or not job_title or not job_title.strip():
        return None
    return classify_career_alignment(latest.position, job_title)


def calculate_ats_score(
    resume: ResumeDocument,
    *,
    job_title: str | None = None,
    job_description: str | None = None,
    categorizer: KeywordCategorizer | None = None,
    settings: Settings | None = None,
) -> ATSScoreReport:
    cfg = settings or default_settings
    _validate_inputs(job_title, job_description, cfg)

    general = score_general(resume, target_job_title=job_title)

    job_score: int | None = None
    keywords_feedback = None
    if job_title and job_title.strip() and job_description and job_description.strip():
        active = categorizer or KeywordCategorizer(get_completion_client(), settings=cfg)
        keyword_set = active.categorize(job_title, job_description)
        job_result = score_job_specific(resume, keyword_set)
        job_score = job_result.score
        keywords_feedback = job_result.keywords_feedback

    mismatch = has_title_mismatch(resume, job_title)
    alignment = career_alignment_for(resume, job_title)
    suggestions = synthesize_suggestions(general.feedback, job_score, mismatch)

    logger.info(
        "ats_score general=%s job_specific=%s title_mismatch=%s alignment=%s",
        general.total_score,
        job_score,
        mismatch,
        alignment.classification if alignment else None,
    )
    return ATSScoreReport(
        general_score=general.total_score,
        job_specific_score=job_score,
        feedback=general.feedback,
        keywords_feedback=keywords_feedback,
        overall_suggestions=suggestions,
        job_title_mismatch=mismatch,
        career_alignment=alignment,
    )
