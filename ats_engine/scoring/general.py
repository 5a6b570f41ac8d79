from __future__ import annotations

import logging
from typing import Any, Sequence

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas import FeedbackItem, GeneralScore, ResumeDocument, looks_missing
from ats_engine.taxonomy import RuleTables, get_default_rules

from .alignment import shares_significant_word

logger = logging.getLogger(__name__)

_MINIMAL_CONTENT_FEEDBACK: tuple[tuple[str, str], ...] = (
    (
        "Content Completeness",
        "Your resume needs more content. Add your work experience, education, skills, and a professional summary.",
    ),
    (
        "ATS Compatibility",
        "Most ATS systems require detailed professional information to properly evaluate your resume.",
    ),
    (
        "Resume Structure",
        "Create a complete resume with standard sections to improve your score.",
    ),
)

_PLACEMENT_MESSAGES = (
    "Improve your score by including more skills in your summary and work experience descriptions.",
    "Good keyword placement. Add more skills to your professional summary for better visibility.",
    "Excellent keyword placement throughout critical resume sections.",
)
_RELEVANCE_MESSAGES = (
    "Your work experience could better align with your target role. "
    "Add more relevant positions or emphasize transferable skills.",
    "Good job experience relevance. Consider highlighting more specific achievements relevant to your target role.",
    "Excellent job experience alignment with your target role.",
)
_EDUCATION_MESSAGES = (
    "Add more detail to your education section. Include institutions, degrees, and dates.",
    "Good education details. Consider adding relevant certifications to strengthen your qualifications.",
    "Excellent education and certification details.",
)
_PRIORITIES = ("high", "medium", "low")


def _cfg(path: str, default: Any) -> float:
    return float(get_scoring_value(f"general.{path}", default))


def _tier(value: float, section: str, default: Sequence[float]) -> int:
    low, mid = get_scoring_value(f"general.{section}.tiers", list(default))
    if value < float(low):
        return 0
    if value < float(mid):
        return 1
    return 2


def _feedback(category: str, value: float, maximum: float, message: str, tier: int) -> FeedbackItem:
    normalized = (value / maximum) * 100 if maximum else 0.0
    return FeedbackItem(
        category=category,
        score=round(min(100.0, max(0.0, normalized)), 2),
        feedback=message,
        priority=_PRIORITIES[tier],
    )


def has_minimal_content(resume: ResumeDocument) -> bool:
    summary_min = int(_cfg("minimal_content.summary_min_chars", 30))
    return bool(
        resume.work_experience
        or resume.education
        or resume.all_skills()
        or len(resume.summary.strip()) > summary_min
    )


def _keyword_match(resume: ResumeDocument, skills: list[str], rules: RuleTables) -> tuple[float, FeedbackItem]:
    maximum = _cfg("keyword_match.max", 40)
    skill_cap = _cfg("keyword_match.skill_cap", 20)
    resume_text = resume.search_text()

    generic = list(rules.generic_keywords)
    matched = [keyword for keyword in generic if keyword.lower() in resume_text]
    base = (min(len(skills), skill_cap) / skill_cap) * _cfg("keyword_match.skill_points", 25) if skills else 0.0
    generic_score = (len(matched) / len(generic)) * _cfg("keyword_match.generic_points", 15) if generic else 0.0

    bonus = 0.0
    organized = bool(resume.technical_skills and resume.soft_skills)
    if organized and len(skills) > _cfg("keyword_match.organization_min_skills", 5):
        bonus = _cfg("keyword_match.organization_bonus", 5)

    score = min(maximum, base + generic_score + bonus)
    tier = _tier(score, "keyword_match", (25, 35))
    if tier == 0:
        suggestions = ", ".join([keyword for keyword in generic if keyword not in matched][:5])
        message = f"Add more relevant skills and industry keywords. Consider including: {suggestions}."
    elif tier == 1:
        message = "Good keyword inclusion. Consider organizing your skills into technical and soft skill categories."
    else:
        message = "Excellent keyword match with a good balance of technical and soft skills."
    return score, _feedback("Keyword Match", score, maximum, message, tier)


def _count_in(text: str, skills: list[str]) -> int:
    lowered = (text or "").lower()
    if not lowered:
        return 0
    return sum(1 for skill in skills if skill.lower() in lowered)


def _keyword_placement(resume: ResumeDocument, skills: list[str]) -> tuple[float, FeedbackItem]:
    maximum = _cfg("keyword_placement.max", 20)
    occurrences = _count_in(resume.summary, skills)
    for entry in resume.work_experience:
        occurrences += _count_in(entry.position, skills)
        for achievement in entry.achievements:
            occurrences += _count_in(achievement, skills)
        occurrences += _count_in(entry.description, skills)

    score = min(maximum, (occurrences / max(1, len(skills))) * maximum) if skills else 0.0
    tier = _tier(score, "keyword_placement", (10, 15))
    return score, _feedback("Keyword Placement", score, maximum, _PLACEMENT_MESSAGES[tier], tier)


def _date_signature(value: str) -> str:
    return f"{len(value)}{'/' if '/' in value else ''}{'-' if '-' in value else ''}{' ' if ' ' in value else ''}"


def _formatting(resume: ResumeDocument) -> tuple[float, FeedbackItem]:
    maximum = _cfg("formatting.max", 15)
    score = maximum
    issues: list[str] = []

    summary_min = int(_cfg("minimal_content.summary_min_chars", 30))
    present = {
        "summary": len(resume.summary.strip()) > summary_min,
        "experience": bool(resume.work_experience),
        "education": bool(resume.education),
        "skills": bool(resume.all_skills()),
    }
    missing_sections = [name for name, ok in present.items() if not ok]
    if missing_sections:
        issues.append(f"Missing standard sections: {', '.join(missing_sections)}")
        score -= min(
            _cfg("formatting.missing_section_cap", 3),
            len(missing_sections) * _cfg("formatting.missing_section_penalty", 3),
        )

    info = resume.personal_info
    missing_contact: list[str] = []
    if looks_missing(info.full_name) or len(info.full_name.strip()) < int(_cfg("formatting.min_name_chars", 3)):
        missing_contact.append("fullName")
    if looks_missing(info.email) or "@" not in info.email:
        missing_contact.append("email")
    if looks_missing(info.phone) or len(info.phone.strip()) < int(_cfg("formatting.min_phone_chars", 5)):
        missing_contact.append("phone")
    if missing_contact:
        issues.append(f"Missing contact details: {', '.join(missing_contact)}")
        score -= min(
            _cfg("formatting.contact_cap", 3),
            len(missing_contact) * _cfg("formatting.contact_field_penalty", 1.5),
        )

    entries = resume.work_experience
    if len(entries) > 1:
        signatures = {_date_signature(entry.start_date) for entry in entries if entry.start_date}
        if len(signatures) > 1:
            issues.append("Inconsistent date formats in work experience")
            score -= _cfg("formatting.date_format_penalty", 3)

        with_bullets = sum(1 for entry in entries if entry.achievements)
        with_paragraphs = sum(1 for entry in entries if entry.description.strip())
        if with_bullets and with_paragraphs and with_bullets != len(entries):
            issues.append("Inconsistent use of bullet points across experience entries")
            score -= _cfg("formatting.bullet_consistency_penalty", 3)

    score = max(0.0, score)
    if issues:
        message = f"Format issues: {'. '.join(issues[:2])}"
    else:
        message = "Excellent formatting. Your resume follows standard ATS-friendly structure."
    tier = _tier(score, "formatting", (10, 12))
    return score, _feedback("Formatting Compliance", score, maximum, message, tier)


def _experience_relevance(
    resume: ResumeDocument,
    target_job_title: str | None,
    rules: RuleTables,
) -> tuple[float, FeedbackItem]:
    maximum = _cfg("experience_relevance.max", 15)
    entries = resume.work_experience
    score = 0.0
    if entries:
        if target_job_title and target_job_title.strip():
            relevant = sum(
                1 for entry in entries if shares_significant_word(entry.position, target_job_title, rules=rules)
            )
        else:
            min_achievements = int(_cfg("experience_relevance.detail_min_achievements", 3))
            min_description = int(_cfg("experience_relevance.detail_min_description_chars", 100))
            relevant = sum(
                1
                for entry in entries
                if len(entry.achievements) >= min_achievements or len(entry.description) > min_description
            )
        score = min(maximum, (relevant / len(entries)) * maximum)
    tier = _tier(score, "experience_relevance", (8, 12))
    return score, _feedback("Experience Relevance", score, maximum, _RELEVANCE_MESSAGES[tier], tier)


def _education(resume: ResumeDocument) -> tuple[float, FeedbackItem]:
    maximum = _cfg("education.max", 10)
    score = 0.0
    if resume.education:
        score += _cfg("education.base_points", 5)
        complete = [
            entry
            for entry in resume.education
            if entry.institution and entry.degree and entry.field_of_study and (entry.start_date or entry.end_date)
        ]
        if len(complete) == len(resume.education):
            score += _cfg("education.completeness_bonus", 2)
    if resume.certifications:
        score += min(_cfg("education.max_certification_points", 3), len(resume.certifications))
    score = min(maximum, score)
    tier = _tier(score, "education", (5, 8))
    return score, _feedback("Education & Certifications", score, maximum, _EDUCATION_MESSAGES[tier], tier)


def score_general(
    resume: ResumeDocument,
    *,
    target_job_title: str | None = None,
    rules: RuleTables | None = None,
) -> GeneralScore:
    """Job-independent ATS readiness of a resume, out of 100.

    Five weighted parts: keyword match (40), keyword placement (20),
    formatting compliance (15), experience relevance (15) and education with
    certifications (10). A resume with essentially no content gets the fixed
    minimal score instead.
    """
    if not has_minimal_content(resume):
        minimal = int(_cfg("minimal_content.score", 5))
        logger.info("general_score minimal_content=true total=%s", minimal)
        return GeneralScore(
            total_score=minimal,
            feedback=[
                FeedbackItem(category=category, score=minimal, feedback=message, priority="high")
                for category, message in _MINIMAL_CONTENT_FEEDBACK
            ],
        )

    active_rules = rules or get_default_rules()
    skills = resume.distinct_skills()

    parts = [
        _keyword_match(resume, skills, active_rules),
        _keyword_placement(resume, skills),
        _formatting(resume),
        _experience_relevance(resume, target_job_title, active_rules),
        _education(resume),
    ]
    total = int(round(sum(score for score, _ in parts)))
    total = max(0, min(100, total))
    logger.info("general_score total=%s skills=%s", total, len(skills))
    return GeneralScore(total_score=total, feedback=[item for _, item in parts])
