from __future__ import annotations

import re
from typing import Any

from pydantic import ValidationError

from ats_engine.ai.parsing import parse_json_object
from ats_engine.errors import ParseError
from ats_engine.schemas import ResumeDocument, looks_missing

PLACEHOLDER_PERSONAL_INFO: dict[str, str] = {
    "fullName": "Not clearly provided in resume",
    "email": "Not provided in resume",
    "phone": "Not provided in resume",
    "location": "Not provided in resume",
    "country": "Not provided in resume",
    "city": "Not provided in resume",
    "linkedinUrl": "",
    "portfolioUrl": "",
}

_ENTRY_SECTIONS: dict[str, str] = {
    "workExperience": "exp",
    "education": "edu",
    "certifications": "cert",
    "projects": "proj",
}
_STRING_LIST_SECTIONS = ("skills", "technicalSkills", "softSkills")
_ENTRY_STRING_LISTS = ("achievements", "technologies")
_DATE_FIELDS = ("startDate", "endDate", "date", "expiryDate")

# Long unbroken tokens (digests, base64) show up when the model echoes file metadata.
_HASH_LIKE_RE = re.compile(r"^[A-Za-z0-9+/=_-]{24,}$")


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _repair_entry(entry: dict[str, Any], entry_id: str) -> dict[str, Any]:
    repaired = dict(entry)
    if not isinstance(repaired.get("id"), str) or not repaired["id"].strip():
        repaired["id"] = entry_id
    for key in _DATE_FIELDS:
        value = repaired.get(key)
        if value is not None and not isinstance(value, str):
            repaired[key] = str(value)
    for key in _ENTRY_STRING_LISTS:
        if key in repaired:
            repaired[key] = _string_list(repaired[key])
    return repaired


def _repair_summary(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    summary = value.strip()
    if looks_missing(summary) or _HASH_LIKE_RE.match(summary):
        return ""
    return summary


def repair_resume_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Bring a model-produced resume mapping into the shape ``ResumeDocument`` accepts."""
    repaired = dict(payload)

    personal_info = repaired.get("personalInfo")
    if not isinstance(personal_info, dict) or not personal_info:
        repaired["personalInfo"] = dict(PLACEHOLDER_PERSONAL_INFO)

    repaired["summary"] = _repair_summary(repaired.get("summary"))

    for key in _STRING_LIST_SECTIONS:
        repaired[key] = _string_list(repaired.get(key))

    for key, prefix in _ENTRY_SECTIONS.items():
        entries = repaired.get(key)
        if not isinstance(entries, list):
            repaired[key] = []
            continue
        repaired[key] = [
            _repair_entry(entry, f"{prefix}-{index}")
            for index, entry in enumerate((item for item in entries if isinstance(item, dict)), start=1)
        ]

    repaired.pop("note", None)
    return repaired


def parse_resume_payload(content: str) -> ResumeDocument:
    payload = repair_resume_payload(parse_json_object(content))
    try:
        return ResumeDocument.model_validate(payload)
    except ValidationError as exc:
        raise ParseError(f"Resume payload does not match the expected shape: {exc.error_count()} errors") from exc
