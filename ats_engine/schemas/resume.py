from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _ResumeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any, info: Any) -> Any:
        # Model output routinely sends null for "not present"; keep collections and text non-null.
        if value is not None:
            return value
        field = cls.model_fields.get(info.field_name)
        if field is None:
            return value
        if field.default_factory is not None:
            return field.default_factory()
        return field.default


class PersonalInfo(_ResumeModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    country: str = ""
    city: str = ""
    linkedin_url: str = ""
    portfolio_url: str = ""


class WorkExperience(_ResumeModel):
    id: str = ""
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str | None = None
    end_date: str | None = None
    current: bool = False
    description: str = ""
    achievements: list[str] = Field(default_factory=list)


class Education(_ResumeModel):
    id: str = ""
    institution: str = ""
    degree: str = ""
    field_of_study: str = ""
    start_date: str | None = None
    end_date: str | None = None
    current: bool = False
    description: str = ""


class Certification(_ResumeModel):
    id: str = ""
    name: str = ""
    issuer: str = ""
    date: str | None = None
    expires: bool = False
    expiry_date: str | None = None


class Project(_ResumeModel):
    id: str = ""
    name: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    start_date: str | None = None
    end_date: str | None = None
    current: bool = False
    url: str | None = None


class ResumeDocument(_ResumeModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    technical_skills: list[str] = Field(default_factory=list)
    soft_skills: list[str] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    note: str | None = None

    def all_skills(self) -> list[str]:
        return [*self.skills, *self.technical_skills, *self.soft_skills]

    def distinct_skills(self) -> list[str]:
        seen: set[str] = set()
        output: list[str] = []
        for skill in self.all_skills():
            key = skill.strip().lower()
            if not key or key in seen:
                continue
            seen.add(key)
            output.append(skill.strip())
        return output

    def text_chunks(self) -> list[str]:
        """Every free-text value of the document, in document order."""
        chunks: list[str] = []

        def collect(value: Any) -> None:
            if isinstance(value, str):
                if value.strip():
                    chunks.append(value)
            elif isinstance(value, dict):
                for item in value.values():
                    collect(item)
            elif isinstance(value, list):
                for item in value:
                    collect(item)

        collect(self.model_dump(exclude={"note"}))
        return chunks

    def search_text(self) -> str:
        return "\n".join(self.text_chunks()).lower()


_MISSING_MARKERS = (
    "not found",
    "not provided",
    "not clearly provided",
    "not available",
    "error processing",
    "n/a",
)


def looks_missing(value: str | None) -> bool:
    """True for empty text and the sentinel strings extraction uses for absent data."""
    lowered = (value or "").strip().lower()
    if not lowered:
        return True
    return lowered.startswith(_MISSING_MARKERS)
