from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CATEGORY_KEYS: tuple[str, ...] = (
    "technicalSkills",
    "softSkills",
    "tools",
    "methodologies",
    "requirements",
    "certificates",
    "education",
    "industryTerms",
    "jobFunctions",
)


class JobKeywordSet(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    technical_skills: list[str] = Field(default_factory=list)
    soft_skills: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    methodologies: list[str] = Field(default_factory=list)
    requirements: list[str] = Field(default_factory=list)
    certificates: list[str] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    industry_terms: list[str] = Field(default_factory=list)
    job_functions: list[str] = Field(default_factory=list)

    def categories(self) -> dict[str, list[str]]:
        dumped = self.model_dump(by_alias=True)
        return {key: list(dumped[key]) for key in CATEGORY_KEYS}

    def total(self) -> int:
        return sum(len(items) for items in self.categories().values())

    def empty_categories(self) -> list[str]:
        return [key for key, items in self.categories().items() if not items]
