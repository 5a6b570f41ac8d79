from __future__ import annotations

import logging

from ats_engine.ai.parsing import Failure, invoke_and_parse, parse_json_object
from ats_engine.ai.types import CompletionClient
from ats_engine.core.config import Settings, settings as default_settings
from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas import JobKeywordSet
from ats_engine.taxonomy import RuleTables, get_default_rules

from .basic import extract_basic_keywords
from .cleaning import clean_keyword_set, clean_keywords
from .fallback import categorize_by_patterns
from .prompts import CATEGORIZATION_SYSTEM_PROMPT, build_categorization_prompt

logger = logging.getLogger(__name__)

CATEGORIZATION_TEMPERATURE = 0.2
CATEGORIZATION_MAX_TOKENS = 800


class KeywordCategorizer:
    """Turns a job posting into a categorized keyword set.

    The model is asked once. Whatever happens to that call, a usable
    ``JobKeywordSet`` comes back: thin responses are back-filled from the
    pattern rules and failed ones are replaced by them entirely.
    """

    def __init__(
        self,
        client: CompletionClient | None,
        *,
        settings: Settings | None = None,
        rules: RuleTables | None = None,
    ):
        self.client = client
        self.settings = settings or default_settings
        self.rules = rules or get_default_rules()

    def categorize(self, job_title: str, job_description: str) -> JobKeywordSet:
        description = (job_description or "").strip()
        if not description:
            logger.info("keyword_categorization source=empty total=0")
            return JobKeywordSet()

        max_chars = self.settings.job_description_max_chars
        if len(description) > max_chars:
            logger.info("keyword_description_truncated chars=%s max_chars=%s", len(description), max_chars)
            description = description[:max_chars]

        if len(description) < self.settings.short_description_chars:
            return self._short_description(description)

        if self.client is None:
            return self._fallback(description, reason="no_client")

        prompt = build_categorization_prompt(
            job_title,
            description,
            max_chars=int(get_scoring_value("keywords.prompt_description_chars", 2000)),
        )
        outcome = invoke_and_parse(
            self.client,
            prompt,
            parse_json_object,
            max_output_tokens=CATEGORIZATION_MAX_TOKENS,
            temperature=CATEGORIZATION_TEMPERATURE,
            structured_output=True,
            system_prompt=CATEGORIZATION_SYSTEM_PROMPT,
            stage="keyword_categorization",
        )
        if isinstance(outcome, Failure):
            return self._fallback(description, reason=outcome.error.code)

        keyword_set = clean_keyword_set(outcome.value, rules=self.rules)
        if keyword_set.total() >= self.settings.keyword_min_total:
            logger.info("keyword_categorization source=llm total=%s", keyword_set.total())
            return keyword_set

        return self._backfill(keyword_set, description)

    def extract_skills(self, job_title: str, job_description: str) -> dict[str, list[str]]:
        """Two-list view of the categorized keywords."""
        keyword_set = self.categorize(job_title, job_description)
        technical = [*keyword_set.technical_skills, *keyword_set.tools, *keyword_set.methodologies]
        soft = [*keyword_set.soft_skills, *keyword_set.job_functions[:3]]
        return {
            "technicalSkills": clean_keywords(technical, rules=self.rules, max_items=len(technical)),
            "softSkills": clean_keywords(soft, rules=self.rules, max_items=len(soft)),
        }

    def _short_description(self, description: str) -> JobKeywordSet:
        limit = int(get_scoring_value("keywords.short_description_max_items", 5))
        keywords = extract_basic_keywords(description, rules=self.rules)
        keyword_set = JobKeywordSet(technical_skills=clean_keywords(keywords, rules=self.rules, max_items=limit))
        logger.info("keyword_categorization source=basic total=%s", keyword_set.total())
        return keyword_set

    def _fallback(self, description: str, *, reason: str) -> JobKeywordSet:
        keyword_set = categorize_by_patterns(extract_basic_keywords(description, rules=self.rules), rules=self.rules)
        logger.info(
            "keyword_categorization source=fallback reason=%s total=%s",
            reason,
            keyword_set.total(),
        )
        return keyword_set

    def _backfill(self, keyword_set: JobKeywordSet, description: str) -> JobKeywordSet:
        fallback = categorize_by_patterns(extract_basic_keywords(description, rules=self.rules), rules=self.rules)
        merged = keyword_set.categories()
        fallback_categories = fallback.categories()
        # Only empty categories take fallback terms; model output is never mixed.
        for key in keyword_set.empty_categories():
            if fallback_categories[key]:
                merged[key] = fallback_categories[key]
        result = JobKeywordSet.model_validate(merged)
        logger.info(
            "keyword_categorization source=llm+fallback llm_total=%s total=%s",
            keyword_set.total(),
            result.total(),
        )
        return result
