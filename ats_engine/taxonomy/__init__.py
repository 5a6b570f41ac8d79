from functools import lru_cache

from ats_engine.core.config import settings

from .rules import DEFAULT_RULES_PATH, CategoryRule, RuleTables


@lru_cache(maxsize=1)
def get_default_rules() -> RuleTables:
    return RuleTables.from_path(settings.rules_path or DEFAULT_RULES_PATH)


__all__ = ["CategoryRule", "RuleTables", "DEFAULT_RULES_PATH", "get_default_rules"]
