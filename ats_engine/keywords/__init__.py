from .basic import extract_basic_keywords
from .categorizer import KeywordCategorizer
from .cleaning import clean_keyword_set, clean_keywords
from .fallback import categorize_by_patterns

__all__ = [
    "KeywordCategorizer",
    "categorize_by_patterns",
    "clean_keyword_set",
    "clean_keywords",
    "extract_basic_keywords",
]
