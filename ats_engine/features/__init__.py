from .domain_classifier import IndustryClassification, classify_industry
from .keywords import (
    CompiledDictionary,
    KeywordSet,
    compile_dictionary,
    extract_keywords,
    extract_profile_keywords,
    profile_text_chunks,
    stem_token,
    term_key,
)

__all__ = [
    "IndustryClassification",
    "classify_industry",
    "CompiledDictionary",
    "KeywordSet",
    "compile_dictionary",
    "extract_keywords",
    "extract_profile_keywords",
    "profile_text_chunks",
    "stem_token",
    "term_key",
]
