from functools import lru_cache

from ats_engine.core.config import settings

from .local_taxonomy import LocalReferenceDictionary
from .provider import EMPTY_DICTIONARY, ReferenceDictionary, ReferenceDictionaryProvider, ReferenceTerm


@lru_cache(maxsize=1)
def get_default_reference_provider() -> ReferenceDictionaryProvider:
    return LocalReferenceDictionary(settings.reference_dictionary_path)


__all__ = [
    "EMPTY_DICTIONARY",
    "LocalReferenceDictionary",
    "ReferenceDictionary",
    "ReferenceDictionaryProvider",
    "ReferenceTerm",
    "get_default_reference_provider",
]
