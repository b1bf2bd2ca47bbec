from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ReferenceTerm:
    display: str
    group: str
    industry: str


@dataclass(frozen=True, slots=True)
class ReferenceDictionary:
    id: str
    label: str
    terms: tuple[ReferenceTerm, ...] = ()
    aliases: tuple[tuple[str, str], ...] = field(default=())

    def is_empty(self) -> bool:
        return not self.terms


EMPTY_DICTIONARY = ReferenceDictionary(id="", label="")


class ReferenceDictionaryProvider(Protocol):
    def industries(self) -> tuple[ReferenceDictionary, ...]:
        """Return every industry dictionary in a stable order."""

    def get(self, industry: str) -> ReferenceDictionary | None:
        """Return the dictionary for an industry id, or None when unknown."""

    def merged(self) -> ReferenceDictionary:
        """Return all industries combined; the first occurrence of a term wins."""
