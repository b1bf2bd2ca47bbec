from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from ats_engine.core.config.scoring import KeywordConfig
from ats_engine.taxonomy.provider import ReferenceDictionaryProvider

from .keywords import KeywordSet, compile_dictionary


class IndustryClassification(BaseModel):
    industry: str | None = None
    label: str | None = None
    source: Literal["stated", "detected", "none"] = "none"
    overlap: int = Field(default=0, ge=0)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    secondary: str | None = None
    matched_terms: list[str] = Field(default_factory=list)


def _industry_overlaps(
    keywords: KeywordSet,
    provider: ReferenceDictionaryProvider,
    config: KeywordConfig | None,
) -> list[tuple[str, str, list[str]]]:
    overlaps: list[tuple[str, str, list[str]]] = []
    for dictionary in provider.industries():
        compiled = compile_dictionary(dictionary, config)
        matched = [compiled.displays[key] for key in compiled.terms if key in keywords]
        overlaps.append((dictionary.id, dictionary.label, matched))
    return overlaps


def classify_industry(
    keywords: KeywordSet,
    provider: ReferenceDictionaryProvider,
    *,
    stated: str | None = None,
    config: KeywordConfig | None = None,
) -> IndustryClassification:
    """Pick the stated industry when the store knows it, else the best-overlapping one.

    Ties are broken by dictionary order in the store, so the result is stable.
    """
    overlaps = _industry_overlaps(keywords, provider, config)
    total_hits = sum(len(matched) for _, _, matched in overlaps)

    if stated:
        dictionary = provider.get(stated)
        if dictionary is not None:
            matched = next((terms for industry, _, terms in overlaps if industry == dictionary.id), [])
            return IndustryClassification(
                industry=dictionary.id,
                label=dictionary.label,
                source="stated",
                overlap=len(matched),
                confidence=1.0,
                matched_terms=matched,
            )

    ranked = sorted(enumerate(overlaps), key=lambda item: (-len(item[1][2]), item[0]))
    if not ranked or total_hits <= 0:
        return IndustryClassification()

    _, (industry, label, matched) = ranked[0]
    secondary = None
    if len(ranked) > 1 and ranked[1][1][2]:
        secondary = ranked[1][1][0]
    return IndustryClassification(
        industry=industry,
        label=label,
        source="detected",
        overlap=len(matched),
        confidence=len(matched) / total_hits,
        secondary=secondary,
        matched_terms=matched,
    )
