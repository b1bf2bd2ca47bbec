from __future__ import annotations

from dataclasses import dataclass, field

from ats_engine.core.config.scoring import KeywordConfig
from ats_engine.features.keywords import CompiledDictionary, KeywordSet, extract_keywords
from ats_engine.schemas.analysis import CategoryBreakdown

from .base import round_half_up


@dataclass(frozen=True, slots=True)
class JobMatch:
    """Keyword overlap between a resume and one job description."""

    job_keywords: KeywordSet
    matched_keys: tuple[str, ...] = ()
    missing_keys: tuple[str, ...] = ()
    match_percentage: int | None = None
    missing_skills: list[str] = field(default_factory=list)


def aggregate_score(breakdown: CategoryBreakdown) -> int:
    # Weights live in each category's max_score, so this is a plain sum.
    total = sum(result.score for _, result in breakdown.items())
    return min(max(round_half_up(total), 0), 100)


def match_job(
    resume_keywords: KeywordSet,
    job_description: str | None,
    dictionary: CompiledDictionary,
    *,
    config: KeywordConfig | None = None,
) -> JobMatch | None:
    """Compare resume keywords with the job description's; None when there is nothing to compare."""
    text = (job_description or "").strip()
    if not text:
        return None

    job_keywords = extract_keywords(text, dictionary, config=config)
    if not len(job_keywords):
        return JobMatch(job_keywords=job_keywords)

    matched = job_keywords.intersection_keys(resume_keywords)
    missing = sorted(job_keywords.difference_keys(resume_keywords))
    return JobMatch(
        job_keywords=job_keywords,
        matched_keys=tuple(matched),
        missing_keys=tuple(missing),
        match_percentage=round_half_up(100 * len(matched) / len(job_keywords)),
        missing_skills=[job_keywords.display(key) for key in missing],
    )
