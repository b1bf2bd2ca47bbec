from __future__ import annotations

import json
import logging
from typing import Any

from ats_engine.core.config.scoring import ScoringConfig, get_scoring_config
from ats_engine.features.domain_classifier import IndustryClassification, classify_industry
from ats_engine.features.keywords import compile_dictionary, extract_profile_keywords
from ats_engine.normalize.normalize_resume import normalize_resume
from ats_engine.schemas.analysis import AnalysisMetadata, AnalysisResult, CategoryBreakdown
from ats_engine.schemas.profile import ResumeProfile
from ats_engine.scoring.achievements import score_achievements
from ats_engine.scoring.aggregate import JobMatch, aggregate_score, match_job
from ats_engine.scoring.education import score_education
from ats_engine.scoring.experience import score_experience
from ats_engine.scoring.personal_info import score_personal_info
from ats_engine.scoring.skills import score_skills
from ats_engine.scoring.structure import score_structure
from ats_engine.scoring.suggestions import (
    build_suggestions,
    collect_recommendations,
    collect_strengths,
    next_steps,
)
from ats_engine.taxonomy import get_default_reference_provider
from ats_engine.taxonomy.provider import ReferenceDictionary, ReferenceDictionaryProvider

logger = logging.getLogger("ats_engine.analysis")


def _skill_dictionaries(
    provider: ReferenceDictionaryProvider,
    stated: str,
) -> tuple[ReferenceDictionary, ...]:
    if stated:
        dictionary = provider.get(stated)
        if dictionary is not None:
            return (dictionary,)
    return provider.industries()


def score_profile(
    profile: ResumeProfile,
    config: ScoringConfig,
    dictionaries: tuple[ReferenceDictionary, ...] = (),
) -> CategoryBreakdown:
    """Run the six category scorers; they are independent and read-only over the profile."""
    categories = config.categories
    return CategoryBreakdown(
        personal_info=score_personal_info(profile, categories.personal_info),
        experience=score_experience(profile, categories.experience, config.action_verbs),
        education=score_education(profile, categories.education),
        skills=score_skills(profile, dictionaries, categories.skills, config.keywords),
        structure=score_structure(profile, categories.structure),
        achievements=score_achievements(profile, categories.achievements),
    )


def _metadata(
    config: ScoringConfig,
    classification: IndustryClassification,
    resume_keyword_count: int,
    match: JobMatch | None,
) -> AnalysisMetadata:
    return AnalysisMetadata(
        version=config.version,
        detected_industry=classification.industry,
        industry_source=classification.source,
        resume_keyword_count=resume_keyword_count,
        job_keyword_count=len(match.job_keywords) if match is not None else None,
    )


def analyze_profile(
    profile: ResumeProfile,
    job_description: str | None = None,
    *,
    industry: str | None = None,
    config: ScoringConfig | None = None,
    dictionary_provider: ReferenceDictionaryProvider | None = None,
) -> AnalysisResult:
    scoring = config or get_scoring_config()
    provider = dictionary_provider or get_default_reference_provider()
    keyword_config = scoring.keywords

    merged = compile_dictionary(provider.merged(), keyword_config)
    resume_keywords = extract_profile_keywords(profile, merged, config=keyword_config)

    stated = (industry or "").strip().lower() or profile.target_industry
    classification = classify_industry(resume_keywords, provider, stated=stated or None, config=keyword_config)

    breakdown = score_profile(profile, scoring, _skill_dictionaries(provider, stated))
    ats_score = aggregate_score(breakdown)
    match = match_job(resume_keywords, job_description, merged, config=keyword_config)

    result = AnalysisResult(
        ats_score=ats_score,
        breakdown=breakdown,
        match_percentage=match.match_percentage if match is not None else None,
        missing_skills=list(match.missing_skills) if match is not None else [],
        strengths=collect_strengths(breakdown, scoring),
        recommendations=collect_recommendations(breakdown, scoring),
        suggestions=build_suggestions(breakdown, scoring, match, merged),
        next_steps=next_steps(ats_score, scoring.next_steps),
        metadata=_metadata(scoring, classification, len(resume_keywords), match),
    )

    logger.info(
        json.dumps(
            {
                "event": "ats_analysis_completed",
                "score": ats_score,
                "match_percentage": result.match_percentage,
                "industry": classification.industry,
                "industry_source": classification.source,
                "resume_keywords": len(resume_keywords),
                "job_description_len": len(job_description or ""),
                "suggestions": len(result.suggestions),
            }
        )
    )
    return result


def analyze(
    resume_data: Any,
    job_description: str | None = None,
    *,
    industry: str | None = None,
    config: ScoringConfig | None = None,
    dictionary_provider: ReferenceDictionaryProvider | None = None,
) -> AnalysisResult:
    """Score a raw resume record and, when given, match it against a job description.

    Raises InvalidInputKind when ``resume_data`` is not a mapping; every other
    input produces a complete result.
    """
    profile = normalize_resume(resume_data)
    return analyze_profile(
        profile,
        job_description,
        industry=industry,
        config=config,
        dictionary_provider=dictionary_provider,
    )
