from __future__ import annotations

from dataclasses import dataclass

from ats_engine.core.config.scoring import (
    CategoryConfig,
    MatchingConfig,
    NextStepsConfig,
    ScoringConfig,
    ThresholdsConfig,
)
from ats_engine.features.keywords import CompiledDictionary
from ats_engine.schemas.analysis import CategoryBreakdown, CategoryResult, Finding, Priority, Suggestion

from .aggregate import JobMatch
from .base import round_half_up

PRIORITY_RANK: dict[str, int] = {"high": 0, "medium": 1, "low": 2}
UNGROUPED_KEYWORDS = "role-specific"
KEYWORDS_CATEGORY = "keywords"

# Float tolerance so that e.g. 4/5 compares equal to a 0.8 threshold.
_EPSILON = 1e-9


@dataclass(frozen=True, slots=True)
class _Candidate:
    priority: Priority
    category: str
    text: str
    impact: int
    order: int


def category_configs(config: ScoringConfig) -> dict[str, CategoryConfig]:
    """Category config by wire key, in breakdown order."""
    categories = config.categories
    return {
        "personalInfo": categories.personal_info,
        "experience": categories.experience,
        "education": categories.education,
        "skills": categories.skills,
        "structure": categories.structure,
        "achievements": categories.achievements,
    }


def needs_attention(finding: Finding, threshold: float) -> bool:
    if finding.advice is None:
        return False
    if finding.possible == 0:
        return True
    return finding.earned / finding.possible < threshold - _EPSILON


def is_strength(finding: Finding, threshold: float) -> bool:
    if finding.possible <= 0 or finding.earned <= 0:
        return False
    return finding.earned / finding.possible >= threshold - _EPSILON


def category_priority(result: CategoryResult, thresholds: ThresholdsConfig) -> Priority:
    ratio = result.score / result.max_score if result.max_score else 0.0
    if ratio < thresholds.high_priority_below - _EPSILON:
        return "high"
    if ratio < thresholds.medium_priority_below - _EPSILON:
        return "medium"
    return "low"


def match_priority(match_percentage: int, matching: MatchingConfig) -> Priority:
    if match_percentage < matching.high_priority_below:
        return "high"
    if match_percentage < matching.medium_priority_below:
        return "medium"
    return "low"


def _category_candidates(breakdown: CategoryBreakdown, config: ScoringConfig) -> list[_Candidate]:
    configs = category_configs(config)
    candidates: list[_Candidate] = []
    for key, result in breakdown.items():
        threshold = configs[key].attention_threshold
        priority = category_priority(result, config.thresholds)
        for finding in result.findings:
            if not needs_attention(finding, threshold):
                continue
            candidates.append(
                _Candidate(
                    priority=priority,
                    category=key,
                    text=finding.advice or finding.message,
                    impact=finding.gap,
                    order=len(candidates),
                )
            )
    return candidates


def _keyword_candidates(
    match: JobMatch,
    dictionary: CompiledDictionary,
    matching: MatchingConfig,
    start: int,
) -> list[_Candidate]:
    if match.match_percentage is None or not match.missing_keys:
        return []

    # One suggestion per dictionary group, in order of each group's first missing key.
    groups: dict[str, list[str]] = {}
    for key in match.missing_keys:
        term = dictionary.terms.get(key)
        group = term.group if term is not None else UNGROUPED_KEYWORDS
        groups.setdefault(group, []).append(match.job_keywords.display(key))

    priority = match_priority(match.match_percentage, matching)
    total = len(match.job_keywords)
    candidates: list[_Candidate] = []
    for group, names in groups.items():
        shown = names[: matching.max_terms_per_suggestion]
        text = f"Add missing {group} keywords from the job description: {', '.join(shown)}"
        if len(names) > len(shown):
            text += f" and {len(names) - len(shown)} more"
        candidates.append(
            _Candidate(
                priority=priority,
                category=KEYWORDS_CATEGORY,
                text=text,
                impact=round_half_up(100 * len(names) / total),
                order=start + len(candidates),
            )
        )
    return candidates


def build_suggestions(
    breakdown: CategoryBreakdown,
    config: ScoringConfig,
    match: JobMatch | None = None,
    dictionary: CompiledDictionary | None = None,
) -> list[Suggestion]:
    """Ranked suggestions: priority, then impact descending, then evaluation order; text is unique."""
    candidates = _category_candidates(breakdown, config)
    if match is not None and dictionary is not None:
        candidates.extend(_keyword_candidates(match, dictionary, config.matching, len(candidates)))

    ranked = sorted(candidates, key=lambda item: (PRIORITY_RANK[item.priority], -item.impact, item.order))
    suggestions: list[Suggestion] = []
    seen: set[str] = set()
    for candidate in ranked:
        if candidate.text in seen:
            continue
        seen.add(candidate.text)
        suggestions.append(
            Suggestion(
                priority=candidate.priority,
                category=candidate.category,
                suggestion=candidate.text,
                impact=candidate.impact,
            )
        )
    return suggestions


def collect_strengths(breakdown: CategoryBreakdown, config: ScoringConfig) -> list[str]:
    configs = category_configs(config)
    strengths: list[str] = []
    for key, result in breakdown.items():
        threshold = configs[key].attention_threshold
        strengths.extend(finding.message for finding in result.findings if is_strength(finding, threshold))
    return strengths[: config.result_limits.strengths]


def collect_recommendations(breakdown: CategoryBreakdown, config: ScoringConfig) -> list[str]:
    configs = category_configs(config)
    recommendations: list[str] = []
    for key, result in breakdown.items():
        threshold = configs[key].attention_threshold
        for finding in result.findings:
            if needs_attention(finding, threshold) and finding.advice not in recommendations:
                recommendations.append(finding.advice)
    return recommendations[: config.result_limits.recommendations]


def next_steps(ats_score: int, config: NextStepsConfig) -> list[str]:
    if ats_score >= config.strong_from:
        return [
            "Your resume is well optimized; tailor it to each role you apply for",
            "Review and update your resume regularly to keep it relevant",
        ]
    if ats_score >= config.fair_from:
        return [
            "Add more quantifiable achievements to show impact",
            "Include additional industry-relevant keywords",
            "Make sure your contact information is complete",
        ]
    return [
        "Restructure your resume with clear, standard section headers",
        "Add quantifiable achievements with specific numbers",
        "Include a comprehensive skills section",
        "Make sure your contact information is complete",
    ]
