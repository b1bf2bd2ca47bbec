from __future__ import annotations

from ats_engine.core.config.scoring import AchievementsConfig, get_scoring_config
from ats_engine.normalize.utils import has_metric, has_year
from ats_engine.schemas.analysis import CategoryResult
from ats_engine.schemas.profile import ResumeProfile

from .base import FindingRecorder, banded_points, scaled_points


def _statements(profile: ResumeProfile) -> list[tuple[str, bool]]:
    """(kind, is_specific) for every standalone achievement outside experience entries."""
    items: list[tuple[str, bool]] = []
    for certification in profile.certifications:
        specific = bool(certification.issuer or certification.date or has_year(certification.name))
        items.append(("certifications", specific))
    for kind, values in (
        ("awards", profile.awards),
        ("publications", profile.publications),
        ("volunteering", profile.volunteering),
    ):
        for value in values:
            items.append((kind, has_metric(value) or has_year(value)))
    return items


def score_achievements(profile: ResumeProfile, config: AchievementsConfig | None = None) -> CategoryResult:
    cfg = config or get_scoring_config().categories.achievements
    points = cfg.points
    recorder = FindingRecorder(cfg.max_score)

    items = _statements(profile)
    if not items:
        recorder.check(
            "No certifications, awards, or publications listed",
            earned=0,
            possible=cfg.max_score,
            advice="Add certifications, awards, or publications that back up your expertise",
        )
        return recorder.result()

    count = len(items)
    recorder.check(
        f"{count} standalone {'achievement' if count == 1 else 'achievements'} listed",
        earned=banded_points(count, cfg.count_points),
        possible=points["count"],
        advice="List more certifications, awards, or publications",
    )

    specific = sum(1 for _, is_specific in items if is_specific)
    recorder.check(
        f"{specific} of {count} achievements include an issuer, date, or figure",
        earned=scaled_points(points["specificity"], specific / cfg.specificity_target),
        possible=points["specificity"],
        advice="Add issuers, dates, or concrete figures to your achievements",
    )

    kinds = sorted({kind for kind, _ in items})
    if len(kinds) >= 2:
        recorder.bonus(f"Achievements span {', '.join(kinds)}", points["variety"])
    else:
        recorder.check(
            f"Achievements limited to {kinds[0]}",
            earned=0,
            possible=points["variety"],
            advice="Round out achievements with another kind, such as awards alongside certifications",
        )

    return recorder.result()
