from __future__ import annotations

from ats_engine.core.config.scoring import ExperienceConfig, get_scoring_config
from ats_engine.normalize.utils import bullet_lines, first_word, has_metric, word_count
from ats_engine.schemas.analysis import CategoryResult
from ats_engine.schemas.profile import ExperienceEntry, ResumeProfile

from .base import FindingRecorder, banded_points, scaled_points


def _entry_lines(entry: ExperienceEntry) -> list[str]:
    return list(entry.achievements) + bullet_lines(entry.description)


def _plural(count: int, singular: str, plural: str | None = None) -> str:
    return singular if count == 1 else (plural or f"{singular}s")


def _length_credit(words: int, cfg: ExperienceConfig) -> float:
    low, high = cfg.description_words
    if words < low:
        return 0.0
    if words > high:
        return cfg.too_long_credit
    return 1.0


def score_experience(
    profile: ResumeProfile,
    config: ExperienceConfig | None = None,
    action_verbs: frozenset[str] | None = None,
) -> CategoryResult:
    cfg = config or get_scoring_config().categories.experience
    verbs = action_verbs if action_verbs is not None else get_scoring_config().action_verbs
    points = cfg.points
    recorder = FindingRecorder(cfg.max_score)

    entries = profile.experience
    if not entries:
        recorder.check(
            "No work experience entries",
            earned=0,
            possible=cfg.max_score,
            advice="Add your work experience with job titles, companies, and dates",
        )
        return recorder.result()

    count = len(entries)
    entry_points = banded_points(count, cfg.entry_points)
    recorder.check(
        f"{count} experience {_plural(count, 'entry', 'entries')} listed",
        earned=entry_points,
        possible=points["entries"],
        advice="Add more relevant roles, internships, or freelance work",
    )

    lines = [line for entry in entries for line in _entry_lines(entry)]

    quantified = sum(1 for line in lines if has_metric(line))
    quantified_points = scaled_points(points["quantified"], quantified / cfg.quantified_target)
    if quantified == 0:
        message = "No quantified achievements found"
    else:
        message = f"{quantified} quantified {_plural(quantified, 'achievement')} found"
    recorder.check(
        message,
        earned=quantified_points,
        possible=points["quantified"],
        advice="Quantify your achievements with numbers, percentages, or dollar amounts",
    )

    if not lines:
        recorder.check(
            "No achievement bullet points to evaluate",
            earned=0,
            possible=points["action_verbs"],
            advice="Describe each role with bullet points that start with strong action verbs",
        )
    else:
        verb_lines = sum(1 for line in lines if first_word(line) in verbs)
        recorder.check(
            f"{verb_lines} of {len(lines)} bullet points open with action verbs",
            earned=scaled_points(points["action_verbs"], verb_lines / len(lines)),
            possible=points["action_verbs"],
            advice="Start bullet points with strong action verbs such as led, built, or improved",
        )

    low, high = cfg.description_words
    word_counts = [word_count(" ".join([entry.description, *entry.achievements])) for entry in entries]
    too_short = sum(1 for words in word_counts if words < low)
    too_long = sum(1 for words in word_counts if words > high)
    average_credit = sum(_length_credit(words, cfg) for words in word_counts) / count
    if too_short:
        message = f"{too_short} role {_plural(too_short, 'description')} under {low} words"
        advice = f"Expand short role descriptions to at least {low} words"
    elif too_long:
        message = f"{too_long} role {_plural(too_long, 'description')} over {high} words"
        advice = f"Tighten long role descriptions to under {high} words"
    else:
        message = "Role descriptions are within the recommended length"
        advice = None
    recorder.check(
        message,
        earned=scaled_points(points["description_length"], average_credit),
        possible=points["description_length"],
        advice=advice,
    )

    return recorder.result()
