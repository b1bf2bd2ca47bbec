from __future__ import annotations

from ats_engine.core.config.scoring import StructureConfig, get_scoring_config
from ats_engine.normalize.utils import word_count
from ats_engine.schemas.analysis import CategoryResult
from ats_engine.schemas.profile import ResumeProfile

from .base import FindingRecorder

_SECTION_LABELS = {
    "summary": "Summary",
    "experience": "Experience",
    "education": "Education",
    "skills": "Skills",
}
_SECTION_ADVICE = {
    "summary": "Add a short professional summary at the top",
    "experience": "Include a dedicated work experience section",
    "education": "Include your educational background",
    "skills": "Add a skills section with industry-relevant keywords",
}


def _ordering_issue(order: tuple[str, ...]) -> str | None:
    position = {section: index for index, section in enumerate(order)}
    if "summary" in position and position["summary"] != 0:
        return "Summary is not the first section"
    if "experience" in position and "education" in position and position["education"] < position["experience"]:
        return "Education appears before experience"
    return None


def score_structure(profile: ResumeProfile, config: StructureConfig | None = None) -> CategoryResult:
    cfg = config or get_scoring_config().categories.structure
    points = cfg.points
    recorder = FindingRecorder(cfg.max_score)

    present = {
        "summary": bool(profile.summary),
        "experience": bool(profile.experience),
        "education": bool(profile.education),
        "skills": bool(profile.skills.all_skills()),
    }
    for section, label in _SECTION_LABELS.items():
        if present[section]:
            recorder.bonus(f"{label} section present", points[section])
        else:
            recorder.check(
                f"{label} section missing",
                earned=0,
                possible=points[section],
                advice=_SECTION_ADVICE[section],
            )

    if profile.summary:
        low, high = cfg.summary_words
        words = word_count(profile.summary)
        if low <= words <= high:
            recorder.bonus(f"Summary length is well balanced ({words} words)", points["summary_length"])
        elif words < low:
            recorder.check(
                f"Summary is short ({words} words)",
                earned=0,
                possible=points["summary_length"],
                advice=f"Expand your summary to {low}-{high} words",
            )
        else:
            recorder.check(
                f"Summary is long ({words} words)",
                earned=0,
                possible=points["summary_length"],
                advice=f"Shorten your summary to {low}-{high} words",
            )

    # Ordering only means something once two core sections exist.
    ordered_sections = tuple(section for section in profile.section_order if section in _SECTION_LABELS)
    if sum(present.values()) >= 2:
        issue = _ordering_issue(ordered_sections)
        if issue is None:
            recorder.bonus("Sections follow a conventional order", points["ordering"])
        else:
            recorder.check(
                issue,
                earned=0,
                possible=points["ordering"],
                advice="Order sections as summary, experience, education, then skills",
            )

    return recorder.result()
