from __future__ import annotations

from ats_engine.core.config.scoring import EducationConfig, get_scoring_config
from ats_engine.schemas.analysis import CategoryResult
from ats_engine.schemas.profile import EducationEntry, ResumeProfile

from .base import FindingRecorder


def _completeness(entry: EducationEntry) -> int:
    return sum(1 for value in (entry.degree, entry.institution, entry.dates) if value)


def score_education(profile: ResumeProfile, config: EducationConfig | None = None) -> CategoryResult:
    cfg = config or get_scoring_config().categories.education
    points = cfg.points
    recorder = FindingRecorder(cfg.max_score)

    if not profile.education:
        recorder.check(
            "No education entries",
            earned=0,
            possible=cfg.max_score,
            advice="Add an education section even if you have work experience",
        )
        return recorder.result()

    recorder.bonus(f"{len(profile.education)} education {'entry' if len(profile.education) == 1 else 'entries'} listed", points["present"])

    # Degree names are not content-validated; any non-empty value counts.
    best = max(profile.education, key=_completeness)
    if best.degree:
        recorder.bonus("Degree or qualification stated", points["degree"])
    else:
        recorder.check("Degree not stated", earned=0, possible=points["degree"], advice="State the degree or qualification you earned")
    if best.institution:
        recorder.bonus("Institution named", points["institution"])
    else:
        recorder.check("Institution not named", earned=0, possible=points["institution"], advice="Name the school or university for your degree")
    if best.dates:
        recorder.bonus("Education dates provided", points["dates"])
    else:
        recorder.check("Education dates missing", earned=0, possible=points["dates"], advice="Add graduation or attendance dates to your education")
    if best.gpa:
        recorder.note(f"GPA listed: {best.gpa}")

    return recorder.result()
