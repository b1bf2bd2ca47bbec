from __future__ import annotations

from collections.abc import Sequence

from ats_engine.core.config.scoring import KeywordConfig, SkillsConfig, get_scoring_config
from ats_engine.features.keywords import compile_dictionary, extract_keywords
from ats_engine.schemas.analysis import CategoryResult
from ats_engine.schemas.profile import ResumeProfile
from ats_engine.taxonomy.provider import ReferenceDictionary

from .base import FindingRecorder, scaled_points


def _best_overlap(
    profile: ResumeProfile,
    dictionaries: Sequence[ReferenceDictionary],
    keyword_config: KeywordConfig | None,
) -> tuple[ReferenceDictionary | None, list[str]]:
    skill_chunks = [skill.display for skill in profile.skills.all_skills()]
    best: ReferenceDictionary | None = None
    best_terms: list[str] = []
    for dictionary in dictionaries:
        if dictionary.is_empty():
            continue
        compiled = compile_dictionary(dictionary, keyword_config)
        skill_keywords = extract_keywords(skill_chunks, compiled, config=keyword_config)
        matched = [compiled.displays[key] for key in skill_keywords.keys() if key in compiled.terms]
        if best is None or len(matched) > len(best_terms):
            best, best_terms = dictionary, matched
    return best, best_terms


def score_skills(
    profile: ResumeProfile,
    dictionaries: Sequence[ReferenceDictionary] = (),
    config: SkillsConfig | None = None,
    keyword_config: KeywordConfig | None = None,
) -> CategoryResult:
    """Score the skills section.

    ``dictionaries`` are the candidate industry dictionaries: the stated
    industry alone, or every industry when none is stated, in which case the
    best-overlapping one is used. Every component only grows as skills are
    added, so the category score is monotone in the skill set.
    """
    cfg = config or get_scoring_config().categories.skills
    kw_cfg = keyword_config or get_scoring_config().keywords
    points = cfg.points
    recorder = FindingRecorder(cfg.max_score)

    technical = len(profile.skills.technical)
    low, high = cfg.technical_band
    if technical == 0:
        recorder.check(
            "No technical skills listed",
            earned=0,
            possible=points["technical_count"],
            advice="Add a skills section with the technical skills relevant to your target role",
        )
    elif technical < low:
        recorder.check(
            f"{technical} technical skills listed (target {low}-{high})",
            earned=scaled_points(points["technical_count"], technical / low),
            possible=points["technical_count"],
            advice=f"List at least {low} relevant technical skills",
        )
    else:
        recorder.bonus(f"{technical} technical skills listed", points["technical_count"])
        if technical > high:
            recorder.advisory(
                f"Skills list is long ({technical} technical skills)",
                f"Trim your technical skills to the {high} most relevant to the role",
            )

    usable = [dictionary for dictionary in dictionaries if not dictionary.is_empty()]
    if not usable:
        recorder.check("Industry keyword overlap not evaluated (no reference dictionary)", earned=0, possible=points["dictionary_overlap"])
    else:
        dictionary, matched = _best_overlap(profile, usable, kw_cfg)
        overlap = len(matched)
        label = dictionary.label if dictionary is not None else "industry"
        if overlap >= cfg.overlap_target:
            recorder.bonus(f"Strong {label} keyword alignment: {overlap} recognized skills", points["dictionary_overlap"])
        else:
            recorder.check(
                f"{overlap} recognized {label} skills (target {cfg.overlap_target})",
                earned=scaled_points(points["dictionary_overlap"], overlap / cfg.overlap_target),
                possible=points["dictionary_overlap"],
                advice="Include more industry-standard skill names recruiters search for",
            )

    if profile.skills.tools:
        recorder.bonus(f"{len(profile.skills.tools)} tools listed", points["tools"])
    else:
        recorder.check("No tools listed", earned=0, possible=points["tools"], advice="List the tools and software you use day to day")

    if profile.skills.soft:
        recorder.bonus(f"{len(profile.skills.soft)} soft skills listed", points["soft"])
    else:
        recorder.check("No soft skills listed", earned=0, possible=points["soft"], advice="Add a few soft skills such as communication or leadership")

    return recorder.result()
