from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ats_engine.schemas.profile import (
    Certification,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProfileLink,
    ProjectEntry,
    ResumeProfile,
    Skill,
    SkillSet,
)

from .utils import matching_key, normalize_block, normalize_line, split_list_text, strip_bullet_prefix

_PERSONAL_KEYS = ("personal", "personalInfo", "personal_info", "contact")
_SUMMARY_KEYS = ("summary", "professionalSummary", "professional_summary", "objective", "about")
_EXPERIENCE_KEYS = ("experience", "workExperience", "work_experience", "employment")
_EDUCATION_KEYS = ("education",)
_SKILLS_KEYS = ("skills",)
_PROJECTS_KEYS = ("projects",)
_CERTIFICATION_KEYS = ("certifications", "certificates")
_ADDITIONAL_KEYS = ("additionalDetails", "additional_details")
_INDUSTRY_KEYS = ("targetIndustry", "target_industry", "industry")

_SECTION_FOR_KEY: dict[str, str] = {
    **{key: "summary" for key in _SUMMARY_KEYS},
    **{key: "experience" for key in _EXPERIENCE_KEYS},
    **{key: "education" for key in _EDUCATION_KEYS},
    **{key: "skills" for key in _SKILLS_KEYS},
    **{key: "projects" for key in _PROJECTS_KEYS},
    **{key: "achievements" for key in _CERTIFICATION_KEYS},
    **{key: "achievements" for key in _ADDITIONAL_KEYS},
    "awards": "achievements",
    "achievements": "achievements",
    "publications": "achievements",
    "volunteering": "achievements",
}

_LINK_LABELS = ("linkedin", "github", "portfolio", "website", "dribbble", "twitter", "instagram")


class InvalidInputKind(TypeError):
    """Raised when the raw resume is not a record at all (a caller bug, not messy data)."""

    def __init__(self, kind: str):
        super().__init__(f"Resume data must be a mapping, got {kind}.")
        self.kind = kind


def _text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return normalize_line(value)
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _text_block(value: Any) -> str:
    if isinstance(value, str):
        return normalize_block(value)
    if isinstance(value, (list, tuple)):
        return "\n".join(line for line in (_text(item) for item in value) if line)
    return _text(value)


def _items(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, (Mapping, str)):
        return [value]
    return []


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _first(source: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = source.get(key)
        if value not in (None, "", [], {}):
            return value
    return None


def _mapping_text(value: Mapping[str, Any]) -> str:
    parts = [_text(item) for item in value.values()]
    return " ".join(part for part in parts if part)


def _strings(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        candidates = [strip_bullet_prefix(line) for line in value.splitlines()]
    else:
        candidates = []
        for item in _items(value):
            if isinstance(item, Mapping):
                candidates.append(_mapping_text(item))
            else:
                candidates.append(strip_bullet_prefix(_text(item)))
    return tuple(normalize_line(item) for item in candidates if normalize_line(item))


def _skill_values(value: Any) -> list[str]:
    if isinstance(value, str):
        return split_list_text(value)
    output: list[str] = []
    for item in _items(value):
        if isinstance(item, Mapping):
            output.append(_text(_first(item, ("name", "skill", "title", "keyword"))))
        elif isinstance(item, str):
            output.extend(split_list_text(item))
        else:
            output.append(_text(item))
    return output


def _skills(*values: Any) -> tuple[Skill, ...]:
    skills: list[Skill] = []
    seen: set[str] = set()
    for value in values:
        for raw in _skill_values(value):
            display = normalize_line(raw)
            key = matching_key(display)
            if not key or key in seen:
                continue
            seen.add(key)
            skills.append(Skill(display=display, key=key))
    return tuple(skills)


def _skill_set(value: Any) -> SkillSet:
    if not isinstance(value, Mapping):
        return SkillSet(technical=_skills(value))

    known = {"technical", "technicalSkills", "technical_skills", "hard", "tools", "soft", "softSkills", "soft_skills", "languages"}
    extra_technical = [item for key, item in value.items() if key not in known]
    return SkillSet(
        technical=_skills(
            value.get("technical"),
            value.get("technicalSkills"),
            value.get("technical_skills"),
            value.get("hard"),
            *extra_technical,
        ),
        tools=_skills(value.get("tools")),
        soft=_skills(value.get("soft"), value.get("softSkills"), value.get("soft_skills")),
        languages=_skills(value.get("languages")),
    )


def _links(personal: Mapping[str, Any]) -> tuple[ProfileLink, ...]:
    links: list[ProfileLink] = []
    seen: set[str] = set()

    def add(label: str, url: Any) -> None:
        clean = _text(url)
        if clean and clean.lower() not in seen:
            seen.add(clean.lower())
            links.append(ProfileLink(label=label, url=clean))

    for key in ("socialLinks", "social_links", "links"):
        container = personal.get(key)
        if isinstance(container, Mapping):
            for label, url in container.items():
                add(str(label).lower(), url)
        else:
            for item in _items(container):
                if isinstance(item, Mapping):
                    add(_text(item.get("label") or item.get("network")).lower(), item.get("url"))
                else:
                    add("", item)
    for label in _LINK_LABELS:
        add(label, personal.get(label))
    return tuple(links)


def _personal(raw: Mapping[str, Any]) -> PersonalInfo:
    personal = _mapping(_first(raw, _PERSONAL_KEYS))
    # Contact fields occasionally sit at the top level of flat records.
    merged: dict[str, Any] = {**raw, **personal}
    return PersonalInfo(
        name=_text(_first(merged, ("name", "fullName", "full_name"))),
        email=_text(_first(merged, ("email", "emailAddress", "email_address"))),
        phone=_text(_first(merged, ("phone", "phoneNumber", "phone_number", "mobile"))),
        location=_text(_first(merged, ("location", "address", "city"))),
        job_title=_text(_first(personal, ("jobTitle", "job_title", "title", "headline"))),
        links=_links(merged),
    )


def _experience_entry(item: Any) -> ExperienceEntry | None:
    if isinstance(item, str):
        description = normalize_block(item)
        return ExperienceEntry(description=description) if description else None
    if not isinstance(item, Mapping):
        return None

    end_date = _text(_first(item, ("endDate", "end_date", "end", "to")))
    if not end_date and item.get("current") is True:
        end_date = "Present"
    entry = ExperienceEntry(
        title=_text(_first(item, ("title", "jobTitle", "job_title", "position", "role"))),
        company=_text(_first(item, ("company", "employer", "organization"))),
        location=_text(item.get("location")),
        start_date=_text(_first(item, ("startDate", "start_date", "start", "from"))),
        end_date=end_date,
        description=_text_block(_first(item, ("description", "summary", "details", "responsibilities"))),
        achievements=_strings(_first(item, ("achievements", "highlights", "bullets", "accomplishments"))),
    )
    return entry if entry != ExperienceEntry() else None


def _education_entry(item: Any) -> EducationEntry | None:
    if isinstance(item, str):
        degree = normalize_line(item)
        return EducationEntry(degree=degree) if degree else None
    if not isinstance(item, Mapping):
        return None

    degree = _text(_first(item, ("degree", "qualification", "studyType", "study_type")))
    field = _text(_first(item, ("fieldOfStudy", "field_of_study", "field", "major", "area")))
    if field and field.lower() not in degree.lower():
        degree = f"{degree} in {field}" if degree else field

    dates = _text(_first(item, ("dates", "date", "graduationDate", "graduation_date", "year")))
    if not dates:
        start = _text(_first(item, ("startDate", "start_date")))
        end = _text(_first(item, ("endDate", "end_date")))
        dates = " - ".join(part for part in (start, end) if part)

    entry = EducationEntry(
        degree=degree,
        institution=_text(_first(item, ("institution", "school", "university", "college"))),
        dates=dates,
        gpa=_text(_first(item, ("gpa", "grade", "score"))),
    )
    return entry if entry != EducationEntry() else None


def _project_entry(item: Any) -> ProjectEntry | None:
    if isinstance(item, str):
        description = normalize_block(item)
        return ProjectEntry(description=description) if description else None
    if not isinstance(item, Mapping):
        return None

    links: list[str] = []
    for key in ("link", "url", "github", "demo", "links"):
        for value in _items(item.get(key)):
            clean = _text(value)
            if clean and clean not in links:
                links.append(clean)
    entry = ProjectEntry(
        title=_text(_first(item, ("title", "name"))),
        description=_text_block(_first(item, ("description", "summary", "details"))),
        technologies=_skills(_first(item, ("technologies", "tech", "stack", "techStack", "tech_stack"))),
        links=tuple(links),
    )
    return entry if entry != ProjectEntry() else None


def _certification(item: Any) -> Certification | None:
    if isinstance(item, str):
        name = normalize_line(item)
        return Certification(name=name) if name else None
    if not isinstance(item, Mapping):
        return None
    entry = Certification(
        name=_text(_first(item, ("name", "title"))),
        issuer=_text(_first(item, ("issuer", "organization", "authority"))),
        date=_text(_first(item, ("date", "year", "issued", "issueDate"))),
    )
    return entry if entry.name else None


def _entries(value: Any, build) -> tuple:
    output = []
    for item in _items(value):
        entry = build(item)
        if entry is not None:
            output.append(entry)
    return tuple(output)


def _section_order(raw: Mapping[str, Any], sections: Mapping[str, Any]) -> tuple[str, ...]:
    present = {
        "summary": bool(sections["summary"]),
        "experience": bool(sections["experience"]),
        "education": bool(sections["education"]),
        "skills": bool(sections["skills"].all_skills()),
        "projects": bool(sections["projects"]),
        "achievements": any(
            sections[key] for key in ("certifications", "awards", "publications", "volunteering")
        ),
    }
    order: list[str] = []
    for key in raw:
        section = _SECTION_FOR_KEY.get(str(key))
        if section and present[section] and section not in order:
            order.append(section)
    return tuple(order)


def normalize_resume(raw: Any) -> ResumeProfile:
    """Decode a loosely-structured resume record into a fully-defaulted ResumeProfile.

    Accepts both the canonical field names (``personal``, ``summary``,
    ``experience[].title``) and the resume-builder record names
    (``personalInfo.fullName``, ``professionalSummary``, ``experience[].jobTitle``,
    ``additionalDetails``). Missing or malformed fields fall back to empty
    defaults; only a non-mapping input is rejected.
    """
    if isinstance(raw, BaseModel):
        raw = raw.model_dump()
    if not isinstance(raw, Mapping):
        raise InvalidInputKind(type(raw).__name__)

    top_level_achievements = raw.get("achievements")
    additional = _mapping(_first(raw, _ADDITIONAL_KEYS))
    if not additional and isinstance(top_level_achievements, Mapping):
        additional = top_level_achievements
        top_level_achievements = None

    sections: dict[str, Any] = {
        "summary": _text_block(_first(raw, _SUMMARY_KEYS)),
        "experience": _entries(_first(raw, _EXPERIENCE_KEYS), _experience_entry),
        "education": _entries(_first(raw, _EDUCATION_KEYS), _education_entry),
        "skills": _skill_set(_first(raw, _SKILLS_KEYS)),
        "projects": _entries(_first(raw, _PROJECTS_KEYS), _project_entry),
        "certifications": _entries(_first(raw, _CERTIFICATION_KEYS), _certification),
        "awards": (
            _strings(additional.get("awards"))
            + _strings(raw.get("awards"))
            + _strings(raw.get("honors"))
            + _strings(top_level_achievements)
        ),
        "publications": _strings(additional.get("publications")) + _strings(raw.get("publications")),
        "volunteering": _strings(additional.get("volunteering")) + _strings(raw.get("volunteering")),
    }
    return ResumeProfile(
        personal=_personal(raw),
        target_industry=matching_key(_text(_first(raw, _INDUSTRY_KEYS))),
        section_order=_section_order(raw, sections),
        **sections,
    )
