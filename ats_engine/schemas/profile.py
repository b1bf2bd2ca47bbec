from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _ProfileModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Skill(_ProfileModel):
    display: str
    key: str


class ProfileLink(_ProfileModel):
    label: str = ""
    url: str


class PersonalInfo(_ProfileModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    job_title: str = ""
    links: tuple[ProfileLink, ...] = ()


class ExperienceEntry(_ProfileModel):
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""
    achievements: tuple[str, ...] = ()


class EducationEntry(_ProfileModel):
    degree: str = ""
    institution: str = ""
    dates: str = ""
    gpa: str = ""


class SkillSet(_ProfileModel):
    technical: tuple[Skill, ...] = ()
    tools: tuple[Skill, ...] = ()
    soft: tuple[Skill, ...] = ()
    languages: tuple[Skill, ...] = ()

    def all_skills(self) -> tuple[Skill, ...]:
        return self.technical + self.tools + self.soft + self.languages


class ProjectEntry(_ProfileModel):
    title: str = ""
    description: str = ""
    technologies: tuple[Skill, ...] = ()
    links: tuple[str, ...] = ()


class Certification(_ProfileModel):
    name: str = ""
    issuer: str = ""
    date: str = ""


class ResumeProfile(_ProfileModel):
    """Canonical, fully-defaulted resume used by every scoring stage."""

    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    experience: tuple[ExperienceEntry, ...] = ()
    education: tuple[EducationEntry, ...] = ()
    skills: SkillSet = Field(default_factory=SkillSet)
    projects: tuple[ProjectEntry, ...] = ()
    certifications: tuple[Certification, ...] = ()
    awards: tuple[str, ...] = ()
    publications: tuple[str, ...] = ()
    volunteering: tuple[str, ...] = ()
    target_industry: str = ""
    section_order: tuple[str, ...] = ()
