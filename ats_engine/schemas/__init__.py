from .analysis import (
    CATEGORY_KEYS,
    AnalysisMetadata,
    AnalysisResult,
    CategoryBreakdown,
    CategoryResult,
    Finding,
    Suggestion,
)
from .profile import (
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

__all__ = [
    "CATEGORY_KEYS",
    "AnalysisMetadata",
    "AnalysisResult",
    "CategoryBreakdown",
    "CategoryResult",
    "Finding",
    "Suggestion",
    "Certification",
    "EducationEntry",
    "ExperienceEntry",
    "PersonalInfo",
    "ProfileLink",
    "ProjectEntry",
    "ResumeProfile",
    "Skill",
    "SkillSet",
]
