from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Priority = Literal["high", "medium", "low"]
IndustrySource = Literal["stated", "detected", "none"]

CATEGORY_KEYS: tuple[str, ...] = (
    "personalInfo",
    "experience",
    "education",
    "skills",
    "structure",
    "achievements",
)


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Finding(BaseModel):
    """One scored check inside a category: a bonus when earned == possible."""

    model_config = ConfigDict(frozen=True)

    message: str
    earned: int = Field(default=0, ge=0)
    possible: int = Field(default=0, ge=0)
    advice: str | None = None

    @property
    def gap(self) -> int:
        return max(self.possible - self.earned, 0)


class CategoryResult(_WireModel):
    score: int = Field(ge=0)
    max_score: int = Field(ge=0)
    details: list[str] = Field(default_factory=list)
    findings: list[Finding] = Field(default_factory=list, exclude=True)

    @model_validator(mode="after")
    def _score_within_max(self) -> "CategoryResult":
        if self.score > self.max_score:
            raise ValueError(f"score {self.score} exceeds max_score {self.max_score}")
        return self


class CategoryBreakdown(_WireModel):
    personal_info: CategoryResult
    experience: CategoryResult
    education: CategoryResult
    skills: CategoryResult
    structure: CategoryResult
    achievements: CategoryResult

    def items(self) -> list[tuple[str, CategoryResult]]:
        """(wire key, result) pairs in fixed category order."""
        return [
            ("personalInfo", self.personal_info),
            ("experience", self.experience),
            ("education", self.education),
            ("skills", self.skills),
            ("structure", self.structure),
            ("achievements", self.achievements),
        ]


class Suggestion(_WireModel):
    priority: Priority
    category: str
    suggestion: str
    impact: int = Field(ge=0)


class AnalysisMetadata(_WireModel):
    version: str
    detected_industry: str | None = None
    industry_source: IndustrySource = "none"
    resume_keyword_count: int = Field(default=0, ge=0)
    job_keyword_count: int | None = None


class AnalysisResult(_WireModel):
    ats_score: int = Field(ge=0, le=100)
    breakdown: CategoryBreakdown
    match_percentage: int | None = Field(default=None, ge=0, le=100)
    missing_skills: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    suggestions: list[Suggestion] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    metadata: AnalysisMetadata
