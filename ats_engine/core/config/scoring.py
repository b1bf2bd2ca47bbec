from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from . import settings

_DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "scoring.yaml"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class CategoryConfig(_FrozenModel):
    max_score: int = Field(ge=0, le=100)
    attention_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    points: dict[str, int]

    @model_validator(mode="after")
    def _points_fill_max_score(self) -> "CategoryConfig":
        if sum(self.points.values()) != self.max_score:
            raise ValueError(
                f"points {dict(self.points)} must sum to max_score={self.max_score}"
            )
        return self


class PersonalInfoConfig(CategoryConfig):
    email_invalid_points: int = 1
    phone_digits: tuple[int, int] = (7, 15)


class ExperienceConfig(CategoryConfig):
    entry_points: tuple[int, ...]
    quantified_target: int = Field(ge=1)
    description_words: tuple[int, int]
    too_long_credit: float = Field(ge=0.0, le=1.0)


class EducationConfig(CategoryConfig):
    pass


class SkillsConfig(CategoryConfig):
    technical_band: tuple[int, int]
    overlap_target: int = Field(ge=1)


class StructureConfig(CategoryConfig):
    summary_words: tuple[int, int]


class AchievementsConfig(CategoryConfig):
    count_points: tuple[int, ...]
    specificity_target: int = Field(ge=1)


class CategoriesConfig(_FrozenModel):
    personal_info: PersonalInfoConfig
    experience: ExperienceConfig
    education: EducationConfig
    skills: SkillsConfig
    structure: StructureConfig
    achievements: AchievementsConfig

    @model_validator(mode="after")
    def _weights_sum_to_100(self) -> "CategoriesConfig":
        total = sum(
            category.max_score
            for category in (
                self.personal_info,
                self.experience,
                self.education,
                self.skills,
                self.structure,
                self.achievements,
            )
        )
        if total != 100:
            raise ValueError(f"category max scores must sum to 100, got {total}")
        return self


class ThresholdsConfig(_FrozenModel):
    high_priority_below: float = 0.5
    medium_priority_below: float = 0.8


class MatchingConfig(_FrozenModel):
    high_priority_below: int = 50
    medium_priority_below: int = 80
    max_terms_per_suggestion: int = Field(default=6, ge=1)


class NextStepsConfig(_FrozenModel):
    strong_from: int = 80
    fair_from: int = 60


class ResultLimitsConfig(_FrozenModel):
    strengths: int = Field(default=8, ge=0)
    recommendations: int = Field(default=10, ge=0)


class KeywordConfig(_FrozenModel):
    min_token_length: int = Field(default=3, ge=1)
    min_stem_length: int = Field(default=4, ge=1)
    suffixes: tuple[str, ...] = ("ing", "ed", "s")
    stop_words: frozenset[str] = frozenset()

    @field_validator("stop_words", mode="before")
    @classmethod
    def _lower_stop_words(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(str(item).strip().lower() for item in value)
        return value


class ScoringConfig(_FrozenModel):
    version: str
    thresholds: ThresholdsConfig = Field(default_factory=ThresholdsConfig)
    categories: CategoriesConfig
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    next_steps: NextStepsConfig = Field(default_factory=NextStepsConfig)
    result_limits: ResultLimitsConfig = Field(default_factory=ResultLimitsConfig)
    keywords: KeywordConfig = Field(default_factory=KeywordConfig)
    action_verbs: frozenset[str] = frozenset()

    @field_validator("version", mode="before")
    @classmethod
    def _stringify_version(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator("action_verbs", mode="before")
    @classmethod
    def _lower_verbs(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(str(item).strip().lower() for item in value)
        return value


def _resolve_path(path: str | Path | None) -> Path:
    if path:
        return Path(path)
    if settings.scoring_config_path:
        return Path(settings.scoring_config_path)
    return _DEFAULT_SCORING_CONFIG_PATH


@lru_cache(maxsize=4)
def _load_scoring_document(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise RuntimeError(
            f"Scoring config not found at '{path}'. "
            "Expected file: config/scoring.yaml"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid scoring config '{path}': expected a top-level mapping."
        )
    return parsed


@lru_cache(maxsize=4)
def _build_scoring_config(path: Path) -> ScoringConfig:
    document = _load_scoring_document(path)
    try:
        return ScoringConfig.model_validate(document)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid scoring config '{path}': {exc}") from exc


def load_scoring_config(path: str | Path) -> ScoringConfig:
    """Load and validate a scoring config from an explicit YAML file."""
    return _build_scoring_config(Path(path).resolve())


def get_scoring_config() -> ScoringConfig:
    """Return the validated scoring config for this process."""
    return _build_scoring_config(_resolve_path(None).resolve())


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'categories.skills.max_score'."""
    if not path:
        return default

    current: Any = _load_scoring_document(_resolve_path(None).resolve())
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current
