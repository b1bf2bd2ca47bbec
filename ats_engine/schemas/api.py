from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ats_engine.core.config import settings


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalyzeRequest(_ApiModel):
    resume: Any = Field(default_factory=dict)
    job_description: str | None = Field(default=None, max_length=settings.max_job_description_chars)
    industry: str | None = Field(default=None, max_length=80)


class IndustryInfo(_ApiModel):
    id: str
    label: str
    term_count: int = Field(ge=0)


class IndustriesResponse(_ApiModel):
    industries: list[IndustryInfo] = Field(default_factory=list)


class HealthResponse(_ApiModel):
    status: str
    engine_version: str
