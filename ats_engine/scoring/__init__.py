from .achievements import score_achievements
from .aggregate import JobMatch, aggregate_score, match_job
from .base import FindingRecorder, round_half_up
from .education import score_education
from .experience import score_experience
from .personal_info import score_personal_info
from .skills import score_skills
from .structure import score_structure
from .suggestions import (
    build_suggestions,
    collect_recommendations,
    collect_strengths,
    needs_attention,
    next_steps,
)

__all__ = [
    "score_achievements",
    "JobMatch",
    "aggregate_score",
    "match_job",
    "FindingRecorder",
    "round_half_up",
    "score_education",
    "score_experience",
    "score_personal_info",
    "score_skills",
    "score_structure",
    "build_suggestions",
    "collect_recommendations",
    "collect_strengths",
    "needs_attention",
    "next_steps",
]
