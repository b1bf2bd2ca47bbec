from ats_engine.normalize.normalize_resume import InvalidInputKind
from ats_engine.services.analysis_service import analyze

__all__ = ["InvalidInputKind", "analyze"]
