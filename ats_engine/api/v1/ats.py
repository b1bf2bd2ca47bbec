from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from ats_engine.core.rate_limit import analysis_rate_limit
from ats_engine.normalize.normalize_resume import InvalidInputKind
from ats_engine.schemas.analysis import AnalysisResult
from ats_engine.schemas.api import AnalyzeRequest, IndustriesResponse, IndustryInfo
from ats_engine.services.analysis_service import analyze
from ats_engine.taxonomy import get_default_reference_provider

router = APIRouter()


@router.post("/ats/analyze", response_model=AnalysisResult, response_model_by_alias=True)
@analysis_rate_limit()
async def ats_analyze(request: Request, payload: AnalyzeRequest):
    _ = request
    try:
        return analyze(payload.resume, payload.job_description, industry=payload.industry)
    except InvalidInputKind as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc


@router.get("/ats/industries", response_model=IndustriesResponse, response_model_by_alias=True)
async def ats_industries():
    provider = get_default_reference_provider()
    return IndustriesResponse(
        industries=[
            IndustryInfo(id=dictionary.id, label=dictionary.label, term_count=len(dictionary.terms))
            for dictionary in provider.industries()
        ]
    )
