"""SEO gap analysis endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.adapters.llm.factory import create_llm_client
from app.core.config import settings
from app.core.rate_limit import enforce_rate_limit
from app.schemas.analysis import AnalyzeRequest, AnalyzeResponse
from app.services.analysis_service import AnalysisService
from app.utils.simple_cache import SimpleTTLCache

router = APIRouter(tags=["Analysis"])

_analysis_service: AnalysisService | None = None


def get_analysis_service() -> AnalysisService:
    """Return the process-wide analysis service, creating it on first use.

    The LLM client itself is resolved lazily by the service, so a missing API
    key is reported per request instead of failing at import time.
    """
    global _analysis_service

    if _analysis_service is None:
        cache = (
            SimpleTTLCache(
                ttl_seconds=settings.app.cache_ttl_seconds,
                max_entries=settings.app.cache_max_entries,
            )
            if settings.app.cache_enabled
            else None
        )
        _analysis_service = AnalysisService(llm_factory=create_llm_client, cache=cache)
    return _analysis_service


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"description": "Missing or invalid fields"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Server configuration error or analysis failure"},
    },
)
async def analyze(
    payload: AnalyzeRequest | None = None,
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalyzeResponse:
    """Compare two competitor pages and return an SEO gap analysis.

    With ``mode="content"`` and the text of a previous analysis, returns a
    rewritten content draft for the low-ranking page instead.

    The caller's rate limit is checked before anything else; a rejected call
    never reaches validation or the LLM.
    """
    return await service.run(payload or AnalyzeRequest())
