"""SEO gap analysis service orchestrating validation, caching and LLM calls.

This service turns a validated form submission into generated text. It handles:
- Required-field validation with a single aggregated error
- Prompt selection (gap analysis or content draft)
- Response caching by content hash
- Lazy LLM client resolution, so configuration problems surface per request
"""

import hashlib
import logging
from typing import Callable

from app.adapters.llm.base import AbstractLLMClient
from app.core.config import settings
from app.core.errors import ValidationAppError
from app.schemas.analysis import AnalyzeRequest, AnalyzeResponse
from app.services.prompts import (
    PROMPT_VERSION,
    PageComparison,
    build_analysis_prompt,
    build_content_prompt,
)
from app.services.section_parser import parse_analysis_sections
from app.utils.simple_cache import SimpleTTLCache

logger = logging.getLogger(__name__)

# attribute name -> wire name, in form order
REQUIRED_FIELDS: dict[str, str] = {
    "primary_keyword": "primaryKeyword",
    "city": "city",
    "state": "state",
    "high_ranking_url": "highRankingUrl",
    "low_ranking_url": "lowRankingUrl",
}


def _truncate(text: str, max_chars: int) -> tuple[str, bool]:
    """Truncate text to max_chars if needed.

    Args:
        text: Input text to potentially truncate.
        max_chars: Maximum allowed character count.

    Returns:
        Tuple of (truncated_text, was_truncated).
    """
    if len(text) <= max_chars:
        return text, False
    return text[:max_chars], True


def _hash_inputs(mode: str, page: PageComparison, analysis: str | None = None) -> str:
    """Generate deterministic hash for cache key.

    Includes prompt version to invalidate cache when prompt logic changes.

    Returns:
        SHA256 hex digest string.
    """
    parts = [
        PROMPT_VERSION,
        mode,
        page.primary_keyword,
        page.city,
        page.state,
        page.high_ranking_url,
        page.low_ranking_url,
        analysis or "",
    ]
    raw = "::".join(parts).encode("utf-8", errors="ignore")
    return hashlib.sha256(raw).hexdigest()


class AnalysisService:
    """Service producing gap analyses and content drafts with an LLM.

    Attributes:
        cache: TTL cache for generated text, or None to disable caching.
    """

    def __init__(
        self,
        llm_factory: Callable[[], AbstractLLMClient],
        cache: SimpleTTLCache | None = None,
    ) -> None:
        """Initialize analysis service with dependencies.

        Args:
            llm_factory: Zero-argument callable returning a configured client.
                Called on first use, after the request has been validated.
            cache: Cache instance for storing results.
        """
        self._llm_factory = llm_factory
        self._llm: AbstractLLMClient | None = None
        self.cache = cache

    def _get_llm(self) -> AbstractLLMClient:
        if self._llm is None:
            self._llm = self._llm_factory()
        return self._llm

    def _validate_request(self, request: AnalyzeRequest) -> PageComparison:
        """Check the five required fields and return them stripped.

        Args:
            request: Submitted payload.

        Returns:
            PageComparison with whitespace-trimmed values.

        Raises:
            ValidationAppError: If any field is missing/blank or too long.
        """
        values: dict[str, str] = {}
        missing: list[str] = []
        for attr, wire_name in REQUIRED_FIELDS.items():
            value = (getattr(request, attr) or "").strip()
            if not value:
                missing.append(wire_name)
            values[attr] = value

        if missing:
            raise ValidationAppError(
                code="missing_required_fields",
                message="Missing required fields",
                details={"missing_fields": missing},
            )

        max_chars = settings.app.max_field_chars
        for attr, wire_name in REQUIRED_FIELDS.items():
            if len(values[attr]) > max_chars:
                raise ValidationAppError(
                    code="field_too_long",
                    message=f"Field '{wire_name}' exceeds {max_chars} characters",
                    details={
                        "field": wire_name,
                        "max_chars": max_chars,
                        "actual_chars": len(values[attr]),
                    },
                )

        return PageComparison(**values)

    def _prepare_analysis(self, analysis: str | None) -> str:
        """Validate and truncate the prior analysis required in content mode.

        Raises:
            ValidationAppError: If the analysis is missing or blank.
        """
        text = (analysis or "").strip()
        if not text:
            raise ValidationAppError(
                code="missing_analysis",
                message="Content mode requires the 'analysis' from a previous analysis call",
                details={"field": "analysis"},
            )

        text, truncated = _truncate(text, settings.app.max_analysis_chars)
        if truncated:
            logger.warning(
                "analysis.input_truncated",
                extra={"max_chars": settings.app.max_analysis_chars},
            )
        return text

    def _build_prompt(self, mode: str, page: PageComparison, analysis: str | None) -> str:
        if mode == "content":
            return build_content_prompt(page, analysis or "")
        return build_analysis_prompt(page)

    def _build_response(self, mode: str, text: str, *, cached: bool) -> AnalyzeResponse:
        return AnalyzeResponse(
            analysis=text,
            mode=mode,
            cached=cached,
            sections=parse_analysis_sections(text) if mode == "analysis" else None,
        )

    async def run(self, request: AnalyzeRequest) -> AnalyzeResponse:
        """Validate the submission and return generated text.

        Args:
            request: Submitted payload.

        Returns:
            AnalyzeResponse carrying the model text unmodified.

        Raises:
            ValidationAppError: If required inputs are missing or invalid.
            ConfigurationAppError: If the LLM client cannot be configured.
            LLMAppError: If the provider call fails.
        """
        mode = request.mode

        # Step 1: Validate inputs
        page = self._validate_request(request)
        analysis = self._prepare_analysis(request.analysis) if mode == "content" else None

        # Step 2: Check cache
        cache_key = _hash_inputs(mode, page, analysis)
        if self.cache is not None:
            cached_text = self.cache.get(cache_key)
            if cached_text is not None:
                logger.info(
                    "analysis.cache_hit",
                    extra={"mode": mode, "cache": self.cache.stats()},
                )
                return self._build_response(mode, cached_text, cached=True)

        # Step 3: Generate fresh text via LLM
        prompt = self._build_prompt(mode, page, analysis)
        llm = self._get_llm()
        text = await llm.generate_text(prompt)

        logger.info(
            "analysis.generated",
            extra={
                "mode": mode,
                "provider": llm.provider,
                "model": llm.model,
                "prompt_chars": len(prompt),
                "output_chars": len(text),
            },
        )

        # Step 4: Cache the result
        if self.cache is not None:
            self.cache.set(cache_key, text)

        return self._build_response(mode, text, cached=False)
