"""Unit tests for AnalysisService."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.errors import ConfigurationAppError, LLMAppError, ValidationAppError
from app.schemas.analysis import AnalyzeRequest, AnalyzeResponse
from app.services.analysis_service import (
    AnalysisService,
    _hash_inputs,
    _truncate,
)
from app.services.prompts import PageComparison, build_analysis_prompt, build_content_prompt
from app.utils.simple_cache import SimpleTTLCache

SAMPLE_ANALYSIS = """## A) Algorithmically Important Content on the High-Ranking Page

- Dedicated H2 for statute of limitations

## B) Missing or Weak Content Signals on the Low-Ranking Page

- No local court references

## C) Search-Engine-Optimized Content Additions

### H2: Filing a Claim in Austin
Paragraph text.
"""


def _request(**overrides) -> AnalyzeRequest:
    data = {
        "primaryKeyword": "car accident lawyer",
        "city": "Austin",
        "state": "TX",
        "highRankingUrl": "https://winner.example.com/austin",
        "lowRankingUrl": "https://loser.example.com/austin",
    }
    data.update(overrides)
    return AnalyzeRequest.model_validate(data)


def _page() -> PageComparison:
    return PageComparison(
        primary_keyword="car accident lawyer",
        city="Austin",
        state="TX",
        high_ranking_url="https://winner.example.com/austin",
        low_ranking_url="https://loser.example.com/austin",
    )


def _service(llm: MagicMock, cache: SimpleTTLCache | None = None) -> AnalysisService:
    return AnalysisService(llm_factory=lambda: llm, cache=cache)


def _mock_llm(text: str = SAMPLE_ANALYSIS) -> MagicMock:
    llm = MagicMock()
    llm.provider = "anthropic"
    llm.model = "claude-sonnet-4-20250514"
    llm.generate_text = AsyncMock(return_value=text)
    return llm


class TestHelperFunctions:
    """Test module-level helper functions."""

    def test_truncate_exact_limit(self) -> None:
        text = "X" * 100
        result, was_truncated = _truncate(text, max_chars=100)

        assert result == text
        assert was_truncated is False

    def test_truncate_exceeds_limit(self) -> None:
        result, was_truncated = _truncate("X" * 150, max_chars=100)

        assert result == "X" * 100
        assert was_truncated is True

    def test_hash_inputs_deterministic(self) -> None:
        hash1 = _hash_inputs("analysis", _page())
        hash2 = _hash_inputs("analysis", _page())

        assert hash1 == hash2
        assert len(hash1) == 64

    def test_hash_inputs_depends_on_mode_and_analysis(self) -> None:
        base = _hash_inputs("analysis", _page())

        assert _hash_inputs("content", _page(), "text") != base
        assert _hash_inputs("content", _page(), "text") != _hash_inputs("content", _page(), "other")

    def test_analysis_prompt_includes_inputs_and_section_headings(self) -> None:
        prompt = build_analysis_prompt(_page())

        assert "car accident lawyer" in prompt
        assert "Austin, TX" in prompt
        assert "https://winner.example.com/austin" in prompt
        assert "https://loser.example.com/austin" in prompt
        assert "## A) Algorithmically Important Content" in prompt
        assert "## B) Missing or Weak Content Signals" in prompt
        assert "## C) Search-Engine-Optimized Content Additions" in prompt

    def test_content_prompt_embeds_previous_analysis(self) -> None:
        prompt = build_content_prompt(_page(), "PREVIOUS ANALYSIS BODY")

        assert "PREVIOUS ANALYSIS BODY" in prompt
        assert "https://loser.example.com/austin" in prompt


class TestAnalysisServiceValidation:
    """Test request validation."""

    def test_valid_request_returns_stripped_values(self) -> None:
        service = _service(_mock_llm())

        page = service._validate_request(_request(city="  Austin  "))

        assert page.city == "Austin"
        assert page.location == "Austin, TX"

    def test_missing_fields_are_reported_together(self) -> None:
        service = _service(_mock_llm())

        with pytest.raises(ValidationAppError) as exc_info:
            service._validate_request(AnalyzeRequest(city="Austin", state="   "))

        assert exc_info.value.code == "missing_required_fields"
        assert exc_info.value.message == "Missing required fields"
        assert exc_info.value.details["missing_fields"] == [
            "primaryKeyword",
            "state",
            "highRankingUrl",
            "lowRankingUrl",
        ]

    def test_overlong_field_is_rejected(self) -> None:
        service = _service(_mock_llm())

        with pytest.raises(ValidationAppError) as exc_info:
            service._validate_request(_request(highRankingUrl="https://x.example/" + "a" * 5000))

        assert exc_info.value.code == "field_too_long"
        assert exc_info.value.details["field"] == "highRankingUrl"

    def test_content_mode_requires_analysis(self) -> None:
        service = _service(_mock_llm())

        with pytest.raises(ValidationAppError) as exc_info:
            service._prepare_analysis("   ")

        assert exc_info.value.code == "missing_analysis"

    def test_content_mode_truncates_long_analysis(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from app.core.config import settings

        monkeypatch.setattr(settings.app, "max_analysis_chars", 10)
        service = _service(_mock_llm())

        assert service._prepare_analysis("A" * 50) == "A" * 10


class TestAnalysisServiceRun:
    """Integration tests for the full run workflow."""

    @pytest.mark.asyncio
    async def test_analysis_mode_relays_text_and_parses_sections(self) -> None:
        llm = _mock_llm()
        service = _service(llm, SimpleTTLCache(ttl_seconds=3600))

        result = await service.run(_request())

        assert isinstance(result, AnalyzeResponse)
        assert result.success is True
        assert result.analysis == SAMPLE_ANALYSIS
        assert result.mode == "analysis"
        assert result.cached is False
        assert result.sections is not None
        assert result.sections.section_a == "- Dedicated H2 for statute of limitations"
        assert result.sections.section_b == "- No local court references"
        assert result.sections.section_c.startswith("### H2: Filing a Claim in Austin")

        llm.generate_text.assert_awaited_once()
        prompt = llm.generate_text.await_args.args[0]
        assert "car accident lawyer" in prompt

    @pytest.mark.asyncio
    async def test_content_mode_uses_content_prompt_without_sections(self) -> None:
        llm = _mock_llm("# Car Accident Lawyer in Austin, TX\n\nDraft body.")
        service = _service(llm)

        result = await service.run(_request(mode="content", analysis=SAMPLE_ANALYSIS))

        assert result.mode == "content"
        assert result.sections is None
        assert result.analysis.startswith("# Car Accident Lawyer")
        prompt = llm.generate_text.await_args.args[0]
        assert "Dedicated H2 for statute of limitations" in prompt

    @pytest.mark.asyncio
    async def test_second_identical_request_is_served_from_cache(self) -> None:
        llm = _mock_llm()
        service = _service(llm, SimpleTTLCache(ttl_seconds=3600))

        first = await service.run(_request())
        second = await service.run(_request())

        assert first.cached is False
        assert second.cached is True
        assert second.analysis == first.analysis
        llm.generate_text.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_without_cache_every_request_calls_llm(self) -> None:
        llm = _mock_llm()
        service = _service(llm, cache=None)

        await service.run(_request())
        await service.run(_request())

        assert llm.generate_text.await_count == 2

    @pytest.mark.asyncio
    async def test_validation_failure_never_builds_llm_client(self) -> None:
        factory = MagicMock()
        service = AnalysisService(llm_factory=factory)

        with pytest.raises(ValidationAppError):
            await service.run(AnalyzeRequest())

        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_configuration_error_surfaces_after_validation(self) -> None:
        def _factory():
            raise ConfigurationAppError(code="llm_missing_api_key", message="Server configuration error")

        service = AnalysisService(llm_factory=_factory)

        with pytest.raises(ConfigurationAppError) as exc_info:
            await service.run(_request())

        assert exc_info.value.code == "llm_missing_api_key"

    @pytest.mark.asyncio
    async def test_llm_failure_is_not_cached(self) -> None:
        llm = _mock_llm()
        llm.generate_text = AsyncMock(
            side_effect=[LLMAppError(code="llm_request_failed", message="boom"), SAMPLE_ANALYSIS]
        )
        service = _service(llm, SimpleTTLCache(ttl_seconds=3600))

        with pytest.raises(LLMAppError):
            await service.run(_request())

        result = await service.run(_request())
        assert result.cached is False
        assert result.analysis == SAMPLE_ANALYSIS

    @pytest.mark.asyncio
    async def test_llm_client_is_created_once(self) -> None:
        llm = _mock_llm()
        factory = MagicMock(return_value=llm)
        service = AnalysisService(llm_factory=factory)

        await service.run(_request())
        await service.run(_request(city="Dallas"))

        factory.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_cache_hit_logs_cache_stats(self, caplog: pytest.LogCaptureFixture) -> None:
        service = _service(_mock_llm(), SimpleTTLCache(ttl_seconds=3600))

        await service.run(_request())
        with caplog.at_level(logging.INFO, logger="app.services.analysis_service"):
            await service.run(_request())

        record = next(r for r in caplog.records if r.getMessage() == "analysis.cache_hit")
        assert record.cache["hits"] == 1
        assert record.cache["entries"] == 1
