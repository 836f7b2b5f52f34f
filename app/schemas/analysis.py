"""Pydantic schemas for SEO gap analysis requests and responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AnalysisMode = Literal["analysis", "content"]


class AnalyzeRequest(BaseModel):
    """Payload submitted by the form.

    Wire names are camelCase. Every field is optional at the schema level so
    that blank or missing values are reported together by the service as a
    single ``missing_required_fields`` error.
    """

    model_config = ConfigDict(populate_by_name=True)

    primary_keyword: str | None = Field(
        None,
        alias="primaryKeyword",
        description="Target keyword, e.g. 'car accident lawyer'.",
    )
    city: str | None = Field(None, description="Target city.")
    state: str | None = Field(None, description="Target state.")
    high_ranking_url: str | None = Field(
        None,
        alias="highRankingUrl",
        description="URL of the competitor page that ranks well.",
    )
    low_ranking_url: str | None = Field(
        None,
        alias="lowRankingUrl",
        description="URL of the page that ranks poorly.",
    )
    mode: AnalysisMode = Field(
        "analysis",
        description="'analysis' for the gap report, 'content' for a rewritten draft.",
    )
    analysis: str | None = Field(
        None,
        description="Gap analysis text from a previous call; required in content mode.",
    )


class AnalysisSections(BaseModel):
    """The three report sections extracted from an analysis."""

    section_a: str = Field(
        ...,
        description="Algorithmically important content on the high-ranking page.",
    )
    section_b: str = Field(
        ...,
        description="Missing or weak content signals on the low-ranking page.",
    )
    section_c: str = Field(
        ...,
        description="Search-engine-optimized content additions.",
    )


class AnalyzeResponse(BaseModel):
    """Generated text relayed to the caller."""

    success: bool = Field(default=True)
    analysis: str = Field(
        ...,
        description="Model output, relayed unmodified (gap report or content draft).",
    )
    mode: AnalysisMode = Field(default="analysis")
    cached: bool = Field(
        default=False,
        description="True if the text was served from cache (same inputs previously analyzed).",
    )
    sections: AnalysisSections | None = Field(
        default=None,
        description="Parsed report sections; only present in analysis mode.",
    )
