"""Split a gap analysis into its A/B/C report sections."""

from __future__ import annotations

import re

from app.schemas.analysis import AnalysisSections

_SECTION_A = re.compile(
    r"##\s*A\)\s*Algorithmically Important Content[^\n]*\n(.*?)(?=##\s*B\)|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_SECTION_B = re.compile(
    r"##\s*B\)\s*Missing or Weak Content Signals[^\n]*\n(.*?)(?=##\s*C\)|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_SECTION_C = re.compile(
    r"##\s*C\)\s*Search-Engine-Optimized Content Additions[^\n]*\n(.*)\Z",
    re.IGNORECASE | re.DOTALL,
)


def _extract(pattern: re.Pattern[str], text: str, label: str) -> str:
    match = pattern.search(text)
    if match is None:
        return f"No content found for Section {label}"
    return match.group(1).strip()


def parse_analysis_sections(text: str) -> AnalysisSections:
    """Extract the three report sections from the model output.

    Missing sections get a fixed placeholder instead of failing, since the
    model does not always follow the requested layout.

    Args:
        text: Raw analysis text.

    Returns:
        AnalysisSections with stripped section bodies.
    """
    return AnalysisSections(
        section_a=_extract(_SECTION_A, text, "A"),
        section_b=_extract(_SECTION_B, text, "B"),
        section_c=_extract(_SECTION_C, text, "C"),
    )
