"""Prompt templates for gap analysis and content generation."""

from __future__ import annotations

from dataclasses import dataclass

# Bump when a template changes so cached results are not reused.
PROMPT_VERSION = "v1"

SECTION_A_TITLE = "Algorithmically Important Content on the High-Ranking Page"
SECTION_B_TITLE = "Missing or Weak Content Signals on the Low-Ranking Page"
SECTION_C_TITLE = "Search-Engine-Optimized Content Additions"


@dataclass(frozen=True)
class PageComparison:
    """Validated inputs shared by both prompt templates."""

    primary_keyword: str
    city: str
    state: str
    high_ranking_url: str
    low_ranking_url: str

    @property
    def location(self) -> str:
        return f"{self.city}, {self.state}"


def build_analysis_prompt(page: PageComparison) -> str:
    """Build the gap analysis prompt.

    The model is asked for three fixed ``## A)``/``## B)``/``## C)`` headings
    so the reply can be split by ``parse_analysis_sections``.

    Args:
        page: Keyword, location and the two competitor URLs.

    Returns:
        Prompt string for the LLM.
    """
    return f"""
You are an SEO analyst focused exclusively on Google ranking signals, not user experience.

Your task is to evaluate content purely from Google's perspective, identifying what content elements exist on a top-ranking local page that are missing or underrepresented on a weaker page.

**IMPORTANT RULES:**
- Ignore whether content is engaging or readable for users
- Assume the primary audience is search engine algorithms
- Analyze only on-page content and headings
- Do NOT consider: backlinks, page speed, UX, design, conversions, schema, internal/external links

**Analysis Parameters:**
- Primary Keyword: {page.primary_keyword}
- Target Location: {page.location}
- High-Ranking Page URL: {page.high_ranking_url}
- Low-Ranking Page URL: {page.low_ranking_url}

**Evaluation Criteria (Algorithmic Lens):**

1. **Keyword & Entity Coverage**
- Primary keyword variants
- Secondary and supporting entities for the topic
- Geographic entity saturation for {page.location}

2. **Topical Completeness**
- Coverage of expected subtopics for a local "{page.primary_keyword}" page
- Missing procedural or contextual sections

3. **Heading Signals**
- H1/H2/H3 patterns aligned with SERP leaders
- Missing topic clusters

4. **Content Depth Signals**
- Section depth (thin vs developed)
- Explanatory blocks reinforcing topical authority

---

**OUTPUT STRUCTURE (REQUIRED):**

## A) {SECTION_A_TITLE}

List topics, headings, and content blocks contributing to ranking strength. Explain WHY each element matters algorithmically.

## B) {SECTION_B_TITLE}

List specific content gaps relative to the high-ranking page. Be precise about what is missing and where it should appear.

## C) {SECTION_C_TITLE}

For each gap, provide:
- **Suggested Heading** (H1/H2/H3 level specified)
- **Content Block** (1-2 paragraphs written to reinforce topical authority, expand geographic entity coverage and increase semantic redundancy)

**Content Requirements:**
- Neutral and informational
- Written for search engines, not persuasion
- No fluff or marketing language
- No competitor mentions

---

Begin your analysis now.
""".strip()


def build_content_prompt(page: PageComparison, analysis: str) -> str:
    """Build the prompt that turns a gap analysis into a full page draft.

    Args:
        page: Keyword, location and the two competitor URLs.
        analysis: Gap analysis text produced by a previous analysis call.

    Returns:
        Prompt string for the LLM.
    """
    return f"""
You are an SEO content writer. Using the gap analysis below, write the complete rewritten content for the low-ranking page so that it closes every gap identified.

**Page Parameters:**
- Primary Keyword: {page.primary_keyword}
- Target Location: {page.location}
- Page To Rewrite: {page.low_ranking_url}
- Reference (High-Ranking) Page: {page.high_ranking_url}

**Writing Rules:**
- Output the full page as markdown, starting with a single H1 that contains the primary keyword and location
- Use H2/H3 headings for every topic cluster named in the analysis
- Incorporate every content addition from section C, expanded where thin
- Mention {page.location} and nearby geographic entities naturally throughout
- Neutral, informational tone; no competitor mentions; no placeholder text

**GAP ANALYSIS:**
{analysis}

Return only the page content.
""".strip()
