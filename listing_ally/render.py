# listing_ally/render.py
from typing import List

from .models import AnalysisResult, OptimizationSuggestion, PipelineFailure

SECTION_TITLES = {
    "brand-voice": "Brand Voice",
    "bullets": "Bullet Points",
    "description": "Description",
}

def _blockquote(text):
    if not text:
        return ">\n"
    return "> " + text.replace("\n", "\n> ") + "\n"

def _cell(value):
    text = (value or "").strip() if isinstance(value, str) else ("" if value is None else str(value))
    if not text:
        text = "(empty)"
    return text.replace("|", "\\|").replace("\n", "<br>")

def _join_bullets(items):
    if not items:
        return "(none)"
    return _cell("<br>".join(f"{idx+1}. {item}" for idx, item in enumerate(items)))

def _suggestion_block(i: int, s: OptimizationSuggestion) -> List[str]:
    lines = [f"### {i}. {SECTION_TITLES.get(s.type.value, s.type.value)}"]
    lines.append("**Current**")
    lines.append(_blockquote(s.current))
    lines.append("**Suggested**")
    lines.append(_blockquote(s.suggested))
    lines.append(f"_Reasoning:_ {s.reasoning}")
    if s.improvements:
        lines.append("_Improvements:_ " + "; ".join(s.improvements))
    lines.append("")
    return lines

def render_markdown_report(result: AnalysisResult) -> str:
    p = result.product
    lines = []
    lines.append(f"# Listing Optimization: {p.identifier or '(unknown ASIN)'}")
    lines.append(f"**Title:** {p.title or ''}\n")

    lines.append("## Summary")
    lines.append(f"- SEO score: **{result.seo_score}** / 100")
    lines.append(f"- BSR potential improvement: **{result.bsr_potential}%**")
    if result.keyword_opportunities:
        lines.append("- Keyword opportunities: " + ", ".join(result.keyword_opportunities))
    else:
        lines.append("- Keyword opportunities: (none)")
    lines.append("")

    lines.append("## Listing Snapshot")
    lines.append("| Field | Value |")
    lines.append("|---|---|")
    lines.append(f"| ASIN | {_cell(p.identifier)} |")
    lines.append(f"| Title | {_cell(p.title)} |")
    lines.append(f"| Brand | {_cell(p.brand or '(unknown)')} |")
    lines.append(f"| Price | {_cell(p.price)} |")
    lines.append(f"| Category | {_cell(p.category or '(unknown)')} |")
    if p.rating is not None:
        reviews = f" ({p.review_count:,} reviews)" if p.review_count is not None else ""
        lines.append(f"| Rating | {p.rating:g}{reviews} |")
    if p.rank is not None:
        lines.append(f"| Best Sellers Rank | #{p.rank:,} |")
    lines.append(f"| Bullet Count | {len(p.bullets)} |")
    lines.append(f"| Bullets | {_join_bullets(p.bullets)} |")
    lines.append(f"| Description | {_cell(p.description)} |")
    lines.append("")

    lines.append("## Suggested Edits")
    if not result.suggestions:
        lines.append("_No suggestions available._\n")
    for i, s in enumerate(result.suggestions, 1):
        lines.extend(_suggestion_block(i, s))

    return "\n".join(lines)

def render_failure(failure: PipelineFailure) -> str:
    return f"Analysis failed ({failure.reason.value}): {failure.message}"
