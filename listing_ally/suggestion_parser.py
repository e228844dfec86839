"""
Parser for the optimization reply returned by the generation service.

The reply is lossy, free-form text, so parsing is best-effort: malformed
segments are dropped and missing summary lines fall back to defaults.
Nothing in here raises.

Each `---` segment runs through a two-state machine:

    EXPECT_TYPE  --first line holds `TYPE: <known type>`-->  SCAN_FIELDS
    EXPECT_TYPE  --anything else-->                       (segment skipped)

In SCAN_FIELDS every remaining line is checked against the field prefixes.
The first line carrying a prefix fixes that field; later duplicates are
ignored, even when the first one was empty. Field order is free.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Optional

from .models import OptimizationSuggestion, SuggestionBundle, SuggestionType

SEGMENT_DELIMITER = "---"
DEFAULT_REASONING = "Optimized for better search visibility and conversion"
DEFAULT_SEO_SCORE = 50
DEFAULT_BSR_POTENTIAL = 20

TYPE_LINE = re.compile(r"TYPE:\s*(brand-voice|bullets|description)", re.I)
SEO_SCORE_LINE = re.compile(r"SEO Score \(1-100\):\s*(\d+)")
BSR_LINE = re.compile(r"BSR Potential Improvement:\s*(-?\d+)%")
KEYWORDS_LINE = re.compile(r"Top Keyword Opportunities:\s*(.+)")

FIELD_PREFIXES = {
    "CURRENT:": "current",
    "SUGGESTED:": "suggested",
    "REASONING:": "reasoning",
}


class _State(Enum):
    EXPECT_TYPE = "expect_type"
    SCAN_FIELDS = "scan_fields"


def _match_type(line: str) -> Optional[SuggestionType]:
    m = TYPE_LINE.search(line)
    return SuggestionType(m.group(1).lower()) if m else None


def _match_field(line: str):
    stripped = line.lstrip()
    for prefix, name in FIELD_PREFIXES.items():
        if stripped.startswith(prefix):
            return name, stripped[len(prefix):].strip()
    return None


def parse_segment(segment: str) -> Optional[OptimizationSuggestion]:
    lines = segment.strip().splitlines()
    if not lines:
        return None

    state = _State.EXPECT_TYPE
    kind: Optional[SuggestionType] = None
    fields: Dict[str, str] = {}

    for line in lines:
        if state is _State.EXPECT_TYPE:
            kind = _match_type(line)
            if kind is None:
                return None
            state = _State.SCAN_FIELDS
            continue
        hit = _match_field(line)
        if hit is not None:
            name, value = hit
            fields.setdefault(name, value)

    current = fields.get("current", "")
    suggested = fields.get("suggested", "")
    if kind is None or not current or not suggested:
        return None
    return OptimizationSuggestion(
        type=kind,
        current=current,
        suggested=suggested,
        reasoning=fields.get("reasoning") or DEFAULT_REASONING,
        improvements=[],
    )


def parse_suggestions(reply: str) -> List[OptimizationSuggestion]:
    out = []
    for segment in (reply or "").split(SEGMENT_DELIMITER):
        suggestion = parse_segment(segment)
        if suggestion is not None:
            out.append(suggestion)
    return out


def _int_or(pattern: re.Pattern, text: str, default: int) -> int:
    m = pattern.search(text)
    return int(m.group(1)) if m else default


def parse_keywords(reply: str) -> List[str]:
    # Empty tokens from stray commas are dropped.
    m = KEYWORDS_LINE.search(reply or "")
    if not m:
        return []
    return [k.strip() for k in m.group(1).split(",") if k.strip()]


def parse(reply: str) -> SuggestionBundle:
    text = reply or ""
    return SuggestionBundle(
        suggestions=parse_suggestions(text),
        seo_score=_int_or(SEO_SCORE_LINE, text, DEFAULT_SEO_SCORE),
        bsr_potential=_int_or(BSR_LINE, text, DEFAULT_BSR_POTENTIAL),
        keyword_opportunities=parse_keywords(text),
    )
