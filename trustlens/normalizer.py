"""Turn raw provider text into an AnalysisResult.

Providers are asked for bare JSON but still wrap it in markdown fences or add a
sentence before/after it. `normalize` digs the object out; `format_result`
fills every missing field so callers always get a complete result.
"""
from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any, Sequence

from .classifier import classify
from .models import AnalysisResult, Breakdown, ReportDraft

MAX_SOURCES = 4

DEFAULT_REASON = "Analysis based on domain patterns."
DEFAULT_ADVICE = "Proceed with caution. Verify the seller independently before purchasing."
DEFAULT_BREAKDOWN_ITEM = "Data unavailable."

_FENCE_OPEN_RE = re.compile(r"^\s*```[a-zA-Z0-9_-]*[ \t]*\n?")
_FENCE_CLOSE_RE = re.compile(r"\n?```\s*$")


class ParseError(ValueError):
    """No JSON object could be recovered from the provider text."""


def strip_code_fences(text: str) -> str:
    text = _FENCE_OPEN_RE.sub("", text, count=1)
    text = _FENCE_CLOSE_RE.sub("", text, count=1)
    return text.strip()


def normalize(raw_text: str | None) -> dict[str, Any]:
    text = strip_code_fences(raw_text or "")

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise ParseError(f"no JSON object in provider text ({len(text)} chars)")
    text = text[start : end + 1]

    try:
        parsed = json.loads(text)
    except ValueError as e:
        raise ParseError(f"malformed JSON from provider: {e}") from e

    if not isinstance(parsed, dict):
        raise ParseError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def format_result(
    parsed: dict[str, Any],
    *,
    url: str,
    sources: Sequence[str] = (),
) -> AnalysisResult:
    draft = ReportDraft.model_validate(parsed)

    score = 0
    if draft.trust_score is not None:
        score = max(0, min(100, int(round(draft.trust_score))))

    slots = draft.breakdown.model_dump() if draft.breakdown else {}
    breakdown = Breakdown(
        **{
            name: slots.get(name) or [DEFAULT_BREAKDOWN_ITEM]
            for name in ("reviews", "sentiment", "price", "seller", "description")
        }
    )

    return AnalysisResult(
        trust_score=score,
        verdict=classify(draft.verdict),
        reasons=draft.reasons or [DEFAULT_REASON],
        advice=draft.advice or DEFAULT_ADVICE,
        breakdown=breakdown,
        sources=list(sources)[:MAX_SOURCES],
        url=url,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
