from __future__ import annotations

from typing import Any, Literal
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

Verdict = Literal["Genuine", "Suspicious", "Fake"]


class AnalyzeRequest(BaseModel):
    url: str = Field(..., min_length=1)


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str

    @property
    def hostname(self) -> str:
        try:
            host = urlparse(self.url).hostname
        except ValueError:
            host = None
        return host or self.url


class Breakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    reviews: list[str] = Field(..., min_length=1)
    sentiment: list[str] = Field(..., min_length=1)
    price: list[str] = Field(..., min_length=1)
    seller: list[str] = Field(..., min_length=1)
    description: list[str] = Field(..., min_length=1)


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    trust_score: int = Field(..., ge=0, le=100)
    verdict: Verdict
    reasons: list[str] = Field(..., min_length=1)
    advice: str = Field(..., min_length=1)
    breakdown: Breakdown
    sources: list[str] = Field(default_factory=list, max_length=4)
    url: str
    timestamp: str


def _as_str_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    items = value if isinstance(value, list) else [value]
    out: list[str] = []
    for item in items:
        if item is None or isinstance(item, (dict, list)):
            continue
        s = str(item).strip()
        if s:
            out.append(s)
    return out or None


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    s = str(value).strip()
    return s or None


class BreakdownDraft(BaseModel):
    model_config = ConfigDict(extra="ignore")

    reviews: list[str] | None = None
    sentiment: list[str] | None = None
    price: list[str] | None = None
    seller: list[str] | None = None
    description: list[str] | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[str] | None:
        return _as_str_list(value)


class ReportDraft(BaseModel):
    """Provider payload before defaulting.

    Every field is optional and every validator coerces or discards instead of
    raising, so validating any JSON object succeeds.
    """

    model_config = ConfigDict(extra="ignore")

    trust_score: float | None = None
    verdict: str | None = None
    reasons: list[str] | None = None
    advice: str | None = None
    breakdown: BreakdownDraft | None = None

    @field_validator("trust_score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            score = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        # NaN and infinities
        if score != score or score in (float("inf"), float("-inf")):
            return None
        return score

    @field_validator("verdict", "advice", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _as_text(value)

    @field_validator("reasons", mode="before")
    @classmethod
    def _coerce_reasons(cls, value: Any) -> list[str] | None:
        return _as_str_list(value)

    @field_validator("breakdown", mode="before")
    @classmethod
    def _coerce_breakdown(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None


class HealthResponse(BaseModel):
    ok: bool
    live: bool
