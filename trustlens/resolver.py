"""
Tiered resolution of a trust verdict.

Init -> Tier1Attempt -> Tier2Attempt -> Fallback -> Done. A tier only hands over
to the next state when it fails; the offline estimator always answers, so
`TieredResolver.resolve` never raises.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .config import Settings
from .estimator import FALLBACK_DELAY_S, estimate
from .models import AnalysisRequest, AnalysisResult
from .normalizer import ParseError, format_result, normalize
from .provider import GeminiProvider, IntelligenceProvider, ProviderRequest, build_provider_request

logger = logging.getLogger(__name__)


class ResolverState(str, Enum):
    INIT = "init"
    TIER1_ATTEMPT = "tier1_attempt"
    TIER2_ATTEMPT = "tier2_attempt"
    FALLBACK = "fallback"
    DONE = "done"


class FailureReason(str, Enum):
    CREDENTIAL_MISSING = "credential_missing"
    TRANSPORT_FAILURE = "transport_failure"
    PARSE_FAILURE = "parse_failure"
    TIMEOUT = "timeout"


_TIER_STATES = (ResolverState.TIER1_ATTEMPT, ResolverState.TIER2_ATTEMPT)


@dataclass(frozen=True)
class Tier:
    name: str
    provider: IntelligenceProvider


@dataclass(frozen=True)
class TierFailure:
    tier: str
    reason: FailureReason
    detail: str


@dataclass(frozen=True)
class TierOutcome:
    tier: str
    result: AnalysisResult | None = None
    failure: TierFailure | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass
class Resolution:
    result: AnalysisResult
    path: list[ResolverState] = field(default_factory=list)
    failures: list[TierFailure] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return ResolverState.FALLBACK in self.path


class TieredResolver:
    def __init__(
        self,
        tiers: Sequence[Tier] = (),
        *,
        search_grounding: bool = True,
        tier_timeout_s: float = 45.0,
        fallback_delay_s: float = FALLBACK_DELAY_S,
    ) -> None:
        if len(tiers) > len(_TIER_STATES):
            raise ValueError(f"at most {len(_TIER_STATES)} provider tiers are supported, got {len(tiers)}")
        self.tiers = list(tiers)
        self.search_grounding = search_grounding
        self.tier_timeout_s = tier_timeout_s
        self.fallback_delay_s = fallback_delay_s

    @classmethod
    def from_settings(cls, settings: Settings) -> TieredResolver:
        tiers: list[Tier] = []
        if settings.has_live_key:
            key = (settings.gemini_api_key or "").strip()
            tiers = [
                Tier("primary", GeminiProvider(key, settings.primary_model)),
                Tier("secondary", GeminiProvider(key, settings.secondary_model)),
            ]
        return cls(
            tiers,
            search_grounding=settings.search_grounding,
            tier_timeout_s=settings.tier_timeout_s,
            fallback_delay_s=settings.fallback_delay_s,
        )

    async def resolve(self, url: str) -> AnalysisResult:
        resolution = await self.resolve_with_trace(url)
        return resolution.result

    async def resolve_with_trace(self, url: str) -> Resolution:
        request = AnalysisRequest(url=url)
        path = [ResolverState.INIT]
        failures: list[TierFailure] = []

        if not self.tiers:
            failures.append(TierFailure("credentials", FailureReason.CREDENTIAL_MISSING, "no live API key configured"))
        else:
            provider_request = build_provider_request(request, search_grounding=self.search_grounding)
            for state, tier in zip(_TIER_STATES, self.tiers):
                path.append(state)
                outcome = await self._attempt(tier, request, provider_request)
                if outcome.ok:
                    path.append(ResolverState.DONE)
                    logger.info("Resolved %s via %s tier", url, tier.name)
                    return Resolution(result=outcome.result, path=path, failures=failures)
                failures.append(outcome.failure)
                logger.warning(
                    "Tier %s failed for %s (%s): %s",
                    tier.name,
                    url,
                    outcome.failure.reason.value,
                    outcome.failure.detail,
                )

        path.append(ResolverState.FALLBACK)
        logger.info("Using offline estimate for %s", url)
        result = await estimate(url, delay_s=self.fallback_delay_s)
        path.append(ResolverState.DONE)
        return Resolution(result=result, path=path, failures=failures)

    async def _attempt(
        self,
        tier: Tier,
        request: AnalysisRequest,
        provider_request: ProviderRequest,
    ) -> TierOutcome:
        try:
            reply = await asyncio.wait_for(tier.provider.generate(provider_request), timeout=self.tier_timeout_s)
            parsed = normalize(reply.text)
            result = format_result(parsed, url=request.url, sources=reply.sources)
        except ParseError as e:
            return TierOutcome(tier.name, failure=TierFailure(tier.name, FailureReason.PARSE_FAILURE, str(e)))
        except asyncio.TimeoutError:
            detail = f"no answer within {self.tier_timeout_s:g}s"
            return TierOutcome(tier.name, failure=TierFailure(tier.name, FailureReason.TIMEOUT, detail))
        except Exception as e:
            detail = f"{type(e).__name__}: {e}"
            return TierOutcome(tier.name, failure=TierFailure(tier.name, FailureReason.TRANSPORT_FAILURE, detail))
        return TierOutcome(tier.name, result=result)


async def analyze_product(url: str, *, settings: Settings | None = None) -> AnalysisResult:
    """Return a trust verdict for `url`. Never raises."""
    resolver = TieredResolver.from_settings(settings or Settings.from_env())
    return await resolver.resolve(url)
