"""
Shared fixtures for the TrustLens test suite.
"""

import pytest

from trustlens.config import Settings
from trustlens.provider import ProviderReply, ProviderRequest


class FakeProvider:
    """Stands in for a live provider: returns a canned reply or raises."""

    def __init__(self, name, reply=None, error=None):
        self.name = name
        self.reply = reply
        self.error = error
        self.requests = []

    async def generate(self, request: ProviderRequest) -> ProviderReply:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


WELL_FORMED_REPORT = """{
  "trust_score": 81,
  "verdict": "Genuine",
  "breakdown": {
    "reviews": ["4.4/5 on Trustpilot across 12,000 reviews"],
    "sentiment": ["Mostly positive"],
    "price": ["In line with market price"],
    "seller": ["Registered company since 2009"],
    "description": ["Matches the manufacturer listing"]
  },
  "reasons": ["Long-standing retailer", "Consistent reviews"],
  "advice": "Safe to buy; pay with a card for buyer protection."
}"""


@pytest.fixture
def offline_settings():
    return Settings(gemini_api_key=None, fallback_delay_s=0.0)


@pytest.fixture
def live_settings():
    return Settings(gemini_api_key="test-gemini-key", fallback_delay_s=0.0, tier_timeout_s=5.0)


@pytest.fixture
def good_reply():
    return ProviderReply(
        text=WELL_FORMED_REPORT,
        sources=[
            "https://www.trustpilot.com/review/shop.example",
            "https://www.scamadviser.com/check-website/shop.example",
        ],
    )
