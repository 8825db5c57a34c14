import pytest

from trustlens.estimator import estimate, estimate_offline


def test_trusted_retailer_is_genuine():
    result = estimate_offline("https://www.amazon.com/deal-xyz")
    assert result.verdict == "Genuine"
    assert result.trust_score == 92
    assert result.sources == []
    assert result.reasons[0] == "Domain matches a known major retailer"


def test_scam_keywords_are_fake():
    result = estimate_offline("http://free-giveaway-winner.biz/claim-now")
    assert result.verdict == "Fake"
    assert result.trust_score == 25
    assert "Suspicious promotional keywords detected" in result.reasons


def test_unknown_shop_is_suspicious():
    result = estimate_offline("http://unknown-shop.example/item")
    assert result.verdict == "Suspicious"
    assert result.trust_score == 65
    assert result.reasons[:2] == ["Domain trust level is low or unknown", "Pricing analysis inconclusive"]


def test_trusted_beats_scam_keywords():
    result = estimate_offline("https://www.flipkart.com/free-giveaway-winner")
    assert result.verdict == "Genuine"
    assert result.trust_score == 92
    assert "Suspicious promotional keywords detected" in result.reasons


def test_matching_is_case_insensitive():
    assert estimate_offline("HTTPS://WWW.NIKE.COM/AIR").verdict == "Genuine"
    assert estimate_offline("http://SHOP.example/URGENT-sale").verdict == "Fake"


def test_deterministic_for_same_url():
    url = "http://lucky-draw.example/spin"
    first = estimate_offline(url)
    second = estimate_offline(url)
    assert (first.trust_score, first.verdict, first.reasons, first.advice) == (
        second.trust_score,
        second.verdict,
        second.reasons,
        second.advice,
    )
    assert first.breakdown == second.breakdown


def test_breakdown_is_filled_with_offline_placeholders():
    breakdown = estimate_offline("not even a url").breakdown
    for slot in (breakdown.reviews, breakdown.sentiment, breakdown.price, breakdown.seller, breakdown.description):
        assert slot and all(item for item in slot)
    assert "offline mode" in breakdown.reviews[0]


def test_url_is_echoed():
    assert estimate_offline("http://unknown-shop.example/item").url == "http://unknown-shop.example/item"


@pytest.mark.asyncio
async def test_estimate_waits_before_answering(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr("trustlens.estimator.asyncio.sleep", fake_sleep)
    result = await estimate("https://www.walmart.com/ip/1", delay_s=1.5)
    assert delays == [1.5]
    assert result.verdict == "Genuine"


@pytest.mark.asyncio
async def test_estimate_without_delay(monkeypatch):
    async def fail_sleep(seconds):
        raise AssertionError("should not sleep")

    monkeypatch.setattr("trustlens.estimator.asyncio.sleep", fail_sleep)
    result = await estimate("http://unknown-shop.example/item", delay_s=0)
    assert result.trust_score == 65
