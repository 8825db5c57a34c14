import pytest

from trustlens.classifier import classify


@pytest.mark.parametrize(
    "label",
    ["Genuine", "genuine", "GENUINE seller", "Safe", "looks safe to me"],
)
def test_genuine_keywords(label):
    assert classify(label) == "Genuine"


@pytest.mark.parametrize(
    "label",
    ["Fake", "likely a SCAM", "Dangerous", "scammer"],
)
def test_fake_keywords(label):
    assert classify(label) == "Fake"


@pytest.mark.parametrize(
    "label",
    ["unverified", "Suspicious", "", "caution", "legitimate", None],
)
def test_anything_else_is_suspicious(label):
    assert classify(label) == "Suspicious"


def test_genuine_keyword_checked_before_fake():
    # "unsafe" contains "safe"; the heuristic is substring based.
    assert classify("not genuine, probably fake") == "Genuine"
    assert classify("unsafe") == "Genuine"
