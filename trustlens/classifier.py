from __future__ import annotations

from .models import Verdict

_GENUINE_KEYWORDS = ("genuine", "safe")
_FAKE_KEYWORDS = ("fake", "scam", "danger")


def classify(raw_label: str | None) -> Verdict:
    """Map a free-form provider label onto Genuine / Suspicious / Fake.

    Genuine keywords are checked first. Anything without a clear keyword is
    Suspicious, so a missing or odd label never reads as trustworthy.
    """
    label = (raw_label or "").strip().lower()
    if any(k in label for k in _GENUINE_KEYWORDS):
        return "Genuine"
    if any(k in label for k in _FAKE_KEYWORDS):
        return "Fake"
    return "Suspicious"
