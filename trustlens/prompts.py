from __future__ import annotations

from typing import Any

SYSTEM_INSTRUCTION = """You are TrustLens, an elite cybersecurity AI specialized in e-commerce fraud detection.

STRICT RULES:
1. Use Google Search grounding results whenever they are available.
2. Never hallucinate. If there is no strong evidence, the verdict MUST be "Suspicious".
3. The verdict can ONLY be one of: Genuine, Suspicious, Fake.
4. Genuine only if a strong, verified reputation exists.
5. Fake if scam evidence exists (complaints, scamadviser warnings, scam reports).
6. Output JSON only. No extra explanation text, no markdown."""


_STRING_ARRAY: dict[str, Any] = {"type": "ARRAY", "items": {"type": "STRING"}}

# Declared output contract, in the provider's schema dialect.
RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "trust_score": {"type": "NUMBER"},
        "verdict": {"type": "STRING"},
        "breakdown": {
            "type": "OBJECT",
            "properties": {
                "reviews": _STRING_ARRAY,
                "sentiment": _STRING_ARRAY,
                "price": _STRING_ARRAY,
                "seller": _STRING_ARRAY,
                "description": _STRING_ARRAY,
            },
        },
        "reasons": _STRING_ARRAY,
        "advice": {"type": "STRING"},
    },
    "required": ["trust_score", "verdict", "reasons", "advice"],
}


def build_prompt(url: str, hostname: str) -> str:
    """Build the per-URL analysis prompt, including the JSON shape to return."""
    return f"""Analyze this product URL:
{url}

Perform these Google Search checks:

1. Reputation search:
- "{hostname} reviews"
- "{hostname} trustpilot"
- "{hostname} scamadviser"
- "{hostname} complaints"

2. Ownership / legitimacy search:
- "is {hostname} legit"
- "who owns {hostname}"
- "{hostname} company details"

3. Price scam check:
- infer the product name from the URL
- search the market price
- compare how realistic the discount is

## RESPONSE FORMAT

Respond with ONLY valid JSON (no markdown, no code blocks):

{{
  "trust_score": <0-100 integer>,
  "verdict": "<Genuine|Suspicious|Fake>",
  "breakdown": {{
    "reviews": ["<findings about customer reviews>"],
    "sentiment": ["<findings about public sentiment>"],
    "price": ["<findings about price realism>"],
    "seller": ["<findings about the seller / ownership>"],
    "description": ["<findings about the product description>"]
  }},
  "reasons": ["<short reasons for the verdict>"],
  "advice": "<one recommendation for the shopper>"
}}"""
