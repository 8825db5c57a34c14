"""
Gemini-backed intelligence provider.
A provider takes a prompt plus an output contract and returns raw text, with
any grounding citations pulled out as source URIs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from google import genai
from google.genai import types

from .models import AnalysisRequest
from .prompts import RESPONSE_SCHEMA, SYSTEM_INSTRUCTION, build_prompt

logger = logging.getLogger(__name__)

_SAFETY_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


class ProviderError(RuntimeError):
    """The provider answered, but with nothing usable (e.g. a safety block)."""


@dataclass(frozen=True)
class ProviderRequest:
    system_instruction: str
    prompt: str
    response_schema: dict[str, Any]
    search_grounding: bool = True


@dataclass(frozen=True)
class ProviderReply:
    text: str
    sources: list[str] = field(default_factory=list)


class IntelligenceProvider(Protocol):
    name: str

    async def generate(self, request: ProviderRequest) -> ProviderReply: ...


def build_provider_request(request: AnalysisRequest, *, search_grounding: bool = True) -> ProviderRequest:
    return ProviderRequest(
        system_instruction=SYSTEM_INSTRUCTION,
        prompt=build_prompt(request.url, request.hostname),
        response_schema=RESPONSE_SCHEMA,
        search_grounding=search_grounding,
    )


def extract_sources(response: Any, limit: int = 4) -> list[str]:
    """Collect grounding URIs from the first candidate, in order, deduplicated."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    sources: list[str] = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = (getattr(web, "uri", None) or "").strip()
        if not uri or uri in sources:
            continue
        sources.append(uri)
        if len(sources) >= limit:
            break
    return sources


class GeminiProvider:
    def __init__(
        self,
        api_key: str,
        model: str,
        *,
        temperature: float = 0.15,
        top_p: float = 0.9,
        max_output_tokens: int = 4096,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.name = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_output_tokens = max_output_tokens

    def build_config(self, request: ProviderRequest) -> types.GenerateContentConfig:
        safety_settings = [
            types.SafetySetting(category=c, threshold=types.HarmBlockThreshold.BLOCK_ONLY_HIGH)
            for c in _SAFETY_CATEGORIES
        ]
        config: dict[str, Any] = {
            "system_instruction": request.system_instruction,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_output_tokens": self.max_output_tokens,
            "safety_settings": safety_settings,
        }
        if request.search_grounding:
            # Gemini rejects a JSON mime type together with tools, so the
            # prompt carries the output contract instead.
            config["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        else:
            config["response_mime_type"] = "application/json"
            config["response_schema"] = request.response_schema
        return types.GenerateContentConfig(**config)

    async def generate(self, request: ProviderRequest) -> ProviderReply:
        client = genai.Client(api_key=self.api_key)
        try:
            resp = await client.aio.models.generate_content(
                model=self.model,
                contents=request.prompt,
                config=self.build_config(request),
            )
        finally:
            await client.aio.aclose()

        text = (getattr(resp, "text", None) or "").strip()
        if not text:
            feedback = getattr(resp, "prompt_feedback", None)
            block_reason = getattr(feedback, "block_reason", None)
            raise ProviderError(f"{self.model} returned no text (block_reason={block_reason})")

        sources = extract_sources(resp)
        logger.debug("%s replied with %d chars and %d sources", self.model, len(text), len(sources))
        return ProviderReply(text=text, sources=sources)
