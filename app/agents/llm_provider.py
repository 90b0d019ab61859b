"""Abstract LLM provider with Gemini, OpenAI and Anthropic adapters."""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod

from app.config import Settings, get_settings


class LLMProvider(ABC):
    """Abstract interface for vision-capable LLM calls."""

    @abstractmethod
    async def analyze_image(self, prompt: str, mime_type: str, b64_data: str) -> str:
        """Send a prompt + one inline base64 image, return the full text response."""
        ...


class GeminiProvider(LLMProvider):
    """Google Gemini vision provider."""

    def __init__(self, api_key: str, model: str = "gemini-1.5-flash"):
        import google.generativeai as genai
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model)

    async def analyze_image(self, prompt: str, mime_type: str, b64_data: str) -> str:
        image_part = {"mime_type": mime_type, "data": base64.standard_b64decode(b64_data)}
        resp = await self.model.generate_content_async([prompt, image_part])
        return resp.text


class OpenAIProvider(LLMProvider):
    """OpenAI GPT-4o vision provider."""

    def __init__(self, api_key: str, model: str = "gpt-4o", max_tokens: int = 1024):
        from openai import AsyncOpenAI
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    async def analyze_image(self, prompt: str, mime_type: str, b64_data: str) -> str:
        resp = await self.client.chat.completions.create(
            model=self.model,
            messages=[{
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{b64_data}"}},
                ],
            }],
            max_tokens=self.max_tokens,
        )
        return resp.choices[0].message.content or ""


class AnthropicProvider(LLMProvider):
    """Anthropic Claude vision provider."""

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514", max_tokens: int = 1024):
        from anthropic import AsyncAnthropic
        self.client = AsyncAnthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    async def analyze_image(self, prompt: str, mime_type: str, b64_data: str) -> str:
        resp = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{
                "role": "user",
                "content": [
                    {"type": "image", "source": {"type": "base64", "media_type": mime_type, "data": b64_data}},
                    {"type": "text", "text": prompt},
                ],
            }],
        )
        return resp.content[0].text


def get_llm_provider(settings: Settings | None = None) -> LLMProvider:
    """Factory: Gemini if its key is set, then OpenAI, then Anthropic."""
    settings = settings or get_settings()
    cfg = settings.verification
    if settings.gemini_api_key:
        return GeminiProvider(settings.gemini_api_key, cfg.gemini_model)
    if settings.openai_api_key:
        return OpenAIProvider(settings.openai_api_key, cfg.openai_model, cfg.max_tokens)
    if settings.anthropic_api_key:
        return AnthropicProvider(settings.anthropic_api_key, cfg.anthropic_model, cfg.max_tokens)
    raise RuntimeError(
        "No LLM API key configured. Set GEMINI_API_KEY, OPENAI_API_KEY or ANTHROPIC_API_KEY."
    )
