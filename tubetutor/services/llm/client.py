from __future__ import annotations

import os
from typing import Any, Dict, Optional, Protocol

import httpx
import openai
from openai import OpenAI

from tubetutor.core.config import Settings


class GenerationTimeout(Exception):
    """A single generation attempt exceeded its timeout."""


class GenerationClient(Protocol):
    def generate(self, prompt: str, *, timeout_sec: float) -> str: ...


class OpenAIGenerationClient:
    """
    Chat-completions client. SDK-level retries are disabled so the retry
    policy in `retry.generate_with_retry` is the only one in effect.
    """

    def __init__(self, model: str, temperature: float = 0.2, api_key: Optional[str] = None) -> None:
        api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY is missing")
        self.model = model
        self.temperature = temperature
        self._client = OpenAI(api_key=api_key, max_retries=0)

    def generate(self, prompt: str, *, timeout_sec: float) -> str:
        try:
            rsp = self._client.with_options(timeout=timeout_sec).chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except openai.APITimeoutError as e:
            raise GenerationTimeout(f"OpenAI call exceeded {timeout_sec}s") from e
        return (rsp.choices[0].message.content or "").strip()


class OllamaGenerationClient:
    """Non-streaming `/api/generate` calls against a local Ollama server."""

    def __init__(self, base_url: str, model: str, temperature: float = 0.2) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature

    def _body(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": self.temperature},
        }

    def generate(self, prompt: str, *, timeout_sec: float) -> str:
        try:
            r = httpx.post(
                f"{self.base_url}/api/generate",
                json=self._body(prompt),
                timeout=httpx.Timeout(timeout_sec, connect=10.0),
            )
        except httpx.TimeoutException as e:
            raise GenerationTimeout(f"Ollama call exceeded {timeout_sec}s") from e
        r.raise_for_status()
        data = r.json()
        if data.get("error"):
            raise RuntimeError(f"Ollama error: {data['error']}")
        return (data.get("response") or "").strip()


def build_generation_client(settings: Settings) -> GenerationClient:
    if settings.llm_provider == "ollama":
        return OllamaGenerationClient(
            settings.ollama_base_url,
            settings.ollama_model,
            temperature=settings.llm_temperature,
        )
    if settings.llm_provider == "openai":
        return OpenAIGenerationClient(settings.openai_model, temperature=settings.llm_temperature)
    raise ValueError(f"Unknown LLM_PROVIDER: {settings.llm_provider!r}")
