import dataclasses

import httpx
import pytest

from tubetutor.core.config import settings
from tubetutor.services.llm.client import (
    GenerationTimeout,
    OllamaGenerationClient,
    OpenAIGenerationClient,
    build_generation_client,
)


def test_ollama_provider():
    client = build_generation_client(
        dataclasses.replace(settings, llm_provider="ollama", ollama_base_url="http://localhost:11434/")
    )
    assert isinstance(client, OllamaGenerationClient)
    assert client.base_url == "http://localhost:11434"


def test_openai_provider_requires_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ValueError):
        build_generation_client(dataclasses.replace(settings, llm_provider="openai"))


def test_openai_provider_with_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    client = build_generation_client(dataclasses.replace(settings, llm_provider="openai"))
    assert isinstance(client, OpenAIGenerationClient)


def test_unknown_provider():
    with pytest.raises(ValueError):
        build_generation_client(dataclasses.replace(settings, llm_provider="carrier-pigeon"))


class _FakeResponse:
    def __init__(self, data):
        self._data = data

    def raise_for_status(self):
        return None

    def json(self):
        return self._data


def test_ollama_generate_posts_prompt(monkeypatch):
    seen = {}

    def fake_post(url, json, timeout):
        seen["url"] = url
        seen["body"] = json
        return _FakeResponse({"response": "  hello  "})

    monkeypatch.setattr("tubetutor.services.llm.client.httpx.post", fake_post)
    client = OllamaGenerationClient("http://ollama:11434", "llama3", temperature=0.5)
    assert client.generate("hi", timeout_sec=5) == "hello"
    assert seen["url"] == "http://ollama:11434/api/generate"
    assert seen["body"]["stream"] is False
    assert seen["body"]["options"] == {"temperature": 0.5}


def test_ollama_timeout_is_generation_timeout(monkeypatch):
    def slow(url, json, timeout):
        raise httpx.ReadTimeout("slow")

    monkeypatch.setattr("tubetutor.services.llm.client.httpx.post", slow)
    client = OllamaGenerationClient("http://ollama:11434", "llama3")
    with pytest.raises(GenerationTimeout):
        client.generate("hi", timeout_sec=1)
