from types import SimpleNamespace

import pytest

from workflows.AI_Integrations import llm_client
from workflows.AI_Integrations.llm_client import LLMClient
from workflows.prospect_research.errors import LLMCallFailed, LLMUnavailable
from workflows.prospect_research.settings import Settings


class _FakeGenaiClient:
    def __init__(self, reply="", error=None, **kwargs):
        self.init_kwargs = kwargs
        self.calls = []
        self._reply = reply
        self._error = error
        self.models = self

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self._error:
            raise self._error
        return SimpleNamespace(text=self._reply)


class _FakeOpenAI:
    def __init__(self, reply="", **kwargs):
        self.init_kwargs = kwargs
        self.calls = []
        self._reply = reply
        self.responses = self

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(output_text=self._reply)


def _patch_genai(monkeypatch, **fake_kwargs):
    created = {}

    def factory(**kwargs):
        created["client"] = _FakeGenaiClient(**fake_kwargs, **kwargs)
        return created["client"]

    monkeypatch.setattr(llm_client.genai, "Client", factory)
    return created


def test_unavailable_without_api_key():
    client = LLMClient(Settings(llm_provider="gemini", gemini_api_key=""))
    assert not client.available()
    with pytest.raises(LLMUnavailable):
        client.generate("prompt")


def test_unknown_provider_is_unavailable():
    client = LLMClient(Settings(llm_provider="llama", gemini_api_key="k", openai_api_key="k"))
    assert not client.available()
    with pytest.raises(LLMUnavailable) as exc:
        client.generate("prompt")
    assert "sconosciuto" in str(exc.value)
    assert "chiave API" not in str(exc.value)


def test_gemini_uses_google_search_grounding(monkeypatch):
    created = _patch_genai(monkeypatch, reply='  {"companies": []}  ')
    client = LLMClient(Settings(llm_provider="gemini", gemini_api_key="k", llm_timeout_sec=30))

    assert client.generate("find prospects") == '{"companies": []}'

    fake = created["client"]
    assert fake.init_kwargs["api_key"] == "k"
    assert fake.init_kwargs["http_options"].timeout == 30000
    call = fake.calls[0]
    assert call["model"] == "gemini-2.0-flash"
    assert call["contents"] == "find prospects"
    assert call["config"].tools[0].google_search is not None


def test_gemini_errors_are_wrapped(monkeypatch):
    _patch_genai(monkeypatch, error=RuntimeError("quota exceeded"))
    client = LLMClient(Settings(llm_provider="gemini", gemini_api_key="k"))
    with pytest.raises(LLMCallFailed) as exc:
        client.generate("p")
    assert "quota exceeded" in str(exc.value)


def test_empty_reply_is_a_failure(monkeypatch):
    _patch_genai(monkeypatch, reply="   ")
    client = LLMClient(Settings(llm_provider="gemini", gemini_api_key="k"))
    with pytest.raises(LLMCallFailed):
        client.generate("p")


def test_openai_uses_web_search_tool(monkeypatch):
    created = {}

    def factory(**kwargs):
        created["client"] = _FakeOpenAI(reply="{}", **kwargs)
        return created["client"]

    monkeypatch.setattr(llm_client, "OpenAI", factory)
    client = LLMClient(Settings(llm_provider="openai", llm_model="gpt-4o-mini", openai_api_key="sk"))

    assert client.generate("p") == "{}"
    call = created["client"].calls[0]
    assert call["tools"] == [{"type": "web_search"}]
    assert call["model"] == "gpt-4o-mini"
    assert call["input"] == "p"
