"""GeminiClient retry/error mapping with google.generativeai patched out."""

from types import SimpleNamespace

import pytest

from screening.ai import gemini_client
from screening.ai.gemini_client import GeminiClient, GeminiConfig
from screening.utils.exceptions import GeminiError, GeminiNetworkError


class FakeModel:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def generate_content(self, prompt, request_options=None):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return SimpleNamespace(parts=[SimpleNamespace(text=t) for t in outcome])


@pytest.fixture
def make_client(monkeypatch):
    monkeypatch.setattr(gemini_client.genai, "configure", lambda **kwargs: None)
    monkeypatch.setattr(gemini_client.time, "sleep", lambda s: None)

    def _make(outcomes):
        model = FakeModel(outcomes)
        monkeypatch.setattr(gemini_client.genai, "GenerativeModel", lambda **kwargs: model)
        config = GeminiConfig(max_retries=3, retry_delay=0.0, min_request_interval=0.0)
        return GeminiClient(api_key="k", config=config), model

    return _make


def test_generate_joins_parts(make_client):
    client, model = make_client([["Two ", "notes."]])
    assert client.generate("prompt") == "Two notes."
    assert model.calls == 1


def test_retry_then_success(make_client):
    client, model = make_client([RuntimeError("429 quota exceeded"), ["ok"]])
    assert client.generate("prompt") == "ok"
    assert model.calls == 2


def test_network_failure_after_retries(make_client):
    client, model = make_client([ConnectionError("connection reset")] * 3)
    with pytest.raises(GeminiNetworkError):
        client.generate("prompt")
    assert model.calls == 3


def test_service_error_is_not_retried(make_client):
    client, model = make_client([ValueError("invalid argument")])
    with pytest.raises(GeminiError) as exc:
        client.generate("prompt")
    assert not isinstance(exc.value, GeminiNetworkError)
    assert exc.value.message == "invalid argument"
    assert model.calls == 1


def test_empty_prompt_rejected(make_client):
    client, model = make_client([])
    with pytest.raises(GeminiError):
        client.generate("   ")
    assert model.calls == 0


def test_missing_key(monkeypatch):
    monkeypatch.setattr(gemini_client, "get_gemini_api_key", lambda: None)
    with pytest.raises(GeminiError):
        GeminiClient(config=GeminiConfig())
