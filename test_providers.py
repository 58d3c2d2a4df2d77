"""Tests for the OpenAI completion provider, using a stand-in client"""
import asyncio
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError, AuthenticationError

from ghostwriter.exceptions import ConfigurationError, ProviderError
from ghostwriter.providers import CompletionRequest, OpenAIProvider

REQUEST = CompletionRequest(system_prompt="system", user_prompt="user", max_tokens=40, temperature=0.9)


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_provider(completions):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIProvider(model="test-model", client=client)


def test_complete_returns_text():
    completions = FakeCompletions(content="A cold wind blew.")
    response = asyncio.run(make_provider(completions).complete(REQUEST))

    assert response.text == "A cold wind blew."
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["max_tokens"] == 40
    assert call["temperature"] == 0.9
    assert call["messages"][0] == {"role": "system", "content": "system"}
    assert call["messages"][1] == {"role": "user", "content": "user"}


def test_empty_content_is_empty_text():
    response = asyncio.run(make_provider(FakeCompletions(content=None)).complete(REQUEST))
    assert response.text == ""


def test_authentication_error_is_mapped():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    error = AuthenticationError("bad key", response=httpx.Response(401, request=request), body=None)

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(make_provider(FakeCompletions(error=error)).complete(REQUEST))
    assert excinfo.value.message == "Invalid API key"
    assert "OPENAI_API_KEY" in excinfo.value.suggestion
    assert excinfo.value.model == "test-model"


def test_connection_error_is_mapped():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    error = APIConnectionError(request=request)

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(make_provider(FakeCompletions(error=error)).complete(REQUEST))
    assert excinfo.value.message == "Could not reach the OpenAI API"


def test_missing_key_is_a_configuration_error(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ConfigurationError) as excinfo:
        OpenAIProvider()
    assert excinfo.value.config_key == "OPENAI_API_KEY"


def test_request_validation():
    with pytest.raises(ValueError):
        CompletionRequest(system_prompt="s", user_prompt="u", max_tokens=0, temperature=0.5)
