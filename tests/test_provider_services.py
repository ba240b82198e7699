"""
Tests for the provider adapters.
"""

import asyncio
import json
import httpx
import pytest
from openai import APIConnectionError
from unittest.mock import AsyncMock, MagicMock, patch

from ideagen.models.idea import GenerationRequest
from ideagen.services.anthropic_service import AnthropicAdapter
from ideagen.services.gemini_service import GeminiAdapter
from ideagen.services.openai_service import DeepSeekAdapter, GrokAdapter, OpenAIAdapter, PerplexityAdapter
from ideagen.services.provider_service import (
    MissingCredentialError,
    ProviderNetworkError,
    RateLimitedError,
    build_base_prompt,
    build_prompt,
)
from ideagen.services.rate_limiter import RateLimiter


@pytest.fixture
def request_params():
    """Fixture providing sample generation parameters."""
    return GenerationRequest(
        industry="Healthcare",
        targetMarket="small clinics",
        technologies="AI",
        additionalNotes="Must be HIPAA compliant",
    )


@pytest.fixture
def rate_limiter():
    return RateLimiter(max_calls=10, window_seconds=60)


@pytest.fixture
def mock_async_openai():
    """Patch AsyncOpenAI and yield (class mock, client mock)."""
    with patch('ideagen.services.openai_service.AsyncOpenAI') as mock_cls:
        client = MagicMock()
        completion = MagicMock()
        completion.choices = [MagicMock()]
        completion.choices[0].message.content = "1. Idea One\nA first idea for clinics."
        client.chat.completions.create = AsyncMock(return_value=completion)
        mock_cls.return_value.__aenter__.return_value = client
        yield mock_cls, client


def gemini_reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def anthropic_reply(text):
    return {"content": [{"type": "text", "text": text}]}


class TestPrompts:
    """Tests for prompt construction."""

    def test_base_prompt_with_notes(self, request_params):
        assert build_base_prompt(request_params) == (
            "Generate 3 SaaS business ideas for the Healthcare industry, targeting small clinics market, "
            "using AI technology. Additional requirements: Must be HIPAA compliant"
        )

    def test_base_prompt_without_notes(self):
        params = GenerationRequest(industry="Retail", targetMarket="teens", technologies="mobile")

        assert build_base_prompt(params) == (
            "Generate 3 SaaS business ideas for the Retail industry, targeting teens market, using mobile technology. "
        )

    def test_full_prompt_appends_format_instructions(self, request_params):
        prompt = build_prompt(request_params)

        assert prompt.startswith(build_base_prompt(request_params) + "\n\n")
        assert prompt.endswith("market size (Small/Medium/Large), and difficulty (Easy/Medium/Hard).")


class TestAdapterPreconditions:
    """Checks that happen before any network call."""

    def test_missing_credential(self, request_params, rate_limiter, mock_async_openai):
        mock_cls, client = mock_async_openai
        adapter = OpenAIAdapter(rate_limiter)

        with pytest.raises(MissingCredentialError) as exc_info:
            asyncio.run(adapter.generate(request_params, None))

        assert str(exc_info.value) == "OpenAI API key not found"
        mock_cls.assert_not_called()
        # Missing credentials do not count against the window
        assert rate_limiter.state("openai").calls_in_window == 0

    def test_blank_credential_counts_as_missing(self, request_params, rate_limiter):
        adapter = GeminiAdapter(rate_limiter)

        with pytest.raises(MissingCredentialError):
            asyncio.run(adapter.generate(request_params, ""))

    def test_rate_limited(self, request_params, mock_async_openai):
        mock_cls, client = mock_async_openai
        limiter = RateLimiter(max_calls=1, window_seconds=60)
        adapter = DeepSeekAdapter(limiter)

        asyncio.run(adapter.generate(request_params, "key"))
        with pytest.raises(RateLimitedError) as exc_info:
            asyncio.run(adapter.generate(request_params, "key"))

        assert str(exc_info.value) == "Rate limit exceeded. Please try again later."
        assert client.chat.completions.create.await_count == 1


class TestChatCompletionsAdapters:
    """Tests for the OpenAI-compatible providers."""

    def test_openai_request(self, request_params, rate_limiter, mock_async_openai):
        mock_cls, client = mock_async_openai
        adapter = OpenAIAdapter(rate_limiter)

        text = asyncio.run(adapter.generate(request_params, "sk-test"))

        assert text == "1. Idea One\nA first idea for clinics."
        mock_cls.assert_called_once_with(api_key="sk-test", base_url="https://api.openai.com/v1", max_retries=0)
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-3.5-turbo"
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 1000
        assert kwargs["messages"][0]["role"] == "system"
        assert "Format your response as a list of ideas" in kwargs["messages"][0]["content"]
        assert kwargs["messages"][1] == {"role": "user", "content": build_base_prompt(request_params)}

    @pytest.mark.parametrize("adapter_cls,base_url,model", [
        (PerplexityAdapter, "https://api.perplexity.ai", "sonar-medium-online"),
        (DeepSeekAdapter, "https://api.deepseek.com/v1", "deepseek-chat"),
        (GrokAdapter, "https://api.grok.ai/v1", "grok-1"),
    ])
    def test_compatible_providers(self, adapter_cls, base_url, model, request_params, rate_limiter, mock_async_openai):
        mock_cls, client = mock_async_openai
        adapter = adapter_cls(rate_limiter, timeout=30)

        asyncio.run(adapter.generate(request_params, "key"))

        assert mock_cls.call_args.kwargs["base_url"] == base_url
        assert mock_cls.call_args.kwargs["timeout"] == 30
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == model
        assert kwargs["max_tokens"] == 1000
        assert "temperature" not in kwargs
        assert kwargs["messages"][1]["content"] == build_prompt(request_params)

    def test_transport_error_becomes_network_error(self, request_params, rate_limiter, mock_async_openai):
        mock_cls, client = mock_async_openai
        client.chat.completions.create.side_effect = APIConnectionError(
            request=httpx.Request("POST", "https://api.grok.ai/v1/chat/completions")
        )
        adapter = GrokAdapter(rate_limiter)

        with pytest.raises(ProviderNetworkError) as exc_info:
            asyncio.run(adapter.generate(request_params, "key"))

        assert str(exc_info.value).startswith("Grok API error: ")

    def test_empty_choices_becomes_network_error(self, request_params, rate_limiter, mock_async_openai):
        mock_cls, client = mock_async_openai
        client.chat.completions.create.return_value.choices = []
        adapter = PerplexityAdapter(rate_limiter)

        with pytest.raises(ProviderNetworkError):
            asyncio.run(adapter.generate(request_params, "key"))


class TestGeminiAdapter:
    """Tests for the Gemini REST adapter."""

    def test_request_and_envelope(self, request_params, rate_limiter):
        captured = {}

        def handler(request):
            captured["request"] = request
            return httpx.Response(200, json=gemini_reply("Gemini text"))

        adapter = GeminiAdapter(rate_limiter, transport=httpx.MockTransport(handler))

        text = asyncio.run(adapter.generate(request_params, "g-key"))

        assert text == "Gemini text"
        request = captured["request"]
        assert request.method == "POST"
        assert request.url.host == "generativelanguage.googleapis.com"
        assert request.url.path == "/v1beta/models/gemini-pro:generateContent"
        assert request.url.params["key"] == "g-key"
        body = json.loads(request.content)
        assert body == {
            "contents": [{"parts": [{"text": build_prompt(request_params)}]}],
            "generationConfig": {"temperature": 0.7, "maxOutputTokens": 1000},
        }

    def test_http_error_status(self, request_params, rate_limiter):
        transport = httpx.MockTransport(lambda request: httpx.Response(403, json={"error": "forbidden"}))
        adapter = GeminiAdapter(rate_limiter, transport=transport)

        with pytest.raises(ProviderNetworkError) as exc_info:
            asyncio.run(adapter.generate(request_params, "g-key"))

        assert str(exc_info.value).startswith("Gemini API error: ")
        assert "403" in str(exc_info.value)

    def test_unexpected_envelope(self, request_params, rate_limiter):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []}))
        adapter = GeminiAdapter(rate_limiter, transport=transport)

        with pytest.raises(ProviderNetworkError):
            asyncio.run(adapter.generate(request_params, "g-key"))

    def test_connection_error(self, request_params, rate_limiter):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        adapter = GeminiAdapter(rate_limiter, transport=httpx.MockTransport(handler))

        with pytest.raises(ProviderNetworkError) as exc_info:
            asyncio.run(adapter.generate(request_params, "g-key"))

        assert "connection refused" in str(exc_info.value)


class TestAnthropicAdapter:
    """Tests for the Anthropic REST adapter."""

    def test_request_and_envelope(self, request_params, rate_limiter):
        captured = {}

        def handler(request):
            captured["request"] = request
            return httpx.Response(200, json=anthropic_reply("Claude text"))

        adapter = AnthropicAdapter(rate_limiter, transport=httpx.MockTransport(handler))

        text = asyncio.run(adapter.generate(request_params, "a-key"))

        assert text == "Claude text"
        request = captured["request"]
        assert str(request.url) == "https://api.anthropic.com/v1/messages"
        assert request.headers["x-api-key"] == "a-key"
        assert request.headers["anthropic-version"] == "2023-06-01"
        assert "authorization" not in request.headers
        assert json.loads(request.content) == {
            "model": "claude-3-sonnet-20240229",
            "max_tokens": 1000,
            "messages": [{"role": "user", "content": build_prompt(request_params)}],
        }

    def test_non_json_body(self, request_params, rate_limiter):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
        adapter = AnthropicAdapter(rate_limiter, transport=transport)

        with pytest.raises(ProviderNetworkError):
            asyncio.run(adapter.generate(request_params, "a-key"))
