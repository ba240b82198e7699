"""
OpenAI-compatible provider implementations for ideagen.
OpenAI, Perplexity, DeepSeek and Grok all expose the chat completions API,
so they share one adapter that differs only in base URL, model and prompts.
"""

from typing import Any, Dict, List, Optional
from openai import AsyncOpenAI, APIError

from ideagen.models.idea import GenerationRequest
from ideagen.services.provider_service import (
    DETAILED_SYSTEM_PROMPT,
    SYSTEM_PROMPT,
    ProviderAdapter,
    ProviderNetworkError,
    build_base_prompt,
    build_prompt,
)
from ideagen.utils.constants import (
    DEEPSEEK_BASE_URL,
    DEEPSEEK_MODEL,
    GROK_BASE_URL,
    GROK_MODEL,
    MAX_TOKENS,
    OPENAI_BASE_URL,
    OPENAI_MODEL,
    PERPLEXITY_BASE_URL,
    PERPLEXITY_MODEL,
    TEMPERATURE,
)
from ideagen.utils.logger import logger


class ChatCompletionsAdapter(ProviderAdapter):
    """Adapter for providers speaking the chat completions protocol."""

    base_url: str = OPENAI_BASE_URL
    model: str = OPENAI_MODEL
    temperature: Optional[float] = None

    def build_messages(self, request: GenerationRequest) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(request)},
        ]

    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        """Chat completions request body sent to the provider."""
        payload = {
            "model": self.model,
            "messages": self.build_messages(request),
            "max_tokens": MAX_TOKENS,
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        return payload

    async def _complete(self, request: GenerationRequest, credential: str) -> str:
        kwargs = {"api_key": credential, "base_url": self.base_url, "max_retries": 0}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        try:
            async with AsyncOpenAI(**kwargs) as client:
                completion = await client.chat.completions.create(**self.build_payload(request))
        except APIError as e:
            logger.error(f"{self.display_name} request failed: {e}")
            raise ProviderNetworkError(self.display_name, str(e)) from e

        try:
            return completion.choices[0].message.content or ""
        except (AttributeError, IndexError, TypeError) as e:
            raise ProviderNetworkError(self.display_name, f"unexpected response shape: {e}") from e


class OpenAIAdapter(ChatCompletionsAdapter):
    provider_id = "openai"
    display_name = "OpenAI"
    base_url = OPENAI_BASE_URL
    model = OPENAI_MODEL
    temperature = TEMPERATURE

    def build_messages(self, request: GenerationRequest) -> List[Dict[str, str]]:
        # OpenAI carries the format instructions in the system message
        return [
            {"role": "system", "content": DETAILED_SYSTEM_PROMPT},
            {"role": "user", "content": build_base_prompt(request)},
        ]


class PerplexityAdapter(ChatCompletionsAdapter):
    provider_id = "perplexity"
    display_name = "Perplexity"
    base_url = PERPLEXITY_BASE_URL
    model = PERPLEXITY_MODEL


class DeepSeekAdapter(ChatCompletionsAdapter):
    provider_id = "deepseek"
    display_name = "DeepSeek"
    base_url = DEEPSEEK_BASE_URL
    model = DEEPSEEK_MODEL


class GrokAdapter(ChatCompletionsAdapter):
    provider_id = "grok"
    display_name = "Grok"
    base_url = GROK_BASE_URL
    model = GROK_MODEL
