"""
Factory for creating provider adapters and the generation orchestrator.
"""

from typing import Dict, Optional

from ideagen.orchestrator import GenerationOrchestrator
from ideagen.services.anthropic_service import AnthropicAdapter
from ideagen.services.credential_service import CredentialStore
from ideagen.services.gemini_service import GeminiAdapter
from ideagen.services.openai_service import DeepSeekAdapter, GrokAdapter, OpenAIAdapter, PerplexityAdapter
from ideagen.services.provider_service import ProviderAdapter
from ideagen.services.rate_limiter import RateLimiter
from ideagen.utils.config import config
from ideagen.utils.constants import PROVIDER_IDS

ADAPTER_CLASSES = {
    "openai": OpenAIAdapter,
    "gemini": GeminiAdapter,
    "anthropic": AnthropicAdapter,
    "perplexity": PerplexityAdapter,
    "deepseek": DeepSeekAdapter,
    "grok": GrokAdapter,
}


def create_adapters(rate_limiter: RateLimiter, timeout: Optional[float] = None) -> Dict[str, ProviderAdapter]:
    """
    Build one adapter per supported provider, sharing a rate limiter.

    Args:
        rate_limiter: Limiter every adapter consults before calling out
        timeout: HTTP timeout in seconds

    Returns:
        Mapping of provider id to adapter, in display order
    """
    return {provider_id: ADAPTER_CLASSES[provider_id](rate_limiter, timeout) for provider_id in PROVIDER_IDS}


def create_orchestrator(credential_store: Optional[CredentialStore] = None,
                        rate_limiter: Optional[RateLimiter] = None) -> GenerationOrchestrator:
    """
    Factory to create a fully wired orchestrator.

    Args:
        credential_store: Source of provider API keys
        rate_limiter: Limiter shared by all adapters

    Returns:
        GenerationOrchestrator instance
    """
    credential_store = credential_store or CredentialStore()
    rate_limiter = rate_limiter or RateLimiter(
        max_calls=config.rate_limit_max_calls,
        window_seconds=config.rate_limit_window_seconds,
        provider_ids=PROVIDER_IDS,
    )
    adapters = create_adapters(rate_limiter, config.request_timeout)
    return GenerationOrchestrator(adapters=adapters, credential_lookup=credential_store.get)
