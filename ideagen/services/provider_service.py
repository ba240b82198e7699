"""
Abstract base class for the LLM providers used by ideagen.
This provides a common interface for generating raw idea text from a provider.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ideagen.models.idea import GenerationRequest
from ideagen.services.rate_limiter import RateLimiter
from ideagen.utils.logger import logger

SYSTEM_PROMPT = "You are a business idea generator specialized in SaaS products. Generate 3 innovative SaaS ideas based on the provided parameters."

DETAILED_SYSTEM_PROMPT = (
    SYSTEM_PROMPT
    + " Format your response as a list of ideas with clear titles and descriptions."
    " For each idea, include a title, description, market size (Small/Medium/Large), and difficulty (Easy/Medium/Hard)."
)

FORMAT_INSTRUCTIONS = "Format your response as a list of 3 ideas. For each idea, include a title, description, market size (Small/Medium/Large), and difficulty (Easy/Medium/Hard)."


class AdapterError(Exception):
    """Raised when a provider could not produce a reply."""

    kind = "AdapterError"

    def __init__(self, display_name: str, message: str):
        self.display_name = display_name
        super().__init__(message)


class MissingCredentialError(AdapterError):
    kind = "MissingCredential"

    def __init__(self, display_name: str):
        super().__init__(display_name, f"{display_name} API key not found")


class RateLimitedError(AdapterError):
    kind = "RateLimited"

    def __init__(self, display_name: str):
        super().__init__(display_name, "Rate limit exceeded. Please try again later.")


class ProviderNetworkError(AdapterError):
    kind = "NetworkError"

    def __init__(self, display_name: str, detail: str):
        self.detail = detail
        super().__init__(display_name, f"{display_name} API error: {detail}")


def build_base_prompt(request: GenerationRequest) -> str:
    """Interpolate the request into the instruction asking for three ideas."""
    notes = f"Additional requirements: {request.additionalNotes}" if request.additionalNotes else ""
    return (
        f"Generate 3 SaaS business ideas for the {request.industry} industry, "
        f"targeting {request.targetMarket} market, using {request.technologies} technology. {notes}"
    )


def build_prompt(request: GenerationRequest) -> str:
    """Base prompt followed by the output format instructions."""
    return f"{build_base_prompt(request)}\n\n{FORMAT_INSTRUCTIONS}"


class ProviderAdapter(ABC):
    """Abstract base class for provider adapters."""

    provider_id: str = ""
    display_name: str = ""

    def __init__(self, rate_limiter: RateLimiter, timeout: Optional[float] = None):
        """
        Initialize the adapter.

        Args:
            rate_limiter: Limiter consulted before every call
            timeout: HTTP timeout in seconds, None for the client default
        """
        self.rate_limiter = rate_limiter
        self.timeout = timeout

    async def generate(self, request: GenerationRequest, credential: Optional[str]) -> str:
        """
        Ask the provider for ideas and return its raw reply text.

        Args:
            request: Generation parameters
            credential: API key for this provider, if one is configured

        Returns:
            The assistant text extracted from the provider response

        Raises:
            MissingCredentialError: No credential is configured
            RateLimitedError: The provider's rate window is full
            ProviderNetworkError: The call failed or the reply had an unexpected shape
        """
        if not credential:
            raise MissingCredentialError(self.display_name)

        if not self.rate_limiter.try_acquire(self.provider_id):
            raise RateLimitedError(self.display_name)

        logger.info(f"Requesting ideas from {self.display_name}")
        return await self._complete(request, credential)

    @abstractmethod
    async def _complete(self, request: GenerationRequest, credential: str) -> str:
        """
        Perform the provider HTTP call.

        Args:
            request: Generation parameters
            credential: API key for this provider

        Returns:
            The raw assistant text
        """
        pass
