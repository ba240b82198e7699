"""
Fans one generation request out to every selected provider.
"""

import asyncio
from typing import Callable, Dict, List, Optional, Sequence

from ideagen.models.idea import GenerationRequest, IdeaRecord, ProviderResult
from ideagen.services.provider_service import AdapterError, ProviderAdapter
from ideagen.services.response_parser import ResponseParser
from ideagen.utils.logger import logger


class GenerationOrchestrator:
    """Runs a generation batch across providers and collects their results."""

    def __init__(
        self,
        adapters: Dict[str, ProviderAdapter],
        credential_lookup: Callable[[str], Optional[str]],
        parser: Optional[ResponseParser] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            adapters: Mapping of provider id to its adapter
            credential_lookup: Returns the API key for a provider id, or None
            parser: Parser for raw provider replies
        """
        self.adapters = adapters
        self.credential_lookup = credential_lookup
        self.parser = parser or ResponseParser()

    async def generate_all(self, request: GenerationRequest, provider_ids: Sequence[str]) -> List[ProviderResult]:
        """
        Request ideas from all selected providers concurrently.

        Args:
            request: Generation parameters
            provider_ids: Providers to ask, in the order results should come back

        Returns:
            One result per provider id, in the same order
        """
        logger.info(f"Generating ideas from {len(provider_ids)} providers: {', '.join(provider_ids)}")
        results = await asyncio.gather(
            *(self._generate_one(request, provider_id) for provider_id in provider_ids)
        )

        failed = sum(1 for result in results if result.error)
        logger.info(f"Generation finished: {len(results) - failed} succeeded, {failed} failed")
        return list(results)

    def generate_all_sync(self, request: GenerationRequest, provider_ids: Sequence[str]) -> List[ProviderResult]:
        """Blocking wrapper around generate_all for callers without an event loop."""
        return asyncio.run(self.generate_all(request, provider_ids))

    async def _generate_one(self, request: GenerationRequest, provider_id: str) -> ProviderResult:
        adapter = self.adapters.get(provider_id)
        if adapter is None:
            logger.warning(f"Unknown service requested: {provider_id}")
            return ProviderResult(ideas=[], error=f"Unknown service: {provider_id}", source=provider_id)

        source = adapter.display_name
        try:
            raw_text = await adapter.generate(request, self.credential_lookup(provider_id))
        except AdapterError as e:
            logger.error(f"{source} failed ({e.kind}): {e}")
            return ProviderResult(ideas=[], error=str(e), source=source)
        except Exception as e:
            logger.exception(f"Unexpected error from {source}")
            return ProviderResult(ideas=[], error=f"{source} API error: {e}", source=source)

        ideas = self.parser.parse(raw_text, source)
        if not ideas:
            logger.warning(f"{source} replied but no ideas could be extracted")
        return ProviderResult(ideas=ideas, source=source)


def all_ideas(results: Sequence[ProviderResult]) -> List[IdeaRecord]:
    """Flatten the ideas of a batch, keeping provider order."""
    return [idea for result in results for idea in result.ideas]


def errors(results: Sequence[ProviderResult]) -> Dict[str, str]:
    """Map each failed provider's display name to its error message."""
    return {result.source: result.error for result in results if not result.ok}
