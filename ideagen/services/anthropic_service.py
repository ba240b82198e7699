"""
Anthropic provider implementation for ideagen.
Calls the Messages API directly with the x-api-key header convention.
"""

from typing import Any, Dict

from ideagen.models.idea import GenerationRequest
from ideagen.services.http_service import HTTPAdapter
from ideagen.services.provider_service import ProviderNetworkError, build_prompt
from ideagen.utils.constants import ANTHROPIC_ENDPOINT, ANTHROPIC_MODEL, ANTHROPIC_VERSION, MAX_TOKENS


class AnthropicAdapter(HTTPAdapter):
    provider_id = "anthropic"
    display_name = "Anthropic"

    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        return {
            "model": ANTHROPIC_MODEL,
            "max_tokens": MAX_TOKENS,
            "messages": [
                {"role": "user", "content": build_prompt(request)},
            ],
        }

    async def _complete(self, request: GenerationRequest, credential: str) -> str:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": credential,
            "anthropic-version": ANTHROPIC_VERSION,
        }
        data = await self._post(ANTHROPIC_ENDPOINT, self.build_payload(request), headers=headers)
        try:
            return data["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderNetworkError(self.display_name, f"unexpected response shape: {e!r}") from e
