"""
Gemini provider implementation for ideagen.
Calls the generateContent REST endpoint directly, authenticating with the
API key as a query parameter.
"""

from typing import Any, Dict

from ideagen.models.idea import GenerationRequest
from ideagen.services.http_service import HTTPAdapter
from ideagen.services.provider_service import ProviderNetworkError, build_prompt
from ideagen.utils.constants import GEMINI_ENDPOINT, MAX_TOKENS, TEMPERATURE


class GeminiAdapter(HTTPAdapter):
    provider_id = "gemini"
    display_name = "Gemini"

    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": build_prompt(request)},
                    ],
                },
            ],
            "generationConfig": {
                "temperature": TEMPERATURE,
                "maxOutputTokens": MAX_TOKENS,
            },
        }

    async def _complete(self, request: GenerationRequest, credential: str) -> str:
        data = await self._post(
            GEMINI_ENDPOINT,
            self.build_payload(request),
            headers={"Content-Type": "application/json"},
            params={"key": credential},
        )
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderNetworkError(self.display_name, f"unexpected response shape: {e!r}") from e
