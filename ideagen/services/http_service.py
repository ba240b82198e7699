"""
Shared plumbing for providers called through plain httpx requests.
"""

from typing import Any, Dict, Optional
import httpx

from ideagen.services.provider_service import ProviderAdapter, ProviderNetworkError
from ideagen.services.rate_limiter import RateLimiter
from ideagen.utils.logger import logger


class HTTPAdapter(ProviderAdapter):
    """Base for adapters that issue their own HTTP request with httpx."""

    def __init__(
        self,
        rate_limiter: RateLimiter,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the adapter.

        Args:
            rate_limiter: Limiter consulted before every call
            timeout: HTTP timeout in seconds, None for the httpx default
            transport: Optional httpx transport, used to stub the network in tests
        """
        super().__init__(rate_limiter, timeout)
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {"transport": self.transport}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return httpx.AsyncClient(**kwargs)

    async def _post(self, url: str, payload: Dict[str, Any], headers: Dict[str, str], params: Optional[Dict[str, str]] = None) -> Any:
        """
        POST a JSON payload and return the decoded JSON reply.

        Raises:
            ProviderNetworkError: Transport failure, non-2xx status or a non-JSON body
        """
        try:
            async with self._client() as client:
                response = await client.post(url, json=payload, headers=headers, params=params)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            logger.error(f"{self.display_name} request failed: {e}")
            raise ProviderNetworkError(self.display_name, str(e)) from e
        except ValueError as e:
            raise ProviderNetworkError(self.display_name, f"invalid JSON response: {e}") from e

