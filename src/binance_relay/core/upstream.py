"""
Upstream HTTP client for the Binance relay.

Wraps an httpx.AsyncClient behind a small protocol so the relay can be
exercised against a test double instead of the network.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from binance_relay.core.config import Settings, get_settings
from binance_relay.core.exceptions import UpstreamUnreachableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    """Status and raw body of an upstream reply."""

    status_code: int
    text: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text)


class UpstreamClient(Protocol):
    """Anything able to issue the relay's outbound GET."""

    async def get(self, url: str, headers: Dict[str, str]) -> UpstreamResponse:
        ...


class HTTPUpstreamClient:
    """httpx based upstream client, one instance per relayed request"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings or get_settings()
        self.transport = transport
        self.http_client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry - initialize HTTP client"""
        self.http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.UPSTREAM_TIMEOUT),
            transport=self.transport,
            follow_redirects=True,
            max_redirects=3
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit - cleanup HTTP client"""
        if self.http_client:
            await self.http_client.aclose()
            self.http_client = None

    async def get(self, url: str, headers: Dict[str, str]) -> UpstreamResponse:
        """
        Issue a GET request upstream.

        Args:
            url: Fully built URL, query string included
            headers: Request headers

        Returns:
            UpstreamResponse with the status code and decoded body

        Raises:
            UpstreamUnreachableError: On timeouts and transport failures
        """
        if not self.http_client:
            raise RuntimeError("Upstream client not initialized. Use async context manager.")

        # Never log the query string, it may carry a signature
        safe_url = url.split("?", 1)[0]

        try:
            response = await self.http_client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Upstream timeout: {e}", extra={"url": safe_url})
            raise UpstreamUnreachableError(
                f"Tiempo de espera agotado llamando a Binance ({self.settings.UPSTREAM_TIMEOUT}s)",
                url=safe_url,
                original_exception=e
            ) from e
        except httpx.TransportError as e:
            logger.error(f"Upstream connection error: {e}", extra={"url": safe_url})
            raise UpstreamUnreachableError(
                str(e) or "No se pudo conectar con Binance",
                url=safe_url,
                original_exception=e
            ) from e

        logger.debug(
            "Upstream responded",
            extra={
                "url": safe_url,
                "status_code": response.status_code,
                "content_type": response.headers.get("content-type", "unknown")
            }
        )

        return UpstreamResponse(status_code=response.status_code, text=response.text)
