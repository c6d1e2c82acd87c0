"""
Binance Signing Relay
Validates relay requests, signs authenticated ones and forwards them upstream
"""
import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from binance_relay.core.config import Settings, get_settings
from binance_relay.core.exceptions import (
    MissingCredentialError,
    MissingSecretError,
    RelayError,
    UpstreamRejectedError,
)
from binance_relay.core.logging import get_logger
from binance_relay.core.signing import (
    build_upstream_url,
    current_timestamp_ms,
    is_authenticated_endpoint,
    sign_parameters,
)
from binance_relay.core.upstream import UpstreamClient, UpstreamResponse
from binance_relay.models.relay import RelayRequest

logger = get_logger(__name__)


@dataclass(frozen=True)
class RelayResponse:
    """Envelope status and JSON body handed back to the caller."""

    status_code: int
    body: Any


class SigningRelay:
    """
    Stateless request transformer in front of the upstream REST API.

    Collaborators are injected so one instance can serve any number of
    concurrent requests; nothing is kept between calls.
    """

    def __init__(
        self,
        upstream: UpstreamClient,
        settings: Optional[Settings] = None,
        clock: Callable[[], int] = current_timestamp_ms
    ):
        self.upstream = upstream
        self.settings = settings or get_settings()
        self.clock = clock

    async def handle(self, request: RelayRequest) -> RelayResponse:
        """
        Relay one request and map the outcome to a client envelope.

        Never raises: validation failures, upstream rejections and any
        unexpected exception are all turned into an error envelope.
        """
        try:
            payload = await self.forward(request)
            return RelayResponse(status_code=200, body=payload)
        except RelayError as e:
            if e.get_http_status_code() >= 500:
                logger.error("Relay failed", error=e.message, error_code=e.error_code)
            return RelayResponse(status_code=e.get_http_status_code(), body=e.to_dict())
        except Exception as e:
            logger.error("Error en proxy", error=str(e), exc_info=True)
            error = RelayError(str(e))
            return RelayResponse(status_code=error.get_http_status_code(), body=error.to_dict())

    async def forward(self, request: RelayRequest) -> Any:
        """
        Validate, sign if needed, call upstream and return its JSON payload.

        Raises:
            MissingCredentialError: apiKey or endpoint missing
            MissingSecretError: authenticated endpoint without secretKey
            UpstreamRejectedError: upstream answered with a non-2xx status
            UpstreamUnreachableError: upstream could not be reached
        """
        if not request.api_key or not request.endpoint:
            raise MissingCredentialError()

        endpoint = request.endpoint
        logger.info("Procesando petición", endpoint=endpoint)

        final_params: Dict[str, Any] = dict(request.params or {})

        if is_authenticated_endpoint(endpoint):
            if not request.secret_key:
                raise MissingSecretError()

            final_params = sign_parameters(final_params, request.secret_key, self.clock())
            logger.info("Signature generada para endpoint autenticado", endpoint=endpoint)

        url = build_upstream_url(self.settings.UPSTREAM_BASE_URL, endpoint, final_params)
        headers = {
            self.settings.UPSTREAM_API_KEY_HEADER: request.api_key,
            "Content-Type": "application/json",
            "User-Agent": self.settings.UPSTREAM_USER_AGENT,
        }

        logger.info("Llamando a Binance", endpoint=endpoint)
        response = await self.upstream.get(url, headers)
        logger.info("Respuesta de Binance", endpoint=endpoint, status_code=response.status_code)

        if not response.is_success:
            logger.error(
                "Error de Binance",
                endpoint=endpoint,
                status_code=response.status_code,
                body=response.text
            )
            raise UpstreamRejectedError(response.status_code, extract_error_message(response))

        data = response.json()
        logger.info("Respuesta exitosa de Binance", endpoint=endpoint)
        return data


def extract_error_message(response: UpstreamResponse) -> str:
    """Best-effort error message: the JSON ``msg`` field, else the raw body."""
    try:
        error_data = json.loads(response.text)
    except ValueError:
        return response.text

    if isinstance(error_data, dict) and error_data.get("msg"):
        return str(error_data["msg"])
    return response.text
