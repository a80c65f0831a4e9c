"""
HTTP client for calls between Value Pipeline services.

Wraps httpx.AsyncClient with a finite timeout and maps every failure onto
two error kinds: the upstream could not be reached, or it answered with
something other than a usable 200 response.
"""

import logging
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class UpstreamError(Exception):
    """Base class for failed upstream calls."""

    def __init__(self, service: str, reason: str):
        super().__init__(f"{service}: {reason}")
        self.service = service
        self.reason = reason


class UpstreamUnreachable(UpstreamError):
    """Network-level failure: connection refused, DNS error or timeout."""


class UpstreamBadResponse(UpstreamError):
    """Upstream answered with a non-200 status or an unparseable body."""


class UpstreamClient:
    """Client for a single upstream service."""

    def __init__(
        self,
        service: str,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the upstream client.

        Args:
            service: Upstream service name, used in errors and logs
            base_url: Upstream base URL, e.g. http://producer:8080
            timeout: Timeout in seconds for each call
            transport: Optional httpx transport replacing the network
        """
        self.service = service
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

        self.logger = logging.getLogger(f"upstream.{service}")

    async def get(self, path: str) -> httpx.Response:
        """
        Issue a GET request against the upstream.

        Returns:
            The response, guaranteed to have status 200

        Raises:
            UpstreamUnreachable: the request never got a response
            UpstreamBadResponse: the response status was not 200 or its body could not be decoded
        """
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(path)
            except httpx.DecodingError as e:
                raise UpstreamBadResponse(self.service, f"GET {path} body could not be decoded: {e!r}") from e
            except httpx.TransportError as e:
                raise UpstreamUnreachable(self.service, f"GET {path} failed: {e!r}") from e

        if response.status_code != 200:
            raise UpstreamBadResponse(self.service, f"GET {path} returned status {response.status_code}")

        self.logger.debug(f"GET {self.base_url}{path} -> {response.status_code}")
        return response

    def parse(self, response: httpx.Response, model: Type[ModelT]) -> ModelT:
        """Validate a response body against a pydantic model."""
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise UpstreamBadResponse(self.service, f"malformed body: {e.error_count()} validation error(s)") from e

    async def get_model(self, path: str, model: Type[ModelT]) -> ModelT:
        """GET a path and parse its body as the given model."""
        response = await self.get(path)
        return self.parse(response, model)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(service='{self.service}', base_url='{self.base_url}')"
