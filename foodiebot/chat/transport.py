from __future__ import annotations

import json
import logging
from typing import Protocol

import httpx

from .config import DEFAULT_CHAT_CONFIG, ChatConfig
from .models import ProxyRequest, ProxyResponse

logger = logging.getLogger(__name__)

UNAVAILABLE_PREFIX = "AI service temporarily unavailable"


def unavailable_message(detail: str) -> str:
    return f"{UNAVAILABLE_PREFIX}: {detail}"


class Transport(Protocol):
    name: str

    async def send(self, request: ProxyRequest) -> ProxyResponse: ...


class _HTTPProxyTransport:
    """One JSON POST per call, no streaming and no retries.

    Failures never escape ``send``: they come back as a ``ProxyResponse``
    with ``ok=False`` and a readable message.
    """

    name = "proxy"

    def __init__(
        self,
        url: str,
        timeout: float,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._client = client

    async def send(self, request: ProxyRequest) -> ProxyResponse:
        logger.debug("Sending %d messages via %s transport to %s",
                     len(request.messages), self.name, self.url)
        try:
            if self._client is not None:
                response = await self._post(self._client, request)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, request)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("%s transport call failed", self.name, exc_info=True)
            return _failure(str(exc) or exc.__class__.__name__)

        if response.is_error:
            detail = self._error_detail(response)
            logger.warning("%s transport returned HTTP %d: %s",
                           self.name, response.status_code, detail)
            return _failure(detail, response.status_code)

        try:
            text = self._extract_text(_json_object(response))
        except ValueError as exc:
            logger.warning("%s transport returned an unreadable body", self.name, exc_info=True)
            return _failure(str(exc), response.status_code)

        return ProxyResponse(text=text, status_code=response.status_code)

    async def _post(self, client: httpx.AsyncClient, request: ProxyRequest) -> httpx.Response:
        return await client.post(
            self.url,
            json=request.to_payload(),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    def _error_detail(self, response: httpx.Response) -> str:
        raise NotImplementedError

    def _extract_text(self, data: dict) -> str:
        raise NotImplementedError


def _failure(detail: str, status_code: int | None = None) -> ProxyResponse:
    return ProxyResponse(text=unavailable_message(detail), ok=False, status_code=status_code)


def _json_object(response: httpx.Response) -> dict:
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError("Unexpected response body from AI proxy")
    return data


class PlatformProxyTransport(_HTTPProxyTransport):
    """The deployment's own ``/api/ai-proxy`` endpoint."""

    name = "platform"

    def __init__(
        self,
        base_url: str,
        endpoint: str,
        timeout: float,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url.rstrip("/") + endpoint, timeout, client)

    def _error_detail(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return f"HTTP {response.status_code}"

    def _extract_text(self, data: dict) -> str:
        return str(data.get("response") or "")


class ExternalProxyTransport(_HTTPProxyTransport):
    """A separately hosted proxy configured by absolute URL."""

    name = "external"

    def _error_detail(self, response: httpx.Response) -> str:
        return response.text or f"HTTP {response.status_code}"

    def _extract_text(self, data: dict) -> str:
        return str(data.get("response") or data.get("result") or "")


def resolve_transport(
    config: ChatConfig = DEFAULT_CHAT_CONFIG,
    client: httpx.AsyncClient | None = None,
) -> Transport:
    """Pick the transport once, from configuration only."""
    if config.uses_external_proxy:
        logger.info("Using external AI proxy at %s", config.proxy_url)
        return ExternalProxyTransport(config.proxy_url.strip(), config.timeout, client)
    logger.info("Using platform AI proxy at %s%s", config.platform_base_url, config.platform_endpoint)
    return PlatformProxyTransport(
        config.platform_base_url, config.platform_endpoint, config.timeout, client,
    )
