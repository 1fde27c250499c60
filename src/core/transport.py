"""
Outbound HTTP transport for the remote data endpoints.

One call in, one ``Result`` out: timeouts, network errors, HTML error pages
and non-2xx statuses are all reported as failed results, never raised.
"""

import asyncio
import json
import logging
from collections.abc import Mapping
from enum import Enum

import httpx

from core.config import RELAY_URL, REQUEST_TIMEOUT_SECONDS
from core.errors import ErrorCodes, http_status_code
from core.result import Result

logger = logging.getLogger(__name__)


class BodyKind(Enum):
    """Content classification of a raw response body."""

    HTML = "html"
    JSON = "json"
    EMPTY = "empty"


def classify_body(text: str) -> BodyKind:
    """
    Sniff a response body before parsing.

    Apps Script deployments answer with HTML login/error pages (often with a
    200 status) when misconfigured, so anything starting with '<' is HTML.
    """
    stripped = text.strip()
    if not stripped:
        return BodyKind.EMPTY
    if stripped.startswith("<"):
        return BodyKind.HTML
    return BodyKind.JSON


def build_target_url(url: str, params: Mapping[str, str] | None = None) -> str:
    """Merge query params into the target URL."""
    target = httpx.URL(url)
    if params:
        target = target.copy_merge_params(dict(params))
    return str(target)


def build_relay_url(relay_url: str, target: str) -> str:
    """Route a target URL through the relay: ``<relay>?target=<encoded target>``."""
    return str(httpx.URL(relay_url).copy_merge_params({"target": target}))


class Transport:
    """Issues single HTTP calls with a hard deadline, optionally through the relay."""

    def __init__(
        self,
        relay_url: str | None = RELAY_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ):
        self.relay_url = relay_url or None
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True)
        return self._client

    def resolve_url(self, url: str, params: Mapping[str, str] | None = None) -> str:
        """Final request URL after merging params and applying the relay hop."""
        target = build_target_url(url, params)
        if self.relay_url:
            return build_relay_url(self.relay_url, target)
        return target

    async def send(
        self,
        url: str,
        *,
        method: str = "GET",
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Result:
        """
        Perform one request and classify the response.

        ``data`` is sent as a form-encoded body. The whole exchange, including
        reading the body, must finish within ``timeout`` seconds or the call
        is cancelled and reported as TIMEOUT.
        """
        request_url = self.resolve_url(url, params)
        logger.debug(f"{method} {request_url}")

        try:
            response = await asyncio.wait_for(
                self.client.request(
                    method,
                    request_url,
                    data=dict(data) if data is not None else None,
                    headers=dict(headers) if headers else None,
                    timeout=self.timeout,
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(f"{method} {url} timed out after {self.timeout}s")
            return Result.failure(ErrorCodes.TIMEOUT)
        except Exception as e:
            logger.warning(f"{method} {url} failed: {e!r}")
            return Result.failure(str(e) or ErrorCodes.NETWORK_ERROR)

        result = interpret_response(response.status_code, response.text)
        if not result.ok:
            logger.warning(f"{method} {url} -> {response.status_code}: {result.error}")
        return result

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def interpret_response(status_code: int, text: str) -> Result:
    """Turn a status code and raw body into a Result."""
    kind = classify_body(text)
    if kind is BodyKind.HTML:
        return Result.failure(ErrorCodes.BACKEND_RETURNED_HTML)

    data = None
    if kind is BodyKind.JSON:
        try:
            data = json.loads(text)
        except ValueError as e:
            return Result.failure(str(e))

    if not 200 <= status_code < 300:
        message = data.get("error") if isinstance(data, dict) else None
        return Result.failure(str(message) if message else http_status_code(status_code))

    return Result.success(data)
