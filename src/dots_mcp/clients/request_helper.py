"""HTTP transport for the DigitalOcean v2 API.

Every domain client describes its call as a ``RequestOptions`` and hands it to
``RequestHelper.execute``. The helper owns the httpx client, authentication,
JSON encoding, error mapping, and page traversal for list endpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel

from dots_mcp.utils.errors import (
    APIError,
    AuthenticationError,
    DotsConnectionError,
    NotFoundError,
    RateLimitError,
)

if TYPE_CHECKING:
    from types import TracebackType

    from dots_mcp.config import DotsConfig

logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    """HTTP verbs used by the API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass
class RequestOptions:
    """Description of a single API call."""

    action_path: str
    method: HttpMethod = HttpMethod.GET
    body: Any = None


@dataclass
class PaginatedRequestOptions(RequestOptions):
    """Description of a list call that may span several pages.

    When ``include_all`` is set the helper walks every page, starting from the
    first regardless of ``page``, and returns the items of all pages under ``key``.
    """

    key: str = ""
    tag_name: str | None = None
    page: int = 1
    page_size: int = 10
    include_all: bool = False

    def query_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"page": self.page, "per_page": self.page_size}
        if self.tag_name:
            params["tag_name"] = self.tag_name
        return params


def _encode_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


def _raise_for_status(response: httpx.Response) -> None:
    """Translate a non-2xx response into the matching APIError subclass."""
    if response.is_success:
        return

    error_id: str | None = None
    message = response.reason_phrase or "request failed"
    details: dict[str, Any] = {}
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error_id = payload.get("id")
        message = payload.get("message", message)
        if payload.get("request_id"):
            details["request_id"] = payload["request_id"]

    status = response.status_code
    if status in (401, 403):
        raise AuthenticationError(status, message, error_id, details)
    if status == 404:
        raise NotFoundError(status, message, error_id, details)
    if status == 429:
        reset = response.headers.get("ratelimit-reset")
        raise RateLimitError(
            status,
            message,
            error_id,
            details,
            reset_at=int(reset) if reset and reset.isdigit() else None,
        )
    raise APIError(status, message, error_id, details)


class RequestHelper:
    """Async transport shared by all domain clients.

    Either build it from a ``DotsConfig`` or inject a preconfigured
    ``httpx.AsyncClient`` (tests pass one backed by ``httpx.MockTransport``).
    """

    def __init__(
        self,
        config: DotsConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if http_client is None:
            if config is None:
                from dots_mcp.config import get_config

                config = get_config()
            http_client = httpx.AsyncClient(
                base_url=config.api_url,
                timeout=httpx.Timeout(config.request_timeout_seconds),
                headers=self._build_headers(config),
            )
        self._client = http_client

    @staticmethod
    def _build_headers(config: DotsConfig) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": config.user_agent,
        }
        if config.api_token:
            headers["Authorization"] = f"Bearer {config.api_token}"
        else:
            logger.warning("No API token configured; requests will be unauthenticated")
        return headers

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> RequestHelper:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def build_paginated_request(
        self,
        *,
        action_path: str,
        key: str,
        page_size: int,
        tag_name: str | None = None,
        page: int = 1,
        include_all: bool = False,
    ) -> PaginatedRequestOptions:
        """Build the descriptor for a list endpoint."""
        return PaginatedRequestOptions(
            action_path=action_path,
            key=key,
            tag_name=tag_name,
            page=page,
            page_size=page_size,
            include_all=include_all,
        )

    async def execute(self, options: RequestOptions) -> Any:
        """Perform the call described by ``options`` and return the parsed JSON.

        Returns None for responses without a body (e.g. 204 on delete).

        Raises:
            APIError: Non-2xx status or a body that is not JSON.
            DotsConnectionError: The request never got a response.
        """
        params = None
        if isinstance(options, PaginatedRequestOptions):
            params = options.query_params()
            if options.include_all:
                # a full walk always starts from the first page
                params["page"] = 1

        data = await self._request(
            options.method.value,
            options.action_path,
            params=params,
            body=_encode_body(options.body),
        )

        if isinstance(options, PaginatedRequestOptions) and options.include_all:
            data = await self._collect_pages(data, options.key)
        return data

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        logger.debug(f"{method} {url} params={params}")
        try:
            response = await self._client.request(method, url, params=params, json=body)
        except httpx.TransportError as e:
            raise DotsConnectionError(f"{method} {url} failed: {e}") from e

        _raise_for_status(response)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                response.status_code,
                f"Response from {method} {url} is not valid JSON",
                "invalid_json",
            ) from e

    async def _collect_pages(self, first: Any, key: str) -> Any:
        """Follow ``links.pages.next`` and gather every page's items under ``key``."""
        if not isinstance(first, dict):
            return first

        items = list(first.get(key) or [])
        next_url = _next_page_url(first)
        seen: set[str] = set()
        while next_url and next_url not in seen:
            seen.add(next_url)
            logger.debug(f"Fetching next page of '{key}': {next_url}")
            page = await self._request(HttpMethod.GET.value, next_url)
            if not isinstance(page, dict):
                break
            items.extend(page.get(key) or [])
            next_url = _next_page_url(page)

        if next_url and next_url in seen:
            logger.warning(f"Stopped paging '{key}': {next_url} was already fetched")

        result = {k: v for k, v in first.items() if k != "links"}
        result[key] = items
        return result


def _next_page_url(payload: dict[str, Any]) -> str | None:
    links = payload.get("links") or {}
    pages = links.get("pages") or {}
    return pages.get("next")
