"""Shared base for resource-scoped API clients."""

from typing import Any

from dots_mcp.clients.request_helper import (
    PaginatedRequestOptions,
    RequestHelper,
    RequestOptions,
)


class BaseModule:
    """Base class for domain clients.

    Holds the transport and the default page size used by list operations.
    """

    def __init__(self, page_size: int, request_helper: RequestHelper) -> None:
        self.page_size = page_size
        self._request_helper = request_helper

    async def _execute(self, options: RequestOptions) -> Any:
        return await self._request_helper.execute(options)

    def _get_base_paginated_request_options(
        self,
        *,
        action_path: str,
        key: str,
        page_size: int,
        tag_name: str | None = None,
        page: int = 1,
        include_all: bool = False,
    ) -> PaginatedRequestOptions:
        return self._request_helper.build_paginated_request(
            action_path=action_path,
            key=key,
            tag_name=tag_name,
            page=page,
            page_size=page_size,
            include_all=include_all,
        )
