"""検索APIサービス。"""

from __future__ import annotations

import httpx

from eustat.config import ClientConfig
from eustat.enums import Lang
from eustat.http import build_search_request
from eustat.normalize import normalize_search_rows
from eustat.services._transport import perform_async_request, perform_sync_request
from eustat.types import SearchResult
from eustat.validation import normalize_lang, normalize_search_text


class SearchService:
    """同期検索サービス。"""

    def __init__(self, *, client: httpx.Client, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    def datasets(self, text: str, *, lang: Lang | str | None = None) -> list[SearchResult]:
        """文字列に一致するデータセットを検索する。"""

        endpoint, params = build_search_request(
            normalize_search_text(text),
            lang=normalize_lang(lang or self._config.lang),
        )
        payload, _ = perform_sync_request(
            client=self._client,
            endpoint=endpoint,
            params=params,
            expect="array",
            user_agent=self._config.user_agent,
            capture_full_response=self._config.capture_full_response,
        )
        return normalize_search_rows(payload)


class AsyncSearchService:
    """非同期検索サービス。"""

    def __init__(self, *, client: httpx.AsyncClient, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    async def datasets(self, text: str, *, lang: Lang | str | None = None) -> list[SearchResult]:
        """文字列に一致するデータセットを検索する。"""

        endpoint, params = build_search_request(
            normalize_search_text(text),
            lang=normalize_lang(lang or self._config.lang),
        )
        payload, _ = await perform_async_request(
            client=self._client,
            endpoint=endpoint,
            params=params,
            expect="array",
            user_agent=self._config.user_agent,
            capture_full_response=self._config.capture_full_response,
        )
        return normalize_search_rows(payload)
