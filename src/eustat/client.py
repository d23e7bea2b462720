"""公開クライアント実装。"""

from __future__ import annotations

from typing import Any

import httpx

from eustat.config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, ClientConfig
from eustat.enums import Lang
from eustat.models import Dataset
from eustat.services.data import AsyncDataService, DataService
from eustat.services.metadata import AsyncMetadataService, MetadataService
from eustat.services.search import AsyncSearchService, SearchService
from eustat.validation import FilterInput, normalize_lang


def _client_kwargs(
    *,
    base_url: str,
    timeout: float,
    http2: bool,
    proxy: str | None,
    limits: httpx.Limits | None,
) -> dict[str, Any]:
    client_kwargs: dict[str, Any] = {
        "base_url": base_url,
        "timeout": timeout,
        "http2": http2,
    }
    if proxy is not None:
        client_kwargs["proxy"] = proxy
    if limits is not None:
        client_kwargs["limits"] = limits
    return client_kwargs


class EurostatClient:
    """Eurostat APIの同期クライアント。"""

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        base_url: str = DEFAULT_BASE_URL,
        lang: Lang | str = Lang.EN,
        user_agent: str = DEFAULT_USER_AGENT,
        capture_full_response: bool = False,
        http_client: httpx.Client | None = None,
        http2: bool = False,
        proxy: str | None = None,
        limits: httpx.Limits | None = None,
    ) -> None:
        """クライアントを初期化する。

        Args:
            timeout: HTTPタイムアウト秒。
            base_url: APIベースURL。
            lang: 既定言語。
            user_agent: User-Agent。
            capture_full_response: 例外に完全レスポンスを保持するか。
            http_client: 外部httpx.Client。
            http2: HTTP/2有効化。
            proxy: プロキシ。
            limits: httpx接続制御。
        """

        if timeout <= 0:
            raise ValueError("timeout は0より大きい値を指定してください。")

        self._owns_client = http_client is None
        if http_client is None:
            self._http_client = httpx.Client(
                **_client_kwargs(
                    base_url=base_url,
                    timeout=timeout,
                    http2=http2,
                    proxy=proxy,
                    limits=limits,
                )
            )
        else:
            self._http_client = http_client

        self._config = ClientConfig(
            base_url=base_url,
            timeout=timeout,
            lang=normalize_lang(lang),
            user_agent=user_agent,
            capture_full_response=capture_full_response,
        )
        self.data = DataService(client=self._http_client, config=self._config)
        self.search = SearchService(client=self._http_client, config=self._config)
        self.metadata = MetadataService(client=self._http_client, config=self._config)

    @property
    def config(self) -> ClientConfig:
        """有効な設定を返す。"""

        return self._config

    def close(self) -> None:
        """内部Clientをクローズする。"""

        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> "EurostatClient":
        """コンテキスト開始。"""

        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        """コンテキスト終了。"""

        self.close()


class AsyncEurostatClient:
    """Eurostat APIの非同期クライアント。"""

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        base_url: str = DEFAULT_BASE_URL,
        lang: Lang | str = Lang.EN,
        user_agent: str = DEFAULT_USER_AGENT,
        capture_full_response: bool = False,
        http_client: httpx.AsyncClient | None = None,
        http2: bool = False,
        proxy: str | None = None,
        limits: httpx.Limits | None = None,
    ) -> None:
        """非同期クライアントを初期化する。"""

        if timeout <= 0:
            raise ValueError("timeout は0より大きい値を指定してください。")

        self._owns_client = http_client is None
        if http_client is None:
            self._http_client = httpx.AsyncClient(
                **_client_kwargs(
                    base_url=base_url,
                    timeout=timeout,
                    http2=http2,
                    proxy=proxy,
                    limits=limits,
                )
            )
        else:
            self._http_client = http_client

        self._config = ClientConfig(
            base_url=base_url,
            timeout=timeout,
            lang=normalize_lang(lang),
            user_agent=user_agent,
            capture_full_response=capture_full_response,
        )
        self.data = AsyncDataService(client=self._http_client, config=self._config)
        self.search = AsyncSearchService(client=self._http_client, config=self._config)
        self.metadata = AsyncMetadataService(client=self._http_client, config=self._config)

    @property
    def config(self) -> ClientConfig:
        """有効な設定を返す。"""

        return self._config

    async def aclose(self) -> None:
        """内部Clientをクローズする。"""

        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "AsyncEurostatClient":
        """非同期コンテキスト開始。"""

        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        """非同期コンテキスト終了。"""

        await self.aclose()


def fetch_dataset(
    dataset_id: str,
    filters: FilterInput | None = None,
    **client_kwargs: Any,
) -> Dataset:
    """一時クライアントでデータセットを取得・復号する。

    Args:
        dataset_id: データセットID。
        filters: 次元ID→カテゴリID列の絞り込み。
        **client_kwargs: :class:`EurostatClient` への引数。

    Returns:
        復号済みデータセット。
    """

    with EurostatClient(**client_kwargs) as client:
        return client.data.get(dataset_id, filters)
