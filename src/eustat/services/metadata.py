"""メタデータAPIサービス。"""

from __future__ import annotations

import httpx

from eustat.config import ClientConfig
from eustat.enums import Lang
from eustat.http import build_metadata_request
from eustat.normalize import normalize_metadata
from eustat.services._transport import perform_async_request, perform_sync_request
from eustat.types import DatasetMetadata
from eustat.validation import normalize_dataset_id, normalize_lang


class MetadataService:
    """同期メタデータ取得サービス。"""

    def __init__(self, *, client: httpx.Client, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    def get(self, dataset_id: str, *, lang: Lang | str | None = None) -> DatasetMetadata:
        """データセットの説明・次元・カテゴリ一覧を取得する。"""

        endpoint = build_metadata_request(
            normalize_dataset_id(dataset_id),
            lang=normalize_lang(lang or self._config.lang),
        )
        payload, request_url = perform_sync_request(
            client=self._client,
            endpoint=endpoint,
            params=None,
            expect="object",
            user_agent=self._config.user_agent,
            capture_full_response=self._config.capture_full_response,
        )
        return normalize_metadata(payload, request_url=request_url)


class AsyncMetadataService:
    """非同期メタデータ取得サービス。"""

    def __init__(self, *, client: httpx.AsyncClient, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    async def get(self, dataset_id: str, *, lang: Lang | str | None = None) -> DatasetMetadata:
        """データセットの説明・次元・カテゴリ一覧を取得する。"""

        endpoint = build_metadata_request(
            normalize_dataset_id(dataset_id),
            lang=normalize_lang(lang or self._config.lang),
        )
        payload, request_url = await perform_async_request(
            client=self._client,
            endpoint=endpoint,
            params=None,
            expect="object",
            user_agent=self._config.user_agent,
            capture_full_response=self._config.capture_full_response,
        )
        return normalize_metadata(payload, request_url=request_url)
