"""データAPIサービス。"""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from eustat.config import ClientConfig
from eustat.decoder import decode
from eustat.enums import Lang
from eustat.http import build_data_request
from eustat.labels import LabelParser
from eustat.models import Dataset
from eustat.parsers import parse_dataset_payload
from eustat.services._transport import perform_async_request, perform_sync_request
from eustat.types import RawDataset
from eustat.validation import FilterInput, normalize_dataset_id, normalize_filters, normalize_lang


class DataService:
    """同期データ取得サービス。"""

    def __init__(self, *, client: httpx.Client, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    def get_raw(
        self,
        dataset_id: str,
        filters: FilterInput | None = None,
        *,
        lang: Lang | str | None = None,
    ) -> RawDataset:
        """データAPIから未復号のデータセットを取得する。

        Args:
            dataset_id: データセットID（例: ``aact_ali01``）。
            filters: 次元ID→カテゴリID列の絞り込み。
            lang: 言語。未指定時はクライアント既定。

        Returns:
            生データセット。
        """

        endpoint, params = build_data_request(
            normalize_dataset_id(dataset_id),
            normalize_filters(filters),
            lang=normalize_lang(lang or self._config.lang),
        )
        payload, request_url = perform_sync_request(
            client=self._client,
            endpoint=endpoint,
            params=params,
            expect="object",
            user_agent=self._config.user_agent,
            capture_full_response=self._config.capture_full_response,
        )
        return parse_dataset_payload(payload, request_url=request_url)

    def get(
        self,
        dataset_id: str,
        filters: FilterInput | None = None,
        *,
        lang: Lang | str | None = None,
        label_parsers: Mapping[str, LabelParser] | None = None,
    ) -> Dataset:
        """データAPIから取得して行形式へ復号する。"""

        raw = self.get_raw(dataset_id, filters, lang=lang)
        return decode(raw, label_parsers=label_parsers)


class AsyncDataService:
    """非同期データ取得サービス。"""

    def __init__(self, *, client: httpx.AsyncClient, config: ClientConfig) -> None:
        self._client = client
        self._config = config

    async def get_raw(
        self,
        dataset_id: str,
        filters: FilterInput | None = None,
        *,
        lang: Lang | str | None = None,
    ) -> RawDataset:
        """データAPIから未復号のデータセットを取得する。"""

        endpoint, params = build_data_request(
            normalize_dataset_id(dataset_id),
            normalize_filters(filters),
            lang=normalize_lang(lang or self._config.lang),
        )
        payload, request_url = await perform_async_request(
            client=self._client,
            endpoint=endpoint,
            params=params,
            expect="object",
            user_agent=self._config.user_agent,
            capture_full_response=self._config.capture_full_response,
        )
        return parse_dataset_payload(payload, request_url=request_url)

    async def get(
        self,
        dataset_id: str,
        filters: FilterInput | None = None,
        *,
        lang: Lang | str | None = None,
        label_parsers: Mapping[str, LabelParser] | None = None,
    ) -> Dataset:
        """データAPIから取得して行形式へ復号する。"""

        raw = await self.get_raw(dataset_id, filters, lang=lang)
        return decode(raw, label_parsers=label_parsers)
