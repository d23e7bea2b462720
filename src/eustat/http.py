"""HTTP要求の組み立て補助。"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from eustat.config import DATA_ENDPOINT, METADATA_ENDPOINT, SEARCH_ENDPOINT
from eustat.enums import Format, Lang, SearchCollection


def build_request_headers(user_agent: str) -> Mapping[str, str]:
    """標準ヘッダを構築する。"""

    return {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": user_agent,
    }


def build_data_request(
    dataset_id: str,
    filters: Sequence[tuple[str, str]],
    *,
    lang: Lang,
) -> tuple[str, list[tuple[str, str]]]:
    """データAPIのエンドポイントとクエリを組み立てる。

    絞り込みは ``geo=BE&geo=BG`` のように同一キーを繰り返して送る。

    Args:
        dataset_id: 正規化済みデータセットID。
        filters: 正規化済みの ``(次元ID, カテゴリID)`` 列。
        lang: 言語。

    Returns:
        (エンドポイント, クエリ)。
    """

    params: list[tuple[str, str]] = [
        ("format", Format.JSON.value),
        ("lang", lang.value),
    ]
    params.extend(filters)
    return DATA_ENDPOINT.format(dataset_id=dataset_id), params


def build_search_request(
    text: str,
    *,
    lang: Lang,
    collection: SearchCollection = SearchCollection.DATASET,
) -> tuple[str, list[tuple[str, str]]]:
    """検索APIのエンドポイントとクエリを組み立てる。"""

    endpoint = SEARCH_ENDPOINT.format(lang=lang.value.lower())
    return endpoint, [("collection", collection.value), ("text", text)]


def build_metadata_request(dataset_id: str, *, lang: Lang) -> str:
    """メタデータAPIのエンドポイントを組み立てる。"""

    return METADATA_ENDPOINT.format(dataset_id=dataset_id, lang=lang.value.lower())
