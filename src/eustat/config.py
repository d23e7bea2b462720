"""設定値定義。"""

from __future__ import annotations

from dataclasses import dataclass

from eustat.enums import Lang

DEFAULT_BASE_URL = "https://ec.europa.eu/eurostat"
DEFAULT_USER_AGENT = "eustat/0.1.0"
DATA_API_VERSION = "1.0"

DATA_ENDPOINT = "/api/dissemination/statistics/" + DATA_API_VERSION + "/data/{dataset_id}"
SEARCH_ENDPOINT = "/search-api/generic/languages/{lang}/_autocomplete"
METADATA_ENDPOINT = "/search-api/datasets/{dataset_id}/languages/{lang}"

RESPONSE_EXCERPT_LENGTH = 2048


@dataclass(slots=True)
class ClientConfig:
    """クライアント共通設定。

    Attributes:
        base_url: APIベースURL。
        timeout: タイムアウト秒。
        lang: 言語。
        user_agent: User-Agent。
        capture_full_response: 完全文字列の例外保持。
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    lang: Lang = Lang.EN
    user_agent: str = DEFAULT_USER_AGENT
    capture_full_response: bool = False
