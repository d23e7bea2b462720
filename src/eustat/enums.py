"""列挙型定義。"""

from __future__ import annotations

from enum import StrEnum


class Lang(StrEnum):
    """API言語を表す列挙型。

    Attributes:
        EN: 英語。
        FR: フランス語。
        DE: ドイツ語。
    """

    EN = "EN"
    FR = "FR"
    DE = "DE"


class Format(StrEnum):
    """データAPIの出力形式を表す列挙型。

    データAPIはJSON-stat互換のJSONのみを扱う。

    Attributes:
        JSON: JSON形式。
    """

    JSON = "JSON"


class SearchCollection(StrEnum):
    """検索APIのコレクション種別。

    Attributes:
        DATASET: データセット。
    """

    DATASET = "dataset"
