"""公開型と内部共通データ構造。"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


@dataclass(frozen=True, slots=True)
class RawDimension:
    """データAPIの次元定義（正規化済み）。

    Attributes:
        label: 次元の表示名。
        index: カテゴリID→位置。
        labels: カテゴリID→表示名。
    """

    label: str
    index: dict[str, int]
    labels: dict[str, str]


@dataclass(frozen=True, slots=True)
class Annotation:
    """データセット注記。

    Attributes:
        type: 注記種別（例: ``UPDATE_DATA``）。
        title: 注記本文。
        date: 注記日付。
    """

    type: str
    title: str | None = None
    date: str | None = None


@dataclass(frozen=True, slots=True)
class RawDataset:
    """データAPIレスポンス本体。

    ``ids`` の順序が値配列の混合基数の桁順（先頭が最上位桁）を決める。

    Attributes:
        ids: 次元IDの並び。
        sizes: 次元ごとのカテゴリ数。``ids`` と同順。
        dimensions: 次元ID→次元定義。
        values: フラット位置→観測値。欠測位置はキーを持たない。
        statuses: フラット位置→ステータスフラグ。
        label: データセット名。
        source: 提供元。
        updated: 最終更新日時（原文）。
        status_labels: ステータスフラグ→説明。
        annotations: 注記一覧。
        request_url: 取得元URL。
    """

    ids: tuple[str, ...]
    sizes: tuple[int, ...]
    dimensions: dict[str, RawDimension]
    values: dict[int, Decimal]
    statuses: dict[int, str] = field(default_factory=dict)
    label: str | None = None
    source: str | None = None
    updated: str | None = None
    status_labels: dict[str, str] = field(default_factory=dict)
    annotations: tuple[Annotation, ...] = ()
    request_url: str | None = None


@dataclass(frozen=True, slots=True)
class Category:
    """次元内の1カテゴリ。

    Attributes:
        id: カテゴリID。
        label: 表示名。
        parsed_label: ラベル解析結果。解析器が登録された次元のみ設定される。
    """

    id: str
    label: str
    parsed_label: Any = None


@dataclass(frozen=True, slots=True)
class Dimension:
    """次元定義。

    Attributes:
        id: 次元ID。
        label: 表示名。
        categories: カテゴリID→カテゴリ。位置順に並ぶ。
    """

    id: str
    label: str
    categories: dict[str, Category]


@dataclass(frozen=True, slots=True)
class Row:
    """観測値1件。

    Attributes:
        key: 次元ID→カテゴリID。
        value: 観測値。欠測時None。
        status: ステータスフラグ。
    """

    key: dict[str, str]
    value: Decimal | None
    status: str | None = None


@dataclass(frozen=True, slots=True)
class DatasetInfo:
    """データセット付随情報。

    Attributes:
        label: データセット名。
        source: 提供元。
        updated: 最終更新日時（原文）。
        status_labels: ステータスフラグ→説明。
        annotations: 注記一覧。
        request_url: 取得元URL。
    """

    label: str | None = None
    source: str | None = None
    updated: str | None = None
    status_labels: dict[str, str] = field(default_factory=dict)
    annotations: tuple[Annotation, ...] = ()
    request_url: str | None = None


@dataclass(slots=True)
class SearchSuggestion:
    """検索ハイライト情報。

    Attributes:
        highlight_location: 一致箇所（``title`` または ``code``）。
        highlight_phrase: ``<b></b>`` で一致部分を囲んだHTML断片。
    """

    highlight_location: str | None
    highlight_phrase: str | None


@dataclass(slots=True)
class SearchResult:
    """検索APIの1件。

    Attributes:
        code: データセットID。
        type: コレクション種別。
        suggest: ハイライト情報。
        extras: 未知キーの退避領域。
    """

    code: str
    type: str
    suggest: SearchSuggestion
    extras: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MetadataPosition:
    """メタデータAPIのカテゴリ。"""

    code: str
    description: str | None


@dataclass(slots=True)
class MetadataDimension:
    """メタデータAPIの次元。"""

    code: str
    description: str | None
    positions: list[MetadataPosition] = field(default_factory=list)


@dataclass(slots=True)
class DatasetMetadata:
    """メタデータAPIの返却オブジェクト。

    メタデータAPIは次元・カテゴリのコードを大文字で返すため、
    データAPIのIDと突き合わせる場合は :meth:`dimension` を使う。

    Attributes:
        code: データセットID。
        title: タイトル。
        description: 説明。
        dimensions: 次元一覧。
        request_url: 取得元URL。
        extras: 未知キーの退避領域。
    """

    code: str
    title: str | None
    description: str | None
    dimensions: list[MetadataDimension] = field(default_factory=list)
    request_url: str | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    def dimension(self, code: str) -> MetadataDimension | None:
        """次元コードを大文字小文字を区別せずに引く。"""

        needle = code.casefold()
        for dimension in self.dimensions:
            if dimension.code.casefold() == needle:
                return dimension
        return None

    @property
    def dimension_codes(self) -> list[str]:
        """次元コード一覧を返す。"""

        return [dimension.code for dimension in self.dimensions]
