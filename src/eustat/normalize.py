"""レスポンス正規化処理。"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from eustat.types import (
    DatasetMetadata,
    MetadataDimension,
    MetadataPosition,
    SearchResult,
    SearchSuggestion,
)

_KEY_ALIASES = {
    "HIGHLIGHTLOCATION": "highlight_location",
    "HIGHLIGHTPHRASE": "highlight_phrase",
}


def normalize_key(key: str) -> str:
    """キー名揺れを吸収して正規化する。

    検索APIは ``highlightLocation`` と ``highLightLocation`` を混在させて返す。
    """

    compact = key.strip().replace("_", "").upper()
    if compact in _KEY_ALIASES:
        return _KEY_ALIASES[compact]
    return key.strip()


def to_int(value: Any) -> int:
    """位置・件数を整数へ変換する。

    JSONの数値または整数表記の文字列を受け付ける。
    真偽値と小数部を持つ数値は拒否する。

    Raises:
        TypeError: 数値・文字列以外の場合。
        ValueError: 整数として解釈できない場合。
    """

    if isinstance(value, bool):
        raise TypeError(f"真偽値は整数として扱えません: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"整数ではありません: {value!r}")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"整数として扱えない型です: {type(value).__name__}")


def decimal_value(value: Any) -> Decimal | None:
    """観測値をDecimalへ変換する。

    欠測として扱うのはNoneのみで、それ以外の変換不能な値は例外にする。

    Raises:
        TypeError: 数値・文字列以外の場合。
        ValueError: 有限の数値として解釈できない場合。
    """

    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise TypeError(f"観測値の型が不正です: {type(value).__name__}")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"観測値を数値として解釈できません: {value!r}") from exc
    if not number.is_finite():
        raise ValueError(f"観測値が有限の数値ではありません: {value!r}")
    return number


def offset_items(raw: Any) -> list[tuple[int, Any]]:
    """値・ステータステーブルを「位置, 値」の組へ展開する。

    JSON-statは位置文字列キーのオブジェクトまたは配列で返す。

    Raises:
        TypeError: 位置キーが整数でない場合。
        ValueError: 位置キーが整数でない場合。
    """

    if isinstance(raw, Mapping):
        return [(to_int(key), value) for key, value in raw.items()]
    if isinstance(raw, list):
        return list(enumerate(raw))
    return []


def normalize_category_index(raw: Any) -> dict[str, int]:
    """カテゴリ索引を「ID→位置」へ正規化する。

    JSON-statでは索引がIDの配列で与えられることもある。
    """

    if isinstance(raw, Mapping):
        return {str(key): to_int(value) for key, value in raw.items()}
    if isinstance(raw, list):
        return {str(key): position for position, key in enumerate(raw)}
    return {}


def _text_or_none(value: Any) -> str | None:
    return str(value) if value is not None else None


def normalize_search_rows(rows: list[Any]) -> list[SearchResult]:
    """検索API結果を正規化する。"""

    result: list[SearchResult] = []
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        suggest_raw = row.get("suggest")
        suggest: dict[str, Any] = {}
        if isinstance(suggest_raw, Mapping):
            suggest = {normalize_key(key): value for key, value in suggest_raw.items()}
        result.append(
            SearchResult(
                code=str(row.get("code", "")),
                type=str(row.get("type", "")),
                suggest=SearchSuggestion(
                    highlight_location=_text_or_none(suggest.get("highlight_location")),
                    highlight_phrase=_text_or_none(suggest.get("highlight_phrase")),
                ),
                extras={
                    key: value
                    for key, value in row.items()
                    if key not in {"code", "type", "suggest"}
                },
            )
        )
    return result


def normalize_metadata(payload: Mapping[str, Any], *, request_url: str | None = None) -> DatasetMetadata:
    """メタデータAPI本文を正規化する。"""

    dimensions: list[MetadataDimension] = []
    for dim in payload.get("dimensions") or []:
        if not isinstance(dim, Mapping):
            continue
        positions = [
            MetadataPosition(
                code=str(pos.get("code", "")),
                description=_text_or_none(pos.get("description")),
            )
            for pos in dim.get("positions") or []
            if isinstance(pos, Mapping)
        ]
        dimensions.append(
            MetadataDimension(
                code=str(dim.get("code", "")),
                description=_text_or_none(dim.get("description")),
                positions=positions,
            )
        )
    return DatasetMetadata(
        code=str(payload.get("code", "")),
        title=_text_or_none(payload.get("title")),
        description=_text_or_none(payload.get("description")),
        dimensions=dimensions,
        request_url=request_url,
        extras={
            key: value
            for key, value in payload.items()
            if key not in {"code", "title", "description", "dimensions"}
        },
    )
