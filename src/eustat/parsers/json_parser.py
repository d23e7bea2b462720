"""JSONレスポンスパーサ。"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from eustat.config import RESPONSE_EXCERPT_LENGTH
from eustat.errors import EurostatParseError, EurostatStructureError
from eustat.normalize import decimal_value, normalize_category_index, offset_items, to_int
from eustat.types import Annotation, RawDataset, RawDimension


@dataclass(slots=True)
class ApiErrorBody:
    """レスポンス本文に含まれるエラー情報。

    Attributes:
        status: 本文上のステータス。
        error_id: エラーID。
        label: エラーメッセージ。
    """

    status: int | None
    error_id: str | None
    label: str | None


def load_json(text: str, *, request_url: str | None = None) -> Any:
    """JSON本文を読み込む。

    Raises:
        EurostatParseError: JSONとして解釈できない場合。
    """

    try:
        return json.loads(text)
    except ValueError as exc:
        raise EurostatParseError(
            f"レスポンス本文をJSONとして解析できませんでした: {exc}",
            request_url=request_url,
            raw_response_excerpt=text[:RESPONSE_EXCERPT_LENGTH],
        ) from exc


def extract_api_error(payload: Any) -> ApiErrorBody | None:
    """本文の ``error`` 要素を取り出す。

    データAPIは ``error`` をオブジェクトまたは配列で返す。
    """

    if not isinstance(payload, Mapping):
        return None
    error = payload.get("error")
    if isinstance(error, list):
        error = next((item for item in error if isinstance(item, Mapping)), None)
    if not isinstance(error, Mapping):
        return None
    status_raw = error.get("status")
    try:
        status = int(status_raw) if status_raw not in (None, "") else None
    except (TypeError, ValueError):
        status = None
    error_id = error.get("id")
    label = error.get("label")
    return ApiErrorBody(
        status=status,
        error_id=str(error_id) if error_id is not None else None,
        label=str(label) if label is not None else None,
    )


def _require(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload:
        raise EurostatStructureError(
            f"データセットに {key} がありません。",
            reason="missing_field",
        )
    return payload[key]


def _parse_dimension(dim_id: str, raw: Any) -> RawDimension:
    if not isinstance(raw, Mapping):
        raise EurostatStructureError(
            f"次元 {dim_id} の定義が不正です。",
            reason="invalid_dimension",
            dimension=dim_id,
        )
    category = raw.get("category")
    if not isinstance(category, Mapping):
        raise EurostatStructureError(
            f"次元 {dim_id} に category がありません。",
            reason="missing_category",
            dimension=dim_id,
        )
    try:
        index = normalize_category_index(category.get("index"))
    except (TypeError, ValueError) as exc:
        raise EurostatStructureError(
            f"次元 {dim_id} のカテゴリ索引が整数ではありません。",
            reason="invalid_category_index",
            dimension=dim_id,
        ) from exc
    labels_raw = category.get("label")
    labels = (
        {str(key): str(value) for key, value in labels_raw.items()}
        if isinstance(labels_raw, Mapping)
        else {}
    )
    if not index and len(labels) == 1:
        # 単一カテゴリの次元は索引が省略されうる
        index = {next(iter(labels)): 0}
    return RawDimension(
        label=str(raw.get("label", dim_id)),
        index=index,
        labels=labels,
    )


def _parse_values(items: list[tuple[int, Any]]) -> dict[int, Decimal]:
    values: dict[int, Decimal] = {}
    for offset, value in items:
        try:
            number = decimal_value(value)
        except (TypeError, ValueError) as exc:
            raise EurostatStructureError(
                f"位置 {offset} の観測値を数値として解釈できません: {value!r}",
                reason="invalid_value",
            ) from exc
        if number is not None:
            values[offset] = number
    return values


def _parse_annotations(extension: Mapping[str, Any]) -> tuple[Annotation, ...]:
    items = extension.get("annotation")
    if not isinstance(items, list):
        return ()
    return tuple(
        Annotation(
            type=str(item.get("type", "")),
            title=str(item["title"]) if item.get("title") is not None else None,
            date=str(item["date"]) if item.get("date") is not None else None,
        )
        for item in items
        if isinstance(item, Mapping)
    )


def parse_dataset_payload(
    payload: Mapping[str, Any],
    *,
    request_url: str | None = None,
) -> RawDataset:
    """データAPI本文を :class:`RawDataset` へ変換する。

    復号に必要な項目（``id``/``size``/``dimension``）の有無と型のみを確認し、
    それ以外の検証は行わない。

    Args:
        payload: JSON本文。
        request_url: 取得元URL。

    Returns:
        正規化済みの生データセット。

    Raises:
        EurostatStructureError: 必須項目が欠落または型不正の場合。
    """

    if not isinstance(payload, Mapping):
        raise EurostatStructureError(
            "データセット本文がJSONオブジェクトではありません。",
            reason="not_an_object",
        )

    ids_raw = _require(payload, "id")
    sizes_raw = _require(payload, "size")
    dimensions_raw = _require(payload, "dimension")
    if not isinstance(ids_raw, list) or not isinstance(sizes_raw, list):
        raise EurostatStructureError(
            "id と size は配列で指定されている必要があります。",
            reason="invalid_id_or_size",
        )
    if not isinstance(dimensions_raw, Mapping):
        raise EurostatStructureError(
            "dimension がオブジェクトではありません。",
            reason="invalid_dimension",
        )
    try:
        sizes = tuple(to_int(size) for size in sizes_raw)
    except (TypeError, ValueError) as exc:
        raise EurostatStructureError(
            "size に整数以外が含まれています。",
            reason="invalid_size",
        ) from exc

    ids = tuple(str(dim_id) for dim_id in ids_raw)
    dimensions = {
        dim_id: _parse_dimension(dim_id, dimensions_raw[dim_id])
        for dim_id in ids
        if dim_id in dimensions_raw
    }

    try:
        value_items = offset_items(payload.get("value"))
        status_items = offset_items(payload.get("status"))
    except (TypeError, ValueError) as exc:
        raise EurostatStructureError(
            "value または status の位置キーが整数ではありません。",
            reason="invalid_offset",
        ) from exc
    values = _parse_values(value_items)
    statuses = {offset: str(flag) for offset, flag in status_items if flag not in (None, "")}

    extension = payload.get("extension")
    if not isinstance(extension, Mapping):
        extension = {}
    status_ext = extension.get("status")
    status_labels: dict[str, str] = {}
    if isinstance(status_ext, Mapping) and isinstance(status_ext.get("label"), Mapping):
        status_labels = {str(k): str(v) for k, v in status_ext["label"].items()}

    return RawDataset(
        ids=ids,
        sizes=sizes,
        dimensions=dimensions,
        values=values,
        statuses=statuses,
        label=str(payload["label"]) if payload.get("label") is not None else None,
        source=str(payload["source"]) if payload.get("source") is not None else None,
        updated=str(payload["updated"]) if payload.get("updated") is not None else None,
        status_labels=status_labels,
        annotations=_parse_annotations(extension),
        request_url=request_url,
    )
