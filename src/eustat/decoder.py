"""データAPIレスポンスの復号。

値配列・次元定義・カテゴリ索引に分かれた本文を、観測ごとの
``{key, value}`` 行と次元辞書へ展開する。I/Oは行わない。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from eustat.errors import EurostatStructureError
from eustat.labels import DEFAULT_LABEL_PARSERS, LabelParser
from eustat.models import Dataset
from eustat.parsers.json_parser import parse_dataset_payload
from eustat.radix import decompose_offset, radix_coefficients, total_size
from eustat.types import Category, DatasetInfo, Dimension, RawDataset, RawDimension, Row


def validate_structure(raw: RawDataset) -> None:
    """次元構成とカテゴリ索引の整合性を検証する。

    各次元のカテゴリ位置が ``0..size-1`` の重複なしの並びであることを要求する。

    Raises:
        EurostatStructureError: 不整合がある場合。
    """

    if len(raw.ids) != len(raw.sizes):
        raise EurostatStructureError(
            f"id と size の長さが一致しません: id={len(raw.ids)}, size={len(raw.sizes)}",
            reason="length_mismatch",
        )
    if len(set(raw.ids)) != len(raw.ids):
        raise EurostatStructureError("id に重複があります。", reason="duplicate_dimension")

    for dim_id, size in zip(raw.ids, raw.sizes):
        if size < 0:
            raise EurostatStructureError(
                f"次元 {dim_id} のサイズが負です: {size}",
                reason="negative_size",
                dimension=dim_id,
            )
        dimension = raw.dimensions.get(dim_id)
        if dimension is None:
            raise EurostatStructureError(
                f"次元 {dim_id} の定義がありません。",
                reason="missing_dimension",
                dimension=dim_id,
            )
        positions = sorted(dimension.index.values())
        if positions != list(range(size)):
            raise EurostatStructureError(
                f"次元 {dim_id} のカテゴリ位置が 0..{size - 1} と一致しません: {positions}",
                reason="category_index_mismatch",
                dimension=dim_id,
            )


def _build_categories(
    dimension: RawDimension,
    parser: LabelParser | None,
) -> list[Category]:
    """位置→カテゴリの配列を作る。"""

    categories: list[Category | None] = [None] * len(dimension.index)
    for cat_id, position in dimension.index.items():
        label = dimension.labels.get(cat_id, cat_id)
        parsed = parser(label) if parser is not None else None
        categories[position] = Category(id=cat_id, label=label, parsed_label=parsed)
    return [category for category in categories if category is not None]


def decode(
    raw: RawDataset | Mapping[str, Any],
    *,
    label_parsers: Mapping[str, LabelParser] | None = None,
) -> Dataset:
    """生データセットを行形式へ復号する。

    Args:
        raw: :class:`RawDataset` またはデータAPIのJSON本文。
        label_parsers: 次元ID→ラベル解析関数。未指定時は ``time`` のみ解析する。

    Returns:
        復号済みデータセット。

    Raises:
        EurostatStructureError: 次元構成が不整合の場合。
        EurostatFormatError: 時点ラベルを解析できない場合。
    """

    if not isinstance(raw, RawDataset):
        raw = parse_dataset_payload(raw)
    parsers = DEFAULT_LABEL_PARSERS if label_parsers is None else label_parsers

    validate_structure(raw)

    ordered: list[tuple[str, str, list[Category]]] = []
    for dim_id in raw.ids:
        dimension = raw.dimensions[dim_id]
        ordered.append(
            (dim_id, dimension.label, _build_categories(dimension, parsers.get(dim_id)))
        )

    coefficients = radix_coefficients(raw.sizes)
    rows: list[Row] = []
    for offset in range(total_size(raw.sizes)):
        positions = decompose_offset(offset, coefficients)
        key = {
            dim_id: categories[position].id
            for (dim_id, _, categories), position in zip(ordered, positions)
        }
        rows.append(
            Row(
                key=key,
                value=raw.values.get(offset),
                status=raw.statuses.get(offset),
            )
        )

    definitions = {
        dim_id: Dimension(
            id=dim_id,
            label=label,
            categories={category.id: category for category in categories},
        )
        for dim_id, label, categories in ordered
    }
    info = DatasetInfo(
        label=raw.label,
        source=raw.source,
        updated=raw.updated,
        status_labels=dict(raw.status_labels),
        annotations=raw.annotations,
        request_url=raw.request_url,
    )
    return Dataset(rows=tuple(rows), definitions=definitions, ids=raw.ids, sizes=raw.sizes, info=info)
