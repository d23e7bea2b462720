"""返却モデル。"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal

from eustat.radix import compose_offset, radix_coefficients
from eustat.types import DatasetInfo, Dimension, Row

NumericMode = Literal["decimal", "float64", "string"]


def _convert_value(value: Decimal | None, mode: NumericMode) -> Decimal | float | str | None:
    if value is None:
        return None
    if mode == "decimal":
        return value
    if mode == "float64":
        return float(value)
    return format(value, "f")


def _jsonable_label(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _dimension_to_dict(dimension: Dimension) -> dict[str, Any]:
    return {
        "label": dimension.label,
        "categories": {
            cat_id: {
                "id": category.id,
                "label": category.label,
                "parsed_label": _jsonable_label(category.parsed_label),
            }
            for cat_id, category in dimension.categories.items()
        },
    }


class Dataset:
    """データAPIの復号結果。

    ``rows`` はフラット位置の昇順に並び、1行が1観測位置に対応する。
    欠測位置は ``value`` がNoneの行として残る。
    """

    def __init__(
        self,
        *,
        rows: tuple[Row, ...],
        definitions: dict[str, Dimension],
        ids: tuple[str, ...],
        sizes: tuple[int, ...],
        info: DatasetInfo | None = None,
    ) -> None:
        self.rows = rows
        self.definitions = definitions
        self.ids = ids
        self.sizes = sizes
        self.info = info or DatasetInfo()
        self._positions: dict[str, dict[str, int]] | None = None

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return f"Dataset(label={self.info.label!r}, ids={self.ids!r}, rows={len(self.rows)})"

    @property
    def dimension_ids(self) -> list[str]:
        """次元ID一覧を宣言順で返す。"""

        return list(self.ids)

    def offset_of(self, key: Mapping[str, str]) -> int:
        """次元ID→カテゴリIDの組からフラット位置を求める。

        Raises:
            KeyError: 次元の過不足または未知のカテゴリIDを含む場合。
        """

        if self._positions is None:
            self._positions = {
                dim_id: {cat_id: pos for pos, cat_id in enumerate(dimension.categories)}
                for dim_id, dimension in self.definitions.items()
            }
        if set(key) != set(self.ids):
            raise KeyError(f"次元の指定が一致しません: {sorted(key)} != {sorted(self.ids)}")
        positions = [self._positions[dim_id][key[dim_id]] for dim_id in self.ids]
        return compose_offset(positions, radix_coefficients(self.sizes))

    def get(self, key: Mapping[str, str] | None = None, /, **kwargs: str) -> Row:
        """カテゴリIDの組で行を引く。

        Examples:
            >>> dataset.get(geo="BE", time="2020")
            >>> dataset.get({"geo": "BE", "time": "2020"})
        """

        merged = dict(key or {})
        merged.update(kwargs)
        return self.rows[self.offset_of(merged)]

    def observed(self) -> list[Row]:
        """欠測でない行のみを返す。"""

        return [row for row in self.rows if row.value is not None]

    def to_long(
        self,
        *,
        numeric_mode: NumericMode = "float64",
        labels: bool = False,
    ) -> list[dict[str, Any]]:
        """long形式データへ変換する。

        Args:
            numeric_mode: 観測値の表現。
            labels: Trueのときカテゴリ表示名を併記する（``<次元ID>_label`` 列）。
        """

        result: list[dict[str, Any]] = []
        for row in self.rows:
            record: dict[str, Any] = dict(row.key)
            if labels:
                for dim_id, cat_id in row.key.items():
                    record[f"{dim_id}_label"] = self.definitions[dim_id].categories[cat_id].label
            record["value"] = _convert_value(row.value, numeric_mode)
            record["status"] = row.status
            result.append(record)
        return result

    def to_wide(
        self,
        *,
        column_dimension: str = "time",
        numeric_mode: NumericMode = "float64",
    ) -> list[dict[str, Any]]:
        """指定次元のカテゴリを列に展開したwide形式へ変換する。"""

        if column_dimension not in self.definitions:
            raise KeyError(f"次元 {column_dimension} はデータセットに含まれていません。")
        index_dims = [dim_id for dim_id in self.ids if dim_id != column_dimension]
        table: dict[tuple[str, ...], dict[str, Any]] = {}
        for row in self.rows:
            group = tuple(row.key[dim_id] for dim_id in index_dims)
            record = table.setdefault(group, {dim_id: row.key[dim_id] for dim_id in index_dims})
            record[row.key[column_dimension]] = _convert_value(row.value, numeric_mode)
        return list(table.values())

    def to_pandas(self, *, numeric_mode: NumericMode = "float64", labels: bool = False) -> Any:
        """pandas.DataFrameへ変換する。"""

        try:
            import pandas as pd
        except ImportError as exc:
            raise RuntimeError("pandas が必要です。pip install 'eustat[pandas]' を実行してください。") from exc
        return pd.DataFrame(self.to_long(numeric_mode=numeric_mode, labels=labels))

    def to_polars(self, *, numeric_mode: NumericMode = "float64", labels: bool = False) -> Any:
        """polars.DataFrameへ変換する。"""

        try:
            import polars as pl
        except ImportError as exc:
            raise RuntimeError("polars が必要です。pip install 'eustat[polars]' を実行してください。") from exc
        return pl.DataFrame(self.to_long(numeric_mode=numeric_mode, labels=labels))

    def to_dict(self) -> dict[str, Any]:
        """JSON保存用dictに変換する。"""

        info = asdict(self.info)
        info["annotations"] = [asdict(item) for item in self.info.annotations]
        return {
            "info": info,
            "ids": list(self.ids),
            "sizes": list(self.sizes),
            "definitions": {
                dim_id: _dimension_to_dict(dimension)
                for dim_id, dimension in self.definitions.items()
            },
            "rows": [
                {
                    "key": dict(row.key),
                    "value": _convert_value(row.value, "string"),
                    "status": row.status,
                }
                for row in self.rows
            ],
        }
