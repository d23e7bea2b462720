"""カテゴリラベル解析。

次元IDごとにラベル解析関数を登録し、復号時に ``Category.parsed_label`` を
設定する。既定では時間軸 ``time`` のみを暦日へ変換する。
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from datetime import date
from typing import Any

from eustat.errors import EurostatFormatError

LabelParser = Callable[[str], Any]

TIME_DIMENSION = "time"

_YEAR_PATTERN = re.compile(r"(\d{4})", re.ASCII)
_QUARTER_PATTERN = re.compile(r"(\d{4})-Q([1-4])", re.ASCII)
_MONTH_PATTERN = re.compile(r"(\d{4})-(\d{2})", re.ASCII)


def parse_time_label(label: str) -> date:
    """Eurostatの時点ラベルを暦日へ変換する。

    受理する形式は次の3つのみ。

    - 年: ``2023`` → 2023-01-01
    - 四半期: ``2023-Q3`` → 2023-07-01
    - 月: ``2023-07`` → 2023-07-01

    Args:
        label: 時点ラベル。

    Returns:
        期首日。

    Raises:
        EurostatFormatError: いずれの形式にも一致しない場合、または暦日として存在しない場合。
    """

    year: int | None = None
    month = 1
    match = _YEAR_PATTERN.fullmatch(label)
    if match:
        year = int(match.group(1))

    match = _QUARTER_PATTERN.fullmatch(label)
    if match:
        year = int(match.group(1))
        month = 3 * (int(match.group(2)) - 1) + 1

    match = _MONTH_PATTERN.fullmatch(label)
    if match:
        year = int(match.group(1))
        month = int(match.group(2))

    if year is None:
        raise EurostatFormatError(f"時点ラベルを解析できません: {label}", label=label)
    try:
        return date(year, month, 1)
    except ValueError as exc:
        # 0000年や13月など暦日にならない値
        raise EurostatFormatError(f"時点ラベルを解析できません: {label}", label=label) from exc


class LabelParserRegistry(Mapping[str, LabelParser]):
    """次元ID→ラベル解析関数の読み取り専用レジストリ。"""

    def __init__(self, parsers: Mapping[str, LabelParser] | None = None) -> None:
        self._parsers: dict[str, LabelParser] = dict(parsers or {})

    def __getitem__(self, dimension_id: str) -> LabelParser:
        return self._parsers[dimension_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._parsers)

    def __len__(self) -> int:
        return len(self._parsers)

    def __repr__(self) -> str:
        return f"LabelParserRegistry({sorted(self._parsers)!r})"

    def with_parser(self, dimension_id: str, parser: LabelParser) -> "LabelParserRegistry":
        """解析関数を追加した新しいレジストリを返す。"""

        merged = dict(self._parsers)
        merged[dimension_id] = parser
        return LabelParserRegistry(merged)

    def without(self, dimension_id: str) -> "LabelParserRegistry":
        """指定次元の解析関数を除いた新しいレジストリを返す。"""

        return LabelParserRegistry(
            {key: value for key, value in self._parsers.items() if key != dimension_id}
        )


DEFAULT_LABEL_PARSERS = LabelParserRegistry({TIME_DIMENSION: parse_time_label})
