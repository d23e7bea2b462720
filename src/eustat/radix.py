"""フラット位置と次元ごとのカテゴリ位置の相互変換。

値配列は ``id`` の宣言順を最上位桁とする混合基数で平坦化されている
（最後に宣言された次元が最も速く変化する）。
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RadixCoefficient:
    """1次元分の桁係数。

    Attributes:
        mul: 後続次元サイズの積。
        mod: 当該次元のサイズ。
    """

    mul: int
    mod: int


def total_size(sizes: Sequence[int]) -> int:
    """全観測位置数を返す。"""

    return math.prod(sizes)


def radix_coefficients(sizes: Sequence[int]) -> tuple[RadixCoefficient, ...]:
    """次元サイズ列から桁係数を計算する。

    Args:
        sizes: ``id`` と同順の次元サイズ。

    Returns:
        次元ごとの係数。``mul[k]`` は ``sizes[k+1:]`` の積。
    """

    coefficients: list[RadixCoefficient] = []
    mul = 1
    for size in reversed(sizes):
        coefficients.append(RadixCoefficient(mul=mul, mod=size))
        mul *= size
    coefficients.reverse()
    return tuple(coefficients)


def decompose_offset(
    offset: int,
    coefficients: Sequence[RadixCoefficient],
) -> tuple[int, ...]:
    """フラット位置を次元ごとのカテゴリ位置へ分解する。"""

    return tuple((offset // coef.mul) % coef.mod for coef in coefficients)


def compose_offset(
    positions: Sequence[int],
    coefficients: Sequence[RadixCoefficient],
) -> int:
    """カテゴリ位置の組からフラット位置を求める。"""

    if len(positions) != len(coefficients):
        raise ValueError("positions と coefficients の長さが一致しません。")
    return sum(position * coef.mul for position, coef in zip(positions, coefficients))
