"""入力正規化と送信前バリデーション。"""

from __future__ import annotations

import warnings
from collections.abc import Mapping, Sequence

from eustat.enums import Lang
from eustat.errors import EurostatValidationError

_FORBIDDEN_CHARS = {"/", "?", "#", "&", "<", ">", '"', "'", "\\", ";"}

FilterInput = Mapping[str, str | Sequence[str]]


def normalize_lang(value: Lang | str | None) -> Lang:
    """言語入力を正規化する。

    Args:
        value: 入力言語。

    Returns:
        正規化後の言語。

    Raises:
        EurostatValidationError: 値が不正な場合。
    """

    if value is None:
        return Lang.EN
    if isinstance(value, Lang):
        return value
    normalized = str(value).strip().upper()
    try:
        return Lang(normalized)
    except ValueError as exc:
        raise EurostatValidationError("lang が不正です。", validation_code="invalid_lang") from exc


def validate_outbound_text(value: str, *, param_name: str) -> None:
    """URLパスやクエリキーとして送信する識別子を検証する。

    Raises:
        EurostatValidationError: 禁止文字または空白を含む場合。
    """

    if any(ch in _FORBIDDEN_CHARS for ch in value):
        raise EurostatValidationError(
            f"{param_name} に禁止文字が含まれています: {value!r}",
            validation_code="forbidden_character",
        )
    if any(ch.isspace() for ch in value):
        raise EurostatValidationError(
            f"{param_name} に空白は指定できません: {value!r}",
            validation_code="whitespace_not_allowed",
        )


def normalize_dataset_id(value: str) -> str:
    """データセットIDを正規化する。"""

    dataset_id = value.strip()
    if not dataset_id:
        raise EurostatValidationError(
            "データセットIDが指定されていません。", validation_code="missing_dataset_id"
        )
    validate_outbound_text(dataset_id, param_name="dataset_id")
    return dataset_id


def normalize_filters(filters: FilterInput | None) -> list[tuple[str, str]]:
    """次元ごとのカテゴリ絞り込みをクエリ用のキー・値ペアへ展開する。

    次元の宣言順とカテゴリの指定順を保つ。文字列1つは単一カテゴリとして扱う。
    カテゴリが空の次元は絞り込みなしとみなして除外し、警告する。

    Args:
        filters: 次元ID→カテゴリID列。

    Returns:
        ``(次元ID, カテゴリID)`` の列。
    """

    if not filters:
        return []
    pairs: list[tuple[str, str]] = []
    for dim_id_raw, categories in filters.items():
        dim_id = str(dim_id_raw).strip()
        if not dim_id:
            raise EurostatValidationError(
                "次元IDが空です。", validation_code="missing_dimension_id"
            )
        validate_outbound_text(dim_id, param_name="dimension")
        values = [categories] if isinstance(categories, str) else list(categories)
        cat_ids = [str(value).strip() for value in values if str(value).strip()]
        if not cat_ids:
            warnings.warn(
                f"次元 '{dim_id}' のカテゴリが空のため絞り込みから除外しました。",
                stacklevel=2,
            )
            continue
        for cat_id in cat_ids:
            validate_outbound_text(cat_id, param_name=f"{dim_id} のカテゴリ")
            pairs.append((dim_id, cat_id))
    return pairs


def normalize_search_text(text: str) -> str:
    """検索文字列を正規化する。"""

    normalized = text.strip()
    if not normalized:
        raise EurostatValidationError(
            "検索文字列が指定されていません。", validation_code="missing_search_text"
        )
    return normalized
