"""時点ラベル解析とレジストリのテスト。"""

from __future__ import annotations

from datetime import date

import pytest

from eustat import EurostatFormatError, parse_time_label
from eustat.labels import DEFAULT_LABEL_PARSERS, LabelParserRegistry


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("2023", date(2023, 1, 1)),
        ("2023-Q1", date(2023, 1, 1)),
        ("2023-Q2", date(2023, 4, 1)),
        ("2023-Q3", date(2023, 7, 1)),
        ("2023-Q4", date(2023, 10, 1)),
        ("2023-07", date(2023, 7, 1)),
        ("2023-12", date(2023, 12, 1)),
    ],
)
def test_parse_time_label_accepts_year_quarter_month(label: str, expected: date) -> None:
    assert parse_time_label(label) == expected


@pytest.mark.parametrize(
    "label",
    [
        "2023-13",
        "2023-00",
        "not-a-date",
        "2023-Q5",
        "2023-Q0",
        "2023M07",
        "23",
        "2023-7",
        " 2023",
        "2023-S1",
        "0000",
        "0000-Q1",
        "0000-01",
    ],
)
def test_parse_time_label_rejects_other_forms(label: str) -> None:
    with pytest.raises(EurostatFormatError) as exc_info:
        parse_time_label(label)

    assert exc_info.value.label == label
    assert exc_info.value.origin == "decoder"


def test_default_registry_only_parses_time() -> None:
    assert list(DEFAULT_LABEL_PARSERS) == ["time"]
    assert DEFAULT_LABEL_PARSERS["time"] is parse_time_label


def test_registry_with_parser_returns_copy() -> None:
    base = LabelParserRegistry()
    extended = base.with_parser("geo", str.lower)

    assert len(base) == 0
    assert extended["geo"]("BE") == "be"
    assert extended.get("time") is None
