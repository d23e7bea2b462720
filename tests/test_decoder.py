"""復号処理のテスト。"""

from __future__ import annotations

import copy
import math
from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from eustat import EurostatFormatError, EurostatStructureError, decode
from eustat.labels import DEFAULT_LABEL_PARSERS
from eustat.radix import compose_offset, radix_coefficients


def _payload() -> dict[str, Any]:
    return {
        "class": "dataset",
        "label": "label",
        "id": ["x", "y", "time"],
        "size": [1, 2, 3],
        "dimension": {
            "x": {"label": "X", "category": {"index": {"a": 0}, "label": {"a": "xa"}}},
            "y": {
                "label": "Y",
                "category": {"index": {"a": 0, "b": 1}, "label": {"a": "ya", "b": "yb"}},
            },
            "time": {
                "label": "Time",
                "category": {
                    "index": {"a": 0, "b": 1, "c": 2},
                    "label": {"a": "2020-01", "b": "2020-02", "c": "2020-03"},
                },
            },
        },
        "value": {"0": 0, "1": 1, "2": 2, "3": 3, "4": 4, "5": 5},
        "status": {},
        "extension": {"annotation": [], "status": {"label": {}}},
    }


def test_decode_rows_follow_declared_dimension_order() -> None:
    dataset = decode(_payload())

    assert [(row.key, row.value) for row in dataset.rows] == [
        ({"x": "a", "y": "a", "time": "a"}, 0),
        ({"x": "a", "y": "a", "time": "b"}, 1),
        ({"x": "a", "y": "a", "time": "c"}, 2),
        ({"x": "a", "y": "b", "time": "a"}, 3),
        ({"x": "a", "y": "b", "time": "b"}, 4),
        ({"x": "a", "y": "b", "time": "c"}, 5),
    ]
    assert all(isinstance(row.value, Decimal) for row in dataset.rows)


def test_decode_definitions() -> None:
    dataset = decode(_payload())

    assert list(dataset.definitions) == ["x", "y", "time"]
    assert dataset.definitions["x"].label == "X"
    assert dataset.definitions["y"].categories["b"].label == "yb"
    assert dataset.definitions["y"].categories["b"].parsed_label is None
    time_categories = dataset.definitions["time"].categories
    assert list(time_categories) == ["a", "b", "c"]
    assert time_categories["b"].parsed_label == date(2020, 2, 1)
    assert time_categories["c"].parsed_label == date(2020, 3, 1)


def test_decode_missing_value_is_none_not_zero() -> None:
    payload = _payload()
    del payload["value"]["3"]

    dataset = decode(payload)

    assert dataset.rows[3].value is None
    assert dataset.rows[0].value == 0
    assert dataset.rows[0].value is not None
    assert len(dataset.rows) == 6


def test_decode_accepts_value_array_with_nulls() -> None:
    payload = _payload()
    payload["value"] = [0, 1, None, 3, 4, 5]

    dataset = decode(payload)

    assert dataset.rows[2].value is None
    assert dataset.rows[5].value == 5


def test_decode_category_order_comes_from_index_not_key_order() -> None:
    payload = _payload()
    payload["dimension"]["y"]["category"]["index"] = {"b": 1, "a": 0}
    payload["dimension"]["y"]["category"]["label"] = {"b": "yb", "a": "ya"}

    dataset = decode(payload)

    assert [row.key["y"] for row in dataset.rows] == ["a", "a", "a", "b", "b", "b"]
    assert list(dataset.definitions["y"].categories) == ["a", "b"]


def test_decode_round_trip_reproduces_offset() -> None:
    payload = {
        "id": ["geo", "unit", "time"],
        "size": [3, 2, 4],
        "dimension": {
            "geo": {
                "label": "Geo",
                "category": {
                    "index": {"BE": 0, "BG": 1, "CZ": 2},
                    "label": {"BE": "Belgium", "BG": "Bulgaria", "CZ": "Czechia"},
                },
            },
            "unit": {
                "label": "Unit",
                "category": {"index": {"NR": 0, "PC": 1}, "label": {"NR": "Number", "PC": "Percent"}},
            },
            "time": {
                "label": "Time",
                "category": {
                    "index": {"2019": 0, "2020": 1, "2021": 2, "2022": 3},
                    "label": {"2019": "2019", "2020": "2020", "2021": "2021", "2022": "2022"},
                },
            },
        },
        "value": {str(i): i * 10 for i in range(24)},
    }
    raw_index = {dim: payload["dimension"][dim]["category"]["index"] for dim in payload["id"]}
    coefficients = radix_coefficients(payload["size"])

    dataset = decode(payload)

    assert len(dataset.rows) == math.prod(payload["size"])
    for offset, row in enumerate(dataset.rows):
        assert set(row.key) == set(payload["id"])
        positions = [raw_index[dim][row.key[dim]] for dim in payload["id"]]
        assert compose_offset(positions, coefficients) == offset
        assert row.value == offset * 10
        for dim, cat in row.key.items():
            assert cat in dataset.definitions[dim].categories


def test_decode_zero_size_dimension_yields_no_rows() -> None:
    payload = _payload()
    payload["size"] = [1, 0, 3]
    payload["dimension"]["y"]["category"] = {"index": {}, "label": {}}
    payload["value"] = {}

    dataset = decode(payload)

    assert dataset.rows == ()
    assert dataset.definitions["y"].categories == {}


def test_decode_statuses_and_info() -> None:
    payload = _payload()
    payload["status"] = {"1": "p"}
    payload["updated"] = "2024-03-01T11:00:00+0100"
    payload["source"] = "ESTAT"
    payload["extension"] = {
        "annotation": [{"type": "UPDATE_DATA", "date": "2024-03-01T11:00:00+0100"}],
        "status": {"label": {"p": "provisional"}},
    }

    dataset = decode(payload)

    assert dataset.rows[1].status == "p"
    assert dataset.rows[0].status is None
    assert dataset.info.label == "label"
    assert dataset.info.source == "ESTAT"
    assert dataset.info.status_labels == {"p": "provisional"}
    assert dataset.info.annotations[0].type == "UPDATE_DATA"


def test_decode_invalid_time_label_aborts() -> None:
    payload = _payload()
    payload["dimension"]["time"]["category"]["label"]["c"] = "2020-13"

    with pytest.raises(EurostatFormatError) as exc_info:
        decode(payload)

    assert exc_info.value.label == "2020-13"
    assert "2020-13" in str(exc_info.value)


def test_decode_custom_label_parsers() -> None:
    payload = _payload()
    payload["dimension"]["time"]["category"]["label"]["c"] = "not-a-date"
    parsers = DEFAULT_LABEL_PARSERS.without("time").with_parser("y", str.upper)

    dataset = decode(payload, label_parsers=parsers)

    assert dataset.definitions["time"].categories["c"].parsed_label is None
    assert dataset.definitions["y"].categories["a"].parsed_label == "YA"


def test_decode_empty_parser_mapping_disables_parsing() -> None:
    dataset = decode(_payload(), label_parsers={})

    assert dataset.definitions["time"].categories["a"].parsed_label is None


def test_decode_does_not_mutate_input() -> None:
    payload = _payload()
    before = copy.deepcopy(payload)

    decode(payload)
    decode(payload)

    assert payload == before


@pytest.mark.parametrize(
    ("index", "reason"),
    [
        ({"a": 0, "b": 2}, "category_index_mismatch"),
        ({"a": 0, "b": 0}, "category_index_mismatch"),
        ({"a": 0}, "category_index_mismatch"),
    ],
)
def test_decode_rejects_non_dense_category_index(index: dict[str, int], reason: str) -> None:
    payload = _payload()
    payload["dimension"]["y"]["category"]["index"] = index

    with pytest.raises(EurostatStructureError) as exc_info:
        decode(payload)

    assert exc_info.value.reason == reason
    assert exc_info.value.dimension == "y"


def test_decode_rejects_id_size_length_mismatch() -> None:
    payload = _payload()
    payload["size"] = [1, 2]

    with pytest.raises(EurostatStructureError) as exc_info:
        decode(payload)

    assert exc_info.value.reason == "length_mismatch"


def test_decode_rejects_missing_dimension_definition() -> None:
    payload = _payload()
    del payload["dimension"]["x"]

    with pytest.raises(EurostatStructureError) as exc_info:
        decode(payload)

    assert exc_info.value.reason == "missing_dimension"
    assert exc_info.value.origin == "decoder"


def _negative_size(payload: dict[str, Any]) -> None:
    payload["size"][0] = -1
    payload["dimension"]["x"]["category"]["index"] = {}


def _duplicate_id(payload: dict[str, Any]) -> None:
    payload["id"] = ["x", "x", "time"]
    payload["size"] = [1, 1, 3]


def _fractional_size(payload: dict[str, Any]) -> None:
    payload["size"][0] = 1.9


def _boolean_size(payload: dict[str, Any]) -> None:
    payload["size"][0] = True


def _fractional_index(payload: dict[str, Any]) -> None:
    payload["dimension"]["x"]["category"]["index"] = {"a": 0.5}


def _junk_value(payload: dict[str, Any]) -> None:
    payload["value"]["3"] = "garbage"


def _boolean_value(payload: dict[str, Any]) -> None:
    payload["value"]["3"] = True


def _object_value(payload: dict[str, Any]) -> None:
    payload["value"]["3"] = {"v": 3}


def _empty_string_value(payload: dict[str, Any]) -> None:
    payload["value"]["3"] = ""


def _fractional_offset(payload: dict[str, Any]) -> None:
    payload["value"] = {"1.5": 1}


@pytest.mark.parametrize(
    ("mutate", "reason", "dimension"),
    [
        (_negative_size, "negative_size", "x"),
        (_duplicate_id, "duplicate_dimension", None),
        (_fractional_size, "invalid_size", None),
        (_boolean_size, "invalid_size", None),
        (_fractional_index, "invalid_category_index", "x"),
        (_junk_value, "invalid_value", None),
        (_boolean_value, "invalid_value", None),
        (_object_value, "invalid_value", None),
        (_empty_string_value, "invalid_value", None),
        (_fractional_offset, "invalid_offset", None),
    ],
)
def test_decode_rejects_malformed_payload(
    mutate: Any,
    reason: str,
    dimension: str | None,
) -> None:
    payload = _payload()
    mutate(payload)

    with pytest.raises(EurostatStructureError) as exc_info:
        decode(payload)

    assert exc_info.value.reason == reason
    assert exc_info.value.dimension == dimension


def test_decode_treats_only_null_as_missing() -> None:
    payload = _payload()
    payload["value"] = [0, None, "2.50", 3, None, 5]

    dataset = decode(payload)

    assert [row.value for row in dataset.rows] == [
        Decimal("0"),
        None,
        Decimal("2.50"),
        Decimal("3"),
        None,
        Decimal("5"),
    ]
