"""CLI出力処理のテスト。"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest

from eustat import EurostatValidationError, decode
from eustat.cli import _dump_dataset, _dump_records, parse_filter_options
from eustat.types import DatasetMetadata, MetadataDimension, MetadataPosition


def _dataset() -> Any:
    return decode(
        {
            "id": ["geo", "time"],
            "size": [1, 1],
            "dimension": {
                "geo": {"label": "Geo", "category": {"index": {"BE": 0}, "label": {"BE": "Belgium"}}},
                "time": {"label": "Time", "category": {"index": {"2020-Q1": 0}, "label": {"2020-Q1": "2020-Q1"}}},
            },
            "value": {"0": 3.25},
        }
    )


def test_parse_filter_options_merges_repeated_dimensions() -> None:
    filters = parse_filter_options(["geo=BE,BG", "time=2020", "geo=CZ"])

    assert filters == {"geo": ["BE", "BG", "CZ"], "time": ["2020"]}


def test_parse_filter_options_rejects_missing_separator() -> None:
    with pytest.raises(EurostatValidationError):
        parse_filter_options(["geo"])


def test_dump_dataset_json(tmp_path: Path) -> None:
    out = tmp_path / "data.json"

    _dump_dataset(_dataset(), out)

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["rows"] == [{"key": {"geo": "BE", "time": "2020-Q1"}, "value": "3.25", "status": None}]
    assert payload["definitions"]["time"]["categories"]["2020-Q1"]["parsed_label"] == "2020-01-01"


def test_dump_dataset_rejects_unknown_suffix(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        _dump_dataset(_dataset(), tmp_path / "data.xlsx")


def test_dump_records_json(tmp_path: Path) -> None:
    metadata = DatasetMetadata(
        code="aact_ali01",
        title="title",
        description=None,
        dimensions=[
            MetadataDimension(
                code="GEO",
                description="Geo",
                positions=[MetadataPosition(code="BE", description="Belgium")],
            )
        ],
    )
    out = tmp_path / "meta.json"

    _dump_records(metadata, out)

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["dimensions"][0]["positions"][0] == {"code": "BE", "description": "Belgium"}


def test_dump_dataset_parquet_writes_long_frame(tmp_path: Path, monkeypatch: Any) -> None:
    pd = pytest.importorskip("pandas")
    monkeypatch.setitem(sys.modules, "pyarrow", ModuleType("pyarrow"))
    saved: list[tuple[Any, Path, bool]] = []

    def fake_to_parquet(self: Any, path: Path, index: bool = True) -> None:
        saved.append((self.copy(), path, index))

    monkeypatch.setattr(pd.DataFrame, "to_parquet", fake_to_parquet)
    out = tmp_path / "data.parquet"

    _dump_dataset(_dataset(), out, labels=True)

    assert len(saved) == 1
    frame, path, index = saved[0]
    assert path == out
    assert index is False
    assert list(frame.columns) == ["geo", "time", "geo_label", "time_label", "value", "status"]
    assert frame.iloc[0]["geo_label"] == "Belgium"
    assert frame.iloc[0]["value"] == pytest.approx(3.25)


def test_dump_dataset_parquet_requires_pyarrow(tmp_path: Path, monkeypatch: Any) -> None:
    monkeypatch.setitem(sys.modules, "pyarrow", None)

    with pytest.raises(RuntimeError, match="eustat\\[cli\\]"):
        _dump_dataset(_dataset(), tmp_path / "data.parquet")
