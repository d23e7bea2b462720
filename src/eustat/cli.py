"""CLIエントリポイント。"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from eustat.errors import EurostatValidationError


def _require_typer() -> Any:
    try:
        import typer
    except ImportError as exc:
        raise RuntimeError(
            "CLIには typer が必要です。pip install 'eustat[cli]' を実行してください。"
        ) from exc
    return typer


def parse_filter_options(values: list[str]) -> dict[str, list[str]]:
    """``geo=BE,BG`` 形式の指定を次元ID→カテゴリID列へ変換する。

    同じ次元を複数回指定した場合は連結する。
    """

    filters: dict[str, list[str]] = {}
    for value in values:
        dim_id, sep, categories = value.partition("=")
        if not sep or not dim_id.strip():
            raise EurostatValidationError(
                f"--filter は 次元=カテゴリ[,カテゴリ...] の形式で指定してください: {value}",
                validation_code="invalid_filter_option",
            )
        filters.setdefault(dim_id.strip(), []).extend(
            chunk.strip() for chunk in categories.split(",") if chunk.strip()
        )
    return filters


def _write_json(payload: Any, out: Path) -> None:
    out.write_text(json.dumps(payload, ensure_ascii=False, indent=2, default=str), encoding="utf-8")


def _dump_dataset(dataset: Any, out: Path, *, labels: bool = False) -> None:
    suffix = out.suffix.lower()
    if suffix == ".json":
        _write_json(dataset.to_dict(), out)
        return
    if suffix == ".csv":
        df = dataset.to_pandas(labels=labels)
        df.to_csv(out, index=False)
        return
    if suffix == ".parquet":
        try:
            import pyarrow  # noqa: F401
        except ImportError as exc:
            raise RuntimeError(
                "Parquet backend is required. pip install 'eustat[cli]' を実行してください。"
            ) from exc
        df = dataset.to_pandas(labels=labels)
        df.to_parquet(out, index=False)
        return
    raise ValueError("出力拡張子は .json / .csv / .parquet のみ対応です。")


def _dump_records(records: Any, out: Path) -> None:
    if out.suffix.lower() != ".json":
        raise ValueError("検索結果・メタデータの出力は .json のみ対応です。")
    if isinstance(records, list):
        payload: Any = [asdict(record) for record in records]
    else:
        payload = asdict(records)
    _write_json(payload, out)


def app_entry() -> None:
    """CLIアプリを起動する。"""

    typer = _require_typer()
    from eustat import EurostatClient

    app = typer.Typer(no_args_is_help=True)

    @app.command("data")
    def data_command(
        dataset: str = typer.Option(..., "--dataset"),
        filter_: list[str] = typer.Option([], "--filter"),
        lang: str = typer.Option("en", "--lang"),
        labels: bool = typer.Option(False, "--labels"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """データセットを取得して行形式で保存する。"""

        with EurostatClient(lang=lang) as client:
            frame = client.data.get(dataset, parse_filter_options(filter_))
            _dump_dataset(frame, out, labels=labels)

    @app.command("search")
    def search_command(
        text: str = typer.Option(..., "--text"),
        lang: str = typer.Option("en", "--lang"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """データセットを検索する。"""

        with EurostatClient(lang=lang) as client:
            _dump_records(client.search.datasets(text), out)

    @app.command("metadata")
    def metadata_command(
        dataset: str = typer.Option(..., "--dataset"),
        lang: str = typer.Option("en", "--lang"),
        out: Path = typer.Option(..., "--out"),
    ) -> None:
        """データセットのメタデータを取得する。"""

        with EurostatClient(lang=lang) as client:
            _dump_records(client.metadata.get(dataset), out)

    app()


if __name__ == "__main__":
    app_entry()
