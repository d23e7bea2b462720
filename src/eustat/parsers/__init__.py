"""レスポンスパーサ公開API。"""

from __future__ import annotations

from eustat.parsers.json_parser import (
    ApiErrorBody,
    extract_api_error,
    load_json,
    parse_dataset_payload,
)


def decode_response_bytes(payload: bytes) -> str:
    """バイト列をUTF-8としてデコードする。

    Args:
        payload: レスポンスバイト列。

    Returns:
        デコード済み文字列。
    """

    return payload.decode("utf-8", errors="replace")


__all__ = [
    "ApiErrorBody",
    "decode_response_bytes",
    "extract_api_error",
    "load_json",
    "parse_dataset_payload",
]
